"""hellocool - Hello World terminal apps with an async command runner."""

__version__ = "0.1.0"
