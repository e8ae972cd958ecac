"""Package version, shared by the package root and the HTTP User-Agent."""

__version__ = "0.1.0"
