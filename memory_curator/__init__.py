"""Memory curator: retires transient memories using multi-model consensus."""

__version__ = "0.1.0"
