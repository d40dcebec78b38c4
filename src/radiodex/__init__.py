"""Radio station playlist generator."""

__version__ = "0.1.0"
