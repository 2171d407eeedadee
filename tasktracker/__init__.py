"""Task tracker backend: user accounts and per-user task records on MongoDB."""

__version__ = "1.0.0"
