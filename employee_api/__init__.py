"""Employee directory proxy over the upstream mock employee API."""

__version__ = "0.1.0"
