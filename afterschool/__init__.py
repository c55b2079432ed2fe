"""After-school lesson booking API."""

__version__ = "1.0.0"
