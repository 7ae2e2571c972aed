"""Package version. Single source for pyproject and the API."""

__version__ = "0.3.0"
