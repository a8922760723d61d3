"""Route group exports."""

from . import health, pathao

__all__ = ["health", "pathao"]
