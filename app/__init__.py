"""Application entry points for the face mask generator."""

from .cli import main
from .spinner import Spinner

__all__ = ["Spinner", "main"]
