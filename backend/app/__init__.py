"""Expose commonly used application models."""

from .models import Base, Label

__all__ = [
    "Base",
    "Label",
]
