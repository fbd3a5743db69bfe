"""Domain layer - core business logic."""

from .models import DocumentRecord, RenameResult

__all__ = ["DocumentRecord", "RenameResult"]
