from __future__ import annotations

from typing import Optional

MIN_DRAFT_LENGTH = 20


class ValidationError(ValueError):
    """Raised when refinement input is rejected before any request is made."""

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


def validate_refinement_input(draft_text: Optional[str], category: Optional[str], min_length: int = MIN_DRAFT_LENGTH) -> None:
    draft = (draft_text or "").strip()
    if len(draft) < min_length:
        raise ValidationError(
            f"Please write a slightly longer message (at least {min_length} characters) before refining.",
            field="message",
        )
    if not (category or "").strip():
        raise ValidationError(
            "Please select a Project Type for better refinement context.",
            field="project_type",
        )
