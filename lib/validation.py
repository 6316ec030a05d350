"""Validation helpers shared across services and entrypoints."""

from __future__ import annotations

from utils.errors import ValidationError


def validate_intake_id(intake_id: str, *, max_length: int = 200) -> str:
    """
    Validate an intake identifier before it is embedded in a filter formula.

    Args:
        intake_id: Raw identifier from the API, CLI, or automation trigger.
        max_length: Upper bound on identifier length.

    Returns:
        The identifier trimmed of surrounding whitespace.

    Raises:
        ValidationError: If the identifier is empty, too long, or spans lines.
    """
    if intake_id is None:
        raise ValidationError("Intake ID is required.")

    if not isinstance(intake_id, str):
        raise ValidationError("Intake ID must be a string.")

    cleaned = intake_id.strip()
    if not cleaned:
        raise ValidationError("Intake ID cannot be empty.")

    if len(cleaned) > max_length:
        raise ValidationError(f"Intake ID exceeds {max_length} characters.")

    if "\n" in cleaned or "\r" in cleaned:
        raise ValidationError("Intake ID must be a single line.")

    return cleaned
