"""Input checks shared by post and reply services."""

from discuss.domain.error import ValidationFailedError


def require_text(field: str, value: str, max_length: int) -> str:
    """Trim user text and check it is non-empty and within bounds.

    Args:
        field: Field name, used in the error message
        value: Raw user input
        max_length: Maximum length after trimming

    Returns:
        The trimmed text

    Raises:
        ValidationFailedError: If the text is blank or too long
    """
    cleaned = value.strip()
    if not cleaned:
        raise ValidationFailedError(f"{field} must not be empty")
    if len(cleaned) > max_length:
        raise ValidationFailedError(
            f"{field} must be at most {max_length} characters"
        )
    return cleaned
