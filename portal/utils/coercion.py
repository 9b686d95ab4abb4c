"""
Free-text to typed value coercion.

Form fields are edited as text and only converted when they leave the
wizard. Anything that does not parse cleanly becomes None rather than a
corrupted number.
"""

import math

# Largest value an INTEGER column holds on every supported backend
INT_MAX = 2**31 - 1


def blank_to_none(value: str | None) -> str | None:
    """Return the stripped text, or None for empty input."""
    if value is None:
        return None
    text = value.strip()
    return text or None


def to_int(value: str | None) -> int | None:
    """Parse an integer field such as a passing-out year."""
    text = blank_to_none(value)
    if text is None:
        return None
    try:
        number = int(text)
    except ValueError:
        parsed = to_float(text)
        if parsed is None or not parsed.is_integer():
            return None
        number = int(parsed)
    if abs(number) > INT_MAX:
        return None
    return number


def to_float(value: str | None) -> float | None:
    """Parse a decimal field such as a percentage, CGPA or CTC."""
    text = blank_to_none(value)
    if text is None:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def to_text(value: int | float | str | None) -> str:
    """Render a stored value back into an editable form field."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
