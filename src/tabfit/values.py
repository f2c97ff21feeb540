"""Cell value to display string conversion."""

from typing import Any


def format_value(value: Any, null_value: str) -> str:
    """Return the display text for one cell; None becomes ``null_value``.

    Booleans print as ``true``/``false``, the way JSON spells them.
    """
    if value is None:
        return null_value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)
