"""Rule-field layout reconstruction.

A rule field describes a composite value (an IP address, a serial key)
as a whitespace-separated ``layout`` of placeholders and literal
separators, e.g. ``"N:3:3 . N:3:3 . N:3:3 . N:3:3"``. Its default comes
from a ``set`` attribute of ``index:value`` tokens, e.g.
``"0:192 1:168 2:0 3:1"``. Reconstruction fills placeholders left to
right from the indexed slots and renders separators according to the
field's ``resultFormat``.
"""

from ..core.errors import LayoutError

DISPLAY_FORMAT = "displayFormat"
PLAIN_STRING = "plainString"
SPECIAL_SEPARATOR = "specialSeparator"


def is_placeholder(token: str) -> bool:
    """A layout token is a placeholder iff it has at least two ':'."""
    return token.count(":") >= 2


def parse_slots(set_value: str, slot_count: int) -> list[str | None]:
    """Parse ``index:value`` tokens into a slot list of ``slot_count`` entries.

    Tokens without ':' are ignored.

    Raises:
        LayoutError: If an index is not an integer or falls outside the slots.
    """
    slots: list[str | None] = [None] * slot_count
    for token in set_value.split():
        if ":" not in token:
            continue
        raw_index, _, value = token.partition(":")
        try:
            index = int(raw_index)
        except ValueError:
            raise LayoutError(f"Invalid slot index {raw_index!r} in set token {token!r}")
        if not 0 <= index < slot_count:
            raise LayoutError(
                f"Slot index {index} out of range for layout of {slot_count} tokens"
            )
        slots[index] = value
    return slots


def reconstruct(
    layout: str,
    set_value: str,
    result_format: str | None = None,
    separator: str | None = None,
) -> str:
    """Rebuild a rule field's default value from its layout and set tokens.

    Args:
        layout: Whitespace-separated layout tokens
        set_value: Whitespace-separated ``index:value`` tokens
        result_format: displayFormat (default), specialSeparator or plainString
        separator: Replacement for literals under specialSeparator

    Returns:
        The concatenated value

    Example:
        >>> reconstruct("1:4:5 - 2:4:5", "0:AB 1:CD")
        'AB-CD'
        >>> reconstruct("1:4:5 - 2:4:5", "0:AB 1:CD", "specialSeparator", "/")
        'AB/CD'
    """
    tokens = layout.split()
    slots = parse_slots(set_value, len(tokens))

    pieces: list[str] = []
    counter = 0
    for token in tokens:
        if is_placeholder(token):
            pieces.append(slots[counter] or "")
            counter += 1
        elif result_format == SPECIAL_SEPARATOR:
            pieces.append(separator or "")
        elif result_format == PLAIN_STRING:
            continue
        else:
            pieces.append(token)
    return "".join(pieces)
