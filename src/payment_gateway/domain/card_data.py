"""Card data redaction helpers.

Nothing outside this module should slice a card number for display or logging.
"""

PAN_MASK = "****"
CVV_MASK = "***"
_VISIBLE_DIGITS = 4


def mask_card_number(pan: str | None) -> str:
    """Mask all but the last four characters of a card number.

    Args:
        pan: Primary account number (may be None)

    Returns:
        "****" for absent or short input, otherwise "*" * (len - 4) + last four
    """
    if pan is None or len(pan) < _VISIBLE_DIGITS:
        return PAN_MASK
    return "*" * (len(pan) - _VISIBLE_DIGITS) + pan[-_VISIBLE_DIGITS:]


def mask_cvv(cvv: str | None = None) -> str:
    """Always return the fixed CVV mask."""
    return CVV_MASK


def extract_last_four(pan: str | None) -> int:
    """Extract the last four digits of a card number as an integer.

    Returns 0 for absent or short input, or when the last four characters
    are not all ASCII digits.
    """
    if pan is None or len(pan) < _VISIBLE_DIGITS:
        return 0
    last_four = pan[-_VISIBLE_DIGITS:]
    if not (last_four.isascii() and last_four.isdigit()):
        return 0
    return int(last_four)
