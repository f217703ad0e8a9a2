"""Regional shape check for buyer phone numbers."""

import re

# +7 / 8 prefix, optional parenthesised area code, optional dashes
DEFAULT_PHONE_PATTERN = r"^\+?[78][-\(]?\d{3}\)?-?\d{3}-?\d{2}-?\d{2}$"


def is_valid_phone(number: str, pattern: str = DEFAULT_PHONE_PATTERN) -> bool:
    """Return True if ``number`` matches the regional phone shape.

    Spaces are ignored, so ``+7 (999) 123-45-67`` and ``+7(999)123-45-67``
    are equivalent.
    """
    compact = re.sub(r"\s+", "", number)

    # Must contain at least one digit
    if not re.search(r"\d", compact):
        return False

    return re.match(pattern, compact) is not None
