"""Structural shape check for buyer email addresses."""

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def is_valid_email(email: str) -> bool:
    """Return True if ``email`` looks like ``local-part@domain.tld``.

    Exactly one @, non-empty local and domain parts, at least one dot in the
    domain, no whitespace, no leading/trailing or consecutive dots, and none
    of the characters that are only legal inside quoted local parts.
    """
    email = email.strip()

    if any(ch.isspace() for ch in email):
        return False

    if email.count("@") != 1:
        return False

    local_part, domain_part = email.split("@", 1)

    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        return False

    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        return False

    if "." not in domain_part:
        return False

    for label in domain_part.split("."):
        if not label or label.startswith("-") or label.endswith("-"):
            return False

    if ".." in local_part:
        return False

    return not any(forbidden in email for forbidden in _FORBIDDEN)
