"""Field- and step-level validation rules for buyer data.

Each rule inspects one field and returns either ``None`` or a message. Rules
are independent of each other, so validating ``("payment", "address")``
never reports anything about email or phone, and vice versa. Validation is
pure: it reads the record it is given and returns data, it never raises for
a bad value.
"""

from collections.abc import Callable, Iterable

from identity.buyer.data import (
    BUYER_FIELDS,
    CONTACTS_STEP_FIELDS,
    ORDER_STEP_FIELDS,
    BuyerData,
    Payment,
)
from identity.shared.email import is_valid_email
from identity.shared.phone import DEFAULT_PHONE_PATTERN, is_valid_phone

PAYMENT_REQUIRED = "Select a payment method"
PAYMENT_UNKNOWN = "Unknown payment method"
EMAIL_REQUIRED = "Enter your email"
EMAIL_INVALID = "Enter a valid email"
PHONE_REQUIRED = "Enter your phone number"
PHONE_INVALID = "Enter a valid phone number"
ADDRESS_REQUIRED = "Enter a delivery address"

ValidationErrors = dict[str, str]


def _is_blank(value: str | None) -> bool:
    return value is None or value.strip() == ""


class BuyerValidator:
    """Validates a ``BuyerData`` record, optionally restricted to some fields.

    Args:
        phone_pattern: Regular expression a phone number must match.
        check_format: When False, email and phone are only checked for
            presence.
    """

    def __init__(self, phone_pattern: str = DEFAULT_PHONE_PATTERN, check_format: bool = True) -> None:
        self.phone_pattern = phone_pattern
        self.check_format = check_format
        self._rules: dict[str, Callable[[BuyerData], str | None]] = {
            "payment": self._check_payment,
            "email": self._check_email,
            "phone": self._check_phone,
            "address": self._check_address,
        }

    def validate(self, data: BuyerData, fields: Iterable[str] | None = None) -> ValidationErrors | None:
        """Return ``None`` if every requested field passes, else field -> message."""
        requested = tuple(fields) if fields is not None else BUYER_FIELDS

        unknown = [field for field in requested if field not in self._rules]
        if unknown:
            raise ValueError(f"Unknown buyer field(s): {', '.join(unknown)}")

        errors: ValidationErrors = {}
        for field in requested:
            message = self._rules[field](data)
            if message is not None:
                errors[field] = message

        return errors or None

    # -------------------------------------------------------------------
    # Rules
    # -------------------------------------------------------------------
    def _check_payment(self, data: BuyerData) -> str | None:
        if not data.payment:
            return PAYMENT_REQUIRED
        if data.payment not in Payment.values():
            return PAYMENT_UNKNOWN
        return None

    def _check_email(self, data: BuyerData) -> str | None:
        if _is_blank(data.email):
            return EMAIL_REQUIRED
        if self.check_format and not is_valid_email(data.email):
            return EMAIL_INVALID
        return None

    def _check_phone(self, data: BuyerData) -> str | None:
        if _is_blank(data.phone):
            return PHONE_REQUIRED
        if self.check_format and not is_valid_phone(data.phone, self.phone_pattern):
            return PHONE_INVALID
        return None

    def _check_address(self, data: BuyerData) -> str | None:
        if _is_blank(data.address):
            return ADDRESS_REQUIRED
        return None


def is_step_complete(data: BuyerData, fields: Iterable[str]) -> bool:
    """Presence check only: every field is set and not blank."""
    return all(not _is_blank(getattr(data, field)) for field in fields)


def is_order_step_complete(data: BuyerData) -> bool:
    return is_step_complete(data, ORDER_STEP_FIELDS)


def is_contacts_step_complete(data: BuyerData) -> bool:
    return is_step_complete(data, CONTACTS_STEP_FIELDS)
