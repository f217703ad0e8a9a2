"""Buyer store: payment method, address and contact details for checkout.

Writes are accepted unconditionally and shallow-merged over the current
record; validity is only established on demand through ``validate``. Every
write, including an empty one, publishes ``buyer:changed`` with the full
merged record.
"""

from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from identity.buyer import validation
from identity.buyer.data import BUYER_FIELDS, BuyerData
from identity.buyer.validation import BuyerValidator, ValidationErrors
from shared.events.bus import EventBus
from shared.events.identity import BuyerChanged

logger = structlog.get_logger(__name__)


class BuyerStore:
    def __init__(self, events: EventBus, validator: BuyerValidator | None = None) -> None:
        self._events = events
        self._validator = validator or BuyerValidator()
        self._data = BuyerData()

    def get_data(self) -> BuyerData:
        return self._data.model_copy()

    def set_data(self, data: Mapping[str, Any] | BuyerData | None = None) -> None:
        """Merge ``data`` over the current record and publish the result.

        Raises:
            ValueError: for unknown field names.
            pydantic.ValidationError: for values that are not strings, in
                which case the record is left unchanged and nothing is
                published.
        """
        if isinstance(data, BuyerData):
            update = data.model_dump(exclude_unset=True)
        else:
            update = dict(data or {})

        unknown = set(update) - set(BUYER_FIELDS)
        if unknown:
            raise ValueError(f"Unknown buyer field(s): {', '.join(sorted(unknown))}")

        # Merged record is re-validated so only strings (or None) are ever stored
        self._data = BuyerData.model_validate({**self._data.model_dump(), **update})
        logger.debug("buyer_data_set", fields=sorted(update))
        self._notify()

    def clear(self) -> None:
        self._data = BuyerData()
        self._notify()

    # -------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------
    def validate(self, fields: Iterable[str] | None = None) -> ValidationErrors | None:
        """Validate the requested fields (all four by default).

        Returns ``None`` when nothing failed, otherwise a mapping holding only
        the failing fields.
        """
        return self._validator.validate(self._data, fields)

    def is_order_step_complete(self) -> bool:
        return validation.is_order_step_complete(self._data)

    def is_contacts_step_complete(self) -> bool:
        return validation.is_contacts_step_complete(self._data)

    def _notify(self) -> None:
        self._events.publish(BuyerChanged(data=self.get_data()))
