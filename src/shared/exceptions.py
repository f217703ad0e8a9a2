"""Infrastructure error taxonomy.

Validation problems are never raised: they are returned as data by the buyer
store. Only transport/service failures and setup contract violations use
exceptions.
"""


class StorefrontError(Exception):
    """Base class for storefront infrastructure errors."""


class ApiError(StorefrontError):
    """A product fetch or order submission failed at the service boundary."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code})"


class ConfigurationError(StorefrontError):
    """A required collaborator or setting is missing at startup."""
