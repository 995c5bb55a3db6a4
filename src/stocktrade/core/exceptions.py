"""Application-level exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 500

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    @property
    def details(self) -> Optional[dict]:
        """Extra error details exposed to API clients."""
        return None


class ValidationError(AppError):
    """Raised when input validation fails."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class PriceDeviationExceededError(AppError):
    """Raised when the requested price is too far from the catalog price."""

    status_code = 400

    def __init__(
        self,
        deviation: str,
        max_allowed: float,
        current_price: float,
        requested_price: float,
    ):
        self.deviation = deviation
        self.max_allowed = max_allowed
        super().__init__(
            f"Price deviation of {deviation}% exceeds maximum allowed {max_allowed}%. "
            f"Current price: ${current_price}, Requested price: ${requested_price}",
            code="PRICE_DEVIATION_EXCEEDED",
        )

    @property
    def details(self) -> Optional[dict]:
        return {"deviation": self.deviation, "maxAllowed": self.max_allowed}


class VendorError(AppError):
    """Base class for failures talking to the stock vendor."""

    status_code = 502

    def __init__(self, message: str, code: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message, code=code)

    @property
    def retryable(self) -> bool:
        return False


class VendorUnavailableError(VendorError):
    """No response was received from the vendor (network failure or timeout)."""

    status_code = 503

    def __init__(self, message: str = "Vendor API is not responding"):
        super().__init__(message, code="VENDOR_UNAVAILABLE", status=503)

    @property
    def retryable(self) -> bool:
        return True


class VendorApiError(VendorError):
    """
    The vendor answered with an error status or an error body.

    HTTP 5xx answers are transient; error envelopes in a 2xx answer are not.
    """

    def __init__(
        self,
        message: str,
        status: int,
        code: Optional[str] = None,
        transient: Optional[bool] = None,
    ):
        self._transient = transient
        super().__init__(message, code=code or "VENDOR_API_ERROR", status=status)

    @property
    def retryable(self) -> bool:
        if self._transient is not None:
            return self._transient
        return self.status >= 500


class InternalError(AppError):
    """Raised for unexpected failures."""

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, code="INTERNAL_ERROR")
