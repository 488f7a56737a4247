"""Custom exceptions for the storefront backend"""

from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """Base exception for the storefront.

    Every subclass carries the machine-readable ``code`` and the HTTP status
    the web layer answers with.
    """

    code = "InternalError"
    status_code = 500

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message, "error": self.code}


class ValidationError(StorefrontError):
    """Missing or malformed input"""

    code = "ValidationError"
    status_code = 400


class InvalidCartError(ValidationError):
    """Cart submission is empty or malformed"""

    code = "InvalidCart"


class UnknownProductError(ValidationError):
    """Cart references a product id absent from the catalog"""

    code = "UnknownProduct"

    def __init__(self, product_id: Any):
        self.product_id = product_id
        super().__init__(f"Product with ID {product_id} not found.")


class DuplicateEmailError(StorefrontError):
    code = "DuplicateEmail"
    status_code = 400

    def __init__(self, email: str):
        self.email = email
        super().__init__("User with this email already exists.")


class UnauthorizedError(StorefrontError):
    """No credentials were presented"""

    code = "MissingToken"
    status_code = 401


class ForbiddenError(StorefrontError):
    """Credentials were presented but do not grant access"""

    code = "InvalidToken"
    status_code = 403


class NotFoundError(StorefrontError):
    code = "NotFound"
    status_code = 404


class GatewayError(StorefrontError):
    """Error reported by the payment provider. Message is passed through."""

    code = "GatewayFailure"
    status_code = 500


class PasswordHashingError(StorefrontError):
    """bcrypt failed (resource exhaustion, bad work factor, ...)"""

    code = "InternalError"
    status_code = 500


class ConfigError(StorefrontError):
    """Configuration error"""

    code = "ConfigError"
    status_code = 500


class InvalidCredentialsError(UnauthorizedError):
    """Login with an unknown email or a wrong password"""

    code = "InvalidCredentials"
