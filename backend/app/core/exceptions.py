"""
Marketplace error taxonomy

Every failure surfaced to a purchaser, vendor or admin is one of these.
Routes convert them to HTTPException with to_http_exception().
"""
from fastapi import HTTPException, status


class MarketplaceError(Exception):
    """Base class for marketplace errors"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(MarketplaceError):
    """Missing or malformed form field, raised before any backend call"""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidTransitionError(ValidationError):
    """Order status change refused by the transition policy"""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot change order status from '{current}' to '{target}'")
        self.current = current
        self.target = target


class BackendError(MarketplaceError):
    """Failure reported by the data backend, message kept verbatim"""

    status_code = status.HTTP_502_BAD_GATEWAY


class NotFoundError(MarketplaceError):
    """Lookup returned no row"""

    status_code = status.HTTP_404_NOT_FOUND


class AuthenticationError(MarketplaceError):
    """Bad credentials or missing/invalid token"""

    status_code = status.HTTP_401_UNAUTHORIZED


def to_http_exception(error: MarketplaceError) -> HTTPException:
    """Map a marketplace error to the HTTPException a route raises"""
    headers = None
    if isinstance(error, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    return HTTPException(status_code=error.status_code, detail=error.message, headers=headers)
