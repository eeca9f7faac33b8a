"""Exceptions for the scanlink service layer.

Storage failures other than identifier collisions propagate unchanged
from the storage layer; these are the service's own outcomes.
"""


class ServiceError(Exception):
    """Base exception for all service-level errors."""
    pass


class ValidationError(ServiceError):
    """Caller supplied input that failed validation."""
    pass


class InvalidIdFormatError(ServiceError):
    """The identifier is not a well-formed short identifier."""
    pass


class ShortLinkNotFoundError(ServiceError):
    """No short link exists for the identifier."""
    pass


class ExhaustedRetriesError(ServiceError):
    """Every generated identifier collided with an existing one."""
    
    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Failed to generate unique ID after {attempts} attempts")
