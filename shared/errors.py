"""
Shared error handling for the AR.IO gateway selector.

None of these errors escape the public selector operations: each is raised
by a lower layer and absorbed into a fallback value at the boundary.
"""

from typing import Dict, Any, Optional


class ArGatewayException(Exception):
    """Base exception for the gateway selector."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a loggable dictionary."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


class StorageError(ArGatewayException):
    """Durable cache store errors."""

    def __init__(self, message: str = "Storage error", details: Optional[Dict[str, Any]] = None):
        super().__init__("STORAGE_ERROR", message, details)


class RegistryFetchError(ArGatewayException):
    """Gateway address registry retrieval errors."""

    def __init__(self, message: str = "Registry fetch failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("REGISTRY_FETCH_ERROR", message, details)
