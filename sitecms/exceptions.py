"""
Custom Exception Classes for Site CMS

This module defines custom exceptions for better error handling and
consistent error responses across the application.
"""

import enum
from typing import Any

from fastapi import status


class ErrorCode(str, enum.Enum):
    """Machine-readable error codes returned in the `error_code` field."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"

    AUTH_FAILED = "AUTH_FAILED"
    AUTH_PERMISSION_DENIED = "AUTH_PERMISSION_DENIED"

    VALIDATION_FAILED = "VALIDATION_FAILED"
    VALIDATION_DUPLICATE_RESOURCE = "VALIDATION_DUPLICATE_RESOURCE"

    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RESOURCE_SITE_NOT_FOUND = "RESOURCE_SITE_NOT_FOUND"
    RESOURCE_PLUGIN_NOT_FOUND = "RESOURCE_PLUGIN_NOT_FOUND"
    RESOURCE_SITE_PLUGIN_NOT_FOUND = "RESOURCE_SITE_PLUGIN_NOT_FOUND"

    PLUGIN_INVALID_CONFIGURATION = "PLUGIN_INVALID_CONFIGURATION"


class CMSError(Exception):
    """Base exception class for all CMS-related exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Authentication & Authorization Exceptions
# ============================================================================


class AuthenticationError(CMSError):
    """Raised when authentication fails"""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message=message, status_code=status.HTTP_401_UNAUTHORIZED, error_code=ErrorCode.AUTH_FAILED)


class AuthorizationError(CMSError):
    """Raised when user lacks permission for an action"""

    def __init__(
        self, message: str = "You do not have permission to perform this action", required_role: str | None = None
    ):
        details = {"required_role": required_role} if required_role else {}
        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            error_code=ErrorCode.AUTH_PERMISSION_DENIED,
            details=details,
        )


# ============================================================================
# Resource Not Found Exceptions
# ============================================================================


class ResourceNotFoundError(CMSError):
    """Base class for resource not found errors"""

    def __init__(
        self,
        resource_type: str,
        resource_id: Any | None = None,
        error_code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND,
        message: str | None = None,
    ):
        if message is None:
            message = f"{resource_type} not found"
            if resource_id is not None:
                message = f"{resource_type} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code=error_code,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class SiteNotFoundError(ResourceNotFoundError):
    """Raised when a site does not exist or has been soft-deleted"""

    def __init__(self, site_id: Any | None = None):
        super().__init__(resource_type="Site", resource_id=site_id, error_code=ErrorCode.RESOURCE_SITE_NOT_FOUND)


class PluginNotFoundError(ResourceNotFoundError):
    """Raised when a plugin is neither registered nor in the catalog"""

    def __init__(self, plugin_id: Any | None = None):
        super().__init__(resource_type="Plugin", resource_id=plugin_id, error_code=ErrorCode.RESOURCE_PLUGIN_NOT_FOUND)


class SitePluginNotFoundError(ResourceNotFoundError):
    """Raised when a plugin has never been associated with a site"""

    def __init__(self, site_id: Any, plugin_id: Any):
        super().__init__(
            resource_type="SitePlugin",
            resource_id=f"{site_id}:{plugin_id}",
            error_code=ErrorCode.RESOURCE_SITE_PLUGIN_NOT_FOUND,
            message="Plugin is not associated with this site",
        )
        self.details.update({"site_id": site_id, "plugin_id": plugin_id})


# ============================================================================
# Plugin Exceptions
# ============================================================================


class InvalidPluginConfigurationError(CMSError):
    """Raised when a plugin rejects the configuration supplied for a site"""

    def __init__(self, system_name: str, reason: str):
        super().__init__(
            message=f"Invalid configuration for plugin '{system_name}': {reason}",
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=ErrorCode.PLUGIN_INVALID_CONFIGURATION,
            details={"system_name": system_name, "reason": reason},
        )


# ============================================================================
# Database & Service Exceptions
# ============================================================================


class DatabaseError(CMSError):
    """Raised when a database operation fails"""

    def __init__(self, message: str = "A database error occurred", operation: str | None = None):
        details = {"operation": operation} if operation else {}
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code=ErrorCode.DATABASE_ERROR,
            details=details,
        )
