"""Custom exceptions for the dashboard data layer."""


class DashboardException(Exception):
    """Base exception for the dashboard application."""

    pass


class DatabaseError(DashboardException):
    """Raised when a database operation fails.

    The message is always the generic, operation-specific text shown to
    callers; the driver error is only available as ``__cause__``.
    """

    pass


class ConfigurationError(DashboardException):
    """Raised when configuration is invalid."""

    pass
