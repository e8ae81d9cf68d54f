"""Data-access layer for the Acme invoices dashboard."""

__version__ = "1.0.0"
