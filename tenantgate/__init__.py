"""Tenantgate: company/project/task tenancy API and its authorization engine."""

__version__ = "0.1.0"
