"""
Core interfaces - Protocols for swappable backends.
"""

from .tenancy import TenancyStore, TenancySnapshot

__all__ = [
    "TenancyStore",
    "TenancySnapshot",
]
