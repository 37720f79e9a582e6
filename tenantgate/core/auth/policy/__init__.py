"""
Policy engines for authorization.

Available engines:
- table: Company role table (default)
"""

from .table import TablePolicyEngine, POLICY_TABLE

__all__ = ["TablePolicyEngine", "POLICY_TABLE"]
