"""
Company schemas (read-only views embedded in project responses).
"""

from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

from tenantgate.core.auth.interfaces import CompanyRole


class UserSummary(BaseModel):
    """Public user info shown next to a company."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str


class CompanyMemberResponse(BaseModel):
    """Company member with the user behind the membership."""
    model_config = ConfigDict(from_attributes=True)

    user_id: UUID
    role: CompanyRole
    user: UserSummary


class CompanySummary(BaseModel):
    """Company with its owner and members."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    owner_id: UUID
    owner: UserSummary
    members: list[CompanyMemberResponse] = Field(default_factory=list)
