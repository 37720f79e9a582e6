"""
Company models.
"""

from uuid import UUID
from sqlalchemy import String, ForeignKey, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tenantgate.core.auth.interfaces import CompanyRole
from .base import Base, StandardMixin, TimestampMixin
from .user import User


class Company(Base, StandardMixin):
    """
    Company - the tenancy root.

    owner_id is set at creation and never changes. The owner does not
    need a CompanyMember row; ownership alone confers every permission.
    """

    __tablename__ = "companies"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    owner_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    # Relationships
    owner: Mapped["User"] = relationship("User")
    members: Mapped[list["CompanyMember"]] = relationship(
        "CompanyMember",
        back_populates="company",
        cascade="all, delete-orphan",
        order_by="CompanyMember.created_at",
    )

    def __repr__(self) -> str:
        return f"<Company {self.name}>"


class CompanyMember(Base, TimestampMixin):
    """Company membership. A user holds at most one role per company."""

    __tablename__ = "company_members"

    user_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    company_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    role: Mapped[CompanyRole] = mapped_column(
        SQLEnum(CompanyRole, name="company_role"),
        default=CompanyRole.VIEWER,
        nullable=False,
    )

    # Relationships
    company: Mapped["Company"] = relationship(
        "Company",
        back_populates="members",
    )
    user: Mapped["User"] = relationship("User")

    def __repr__(self) -> str:
        return f"<CompanyMember company={self.company_id} user={self.user_id} role={self.role}>"
