# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User accounts and role profiles.

Every staff profile shares its primary key with the owning ``users`` row, so
a token subject id is also the teacher, principal, school admin or parent id.
Staff profiles carry exactly one ``school_id``; the parent profile carries
none because a parent's children may attend several schools.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from src.infrastructure.database.models.school import School
    from src.infrastructure.database.models.student import StudentParent


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Login account. ``role`` holds a ``Role`` value."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class _StaffProfile:
    """Columns shared by the single-school staff profiles."""

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    school_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("schools.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


class SchoolAdmin(_StaffProfile, TimestampMixin, Base):
    __tablename__ = "school_admins"

    user: Mapped[User] = relationship()
    school: Mapped["School"] = relationship()


class Principal(_StaffProfile, TimestampMixin, Base):
    __tablename__ = "principals"

    user: Mapped[User] = relationship()
    school: Mapped["School"] = relationship()


class Teacher(_StaffProfile, TimestampMixin, Base):
    __tablename__ = "teachers"

    user: Mapped[User] = relationship()
    school: Mapped["School"] = relationship()


class Parent(TimestampMixin, Base):
    """Parent profile. Deliberately has no school column."""

    __tablename__ = "parents"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)

    user: Mapped[User] = relationship()
    student_links: Mapped[list["StudentParent"]] = relationship(back_populates="parent")
