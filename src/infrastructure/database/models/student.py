# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Students and their parent links.

``students.primary_parent_id`` is only a display pointer. Access decisions
read ``student_parents``, which holds the primary link and every additional
one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from src.infrastructure.database.models.school import School, SchoolClass
    from src.infrastructure.database.models.user import Parent


class Student(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "students"

    school_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("schools.id", ondelete="CASCADE"), nullable=False, index=True
    )
    class_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("classes.id", ondelete="SET NULL"), nullable=True, index=True
    )
    primary_parent_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("parents.user_id", ondelete="SET NULL"), nullable=True
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    registration_number: Mapped[str] = mapped_column(String(50), nullable=False)

    school: Mapped["School"] = relationship()
    school_class: Mapped["SchoolClass | None"] = relationship(back_populates="students")
    parent_links: Mapped[list["StudentParent"]] = relationship(back_populates="student")


class StudentParent(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """One parent-child relationship row (primary or additional)."""

    __tablename__ = "student_parents"
    __table_args__ = (UniqueConstraint("student_id", "parent_id", name="uq_student_parent"),)

    student_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True
    )
    parent_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("parents.user_id", ondelete="CASCADE"), nullable=False, index=True
    )
    relationship_type: Mapped[str] = mapped_column(String(32), default="parent", nullable=False)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    student: Mapped[Student] = relationship(back_populates="parent_links")
    parent: Mapped["Parent"] = relationship(back_populates="student_links")
