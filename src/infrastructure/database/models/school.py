# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Schools and the class/lesson structure inside a school.

A teacher sees a class either by supervising it (``classes.supervisor_id``)
or by teaching at least one lesson in it (``lessons.teacher_id``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from src.infrastructure.database.models.student import Student


class School(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Tenant. Every other school-owned row points here."""

    __tablename__ = "schools"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)


subject_teachers = Table(
    "subject_teachers",
    Base.metadata,
    Column("subject_id", String(36), ForeignKey("subjects.id", ondelete="CASCADE"), primary_key=True),
    Column("teacher_id", String(36), ForeignKey("teachers.user_id", ondelete="CASCADE"), primary_key=True),
)


class Subject(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "subjects"

    school_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("schools.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)


class SchoolClass(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A class (section) of students inside one school."""

    __tablename__ = "classes"

    school_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("schools.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, default=30, nullable=False)
    supervisor_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("teachers.user_id", ondelete="SET NULL"), nullable=True, index=True
    )

    lessons: Mapped[list["Lesson"]] = relationship(back_populates="school_class")
    students: Mapped[list["Student"]] = relationship(back_populates="school_class")


class Lesson(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Links a teacher, a subject and a class."""

    __tablename__ = "lessons"

    school_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("schools.id", ondelete="CASCADE"), nullable=False, index=True
    )
    class_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    subject_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False
    )
    teacher_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("teachers.user_id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    school_class: Mapped[SchoolClass] = relationship(back_populates="lessons")
