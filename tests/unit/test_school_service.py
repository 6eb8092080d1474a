# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for School service."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from src.domains.access.predicates import ParentSchools
from src.domains.school.service import SchoolNotFoundError, SchoolService


@pytest.fixture
def mock_db():
    """Create mock database session."""
    db = AsyncMock()
    db.execute = AsyncMock()
    return db


@pytest.fixture
def school_service(mock_db):
    """Create school service with mock database."""
    return SchoolService(db=mock_db)


@pytest.fixture
def sample_school():
    """Create a sample school model."""
    school = MagicMock()
    school.id = "A"
    school.code = "SCH-A"
    school.name = "Alder Primary"
    school.city = "Izmir"
    return school


class TestListSchools:
    @pytest.mark.asyncio
    async def test_scoped_list(self, school_service, mock_db, sample_school) -> None:
        result = MagicMock()
        result.scalars.return_value.all.return_value = [sample_school]
        mock_db.execute.return_value = result

        schools = await school_service.list_schools(ParentSchools("P1"))

        assert [s.code for s in schools] == ["SCH-A"]
        stmt = mock_db.execute.await_args.args[0]
        sql = str(stmt.compile(dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True}))
        assert "schools.id IN" in sql
        assert "student_parents.parent_id = 'P1'" in sql


class TestGetOverview:
    @pytest.mark.asyncio
    async def test_missing_school_raises(self, school_service, mock_db) -> None:
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_db.execute.return_value = result

        with pytest.raises(SchoolNotFoundError):
            await school_service.get_overview("Z")

    @pytest.mark.asyncio
    async def test_counts(self, school_service, mock_db, sample_school) -> None:
        found = MagicMock()
        found.scalar_one_or_none.return_value = sample_school

        def count(value: int) -> MagicMock:
            result = MagicMock()
            result.scalar.return_value = value
            return result

        mock_db.execute.side_effect = [found, count(120), count(5), count(9), count(7), count(3)]

        overview = await school_service.get_overview("A")

        assert overview.school.id == "A"
        assert overview.student_count == 120
        assert overview.class_count == 5
        assert overview.teacher_count == 9
        assert overview.subject_count == 7
        assert overview.unassigned_student_count == 3
