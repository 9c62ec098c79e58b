"""
Exercise Tracker — Exercise Service Unit Tests
================================================

What:  ExerciseService against a mocked session and a patched user lookup.

What we test:
    ✅ response merges the owner's id/username with the exercise
    ✅ missing date defaults to today (UTC)
    ✅ unparseable date / duration → InternalFailure, nothing inserted
    ✅ unknown owner → UserNotFound, nothing inserted
    ✅ get_log shapes entries and counts the returned set
    ✅ owner lookup happens before the query string is parsed
"""

import datetime
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest

from exercise_tracker.exceptions import InternalFailure, UserNotFound
from exercise_tracker.models.exercise import Exercise
from exercise_tracker.models.user import User
from exercise_tracker.schemas.exercise import ExerciseCreate
from exercise_tracker.services.exercise_service import ExerciseService
from exercise_tracker.services.parsing import format_calendar_date, today


@pytest.fixture
def alice():
    return User(id=uuid4(), username="alice")


@pytest.fixture
def patched_user_service(alice):
    with patch("exercise_tracker.services.exercise_service.user_service") as mock_users:
        mock_users.get_user = AsyncMock(return_value=alice)
        yield mock_users


class TestCreateExercise:
    """Tests for create_exercise."""

    def setup_method(self):
        self.service = ExerciseService()

    @pytest.mark.asyncio
    async def test_create_exercise(self, mock_db_session, patched_user_service, alice):
        """The response merges the owner with the stored exercise."""
        payload = ExerciseCreate(description="run", duration="30", date="2023-05-01")

        result = await self.service.create_exercise(mock_db_session, str(alice.id), payload)

        assert result.id == alice.id
        assert result.username == "alice"
        assert result.description == "run"
        assert result.duration == 30
        assert result.date == "Mon May 01 2023"

        stored = mock_db_session.add.call_args[0][0]
        assert isinstance(stored, Exercise)
        assert stored.user_id == alice.id
        assert stored.date == datetime.date(2023, 5, 1)
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_date_defaults_to_today(self, mock_db_session, patched_user_service, alice):
        """No date means today in UTC."""
        before = today()
        result = await self.service.create_exercise(
            mock_db_session,
            str(alice.id),
            ExerciseCreate(description="swim", duration=20),
        )
        after = today()

        assert result.date in {format_calendar_date(before), format_calendar_date(after)}
        assert mock_db_session.add.call_args[0][0].date in {before, after}

    @pytest.mark.asyncio
    async def test_invalid_date_fails(self, mock_db_session, patched_user_service, alice):
        """An unparseable date is InternalFailure and nothing is added."""
        payload = ExerciseCreate(description="run", duration=30, date="the day before yesterday")

        with pytest.raises(InternalFailure) as exc_info:
            await self.service.create_exercise(mock_db_session, str(alice.id), payload)

        assert exc_info.value.status_code == 500
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_numeric_duration_fails(self, mock_db_session, patched_user_service, alice):
        """A non-numeric duration is InternalFailure and nothing is added."""
        payload = ExerciseCreate(description="run", duration="half an hour")

        with pytest.raises(InternalFailure):
            await self.service.create_exercise(mock_db_session, str(alice.id), payload)
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_oversized_duration_fails(self, mock_db_session, patched_user_service, alice):
        """A duration too large for the column never reaches the store."""
        payload = ExerciseCreate(description="run", duration=10**20)

        with pytest.raises(InternalFailure):
            await self.service.create_exercise(mock_db_session, str(alice.id), payload)
        mock_db_session.add.assert_not_called()
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_user(self, mock_db_session, patched_user_service):
        """An unknown owner stops the insert."""
        missing = str(uuid4())
        patched_user_service.get_user = AsyncMock(side_effect=UserNotFound(missing))

        with pytest.raises(UserNotFound):
            await self.service.create_exercise(
                mock_db_session,
                missing,
                ExerciseCreate(description="run", duration=30),
            )
        mock_db_session.add.assert_not_called()


class TestGetLog:
    """Tests for get_log."""

    def setup_method(self):
        self.service = ExerciseService()

    def _rows(self, mock_db_session, exercises):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = exercises
        mock_db_session.execute.return_value = mock_result

    @pytest.mark.asyncio
    async def test_log_entries_are_stripped_and_counted(self, mock_db_session, patched_user_service, alice):
        """Entries drop ids and count matches the returned set."""
        self._rows(mock_db_session, [
            Exercise(id=uuid4(), user_id=alice.id, description="run", duration=30,
                     date=datetime.date(2023, 5, 1)),
            Exercise(id=uuid4(), user_id=alice.id, description="bike", duration=60,
                     date=datetime.date(2023, 5, 3)),
        ])

        result = await self.service.get_log(mock_db_session, str(alice.id))

        assert result.id == alice.id
        assert result.username == "alice"
        assert result.count == 2
        assert [entry.model_dump() for entry in result.log] == [
            {"description": "run", "duration": 30, "date": "Mon May 01 2023"},
            {"description": "bike", "duration": 60, "date": "Wed May 03 2023"},
        ]

    @pytest.mark.asyncio
    async def test_empty_log(self, mock_db_session, patched_user_service, alice):
        """A user with no matching exercises gets count 0."""
        self._rows(mock_db_session, [])

        result = await self.service.get_log(mock_db_session, str(alice.id), limit="5")

        assert result.count == 0
        assert result.log == []

    @pytest.mark.asyncio
    async def test_unknown_user_wins_over_bad_query(self, mock_db_session, patched_user_service):
        """The owner lookup runs before the query is parsed."""
        missing = str(uuid4())
        patched_user_service.get_user = AsyncMock(side_effect=UserNotFound(missing))

        with pytest.raises(UserNotFound):
            await self.service.get_log(mock_db_session, missing, date_from="garbage")
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_bad_bound_fails_without_querying(self, mock_db_session, patched_user_service, alice):
        """A bad date bound fails before any SELECT."""
        with pytest.raises(InternalFailure):
            await self.service.get_log(mock_db_session, str(alice.id), date_from="garbage")
        mock_db_session.execute.assert_not_awaited()
