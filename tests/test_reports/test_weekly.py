"""Tests for the weekly report snapshot cache."""

import json
from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select

from rehabreport.models.daily_summary import DailySummary
from rehabreport.models.recovery import RecoveryScore
from rehabreport.models.report import ReportPeriod, ReportSnapshot
from rehabreport.models.user import User
from rehabreport.reports.errors import NotFoundError
from rehabreport.reports.narrative import (
    FULL_WEEK_MESSAGE,
    HIGH_CONSISTENCY_MESSAGE,
    NO_DATA_MESSAGE,
)
from rehabreport.reports.snapshots import encode_range
from rehabreport.reports.store import insert_snapshot_if_absent
from rehabreport.reports.weekly import current_week_start, get_or_create_weekly_report
from tests.conftest import test_session

MONDAY = date(2024, 6, 10)


async def _create_user(session: object) -> int:
    user = User(name="Test User", email="test@example.com")
    session.add(user)  # type: ignore[union-attr]
    await session.commit()  # type: ignore[union-attr]
    await session.refresh(user)  # type: ignore[union-attr]
    return user.id


async def _add_week(session: object, user_id: int, rates: list[int]) -> None:
    for i, rate in enumerate(rates):
        session.add(  # type: ignore[union-attr]
            DailySummary(
                user_id=user_id,
                summary_date=MONDAY + timedelta(days=i),
                exercise_completion_rate=rate,
            )
        )
    await session.commit()  # type: ignore[union-attr]


async def _count_snapshots(session: object) -> int:
    result = await session.execute(select(func.count(ReportSnapshot.id)))  # type: ignore[union-attr]
    return result.scalar_one()


class TestCurrentWeekStart:
    def test_monday_is_itself(self) -> None:
        assert current_week_start(date(2024, 6, 10)) == date(2024, 6, 10)

    def test_sunday_goes_back(self) -> None:
        assert current_week_start(date(2024, 6, 16)) == date(2024, 6, 10)


class TestGetOrCreateWeeklyReport:
    async def test_creates_snapshot(self) -> None:
        async with test_session() as session:
            user_id = await _create_user(session)
            await _add_week(session, user_id, [100] * 7)
            session.add(
                RecoveryScore(user_id=user_id, score_date=date(2024, 6, 16), daily_score=Decimal("78.50"))
            )
            await session.commit()

            report = await get_or_create_weekly_report(session, user_id, MONDAY)

        assert report.period == "WEEKLY"
        assert report.user_id == user_id
        assert report.covered_range.start == "2024-06-10"
        assert report.covered_range.end == "2024-06-16"
        assert report.weekly_highlight == FULL_WEEK_MESSAGE
        assert report.metrics is not None
        assert report.metrics.total_days_with_records == 7
        assert report.metrics.avg_completion_rate == 100
        assert report.recovery_prediction == Decimal("78.5")

    async def test_same_week_returns_same_snapshot(self) -> None:
        async with test_session() as session:
            user_id = await _create_user(session)
            await _add_week(session, user_id, [90, 90, 90, 90])

            first = await get_or_create_weekly_report(session, user_id, MONDAY)
            second = await get_or_create_weekly_report(session, user_id, MONDAY)

            assert first.report_snapshot_id == second.report_snapshot_id
            assert second.weekly_highlight == HIGH_CONSISTENCY_MESSAGE
            assert await _count_snapshots(session) == 1

    async def test_cache_hit_does_not_recompute(self) -> None:
        async with test_session() as session:
            user_id = await _create_user(session)
            first = await get_or_create_weekly_report(session, user_id, MONDAY)
            assert first.weekly_highlight == NO_DATA_MESSAGE

            # New activity after the snapshot was stored does not change it
            await _add_week(session, user_id, [100] * 7)
            second = await get_or_create_weekly_report(session, user_id, MONDAY)

        assert second.report_snapshot_id == first.report_snapshot_id
        assert second.weekly_highlight == NO_DATA_MESSAGE
        assert second.metrics is not None
        assert second.metrics.total_days_with_records == 0

    async def test_shifted_week_is_a_distinct_snapshot(self) -> None:
        async with test_session() as session:
            user_id = await _create_user(session)
            first = await get_or_create_weekly_report(session, user_id, MONDAY)
            shifted = await get_or_create_weekly_report(
                session, user_id, MONDAY + timedelta(days=1)
            )

            assert shifted.report_snapshot_id != first.report_snapshot_id
            assert shifted.covered_range.start == "2024-06-11"
            assert shifted.covered_range.end == "2024-06-17"
            assert await _count_snapshots(session) == 2

    async def test_missing_recovery_score_is_zero(self) -> None:
        async with test_session() as session:
            user_id = await _create_user(session)
            report = await get_or_create_weekly_report(session, user_id, MONDAY)

        assert report.recovery_prediction == Decimal("0")

    async def test_defaults_to_current_week(self) -> None:
        async with test_session() as session:
            user_id = await _create_user(session)
            report = await get_or_create_weekly_report(session, user_id)

        monday = current_week_start()
        assert report.covered_range.start == monday.isoformat()
        assert report.covered_range.end == (monday + timedelta(days=6)).isoformat()

    async def test_highlight_is_stored_json_encoded(self) -> None:
        async with test_session() as session:
            user_id = await _create_user(session)
            report = await get_or_create_weekly_report(session, user_id, MONDAY)
            snapshot = await session.get(ReportSnapshot, report.report_snapshot_id)

            assert snapshot is not None
            assert snapshot.weekly_highlight == json.dumps(NO_DATA_MESSAGE)
            assert json.loads(snapshot.covered_range) == {"start": "2024-06-10", "end": "2024-06-16"}
            assert json.loads(snapshot.metrics) == {"totalDaysWithRecords": 0, "avgCompletionRate": 0}

    async def test_user_not_found_creates_nothing(self) -> None:
        async with test_session() as session:
            with pytest.raises(NotFoundError):
                await get_or_create_weekly_report(session, 999, MONDAY)
            assert await _count_snapshots(session) == 0

    async def test_lost_race_returns_winner(self) -> None:
        async with test_session() as session:
            user_id = await _create_user(session)
            winner = await get_or_create_weekly_report(session, user_id, MONDAY)

            # Simulate a request that checked the cache before the winner committed
            with patch(
                "rehabreport.reports.weekly.find_snapshot_by_range",
                new_callable=AsyncMock,
                return_value=None,
            ):
                loser = await get_or_create_weekly_report(session, user_id, MONDAY)

            assert loser.report_snapshot_id == winner.report_snapshot_id
            assert await _count_snapshots(session) == 1


class TestInsertSnapshotIfAbsent:
    def _snapshot(self, user_id: int) -> ReportSnapshot:
        end = MONDAY + timedelta(days=6)
        return ReportSnapshot(
            user_id=user_id,
            period=ReportPeriod.WEEKLY.value,
            range_start=MONDAY,
            range_end=end,
            covered_range=encode_range(MONDAY, end),
            weekly_highlight=json.dumps(NO_DATA_MESSAGE),
            metrics="{}",
            recovery_prediction=Decimal("0"),
        )

    async def test_first_insert_creates(self) -> None:
        async with test_session() as session:
            user_id = await _create_user(session)
            snapshot, created = await insert_snapshot_if_absent(session, self._snapshot(user_id))
            assert created is True
            assert snapshot.id is not None

    async def test_duplicate_returns_existing(self) -> None:
        async with test_session() as session:
            user_id = await _create_user(session)
            first, _ = await insert_snapshot_if_absent(session, self._snapshot(user_id))
            first_id = first.id

            second, created = await insert_snapshot_if_absent(session, self._snapshot(user_id))
            assert created is False
            assert second.id == first_id
            assert await _count_snapshots(session) == 1
