"""Tests for the dashboard progress engine."""

import asyncio

from conftest import InMemoryProgressStore, make_date
from streak_voyage.clock import FixedClock
from streak_voyage.engines.progress import (
    DashboardProgressEngine,
    apply_streak_update,
    normalize_snapshot,
)
from streak_voyage.models.progress import DashboardProgressSnapshot, WorkoutCompletionEvent

DAY_ONE = make_date("2026-02-19T10:00:00Z")
DAY_TWO = make_date("2026-02-20T08:00:00Z")
DAY_FOUR = make_date("2026-02-22T10:00:00Z")


def make_engine(store, now, calendar, on_change=None):
    return DashboardProgressEngine(
        store=store,
        clock=FixedClock(now),
        calendar=calendar,
        on_change=on_change,
    )


def seeded_snapshot(**overrides) -> DashboardProgressSnapshot:
    values = dict(
        total_workouts=3,
        total_xp=150,
        current_streak=3,
        longest_streak=3,
        last_workout_at=DAY_ONE,
        daily_completed_date=DAY_ONE,
        daily_completed_workout_ids=["squats", "pushups"],
    )
    values.update(overrides)
    return DashboardProgressSnapshot(**values)


class TestRecordCompletion:
    """Tests for recording workout completions."""

    def test_first_completion_initializes_daily_progress_and_streak(self, utc_calendar):
        """Test the first workout starts a streak of one."""
        store = InMemoryProgressStore()
        engine = make_engine(store, DAY_ONE, utc_calendar)

        async def scenario():
            await engine.load()
            return await engine.record_completion(
                WorkoutCompletionEvent("squats", 50, DAY_ONE)
            )

        assert asyncio.run(scenario()) is True
        assert engine.total_workouts == 1
        assert engine.total_xp == 50
        assert engine.current_streak == 1
        assert engine.longest_streak == 1
        assert engine.today_completed_count == 1
        assert engine.is_workout_completed_today("squats")
        assert store.snapshot.current_streak == 1
        assert store.snapshot.last_workout_at == DAY_ONE

    def test_second_workout_same_day_does_not_increase_streak(self, utc_calendar):
        """Test distinct same-day completions accumulate XP only."""
        engine = make_engine(InMemoryProgressStore(), DAY_ONE, utc_calendar)

        async def scenario():
            await engine.load()
            await engine.record_completion(WorkoutCompletionEvent("squats", 50, DAY_ONE))
            await engine.record_completion(WorkoutCompletionEvent("pushups", 50, DAY_ONE))

        asyncio.run(scenario())

        assert engine.total_workouts == 2
        assert engine.total_xp == 100
        assert engine.current_streak == 1
        assert engine.today_completed_count == 2
        assert engine.snapshot.daily_completed_workout_ids == ["squats", "pushups"]

    def test_same_workout_twice_in_one_day_is_ignored(self, utc_calendar):
        """Test per-day idempotence: nothing changes and nothing persists."""
        store = InMemoryProgressStore()
        engine = make_engine(store, DAY_ONE, utc_calendar)

        async def scenario():
            await engine.load()
            await engine.record_completion(WorkoutCompletionEvent("squats", 50, DAY_ONE))
            saves = store.save_call_count
            repeated = await engine.record_completion(
                WorkoutCompletionEvent("squats", 50, DAY_ONE.replace(hour=18))
            )
            return repeated, store.save_call_count - saves

        repeated, extra_saves = asyncio.run(scenario())

        assert repeated is False
        assert extra_saves == 0
        assert engine.total_workouts == 1
        assert engine.total_xp == 50
        assert engine.today_completed_count == 1

    def test_consecutive_day_increases_streak_and_resets_daily_completion(self, utc_calendar):
        """Test yesterday's workout extends the streak."""
        seeded = seeded_snapshot(
            total_workouts=1,
            total_xp=50,
            current_streak=1,
            longest_streak=1,
            daily_completed_workout_ids=["squats"],
        )
        engine = make_engine(InMemoryProgressStore(seeded), DAY_TWO, utc_calendar)

        async def scenario():
            await engine.load()
            assert engine.today_completed_count == 0
            assert engine.current_streak == 1
            await engine.record_completion(WorkoutCompletionEvent("pushups", 50, DAY_TWO))

        asyncio.run(scenario())

        assert engine.total_workouts == 2
        assert engine.total_xp == 100
        assert engine.current_streak == 2
        assert engine.longest_streak == 2
        assert engine.today_completed_count == 1
        assert engine.is_workout_completed_today("pushups")
        assert not engine.is_workout_completed_today("squats")

    def test_completion_on_new_day_without_refresh(self, utc_calendar):
        """Test a completion dated tomorrow normalizes the stale day first."""
        engine = make_engine(
            InMemoryProgressStore(seeded_snapshot(current_streak=2, longest_streak=2)),
            DAY_ONE,
            utc_calendar,
        )

        async def scenario():
            await engine.load()
            assert engine.today_completed_count == 2
            return await engine.record_completion(
                WorkoutCompletionEvent("squats", 50, DAY_TWO)
            )

        assert asyncio.run(scenario()) is True
        assert engine.current_streak == 3
        assert engine.snapshot.daily_completed_workout_ids == ["squats"]
        assert engine.snapshot.daily_completed_date == DAY_TWO

    def test_completion_after_gap_restarts_streak(self, utc_calendar):
        """Test a gap of two or more days restarts the streak at one."""
        engine = make_engine(
            InMemoryProgressStore(seeded_snapshot(current_streak=5, longest_streak=5)),
            DAY_FOUR,
            utc_calendar,
        )

        async def scenario():
            await engine.load()
            await engine.record_completion(WorkoutCompletionEvent("squats", 50, DAY_FOUR))

        asyncio.run(scenario())

        assert engine.current_streak == 1
        assert engine.longest_streak == 5

    def test_level_progress(self, utc_calendar):
        """Test level derivation from accumulated XP."""
        engine = make_engine(
            InMemoryProgressStore(seeded_snapshot(total_xp=80)), DAY_ONE, utc_calendar
        )

        async def scenario():
            await engine.load()
            await engine.record_completion(WorkoutCompletionEvent("lunges", 50, DAY_ONE))

        asyncio.run(scenario())

        assert engine.total_xp == 130
        assert engine.current_level == 2
        assert engine.level_xp_progress == 30
        assert engine.xp_to_next_level == 70

    def test_on_change_receives_persisted_snapshot(self, utc_calendar):
        """Test the change callback fires after each persisted change."""
        seen = []
        engine = make_engine(
            InMemoryProgressStore(), DAY_ONE, utc_calendar, on_change=seen.append
        )

        async def scenario():
            await engine.load()
            await engine.record_completion(WorkoutCompletionEvent("squats", 50, DAY_ONE))
            await engine.record_completion(WorkoutCompletionEvent("squats", 50, DAY_ONE))

        asyncio.run(scenario())

        assert len(seen) == 1
        assert seen[0].total_workouts == 1

    def test_concurrent_completions_are_not_lost(self, utc_calendar):
        """Test the lock serializes overlapping calls."""
        store = InMemoryProgressStore()
        engine = make_engine(store, DAY_ONE, utc_calendar)

        async def scenario():
            await engine.load()
            await asyncio.gather(
                engine.record_completion(WorkoutCompletionEvent("squats", 50, DAY_ONE)),
                engine.record_completion(WorkoutCompletionEvent("pushups", 50, DAY_ONE)),
                engine.record_completion(WorkoutCompletionEvent("squats", 50, DAY_ONE)),
            )

        asyncio.run(scenario())

        assert store.snapshot.total_workouts == 2
        assert store.snapshot.total_xp == 100


class TestLoadAndRefresh:
    """Tests for loading and day-rollover normalization."""

    def test_missed_day_resets_streak_on_load(self, utc_calendar):
        """Test a two-day gap breaks the streak without a new completion."""
        store = InMemoryProgressStore(seeded_snapshot())
        engine = make_engine(store, DAY_FOUR, utc_calendar)

        asyncio.run(engine.load())

        assert engine.current_streak == 0
        assert engine.longest_streak == 3
        assert engine.total_workouts == 3
        assert engine.total_xp == 150
        assert engine.today_completed_count == 0
        assert store.save_call_count > 0

    def test_load_without_stored_snapshot_uses_defaults(self, utc_calendar):
        """Test a fresh install starts empty and writes nothing."""
        store = InMemoryProgressStore()
        engine = make_engine(store, DAY_ONE, utc_calendar)

        snapshot = asyncio.run(engine.load())

        assert snapshot == DashboardProgressSnapshot()
        assert engine.current_level == 1
        assert store.save_call_count == 0

    def test_load_same_day_does_not_persist(self, utc_calendar):
        """Test an up-to-date snapshot is not rewritten."""
        store = InMemoryProgressStore(seeded_snapshot())
        engine = make_engine(store, DAY_ONE.replace(hour=22), utc_calendar)

        asyncio.run(engine.load())

        assert engine.today_completed_count == 2
        assert store.save_call_count == 0

    def test_refresh_resets_daily_completion_when_day_changes(self, utc_calendar):
        """Test foreground refresh clears yesterday's completions."""
        store = InMemoryProgressStore(seeded_snapshot())
        clock = FixedClock(DAY_ONE)
        engine = DashboardProgressEngine(store, clock=clock, calendar=utc_calendar)

        async def scenario():
            await engine.load()
            assert engine.today_completed_count == 2
            clock.set(make_date("2026-02-20T09:00:00Z"))
            return await engine.refresh_for_current_date()

        assert asyncio.run(scenario()) is True
        assert engine.today_completed_count == 0
        assert engine.current_streak == 3
        assert store.snapshot.daily_completed_workout_ids == []
        assert store.snapshot.daily_completed_date is None
        assert store.save_call_count > 0

    def test_refresh_is_idempotent(self, utc_calendar):
        """Test refreshing twice equals refreshing once."""
        store = InMemoryProgressStore(seeded_snapshot())
        clock = FixedClock(DAY_ONE)
        engine = DashboardProgressEngine(store, clock=clock, calendar=utc_calendar)

        async def scenario():
            await engine.load()
            clock.set(DAY_FOUR)
            first_changed = await engine.refresh_for_current_date()
            once = engine.snapshot
            saves = store.save_call_count
            second_changed = await engine.refresh_for_current_date()
            return first_changed, second_changed, once, saves

        first_changed, second_changed, once, saves = asyncio.run(scenario())

        assert first_changed is True
        assert second_changed is False
        assert engine.snapshot == once
        assert store.save_call_count == saves


class TestPureFunctions:
    """Tests for normalize_snapshot and apply_streak_update."""

    def test_normalize_twice_equals_once(self, utc_calendar):
        """Test normalization idempotence."""
        once = normalize_snapshot(seeded_snapshot(), DAY_FOUR, utc_calendar)
        twice = normalize_snapshot(once, DAY_FOUR, utc_calendar)

        assert once == twice
        assert once.current_streak == 0

    def test_normalize_does_not_mutate_input(self, utc_calendar):
        """Test normalization returns a new snapshot."""
        original = seeded_snapshot()
        normalize_snapshot(original, DAY_FOUR, utc_calendar)

        assert original == seeded_snapshot()

    def test_normalize_keeps_streak_when_last_workout_was_yesterday(self, utc_calendar):
        """Test the streak survives until the day after tomorrow."""
        normalized = normalize_snapshot(seeded_snapshot(), DAY_TWO, utc_calendar)

        assert normalized.current_streak == 3
        assert normalized.daily_completed_workout_ids == []

    def test_streak_update_rules(self, utc_calendar):
        """Test each branch of the streak update."""
        fresh = DashboardProgressSnapshot()
        apply_streak_update(fresh, DAY_ONE, utc_calendar)
        assert fresh.current_streak == 1

        same_day = seeded_snapshot(current_streak=4)
        apply_streak_update(same_day, DAY_ONE.replace(hour=20), utc_calendar)
        assert same_day.current_streak == 4

        next_day = seeded_snapshot(current_streak=4)
        apply_streak_update(next_day, DAY_TWO, utc_calendar)
        assert next_day.current_streak == 5

        broken_then_next_day = seeded_snapshot(current_streak=0)
        apply_streak_update(broken_then_next_day, DAY_TWO, utc_calendar)
        assert broken_then_next_day.current_streak == 1

        gap = seeded_snapshot(current_streak=4)
        apply_streak_update(gap, DAY_FOUR, utc_calendar)
        assert gap.current_streak == 1

        future_dated = seeded_snapshot(current_streak=4, last_workout_at=DAY_FOUR)
        apply_streak_update(future_dated, DAY_ONE, utc_calendar)
        assert future_dated.current_streak == 1
