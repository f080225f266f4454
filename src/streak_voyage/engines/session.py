"""Workout session state machine."""

import logging
from enum import Enum
from typing import Callable

from ..clock import Clock, SystemClock
from ..config import DEFAULT_REST_SECONDS
from ..models.progress import WorkoutCompletionEvent
from ..models.workout import WorkoutPlan
from .timer import AsyncioRestTicker, RestTicker

logger = logging.getLogger(__name__)


class WorkoutPhase(str, Enum):
    """Phase of a workout session."""

    FORM_TIP = "form_tip"
    ACTIVE_SET = "active_set"
    REST = "rest"
    COMPLETED = "completed"


class WorkoutSession:
    """Drives one attempt at a workout plan from form tip to completion.

    The machine is synchronous and timer-agnostic: the rest countdown only
    moves when `tick_rest_countdown()` is called. With automatic timing
    enabled, a ticker is started on entering rest and stopped before any
    other advance. Calls made in the wrong phase are ignored.

    Nothing is persisted here; a finished session exposes a
    `WorkoutCompletionEvent` for the host to forward to the progress
    engine. Abandoning a session has no side effects.
    """

    def __init__(
        self,
        plan: WorkoutPlan,
        rest_duration_seconds: int = DEFAULT_REST_SECONDS,
        uses_automatic_rest_timer: bool = False,
        clock: Clock | None = None,
        ticker: RestTicker | None = None,
        on_completed: Callable[[WorkoutCompletionEvent], None] | None = None,
    ):
        self.plan = plan
        self.rest_duration_seconds = max(rest_duration_seconds, 1)
        self.uses_automatic_rest_timer = uses_automatic_rest_timer
        self.clock = clock or SystemClock()
        self.on_completed = on_completed
        self._ticker = ticker

        self.phase = WorkoutPhase.FORM_TIP
        self.current_set_index = 0
        self.current_rep_count = 0
        self.rest_seconds_remaining = self.rest_duration_seconds
        self.completion_event: WorkoutCompletionEvent | None = None
        self._event_taken = False

    @property
    def ticker(self) -> RestTicker:
        if self._ticker is None:
            self._ticker = AsyncioRestTicker()
        return self._ticker

    @property
    def total_sets(self) -> int:
        return len(self.plan.reps_by_set)

    @property
    def current_set_target(self) -> int:
        if 0 <= self.current_set_index < self.total_sets:
            return self.plan.reps_by_set[self.current_set_index]
        return 0

    @property
    def current_set_number(self) -> int:
        return min(self.current_set_index + 1, self.total_sets)

    @property
    def completed_sets_count(self) -> int:
        if self.phase is WorkoutPhase.ACTIVE_SET:
            return self.current_set_index
        if self.phase is WorkoutPhase.REST:
            return self.current_set_index + 1
        if self.phase is WorkoutPhase.COMPLETED:
            return self.total_sets
        return 0

    @property
    def can_count_rep(self) -> bool:
        return self.phase is WorkoutPhase.ACTIVE_SET

    @property
    def can_complete_set(self) -> bool:
        return self.phase is WorkoutPhase.ACTIVE_SET

    def start_workout(self) -> None:
        """Begin (or restart) the session at the first set."""
        self._stop_rest_timer()
        self.completion_event = None
        self._event_taken = False
        self.current_set_index = 0
        self.current_rep_count = 0
        self.rest_seconds_remaining = self.rest_duration_seconds
        self.phase = WorkoutPhase.ACTIVE_SET

    def count_rep(self) -> None:
        if not self.can_count_rep:
            return
        if self.current_rep_count >= self.current_set_target:
            return

        self.current_rep_count += 1

        if self.current_rep_count == self.current_set_target:
            self._complete_current_set()

    def complete_set(self) -> None:
        """Mark the current set done without counting each rep."""
        if not self.can_complete_set:
            return
        self.current_rep_count = self.current_set_target
        self._complete_current_set()

    def skip_rest(self) -> None:
        if self.phase is not WorkoutPhase.REST:
            return
        self.rest_seconds_remaining = 0
        self._move_to_next_set()

    def tick_rest_countdown(self) -> None:
        if self.phase is not WorkoutPhase.REST:
            return
        if self.rest_seconds_remaining <= 0:
            self._move_to_next_set()
            return

        self.rest_seconds_remaining -= 1

        if self.rest_seconds_remaining == 0:
            self._move_to_next_set()

    def take_completion_event(self) -> WorkoutCompletionEvent | None:
        """Hand the completion event to the host, once per completed session."""
        if self.completion_event is None or self._event_taken:
            return None
        self._event_taken = True
        return self.completion_event

    def _complete_current_set(self) -> None:
        if self.current_set_index >= self.total_sets - 1:
            self._finish_workout()
            return
        self._start_rest()

    def _start_rest(self) -> None:
        self.phase = WorkoutPhase.REST
        self.rest_seconds_remaining = self.rest_duration_seconds
        if self.uses_automatic_rest_timer:
            self._stop_rest_timer()
            self.ticker.start(self.tick_rest_countdown)

    def _move_to_next_set(self) -> None:
        self._stop_rest_timer()
        self.current_set_index += 1
        self.current_rep_count = 0
        self.phase = WorkoutPhase.ACTIVE_SET

    def _finish_workout(self) -> None:
        self._stop_rest_timer()
        self.phase = WorkoutPhase.COMPLETED
        self.completion_event = WorkoutCompletionEvent(
            workout_id=self.plan.id,
            xp_awarded=self.plan.xp_reward,
            completed_at=self.clock.now(),
        )
        logger.debug("Workout %s completed", self.plan.id)
        if self.on_completed is not None:
            self.on_completed(self.completion_event)

    def _stop_rest_timer(self) -> None:
        if self._ticker is not None and self._ticker.is_running:
            self._ticker.stop()
