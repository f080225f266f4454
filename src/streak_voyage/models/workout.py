"""Workout plan model and the built-in workout catalog."""

from dataclasses import dataclass


@dataclass(frozen=True)
class WorkoutPlan:
    """A fixed bodyweight workout made of one or more rep-counted sets."""

    id: str
    name: str
    subtitle: str
    form_tip: str
    reps_by_set: tuple[int, ...]
    xp_reward: int

    def __post_init__(self):
        if not self.reps_by_set:
            raise ValueError(f"Workout {self.id!r} must have at least one set")
        if any(reps <= 0 for reps in self.reps_by_set):
            raise ValueError(f"Workout {self.id!r} has a set with no reps")
        if self.xp_reward <= 0:
            raise ValueError(f"Workout {self.id!r} must award positive XP")

    @property
    def total_sets(self) -> int:
        return len(self.reps_by_set)

    @property
    def total_reps(self) -> int:
        return sum(self.reps_by_set)

    @property
    def sets_summary(self) -> str:
        """Short description, e.g. '3 sets - 32 reps'."""
        return f"{self.total_sets} sets - {self.total_reps} reps"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "subtitle": self.subtitle,
            "form_tip": self.form_tip,
            "reps_by_set": list(self.reps_by_set),
            "xp_reward": self.xp_reward,
        }


SQUATS = WorkoutPlan(
    id="squats",
    name="Squats",
    subtitle="Build strong legs and glutes",
    form_tip=(
        "Feet shoulder-width apart, chest up. Push your hips back and keep "
        "your knees tracking over your toes."
    ),
    reps_by_set=(10, 12, 10),
    xp_reward=50,
)

PUSHUPS = WorkoutPlan(
    id="pushups",
    name="Push-ups",
    subtitle="Strengthen chest, arms and core",
    form_tip=(
        "Hands under your shoulders, body in a straight line. Lower your "
        "chest until it nearly touches the floor."
    ),
    reps_by_set=(8, 10, 8),
    xp_reward=50,
)

WORKOUT_CATALOG: list[WorkoutPlan] = [SQUATS, PUSHUPS]


def get_workout_plan(workout_id: str) -> WorkoutPlan | None:
    """Look up a catalog workout by ID (case-insensitive)."""
    key = workout_id.strip().lower()
    for plan in WORKOUT_CATALOG:
        if plan.id == key:
            return plan
    return None
