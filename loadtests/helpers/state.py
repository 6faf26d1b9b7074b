"""Shared state for the rating contention scenario.

Every simulated user points at the same recipe, and the ratings the API
acknowledged are tallied so the aggregate can be checked once the run stops.
"""

import threading
from dataclasses import dataclass, field


@dataclass
class RatingTally:
    recipe_id: str | None = None
    accepted: list[float] = field(default_factory=list)
    conflicts: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def accept(self, rating: float) -> None:
        with self._lock:
            self.accepted.append(rating)

    def conflict(self) -> None:
        with self._lock:
            self.conflicts += 1

    @property
    def expected_average(self) -> float:
        return sum(self.accepted) / len(self.accepted) if self.accepted else 0.0
