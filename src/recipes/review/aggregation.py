"""RatingAggregator: submit a review and fold it into the recipe's rating.

Each submission is one unit of work:

    1. read the recipe (average A, count N) inside the unit of work
    2. compute N' = N + 1 and A' = (A * N + r) / N'
    3. write (A', N') back to the recipe
    4. store the new review

The repository checks the recipe's version on save. If another submission
committed against the same recipe after our read, the save raises
``ExpectedVersionError``, the unit of work rolls back, and the whole
sequence is retried from step 1 with a fresh read. Nothing is visible to
readers until the unit of work commits, so a failed or abandoned attempt
leaves neither an orphan review nor a bumped aggregate.

There is no in-process lock; the store's version check is the only
serialization point. Between attempts the aggregator sleeps for a jittered
delay that doubles per conflict, capped at one second.

Submission runs outside Protean command handlers, which wrap their body in
a unit of work of their own; the version check must fail inside the retry
loop, not at an enclosing commit.
"""

import math
import os
import random
import time
from dataclasses import dataclass

from protean.core.unit_of_work import UnitOfWork
from protean.exceptions import ExpectedVersionError

from recipes.recipe.recipe import RATING_TOLERANCE, Recipe
from recipes.review.review import Rating, Review
from recipes.utils.logging import get_logger, log_context

logger = get_logger(__name__)

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_BACKOFF_SECONDS = 0.05
MAX_BACKOFF_SECONDS = 1.0


class RatingConflictError(Exception):
    """Concurrent submissions kept invalidating our read of the recipe."""

    def __init__(self, recipe_id, attempts):
        self.recipe_id = recipe_id
        self.attempts = attempts
        super().__init__(f"Could not record rating for recipe {recipe_id} after {attempts} attempts")


@dataclass(frozen=True)
class RatingAudit:
    """Stored rating aggregate of a recipe next to its recomputed value."""

    recipe_id: str
    average_rating: float
    review_count: int
    expected_average: float
    expected_count: int

    @property
    def consistent(self) -> bool:
        return self.review_count == self.expected_count and math.isclose(
            self.average_rating, self.expected_average, abs_tol=RATING_TOLERANCE
        )


class RatingAggregator:
    """Records reviews and keeps each recipe's rating aggregate in step.

    The aggregator is handed the domain whose repositories it writes to,
    and is expected to run inside that domain's context. It holds no
    other state, so one instance can serve every request.

    ``max_attempts`` and ``backoff`` (base delay in seconds, ``0`` retries
    immediately) default to ``RATING_MAX_ATTEMPTS`` and
    ``RATING_RETRY_BACKOFF_SECONDS`` from the environment.
    """

    def __init__(self, domain, max_attempts: int | None = None, backoff: float | None = None):
        if max_attempts is None:
            max_attempts = int(os.getenv("RATING_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS))
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        if backoff is None:
            backoff = float(os.getenv("RATING_RETRY_BACKOFF_SECONDS", DEFAULT_BACKOFF_SECONDS))
        if backoff < 0:
            raise ValueError("backoff cannot be negative")

        self.domain = domain
        self.max_attempts = max_attempts
        self.backoff = backoff

    def submit_review(self, recipe_id, author_id, author_name, rating, comment=None) -> Review:
        """Store a review and update the recipe's average rating atomically.

        Raises ``ValidationError`` for a rating outside 1.0-5.0 before
        touching the store, ``ObjectNotFoundError`` if the recipe does not
        exist, and ``RatingConflictError`` once the retry budget is spent.
        Every call records a distinct review, identical content included.
        """
        # Validates the bound before any read or write
        score = Rating(score=rating)

        with log_context(recipe_id=str(recipe_id)):
            for attempt in range(1, self.max_attempts + 1):
                try:
                    review, recipe = self._attempt(recipe_id, author_id, author_name, score, comment)
                except ExpectedVersionError:
                    logger.info("rating_conflict_retry", attempt=attempt, max_attempts=self.max_attempts)
                    if attempt < self.max_attempts:
                        time.sleep(self.retry_delay(attempt))
                    continue

                logger.info(
                    "review_submitted",
                    review_id=str(review.id),
                    average_rating=recipe.average_rating,
                    review_count=recipe.review_count,
                    attempts=attempt,
                )
                return review

            logger.warning("rating_conflict_exhausted", attempts=self.max_attempts)
            raise RatingConflictError(recipe_id, self.max_attempts)

    def retry_delay(self, attempt: int) -> float:
        """Seconds to wait after the ``attempt``-th conflict."""
        ceiling = min(MAX_BACKOFF_SECONDS, self.backoff * 2 ** (attempt - 1))
        return random.uniform(ceiling / 2, ceiling)

    def _attempt(self, recipe_id, author_id, author_name, score, comment):
        """Run one read-compute-write pass as a single unit of work."""
        recipe_repo = self.domain.repository_for(Recipe)
        review_repo = self.domain.repository_for(Review)

        with UnitOfWork():
            recipe = recipe_repo.get(recipe_id)

            review = Review.write(
                recipe_id=recipe.id,
                author_id=author_id,
                author_name=author_name,
                rating=score,
                comment=comment,
            )
            recipe.record_rating(score.score, review.id)

            review_repo.add(review)
            recipe_repo.add(recipe)

        return review, recipe

    def audit(self, recipe_id) -> RatingAudit:
        """Recompute a recipe's rating from its stored reviews."""
        recipe = self.domain.repository_for(Recipe).get(recipe_id)
        reviews = self.domain.repository_for(Review).for_recipe(recipe.id)

        scores = [r.rating.score for r in reviews]
        expected_average = sum(scores) / len(scores) if scores else 0.0

        return RatingAudit(
            recipe_id=str(recipe.id),
            average_rating=recipe.average_rating,
            review_count=recipe.review_count,
            expected_average=expected_average,
            expected_count=len(scores),
        )
