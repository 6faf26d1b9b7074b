"""Review aggregate: one customer's rating and comment on a recipe.

Reviews are write-once: there is no edit or delete path. The author's
display name is copied in at submission time and is never refreshed, so a
later rename leaves historical reviews untouched.
"""

import math
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String, Text, ValueObject

from recipes.domain import recipes
from recipes.recipe.recipe import MAX_RATING, MIN_RATING
from recipes.review.events import ReviewSubmitted


@recipes.value_object(part_of="Review")
class Rating:
    """A star rating from 1.0 to 5.0."""

    score = Float(required=True)

    @invariant.post
    def score_must_be_in_range(self):
        if self.score is not None and (math.isnan(self.score) or not (MIN_RATING <= self.score <= MAX_RATING)):
            raise ValidationError({"score": [f"Rating must be between {MIN_RATING} and {MAX_RATING}"]})


@recipes.aggregate
class Review:
    """A customer's review of a recipe."""

    recipe_id = Identifier(required=True)

    # Author, denormalized at write time
    author_id = Identifier(required=True)
    author_name = String(required=True, max_length=100)

    # Content
    rating = ValueObject(Rating, required=True)
    comment = Text()

    created_at = DateTime()

    @invariant.post
    def author_name_must_not_be_empty(self):
        if self.author_name is not None and len(self.author_name.strip()) == 0:
            raise ValidationError({"author_name": ["Author name cannot be empty"]})

    @classmethod
    def write(cls, recipe_id, author_id, author_name, rating, comment=None):
        """Create a new review. ``rating`` is a Rating or a plain score."""
        if not isinstance(rating, Rating):
            rating = Rating(score=rating)

        now = datetime.now(UTC)

        review = cls(
            recipe_id=recipe_id,
            author_id=author_id,
            author_name=author_name,
            rating=rating,
            comment=comment,
            created_at=now,
        )

        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                recipe_id=str(recipe_id),
                author_id=str(author_id),
                author_name=author_name,
                rating=rating.score,
                comment=comment,
                submitted_at=now,
            )
        )

        return review
