"""Recipe aggregate, the rated entity of the Recipes domain.

A recipe carries descriptive content (ingredients, steps, category) and two
derived fields, ``average_rating`` and ``review_count``. The derived fields
always describe the set of stored reviews for the recipe and change only
through ``record_rating``, which the RatingAggregator calls inside the same
unit of work that stores the review.
"""

import json
import math
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from recipes.domain import recipes
from recipes.recipe.events import RecipeCreated, RecipeRated, RecipeUpdated

MIN_RATING = 1.0
MAX_RATING = 5.0

# Allowed drift between a stored average and its recomputed value
RATING_TOLERANCE = 1e-6

EDITABLE_FIELDS = (
    "name",
    "description",
    "category",
    "cooking_time",
    "difficulty",
    "ingredients",
    "steps",
    "image_url",
)
RATING_FIELDS = ("average_rating", "review_count")


class RecipeCategory(Enum):
    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACKS = "Snacks"
    DESSERT = "Dessert"


class Difficulty(Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


def running_average(average, count, rating):
    """Fold one more rating into a mean of ``count`` values.

    Returns the new ``(average, count)`` pair.
    """
    new_count = count + 1
    return (average * count + rating) / new_count, new_count


@recipes.aggregate
class Recipe:
    """A recipe that customers can rate and review."""

    # Content
    name = String(required=True, max_length=200)
    description = Text()
    category = String(choices=RecipeCategory)
    cooking_time = String(max_length=50)  # e.g. "30 minutes"
    difficulty = String(choices=Difficulty)
    ingredients = Text()  # JSON array of strings
    steps = Text()  # JSON array of strings
    image_url = String(max_length=500)

    # Authorship
    created_by = Identifier()
    created_at = DateTime()
    updated_at = DateTime()

    # Rating aggregate, owned by the RatingAggregator
    average_rating = Float(default=0.0)
    review_count = Integer(default=0)

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def name_must_not_be_empty(self):
        if self.name is not None and len(self.name.strip()) == 0:
            raise ValidationError({"name": ["Recipe name cannot be empty"]})

    @invariant.post
    def review_count_cannot_be_negative(self):
        if self.review_count is not None and self.review_count < 0:
            raise ValidationError({"review_count": ["Review count cannot be negative"]})

    @invariant.post
    def average_rating_must_match_count(self):
        if not self.review_count:
            if self.average_rating:
                raise ValidationError({"average_rating": ["A recipe without reviews cannot have a rating"]})
            return

        if not (MIN_RATING - RATING_TOLERANCE <= self.average_rating <= MAX_RATING + RATING_TOLERANCE):
            raise ValidationError(
                {"average_rating": [f"Average rating must be between {MIN_RATING} and {MAX_RATING}"]}
            )

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        name,
        description=None,
        category=None,
        cooking_time=None,
        difficulty=None,
        ingredients=None,
        steps=None,
        image_url=None,
        created_by=None,
    ):
        """Publish a new recipe with an empty rating aggregate."""
        now = datetime.now(UTC)

        recipe = cls(
            name=name,
            description=description,
            category=category,
            cooking_time=cooking_time,
            difficulty=difficulty,
            ingredients=json.dumps(ingredients or []),
            steps=json.dumps(steps or []),
            image_url=image_url,
            created_by=created_by,
            created_at=now,
            average_rating=0.0,
            review_count=0,
        )

        recipe.raise_(
            RecipeCreated(
                recipe_id=str(recipe.id),
                name=name,
                category=category,
                difficulty=difficulty,
                created_by=str(created_by) if created_by else None,
                created_at=now,
            )
        )

        return recipe

    # -------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------
    def update_details(self, **changes):
        """Change a recipe's content. Fields passed as ``None`` keep their value.

        Only the fields in ``EDITABLE_FIELDS`` can be changed here; the
        rating aggregate belongs to the reviews.
        """
        rejected = {}
        for field in changes:
            if field in RATING_FIELDS:
                rejected[field] = ["Rating fields change only when a review is recorded"]
            elif field not in EDITABLE_FIELDS:
                rejected[field] = ["Unknown recipe field"]
        if rejected:
            raise ValidationError(rejected)

        changes = {field: value for field, value in changes.items() if value is not None}
        for field in ("ingredients", "steps"):
            if field in changes:
                changes[field] = json.dumps(changes[field])

        now = datetime.now(UTC)
        with atomic_change(self):
            for field, value in changes.items():
                setattr(self, field, value)
            self.updated_at = now

        self.raise_(
            RecipeUpdated(
                recipe_id=str(self.id),
                changed_fields=json.dumps(sorted(changes)),
                name=self.name,
                category=self.category,
                difficulty=self.difficulty,
                updated_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Rating aggregate
    # -------------------------------------------------------------------
    def record_rating(self, rating, review_id):
        """Count one more review into the running average.

        Must be called on a copy of the recipe read inside the current unit
        of work, so the update is computed from the stored values.
        """
        if rating is None or math.isnan(rating) or not (MIN_RATING <= rating <= MAX_RATING):
            raise ValidationError({"rating": [f"Rating must be between {MIN_RATING} and {MAX_RATING}"]})

        average, count = running_average(self.average_rating or 0.0, self.review_count or 0, rating)

        with atomic_change(self):
            self.average_rating = average
            self.review_count = count

        self.raise_(
            RecipeRated(
                recipe_id=str(self.id),
                review_id=str(review_id),
                rating=rating,
                average_rating=average,
                review_count=count,
                rated_at=datetime.now(UTC),
            )
        )

    def ingredient_list(self):
        return json.loads(self.ingredients) if self.ingredients else []

    def step_list(self):
        return json.loads(self.steps) if self.steps else []
