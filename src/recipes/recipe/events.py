"""Domain events for the Recipe aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from recipes.domain import recipes


@recipes.event(part_of="Recipe")
class RecipeCreated:
    """An author published a new recipe."""

    __version__ = "v1"

    recipe_id = Identifier(required=True)
    name = String(required=True)
    category = String()
    difficulty = String()
    created_by = Identifier()
    created_at = DateTime(required=True)


@recipes.event(part_of="Recipe")
class RecipeRated:
    """A review was counted into the recipe's running average."""

    __version__ = "v1"

    recipe_id = Identifier(required=True)
    review_id = Identifier(required=True)
    rating = Float(required=True)
    average_rating = Float(required=True)
    review_count = Integer(required=True)
    rated_at = DateTime(required=True)


@recipes.event(part_of="Recipe")
class RecipeUpdated:
    """The author changed a recipe's content."""

    __version__ = "v1"

    recipe_id = Identifier(required=True)
    changed_fields = Text()  # JSON array of field names
    name = String(required=True)
    category = String()
    difficulty = String()
    updated_at = DateTime(required=True)
