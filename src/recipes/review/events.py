"""Domain events for the Review aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from recipes.domain import recipes


@recipes.event(part_of="Review")
class ReviewSubmitted:
    """A customer rated and reviewed a recipe."""

    __version__ = "v1"

    review_id = Identifier(required=True)
    recipe_id = Identifier(required=True)
    author_id = Identifier(required=True)
    author_name = String(required=True)
    rating = Float(required=True)
    comment = Text()
    submitted_at = DateTime(required=True)
