"""Repository for the Review aggregate."""

from recipes.domain import recipes
from recipes.review.review import Review
from recipes.utils.paging import fetch_all


@recipes.repository(part_of=Review)
class ReviewRepository:
    def for_recipe(self, recipe_id: str, limit: int | None = None) -> list[Review]:
        """Reviews of a recipe, newest first. All of them unless ``limit`` is given."""
        query = self._dao.query.filter(recipe_id=str(recipe_id)).order_by("-created_at")
        if limit is not None:
            return query.limit(limit).all().items
        return fetch_all(query)

    def discard_for_recipe(self, recipe_id: str) -> int:
        """Delete every review of a recipe. Returns how many were deleted."""
        reviews = self.for_recipe(recipe_id)
        for review in reviews:
            self._dao.delete(review)
        return len(reviews)
