"""Repository for the Recipe aggregate."""

from recipes.domain import recipes
from recipes.recipe.recipe import Recipe
from recipes.utils.paging import fetch_all


@recipes.repository(part_of=Recipe)
class RecipeRepository:
    """Recipe lookups beyond the standard get/add."""

    def browse(self, category: str | None = None, term: str | None = None, author: str | None = None) -> list[Recipe]:
        """Recipes matching every filter given; all recipes when none is.

        Name searches are ordered by name, everything else newest first.
        """
        filters = {}
        if category:
            filters["category"] = category
        if term:
            filters["name__icontains"] = term
        if author:
            filters["created_by"] = str(author)

        query = self._dao.query
        if filters:
            query = query.filter(**filters)
        return fetch_all(query.order_by("name" if term else "-created_at"))

    def by_category(self, category: str) -> list[Recipe]:
        return self.browse(category=category)

    def search(self, term: str) -> list[Recipe]:
        """Recipes whose name contains ``term``, ignoring case."""
        return self.browse(term=term)

    def by_author(self, author: str) -> list[Recipe]:
        return self.browse(author=author)

    def with_ids(self, recipe_ids) -> list[Recipe]:
        """Recipes among ``recipe_ids`` that still exist, by name."""
        recipe_ids = [str(recipe_id) for recipe_id in recipe_ids]
        if not recipe_ids:
            return []
        return fetch_all(self._dao.query.filter(id__in=recipe_ids).order_by("name"))

    def discard(self, recipe: Recipe) -> None:
        self._dao.delete(recipe)
