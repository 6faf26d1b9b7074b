"""Repository for the FavoriteList aggregate."""

from protean.exceptions import ObjectNotFoundError

from recipes.domain import recipes
from recipes.favorite.favorite import FavoriteList
from recipes.utils.paging import fetch_all


@recipes.repository(part_of=FavoriteList)
class FavoriteListRepository:
    def for_user(self, user_id: str) -> FavoriteList:
        """The user's list, or a new empty one if they have never bookmarked anything."""
        try:
            return self.get(user_id)
        except ObjectNotFoundError:
            return FavoriteList.create(user_id)

    def containing(self, recipe_id: str) -> list[FavoriteList]:
        """Every list that has bookmarked ``recipe_id``."""
        candidates = fetch_all(self._dao.query.filter(recipe_ids__contains=str(recipe_id)))
        return [favorites for favorites in candidates if favorites.contains(recipe_id)]
