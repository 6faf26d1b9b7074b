"""FavoriteList aggregate: the recipes one user has bookmarked.

There is one list per user, keyed by the user's id. Adding a recipe that is
already on the list, or removing one that is not, changes nothing and
raises no event.
"""

import json
from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, Text

from recipes.domain import recipes
from recipes.favorite.events import FavoriteAdded, FavoriteRemoved


@recipes.aggregate
class FavoriteList:
    user_id = Identifier(identifier=True, required=True)
    recipe_ids = Text()  # JSON array, most recently added last
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id):
        return cls(user_id=user_id, recipe_ids=json.dumps([]), updated_at=datetime.now(UTC))

    def recipe_id_list(self):
        return json.loads(self.recipe_ids) if self.recipe_ids else []

    def contains(self, recipe_id):
        return str(recipe_id) in self.recipe_id_list()

    def add(self, recipe_id):
        """Bookmark a recipe. Returns False if it was already on the list."""
        recipe_id = str(recipe_id)
        ids = self.recipe_id_list()
        if recipe_id in ids:
            return False

        now = datetime.now(UTC)
        self.recipe_ids = json.dumps([*ids, recipe_id])
        self.updated_at = now

        self.raise_(FavoriteAdded(user_id=str(self.user_id), recipe_id=recipe_id, added_at=now))
        return True

    def remove(self, recipe_id):
        """Drop a recipe from the list. Returns False if it was not on it."""
        recipe_id = str(recipe_id)
        ids = self.recipe_id_list()
        if recipe_id not in ids:
            return False

        now = datetime.now(UTC)
        self.recipe_ids = json.dumps([i for i in ids if i != recipe_id])
        self.updated_at = now

        self.raise_(FavoriteRemoved(user_id=str(self.user_id), recipe_id=recipe_id, removed_at=now))
        return True

    def toggle(self, recipe_id):
        """Flip a recipe's bookmark. Returns whether it is now a favorite."""
        if self.remove(recipe_id):
            return False
        self.add(recipe_id)
        return True
