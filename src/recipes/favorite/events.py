"""Domain events for the FavoriteList aggregate."""

from protean.fields import DateTime, Identifier

from recipes.domain import recipes


@recipes.event(part_of="FavoriteList")
class FavoriteAdded:
    __version__ = "v1"

    user_id = Identifier(required=True)
    recipe_id = Identifier(required=True)
    added_at = DateTime(required=True)


@recipes.event(part_of="FavoriteList")
class FavoriteRemoved:
    __version__ = "v1"

    user_id = Identifier(required=True)
    recipe_id = Identifier(required=True)
    removed_at = DateTime(required=True)
