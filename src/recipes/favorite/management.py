"""Favorites: bookmark and un-bookmark recipes."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from recipes.domain import recipes
from recipes.favorite.favorite import FavoriteList
from recipes.recipe.recipe import Recipe


@recipes.command(part_of="FavoriteList")
class AddFavorite:
    user_id = Identifier(required=True)
    recipe_id = Identifier(required=True)


@recipes.command(part_of="FavoriteList")
class RemoveFavorite:
    user_id = Identifier(required=True)
    recipe_id = Identifier(required=True)


@recipes.command(part_of="FavoriteList")
class ToggleFavorite:
    user_id = Identifier(required=True)
    recipe_id = Identifier(required=True)


@recipes.command_handler(part_of=FavoriteList)
class ManageFavoritesHandler:
    @handle(AddFavorite)
    def add_favorite(self, command):
        # Only existing recipes can be bookmarked
        current_domain.repository_for(Recipe).get(command.recipe_id)

        repo = current_domain.repository_for(FavoriteList)
        favorites = repo.for_user(command.user_id)
        if favorites.add(command.recipe_id):
            repo.add(favorites)
        return True

    @handle(RemoveFavorite)
    def remove_favorite(self, command):
        repo = current_domain.repository_for(FavoriteList)
        favorites = repo.for_user(command.user_id)
        if favorites.remove(command.recipe_id):
            repo.add(favorites)
        return False

    @handle(ToggleFavorite)
    def toggle_favorite(self, command):
        repo = current_domain.repository_for(FavoriteList)
        favorites = repo.for_user(command.user_id)
        if not favorites.contains(command.recipe_id):
            current_domain.repository_for(Recipe).get(command.recipe_id)

        is_favorite = favorites.toggle(command.recipe_id)
        repo.add(favorites)
        return is_favorite
