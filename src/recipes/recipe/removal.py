"""DeleteRecipe: remove a recipe together with its reviews.

The recipe, its reviews and any bookmarks of it go in one unit of work.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from recipes.domain import recipes
from recipes.favorite.favorite import FavoriteList
from recipes.recipe.recipe import Recipe
from recipes.review.review import Review
from recipes.utils.logging import get_logger

logger = get_logger(__name__)


@recipes.command(part_of="Recipe")
class DeleteRecipe:
    recipe_id = Identifier(required=True)


@recipes.command_handler(part_of=Recipe)
class DeleteRecipeHandler:
    @handle(DeleteRecipe)
    def delete_recipe(self, command):
        recipe_repo = current_domain.repository_for(Recipe)
        recipe = recipe_repo.get(command.recipe_id)

        reviews_deleted = current_domain.repository_for(Review).discard_for_recipe(recipe.id)

        favorites_repo = current_domain.repository_for(FavoriteList)
        for favorites in favorites_repo.containing(recipe.id):
            favorites.remove(recipe.id)
            favorites_repo.add(favorites)

        recipe_repo.discard(recipe)
        logger.info("recipe_deleted", recipe_id=str(recipe.id), reviews_deleted=reviews_deleted)
