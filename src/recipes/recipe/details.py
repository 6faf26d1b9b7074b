"""UpdateRecipe: change a recipe's content."""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from recipes.domain import recipes
from recipes.recipe.recipe import Recipe


@recipes.command(part_of="Recipe")
class UpdateRecipe:
    """Fields left empty keep their current value. The rating aggregate is not editable."""

    recipe_id = Identifier(required=True)
    name = String(max_length=200)
    description = Text()
    category = String(max_length=20)
    cooking_time = String(max_length=50)
    difficulty = String(max_length=10)
    ingredients = Text()  # JSON array of strings
    steps = Text()  # JSON array of strings
    image_url = String(max_length=500)


@recipes.command_handler(part_of=Recipe)
class ManageRecipeDetailsHandler:
    @handle(UpdateRecipe)
    def update_recipe(self, command):
        repo = current_domain.repository_for(Recipe)
        recipe = repo.get(command.recipe_id)

        recipe.update_details(
            name=command.name,
            description=command.description,
            category=command.category,
            cooking_time=command.cooking_time,
            difficulty=command.difficulty,
            ingredients=json.loads(command.ingredients) if command.ingredients else None,
            steps=json.loads(command.steps) if command.steps else None,
            image_url=command.image_url,
        )
        repo.add(recipe)
