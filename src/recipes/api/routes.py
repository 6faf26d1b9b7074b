"""FastAPI routes for the Recipes & Ratings bounded context.

Recipe and favorite changes go through Protean commands. Review submission
goes through the RatingAggregator, which the composition root places on
``app.state.rating_aggregator``.
"""

import json

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError
from protean.utils.globals import current_domain

from recipes.api.schemas import (
    CreateRecipeRequest,
    FavoriteStatusResponse,
    RecipeIdResponse,
    RecipeResponse,
    ReviewIdResponse,
    ReviewResponse,
    StatusResponse,
    SubmitReviewRequest,
    UpdateRecipeRequest,
)
from recipes.favorite.favorite import FavoriteList
from recipes.favorite.management import AddFavorite, RemoveFavorite, ToggleFavorite
from recipes.recipe.creation import CreateRecipe
from recipes.recipe.details import UpdateRecipe
from recipes.recipe.recipe import Recipe
from recipes.recipe.removal import DeleteRecipe
from recipes.review.aggregation import RatingAggregator, RatingConflictError
from recipes.review.review import Review

recipe_router = APIRouter(prefix="/recipes", tags=["recipes"])
favorite_router = APIRouter(prefix="/users/{user_id}/favorites", tags=["favorites"])


def get_rating_aggregator(request: Request) -> RatingAggregator:
    return request.app.state.rating_aggregator


def _json_list(values):
    return json.dumps(values) if values else None


def _recipe_response(recipe) -> RecipeResponse:
    return RecipeResponse(
        recipe_id=str(recipe.id),
        name=recipe.name,
        description=recipe.description,
        category=recipe.category,
        cooking_time=recipe.cooking_time,
        difficulty=recipe.difficulty,
        ingredients=recipe.ingredient_list(),
        steps=recipe.step_list(),
        image_url=recipe.image_url,
        created_by=str(recipe.created_by) if recipe.created_by else None,
        average_rating=recipe.average_rating,
        review_count=recipe.review_count,
    )


# ---------------------------------------------------------------------------
# Recipes
# ---------------------------------------------------------------------------
@recipe_router.post("", status_code=201, response_model=RecipeIdResponse)
async def create_recipe(body: CreateRecipeRequest) -> RecipeIdResponse:
    """Publish a new recipe."""
    command = CreateRecipe(
        name=body.name,
        description=body.description,
        category=body.category,
        cooking_time=body.cooking_time,
        difficulty=body.difficulty,
        ingredients=_json_list(body.ingredients),
        steps=_json_list(body.steps),
        image_url=body.image_url,
        created_by=body.created_by,
    )
    recipe_id = current_domain.process(command, asynchronous=False)
    return RecipeIdResponse(recipe_id=recipe_id)


@recipe_router.get("", response_model=list[RecipeResponse])
async def browse_recipes(
    category: str | None = None,
    q: str | None = None,
    author: str | None = None,
) -> list[RecipeResponse]:
    """All recipes, narrowed by category, name search and author when given."""
    found = current_domain.repository_for(Recipe).browse(category=category, term=q, author=author)
    return [_recipe_response(recipe) for recipe in found]


@recipe_router.get("/{recipe_id}", response_model=RecipeResponse)
async def get_recipe(recipe_id: str) -> RecipeResponse:
    """Recipe detail, including its rating aggregate."""
    return _recipe_response(current_domain.repository_for(Recipe).get(recipe_id))


@recipe_router.put("/{recipe_id}", response_model=StatusResponse)
async def update_recipe(recipe_id: str, body: UpdateRecipeRequest) -> StatusResponse:
    command = UpdateRecipe(
        recipe_id=recipe_id,
        name=body.name,
        description=body.description,
        category=body.category,
        cooking_time=body.cooking_time,
        difficulty=body.difficulty,
        ingredients=json.dumps(body.ingredients) if body.ingredients is not None else None,
        steps=json.dumps(body.steps) if body.steps is not None else None,
        image_url=body.image_url,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@recipe_router.delete("/{recipe_id}", response_model=StatusResponse)
async def delete_recipe(recipe_id: str) -> StatusResponse:
    current_domain.process(DeleteRecipe(recipe_id=recipe_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
@recipe_router.post("/{recipe_id}/reviews", status_code=201, response_model=ReviewIdResponse)
async def submit_review(
    recipe_id: str,
    body: SubmitReviewRequest,
    aggregator: RatingAggregator = Depends(get_rating_aggregator),
) -> ReviewIdResponse:
    """Rate and review a recipe."""
    review = aggregator.submit_review(
        recipe_id=recipe_id,
        author_id=body.author_id,
        author_name=body.author_name,
        rating=body.rating,
        comment=body.comment,
    )
    return ReviewIdResponse(review_id=str(review.id))


@recipe_router.get("/{recipe_id}/reviews", response_model=list[ReviewResponse])
async def list_reviews(recipe_id: str) -> list[ReviewResponse]:
    """Reviews of a recipe, newest first."""
    recipe = current_domain.repository_for(Recipe).get(recipe_id)
    reviews = current_domain.repository_for(Review).for_recipe(recipe.id)
    return [
        ReviewResponse(
            review_id=str(review.id),
            recipe_id=str(review.recipe_id),
            author_id=str(review.author_id),
            author_name=review.author_name,
            rating=review.rating.score,
            comment=review.comment,
            created_at=review.created_at,
        )
        for review in reviews
    ]


# ---------------------------------------------------------------------------
# Favorites
# ---------------------------------------------------------------------------
@favorite_router.get("", response_model=list[RecipeResponse])
async def list_favorites(user_id: str) -> list[RecipeResponse]:
    favorites = current_domain.repository_for(FavoriteList).for_user(user_id)
    found = current_domain.repository_for(Recipe).with_ids(favorites.recipe_id_list())
    return [_recipe_response(recipe) for recipe in found]


@favorite_router.get("/{recipe_id}", response_model=FavoriteStatusResponse)
async def check_favorite(user_id: str, recipe_id: str) -> FavoriteStatusResponse:
    favorites = current_domain.repository_for(FavoriteList).for_user(user_id)
    return FavoriteStatusResponse(recipe_id=recipe_id, favorite=favorites.contains(recipe_id))


@favorite_router.put("/{recipe_id}", response_model=FavoriteStatusResponse)
async def add_favorite(user_id: str, recipe_id: str) -> FavoriteStatusResponse:
    current_domain.process(AddFavorite(user_id=user_id, recipe_id=recipe_id), asynchronous=False)
    return FavoriteStatusResponse(recipe_id=recipe_id, favorite=True)


@favorite_router.delete("/{recipe_id}", response_model=FavoriteStatusResponse)
async def remove_favorite(user_id: str, recipe_id: str) -> FavoriteStatusResponse:
    current_domain.process(RemoveFavorite(user_id=user_id, recipe_id=recipe_id), asynchronous=False)
    return FavoriteStatusResponse(recipe_id=recipe_id, favorite=False)


@favorite_router.post("/{recipe_id}/toggle", response_model=FavoriteStatusResponse)
async def toggle_favorite(user_id: str, recipe_id: str) -> FavoriteStatusResponse:
    favorite = current_domain.process(ToggleFavorite(user_id=user_id, recipe_id=recipe_id), asynchronous=False)
    return FavoriteStatusResponse(recipe_id=recipe_id, favorite=favorite)


def register_error_handlers(app: FastAPI) -> None:
    """Map lookup failures and write conflicts to HTTP responses."""

    @app.exception_handler(ObjectNotFoundError)
    async def not_found(request: Request, exc: ObjectNotFoundError):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(RatingConflictError)
    async def rating_conflict(request: Request, exc: RatingConflictError):
        return JSONResponse(
            status_code=409,
            content={"error": str(exc), "recipe_id": str(exc.recipe_id), "attempts": exc.attempts},
        )

    @app.exception_handler(ExpectedVersionError)
    async def stale_write(request: Request, exc: ExpectedVersionError):
        return JSONResponse(status_code=409, content={"error": str(exc)})
