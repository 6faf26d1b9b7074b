"""Pydantic request/response schemas for the Recipes API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CreateRecipeRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    category: str | None = None
    cooking_time: str | None = Field(default=None, max_length=50)
    difficulty: str | None = None
    ingredients: list[str] | None = None
    steps: list[str] | None = None
    image_url: str | None = Field(default=None, max_length=500)
    created_by: str | None = None


class UpdateRecipeRequest(BaseModel):
    """Content changes only. Unknown fields, the rating aggregate included, are rejected."""

    model_config = {"extra": "forbid"}

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    category: str | None = None
    cooking_time: str | None = Field(default=None, max_length=50)
    difficulty: str | None = None
    ingredients: list[str] | None = None
    steps: list[str] | None = None
    image_url: str | None = Field(default=None, max_length=500)


class SubmitReviewRequest(BaseModel):
    author_id: str
    author_name: str = Field(min_length=1, max_length=100)
    rating: float = Field(ge=1.0, le=5.0)
    comment: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class RecipeIdResponse(BaseModel):
    recipe_id: str


class ReviewIdResponse(BaseModel):
    review_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class FavoriteStatusResponse(BaseModel):
    recipe_id: str
    favorite: bool


class RecipeResponse(BaseModel):
    recipe_id: str
    name: str
    description: str | None = None
    category: str | None = None
    cooking_time: str | None = None
    difficulty: str | None = None
    ingredients: list[str] = []
    steps: list[str] = []
    image_url: str | None = None
    created_by: str | None = None
    average_rating: float
    review_count: int


class ReviewResponse(BaseModel):
    review_id: str
    recipe_id: str
    author_id: str
    author_name: str
    rating: float
    comment: str | None = None
    created_at: datetime | None = None
