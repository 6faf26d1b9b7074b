"""Recipes domain API package."""

from recipes.api.routes import favorite_router, get_rating_aggregator, recipe_router, register_error_handlers

__all__ = ["favorite_router", "get_rating_aggregator", "recipe_router", "register_error_handlers"]
