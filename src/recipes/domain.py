"""Recipes & Ratings bounded context.

Handles the recipe catalogue, customer reviews, per-user favorites and
the running average rating kept on every recipe. The rating aggregate is mutated
only through the RatingAggregator, which commits the review and the
recipe update in a single unit of work.
"""

from protean.domain import Domain

from recipes.utils.logging import configure_logging

configure_logging()

# Domain Composition Root
recipes = Domain(name="recipes")
