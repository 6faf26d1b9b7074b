"""Shared BDD fixtures and step definitions for the Recipes domain."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from recipes.recipe.recipe import Recipe
from recipes.review.review import Review


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a recipe with no reviews", target_fixture="recipe_id")
def recipe_with_no_reviews(make_recipe):
    return make_recipe(name="BDD Ratatouille", category="Dinner")


@given(parsers.cfparse("a customer rated it {rating:f}"))
def customer_rated_it(aggregator, recipe_id, rating):
    aggregator.submit_review(recipe_id, author_id="cust-bdd-given", author_name="Given Customer", rating=rating)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(
    parsers.re(r"the recipe has an average rating of (?P<average>[\d.]+) from (?P<count>\d+) reviews?"),
    converters={"average": float, "count": int},
)
def recipe_has_aggregate(recipe_id, average, count):
    recipe = current_domain.repository_for(Recipe).get(recipe_id)
    assert recipe.average_rating == pytest.approx(average)
    assert recipe.review_count == count


@then(parsers.cfparse("the recipe has {count:d} stored reviews"))
def recipe_has_reviews(recipe_id, count):
    assert len(current_domain.repository_for(Review).for_recipe(recipe_id)) == count


@then("the submission is rejected")
def submission_rejected(error):
    assert error["exc"] is not None
