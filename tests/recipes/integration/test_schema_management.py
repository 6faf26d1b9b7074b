"""Schema helpers against the in-memory provider and a SQLite database."""

import pytest
from protean import current_domain
from recipes.domain import recipes
from recipes.recipe.recipe import Recipe
from recipes.review.aggregation import RatingAggregator
from recipes.review.review import Review
from recipes.utils.db import _sql_providers, drop_db, setup_db
from sqlalchemy import create_engine, inspect


def _tables(database_uri):
    return set(inspect(create_engine(database_uri)).get_table_names())


@pytest.fixture()
def sqlite_uri(tmp_path):
    """Point the default provider at a fresh SQLite file for one test."""
    databases = recipes.config["databases"]
    original = databases["default"]
    database_uri = f"sqlite:///{tmp_path / 'recipes.db'}"

    databases["default"] = {"provider": "sqlite", "database_uri": database_uri}
    recipes.providers._initialize()
    try:
        yield database_uri
    finally:
        databases["default"] = original
        recipes.providers._initialize()


class TestMemoryProvider:
    def test_memory_provider_is_not_sql(self):
        assert list(_sql_providers(recipes)) == []

    def test_setup_and_drop_leave_memory_store_usable(self, make_recipe):
        setup_db(recipes)
        recipe_id = make_recipe()
        drop_db(recipes)

        assert current_domain.repository_for(Recipe).get(recipe_id).name == "Shakshuka"


@pytest.mark.slow
class TestSQLiteProvider:
    def test_setup_creates_and_drop_removes_tables(self, sqlite_uri):
        assert len(list(_sql_providers(recipes))) == 1

        setup_db(recipes)
        assert {"recipe", "review"} <= _tables(sqlite_uri)

        drop_db(recipes)
        assert not {"recipe", "review"} & _tables(sqlite_uri)

    def test_review_submission_on_sqlite(self, sqlite_uri, make_recipe):
        setup_db(recipes)
        aggregator = RatingAggregator(recipes, backoff=0)
        recipe_id = make_recipe()

        aggregator.submit_review(recipe_id, author_id="user-001", author_name="Ada", rating=4.0)
        aggregator.submit_review(recipe_id, author_id="user-002", author_name="Bea", rating=2.0)

        recipe = current_domain.repository_for(Recipe).get(recipe_id)
        assert recipe.average_rating == 3.0
        assert recipe.review_count == 2
        assert aggregator.audit(recipe_id).consistent

        drop_db(recipes)

    def test_racing_submission_on_sqlite(self, sqlite_uri, make_recipe, rivals_commit_mid_attempt):
        setup_db(recipes)
        aggregator = RatingAggregator(recipes, backoff=0)
        recipe_id = make_recipe()
        reads = rivals_commit_mid_attempt(recipe_id, 1.0)

        aggregator.submit_review(recipe_id, author_id="user-001", author_name="Ada", rating=5.0)

        assert reads == [(0.0, 0), (1.0, 1)]
        recipe = current_domain.repository_for(Recipe).get(recipe_id)
        assert (recipe.average_rating, recipe.review_count) == (3.0, 2)
        assert len(current_domain.repository_for(Review).for_recipe(recipe_id)) == 2

        drop_db(recipes)
