import threading

import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def recipes_bed():
    from recipes.domain import recipes

    bed = DomainFixture(recipes)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(recipes_bed):
    with recipes_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()


@pytest.fixture()
def aggregator():
    from recipes.review.aggregation import RatingAggregator

    return RatingAggregator(current_domain, max_attempts=3, backoff=0)


@pytest.fixture()
def make_recipe():
    """Persist a recipe with an empty rating aggregate and return its id."""
    from recipes.recipe.recipe import Recipe

    def _make(**overrides):
        defaults = {
            "name": "Shakshuka",
            "description": "Eggs poached in a spiced tomato sauce.",
            "category": "Breakfast",
            "cooking_time": "30 minutes",
            "difficulty": "Easy",
            "ingredients": ["eggs", "tomatoes", "paprika"],
            "steps": ["Simmer the sauce", "Crack in the eggs"],
            "created_by": "author-001",
        }
        defaults.update(overrides)
        recipe = Recipe.create(**defaults)
        current_domain.repository_for(Recipe).add(recipe)
        return str(recipe.id)

    return _make


# ---------------------------------------------------------------------------
# Racing submitters
# ---------------------------------------------------------------------------
@pytest.fixture()
def run_concurrently(recipes_bed):
    """Run callables on their own threads, each inside the domain context.

    Returns the exceptions they raised, in no particular order.
    """

    def _run(*targets):
        errors = []

        def _worker(target):
            try:
                with recipes_bed.domain_context():
                    target()
            except Exception as exc:
                errors.append(exc)

        threads = [threading.Thread(target=_worker, args=(t,)) for t in targets]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)
            assert not thread.is_alive(), "submitter thread did not finish"
        return errors

    return _run


@pytest.fixture()
def rivals_commit_mid_attempt(monkeypatch, run_concurrently):
    """Make rival reviews commit between our read of a recipe and our commit.

    Each time the calling thread folds a rating into the recipe, the next
    pending rival review is submitted and committed on another thread
    first, so our unit of work holds a stale version. Returns the list of
    ``(average_rating, review_count)`` our thread read on each attempt.
    """
    from recipes.domain import recipes
    from recipes.recipe.recipe import Recipe
    from recipes.review.aggregation import RatingAggregator

    def _arm(recipe_id, *rival_ratings):
        pending = list(rival_ratings)
        ours = threading.current_thread()
        reads = []
        real_record_rating = Recipe.record_rating

        def _record_rating(recipe, rating, review_id):
            if threading.current_thread() is ours:
                reads.append((recipe.average_rating, recipe.review_count))
                if pending:
                    rival_rating = pending.pop(0)
                    errors = run_concurrently(
                        lambda: RatingAggregator(recipes, backoff=0).submit_review(
                            recipe_id, author_id="user-rival", author_name="Rival", rating=rival_rating
                        )
                    )
                    assert errors == []
            return real_record_rating(recipe, rating, review_id)

        monkeypatch.setattr(Recipe, "record_rating", _record_rating)
        return reads

    return _arm
