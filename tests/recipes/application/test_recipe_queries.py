"""Repository queries for recipes and reviews."""

from datetime import UTC, datetime, timedelta

from protean import current_domain
from recipes.recipe.recipe import Recipe
from recipes.review.review import Rating, Review


def _store_review(recipe_id, author_name, created_at, score=4.0):
    review = Review(
        recipe_id=recipe_id,
        author_id=f"user-{author_name.lower()}",
        author_name=author_name,
        rating=Rating(score=score),
        created_at=created_at,
    )
    current_domain.repository_for(Review).add(review)
    return review


class TestReviewsForRecipe:
    def test_newest_first(self, make_recipe):
        recipe_id = make_recipe()
        start = datetime(2024, 6, 1, tzinfo=UTC)
        _store_review(recipe_id, "Ada", start)
        _store_review(recipe_id, "Cy", start + timedelta(days=2))
        _store_review(recipe_id, "Bea", start + timedelta(days=1))

        reviews = current_domain.repository_for(Review).for_recipe(recipe_id)

        assert [r.author_name for r in reviews] == ["Cy", "Bea", "Ada"]

    def test_limit(self, make_recipe):
        recipe_id = make_recipe()
        start = datetime(2024, 6, 1, tzinfo=UTC)
        for i, name in enumerate(["Ada", "Bea", "Cy"]):
            _store_review(recipe_id, name, start + timedelta(hours=i))

        reviews = current_domain.repository_for(Review).for_recipe(recipe_id, limit=2)

        assert [r.author_name for r in reviews] == ["Cy", "Bea"]

    def test_no_reviews(self, make_recipe):
        recipe_id = make_recipe()
        assert current_domain.repository_for(Review).for_recipe(recipe_id) == []


class TestRecipeLookups:
    def test_by_category(self, make_recipe):
        make_recipe(name="Porridge", category="Breakfast")
        make_recipe(name="Brownies", category="Dessert")
        make_recipe(name="Granola", category="Breakfast")

        names = {r.name for r in current_domain.repository_for(Recipe).by_category("Breakfast")}

        assert names == {"Porridge", "Granola"}

    def test_search_ignores_case(self, make_recipe):
        make_recipe(name="Tomato Soup")
        make_recipe(name="Green tomato chutney")
        make_recipe(name="Apple pie", category="Dessert")

        names = [r.name for r in current_domain.repository_for(Recipe).search("TOMATO")]

        assert sorted(names) == ["Green tomato chutney", "Tomato Soup"]

    def test_by_author_newest_first(self, make_recipe):
        make_recipe(name="Ada first", created_by="author-ada")
        make_recipe(name="Bea only", created_by="author-bea")
        make_recipe(name="Ada second", created_by="author-ada")

        names = [r.name for r in current_domain.repository_for(Recipe).by_author("author-ada")]

        assert names == ["Ada second", "Ada first"]

    def test_browse_without_filters_returns_everything(self, make_recipe):
        for name in ("Porridge", "Brownies", "Granola"):
            make_recipe(name=name)

        assert len(current_domain.repository_for(Recipe).browse()) == 3

    def test_browse_combines_filters(self, make_recipe):
        make_recipe(name="Tomato omelette", category="Breakfast")
        make_recipe(name="Tomato tart", category="Dinner")
        make_recipe(name="Porridge", category="Breakfast")

        found = current_domain.repository_for(Recipe).browse(category="Breakfast", term="tomato")

        assert [r.name for r in found] == ["Tomato omelette"]

    def test_browse_reads_past_one_page(self, make_recipe, monkeypatch):
        monkeypatch.setattr("recipes.utils.paging.PAGE_SIZE", 2)
        for i in range(5):
            make_recipe(name=f"Recipe {i}")

        assert len(current_domain.repository_for(Recipe).browse()) == 5

    def test_with_ids_skips_missing(self, make_recipe):
        soup = make_recipe(name="Soup")
        cake = make_recipe(name="Cake", category="Dessert")

        found = current_domain.repository_for(Recipe).with_ids([soup, "gone", cake])

        assert [r.name for r in found] == ["Cake", "Soup"]
        assert current_domain.repository_for(Recipe).with_ids([]) == []


class TestRatingAudit:
    def test_audit_of_unrated_recipe(self, aggregator, make_recipe):
        recipe_id = make_recipe()
        audit = aggregator.audit(recipe_id)
        assert audit.review_count == 0
        assert audit.expected_count == 0
        assert audit.consistent

    def test_audit_detects_review_written_around_the_aggregator(self, aggregator, make_recipe):
        recipe_id = make_recipe()
        aggregator.submit_review(recipe_id, author_id="user-001", author_name="Ada", rating=4.0)
        _store_review(recipe_id, "Sneaky", datetime.now(UTC), score=1.0)

        audit = aggregator.audit(recipe_id)

        assert audit.review_count == 1
        assert audit.expected_count == 2
        assert audit.expected_average == 2.5
        assert not audit.consistent
