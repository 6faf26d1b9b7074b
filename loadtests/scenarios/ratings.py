"""Rating contention scenario.

Every user submits reviews against one shared recipe as fast as it can,
so most submissions race. Each accepted review is tallied; at the end of
the run the recipe's ``review_count`` and ``average_rating`` must match
the tally exactly. A 409 means the retry budget ran out; it is counted
but never changes the aggregate.
"""

import requests
from locust import HttpUser, constant_pacing, events, task

from loadtests.data_generators import recipe_data, review_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import RatingTally

tally = RatingTally()


@events.test_start.add_listener
def create_shared_recipe(environment, **_kwargs):
    resp = requests.post(f"{environment.host}/recipes", json=recipe_data(), timeout=10)
    resp.raise_for_status()
    tally.recipe_id = resp.json()["recipe_id"]
    print(f"[LOADTEST] Contended recipe: {tally.recipe_id}")


@events.test_stop.add_listener
def check_aggregate(environment, **_kwargs):
    if tally.recipe_id is None:
        return

    recipe = requests.get(f"{environment.host}/recipes/{tally.recipe_id}", timeout=10).json()
    expected_count = len(tally.accepted)
    matches = (
        recipe["review_count"] == expected_count
        and abs(recipe["average_rating"] - tally.expected_average) < 1e-6
    )

    print(f"[LOADTEST] Accepted reviews: {expected_count}, conflicts (409): {tally.conflicts}")
    print(f"[LOADTEST] Stored aggregate: {recipe['average_rating']:.4f} from {recipe['review_count']} reviews")
    print(f"[LOADTEST] Expected aggregate: {tally.expected_average:.4f} from {expected_count} reviews")
    if not matches:
        print("[LOADTEST] AGGREGATE MISMATCH")
        environment.process_exit_code = 1


class RatingContentionUser(HttpUser):
    """Many reviewers, one recipe."""

    wait_time = constant_pacing(0.05)

    @task(5)
    def submit_review(self):
        if tally.recipe_id is None:
            return

        payload = review_data()
        with self.client.post(
            f"/recipes/{tally.recipe_id}/reviews",
            json=payload,
            catch_response=True,
            name="POST /recipes/{id}/reviews",
        ) as resp:
            if resp.status_code == 201:
                tally.accept(payload["rating"])
            elif resp.status_code == 409:
                tally.conflict()
                resp.success()
            else:
                resp.failure(f"Submit review failed: {resp.status_code} {extract_error_detail(resp)}")

    @task(1)
    def read_recipe(self):
        if tally.recipe_id is None:
            return
        self.client.get(f"/recipes/{tally.recipe_id}", name="GET /recipes/{id}")
