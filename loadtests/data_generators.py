"""Faker-based data generators for Locust load test scenarios.

Payloads match the field names and bounds of the Recipes API's Pydantic
request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

CATEGORIES = ["Breakfast", "Lunch", "Dinner", "Snacks", "Dessert"]
DIFFICULTIES = ["Easy", "Medium", "Hard"]


def recipe_data() -> dict:
    return {
        "name": f"{fake.word().title()} {random.choice(['Stew', 'Salad', 'Pie', 'Curry', 'Soup'])}",
        "description": fake.sentence(nb_words=12),
        "category": random.choice(CATEGORIES),
        "cooking_time": f"{random.choice([10, 20, 30, 45, 60, 90])} minutes",
        "difficulty": random.choice(DIFFICULTIES),
        "ingredients": [fake.word() for _ in range(random.randint(3, 8))],
        "steps": [fake.sentence(nb_words=6) for _ in range(random.randint(2, 5))],
        "created_by": f"author-lt-{uuid.uuid4().hex[:8]}",
    }


def review_data() -> dict:
    """A review whose rating is a half-star step between 1.0 and 5.0."""
    return {
        "author_id": f"user-lt-{uuid.uuid4().hex[:8]}",
        "author_name": fake.first_name(),
        "rating": random.choice([1.0, 1.5, 2.0, 2.5, 3.0, 3.5, 4.0, 4.5, 5.0]),
        "comment": fake.sentence(nb_words=10) if random.random() < 0.7 else None,
    }
