"""
Seed recipes.

A small fixed set of example recipes used to populate an empty recipe book
the first time it is opened. Each has a static id, so seeding the same book
twice yields the same records.
"""

from typing import List

from .schemas import Ingredient, Recipe


_SEED_RECIPES = [
    Recipe(
        id=1,
        name="Classic Spaghetti Carbonara",
        ingredients=[
            Ingredient(name="Spaghetti", amount=400, unit="g"),
            Ingredient(name="Eggs", amount=4, unit="pcs"),
            Ingredient(name="Pecorino Romano", amount=100, unit="g"),
            Ingredient(name="Guanciale", amount=200, unit="g"),
        ],
        instructions=(
            "1. Cook pasta\n"
            "2. Mix eggs with cheese\n"
            "3. Fry guanciale\n"
            "4. Combine all ingredients"
        ),
        default_servings=4,
        current_servings=4,
    ),
    Recipe(
        id=2,
        name="Chicken Tikka Masala",
        ingredients=[
            Ingredient(name="Chicken breast", amount=600, unit="g"),
            Ingredient(name="Yogurt", amount=200, unit="ml"),
            Ingredient(name="Tomato sauce", amount=400, unit="ml"),
            Ingredient(name="Spices", amount=30, unit="g"),
        ],
        instructions=(
            "1. Marinate chicken\n"
            "2. Grill chicken\n"
            "3. Prepare sauce\n"
            "4. Combine"
        ),
        default_servings=4,
        current_servings=4,
    ),
    Recipe(
        id=3,
        name="Banana Pancakes",
        ingredients=[
            Ingredient(name="Flour", amount=150, unit="g"),
            Ingredient(name="Milk", amount=250, unit="ml"),
            Ingredient(name="Egg", amount=1, unit="pcs"),
            Ingredient(name="Banana", amount=1, unit="pcs"),
            Ingredient(name="Baking powder", amount=1.5, unit="tsp"),
        ],
        instructions=(
            "1. Mash the banana\n"
            "2. Whisk in milk and egg\n"
            "3. Fold in flour and baking powder\n"
            "4. Fry small ladles of batter until golden"
        ),
        default_servings=2,
        current_servings=2,
    ),
]


def seed_recipes() -> List[Recipe]:
    """Return fresh copies of the seed recipes."""
    return [r.model_copy(deep=True) for r in _SEED_RECIPES]


def seed_if_empty(current) -> List[Recipe]:
    if current:
        return current
    return seed_recipes()
