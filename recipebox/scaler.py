"""Scale a recipe's base ingredient amounts to its current serving count.

Scaled values are always recomputed from the stored base amounts and are
never written back to the recipe.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import List

from .errors import InvalidRecipe
from .schemas import Ingredient, Recipe


logger = logging.getLogger(__name__)

PRECISION = Decimal("0.01")


def check_servings(recipe: Recipe) -> None:
    if recipe.default_servings <= 0:
        raise InvalidRecipe(
            f"recipe {recipe.id} has default servings "
            f"{recipe.default_servings}; cannot scale"
        )
    if recipe.current_servings < 1:
        raise InvalidRecipe(
            f"recipe {recipe.id} has current servings "
            f"{recipe.current_servings}; cannot scale"
        )


def scaling_ratio(recipe: Recipe) -> Decimal:
    check_servings(recipe)
    return Decimal(recipe.current_servings) / Decimal(recipe.default_servings)


def scale_amount(amount: float, current: int, default: int) -> float:
    scaled = Decimal(str(amount)) * Decimal(current) / Decimal(default)
    try:
        return float(scaled.quantize(PRECISION, rounding=ROUND_HALF_UP))
    except InvalidOperation as e:
        raise InvalidRecipe(f"amount {amount} cannot be scaled") from e


def scale(recipe: Recipe) -> List[Ingredient]:
    """Return the recipe's ingredients scaled to ``current_servings``.

    Each amount is ``base * current_servings / default_servings`` rounded
    half-up to two decimal places. Names and units are unchanged.

    Raises:
        InvalidRecipe: ``default_servings`` is not positive or
            ``current_servings`` is below one.
    """
    check_servings(recipe)
    return [
        Ingredient(
            name=ing.name,
            amount=scale_amount(
                ing.amount, recipe.current_servings, recipe.default_servings
            ),
            unit=ing.unit,
        )
        for ing in recipe.ingredients
    ]


def scaled_or_base(recipe: Recipe) -> List[Ingredient]:
    """Ingredients for display: scaled, or the base amounts if unscalable."""
    try:
        return scale(recipe)
    except InvalidRecipe as e:
        logger.warning("Showing base amounts: %s", e)
        return [ing.model_copy() for ing in recipe.ingredients]


def format_amount(amount: float) -> str:
    text = f"{amount:.2f}".rstrip("0").rstrip(".")
    return text or "0"


def format_ingredient(ingredient: Ingredient) -> str:
    line = f"{ingredient.name}: {format_amount(ingredient.amount)}"
    if ingredient.unit:
        line = f"{line} {ingredient.unit}"
    return line
