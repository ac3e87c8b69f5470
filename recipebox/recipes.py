import json
import logging
from typing import List

from pydantic import ValidationError

from .errors import UnsupportedLayout
from .schemas import Recipe


logger = logging.getLogger(__name__)

LAYOUT_VERSION = 1


def encode_recipes(recipes) -> str:
    """Serialize recipes into the versioned slot document.

    Args:
        recipes (iterable of Recipe): the full collection, in display order.

    Returns:
        str: JSON text holding ``{"version": ..., "recipes": [...]}``.
    """
    payload = {
        "version": LAYOUT_VERSION,
        "recipes": [r.model_dump(mode="json", by_alias=True) for r in recipes],
    }
    return json.dumps(payload, ensure_ascii=False)


def decode_recipes(raw: str) -> List[Recipe]:
    """Parse a slot document back into recipes.

    A bare JSON array is the unversioned layout and is read as version 1.
    Records that do not validate are dropped one by one, as are records
    repeating an id already seen, so the rest of the book survives.

    Args:
        raw (str): JSON text read from the slot.

    Returns:
        list: list of Recipe objects.

    Raises:
        UnsupportedLayout: the text is not JSON, has an unknown version, or
            its recipes are not a list.
    """
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise UnsupportedLayout(f"not a JSON document: {e}") from e

    if isinstance(data, list):
        items = data
    elif isinstance(data, dict):
        version = data.get("version")
        if type(version) is not int or version != LAYOUT_VERSION:
            raise UnsupportedLayout(f"unknown layout version: {version!r}")
        items = data.get("recipes", [])
    else:
        raise UnsupportedLayout(f"unexpected document type: {type(data).__name__}")

    if not isinstance(items, list):
        raise UnsupportedLayout(f"recipes must be a list, got {type(items).__name__}")

    seen = set()
    unique = []
    for position, item in enumerate(items):
        try:
            r = Recipe.model_validate(item)
        except ValidationError as e:
            logger.warning("Dropping unreadable recipe at position %d: %s", position, e)
            continue
        if r.id in seen:
            logger.warning("Dropping recipe %r with duplicate id %s", r.name, r.id)
            continue
        seen.add(r.id)
        unique.append(r)
    return unique
