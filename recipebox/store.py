"""The recipe book: an ordered collection of recipes kept in one storage slot.

Every mutating call persists the whole collection straight away. Storage
failures are logged and never raised; the in-memory collection keeps the
change for the rest of the session.
"""

import logging
from typing import Iterator, List, Mapping, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from . import db
from .config import Settings
from .crud import SlotStorage
from .errors import InvalidInput, RecipeNotFound, UnsupportedLayout
from .recipes import decode_recipes, encode_recipes
from .schemas import Recipe, RecipeCreate
from .seed import seed_if_empty


logger = logging.getLogger(__name__)


def parse_servings(value) -> int:
    """Coerce a servings value from user input to a positive int.

    Accepts ints, integral floats and numeric strings such as ``" 6 "``.

    Raises:
        InvalidInput: the value is not a whole number or is below one.
    """
    if isinstance(value, bool):
        raise InvalidInput(f"servings must be a number, got {value!r}")
    if isinstance(value, str):
        text = value.strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                raise InvalidInput(
                    f"servings must be a number, got {text!r}"
                ) from None
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidInput(f"servings must be a whole number, got {value}")
        value = int(value)
    if not isinstance(value, int):
        raise InvalidInput(f"servings must be a number, got {value!r}")
    if value < 1:
        raise InvalidInput(f"servings must be at least 1, got {value}")
    return value


def to_draft(value) -> RecipeCreate:
    try:
        if isinstance(value, RecipeCreate):
            # fields may have been reassigned since construction
            return RecipeCreate.model_validate(value.model_dump())
        if isinstance(value, Recipe):
            return value.to_draft()
        if isinstance(value, Mapping):
            return RecipeCreate.model_validate(dict(value))
    except ValidationError as e:
        raise InvalidInput(f"invalid recipe: {e}") from e
    raise InvalidInput(f"cannot build a recipe from {type(value).__name__}")


class RecipeStore:
    """Recipe collection persisted under a single key of a slot storage.

    ``storage`` needs ``read(key) -> str | None`` and ``write(key, value)``;
    see :class:`recipebox.crud.SlotStorage`.
    """

    def __init__(self, storage, key: str = "recipes") -> None:
        self.storage = storage
        self.key = key
        self._recipes: List[Recipe] = []
        # never decremented, so deleted ids are not handed out again
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._recipes)

    def __iter__(self) -> Iterator[Recipe]:
        return iter(self.recipes)

    @property
    def recipes(self) -> List[Recipe]:
        return [r.model_copy(deep=True) for r in self._recipes]

    def load(self) -> List[Recipe]:
        """Read the persisted collection; empty if missing or unreadable."""
        try:
            raw = self.storage.read(self.key)
        except SQLAlchemyError as e:
            logger.warning("Could not read slot %r, starting empty: %s", self.key, e)
            return []
        if raw is None:
            return []
        try:
            return decode_recipes(raw)
        except UnsupportedLayout as e:
            logger.warning("Ignoring unreadable slot %r: %s", self.key, e)
            return []

    def seed_if_empty(self, current) -> List[Recipe]:
        return seed_if_empty(current)

    def start(self) -> List[Recipe]:
        """Load on start, seeding and persisting an empty book."""
        loaded = self.load()
        recipes = self.seed_if_empty(loaded)
        self._replace(recipes)
        if recipes is not loaded:
            logger.info("Seeded empty recipe book with %d recipes", len(recipes))
            self._persist()
        return self.recipes

    def save(self, recipes=None) -> bool:
        """Persist the full collection, replacing what the slot held.

        Returns:
            bool: whether the write reached storage.
        """
        if recipes is not None:
            self._replace(recipes)
        return self._persist()

    def get(self, id: int) -> Recipe:
        index = self._index_of(id)
        if index is None:
            raise RecipeNotFound(f"{id}")
        return self._recipes[index].model_copy(deep=True)

    def create(self, base) -> int:
        draft = to_draft(base)
        id = self._next_id
        self._next_id += 1
        self._recipes.append(Recipe.from_draft(id, draft))
        self._persist()
        logger.info("Created recipe %s (%s)", id, draft.name)
        return id

    def update(self, id: int, fields) -> Optional[Recipe]:
        draft = to_draft(fields)
        index = self._index_of(id)
        if index is None:
            logger.info("Update of missing recipe %s ignored", id)
            return None
        recipe = Recipe.from_draft(id, draft)
        self._recipes[index] = recipe
        self._persist()
        return recipe.model_copy(deep=True)

    def delete(self, id: int) -> bool:
        index = self._index_of(id)
        if index is None:
            return False
        del self._recipes[index]
        self._persist()
        logger.info("Deleted recipe %s", id)
        return True

    def set_current_servings(self, id: int, n) -> Optional[Recipe]:
        servings = parse_servings(n)
        index = self._index_of(id)
        if index is None:
            return None
        recipe = self._recipes[index].model_copy(
            update={"current_servings": servings}, deep=True
        )
        self._recipes[index] = recipe
        self._persist()
        return recipe.model_copy(deep=True)

    def save_draft(self, draft, editing_id: Optional[int] = None) -> int:
        """Save the edit form: create without a target, replace with one."""
        if editing_id is None:
            return self.create(draft)
        if self.update(editing_id, draft) is None:
            raise RecipeNotFound(f"{editing_id}")
        return editing_id

    def _index_of(self, id: int) -> Optional[int]:
        for i, r in enumerate(self._recipes):
            if r.id == id:
                return i
        return None

    def _replace(self, recipes) -> None:
        recipes = [r.model_copy(deep=True) for r in recipes]
        ids = [r.id for r in recipes]
        if len(set(ids)) != len(ids):
            raise InvalidInput("recipe ids must be unique")
        self._recipes = recipes
        self._next_id = max(self._next_id, max(ids, default=0) + 1)

    def _persist(self) -> bool:
        try:
            self.storage.write(self.key, encode_recipes(self._recipes))
        except SQLAlchemyError as e:
            logger.warning("Could not persist slot %r: %s", self.key, e)
            return False
        logger.debug("Persisted %d recipes to slot %r", len(self._recipes), self.key)
        return True


def open_store(settings: Optional[Settings] = None) -> RecipeStore:
    """Build a store on the configured database, creating the table if needed."""
    if settings is None:
        settings = db.settings
        engine, session_factory = db.engine, db.SessionLocal
    else:
        engine = db.make_engine(settings.db_url)
        session_factory = db.make_session_factory(engine)
    try:
        db.init_db(engine)
    except SQLAlchemyError as e:
        logger.warning("Could not prepare database: %s", e)
    return RecipeStore(SlotStorage(session_factory), key=settings.storage_key)
