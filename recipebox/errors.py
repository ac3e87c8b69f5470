class RecipeBookError(Exception):
    pass


class InvalidInput(RecipeBookError, ValueError):
    """A user-supplied value was rejected; the prior state is kept."""


class InvalidRecipe(RecipeBookError, ValueError):
    """A stored recipe cannot be scaled, e.g. it has no servings basis."""


class RecipeNotFound(RecipeBookError, LookupError):
    pass


class UnsupportedLayout(RecipeBookError):
    """The persisted document has a shape or version we cannot read."""
