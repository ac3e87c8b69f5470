from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


DEFAULT_SERVINGS = 4


class Ingredient(BaseModel):
    name: str = Field(..., json_schema_extra={"example": "Spaghetti"})
    amount: float = Field(
        ..., ge=0, allow_inf_nan=False, json_schema_extra={"example": 400}
    )
    unit: str = Field("", json_schema_extra={"example": "g"})


class RecipeBase(BaseModel):
    # persisted records use the camelCase keys of the original layout
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(
        "", json_schema_extra={"example": "Classic Spaghetti Carbonara"}
    )
    ingredients: List[Ingredient] = Field(default_factory=list)
    instructions: str = Field(
        "", json_schema_extra={"example": "1. Cook pasta\n2. Combine"}
    )
    default_servings: int = DEFAULT_SERVINGS
    current_servings: int = DEFAULT_SERVINGS


class RecipeCreate(RecipeBase):
    """The draft a user fills in before saving."""

    default_servings: int = Field(DEFAULT_SERVINGS, gt=0)
    current_servings: int = Field(DEFAULT_SERVINGS, ge=1)


class Recipe(RecipeBase):
    id: int

    @classmethod
    def from_draft(cls, id: int, draft: RecipeCreate) -> "Recipe":
        return cls(id=id, **draft.model_dump())

    def to_draft(self) -> RecipeCreate:
        return RecipeCreate(**self.model_dump(exclude={"id"}))
