"""Models for photo-based food identification."""

from pydantic import BaseModel, ConfigDict, Field

FOOD_CATEGORY_LABELS: tuple[str, ...] = (
    "Vegetables",
    "Meat",
    "Fruits",
    "Dairy & Eggs",
    "Seasonings & Sauces",
    "Grains & Pasta",
    "Canned & Packaged",
    "Frozen",
    "Snacks",
    "Beverages",
    "Other",
)

CONFIDENCE_LEVELS: tuple[str, ...] = ("high", "medium", "low")


class FoodIdentification(BaseModel):
    """Structured output for a single identified food."""

    model_config = ConfigDict(populate_by_name=True, strict=True)

    food_name: str = Field(alias="foodName")
    category: str
    confidence: str
    note: str | None = Field(default=None, alias="additionalInfo")
