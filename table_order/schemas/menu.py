from __future__ import annotations

import enum
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

CENT = Decimal("0.01")

DietaryTag = Literal["vegetarian", "vegan", "gluten-free", "halal"]


class SpiceLevel(str, enum.Enum):
    mild = "mild"
    medium = "medium"
    hot = "hot"
    very_hot = "very-hot"


class NutritionInfo(BaseModel):
    calories: int = Field(..., ge=0)
    protein: float = Field(..., ge=0)
    carbs: float = Field(..., ge=0)
    fat: float = Field(..., ge=0)


class MenuItemFields(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    price: Decimal = Field(..., ge=0)
    category: str = Field(..., min_length=1)
    image: Optional[str] = None
    available: bool = True
    preparation_time: int = Field(..., gt=0)
    spicy_level: Optional[SpiceLevel] = None
    dietary: List[DietaryTag] = Field(default_factory=list)
    allergens: List[str] = Field(default_factory=list)
    nutritional_info: Optional[NutritionInfo] = None
    ingredients: List[str] = Field(default_factory=list)
    popularity: Optional[int] = Field(default=None, ge=1, le=5)
    restaurant_id: Optional[str] = None

    @field_validator("price")
    @classmethod
    def _quantize_price(cls, value: Decimal) -> Decimal:
        return value.quantize(CENT)

    @field_validator("dietary")
    @classmethod
    def _dedupe_dietary(cls, value: List[str]) -> List[str]:
        return list(dict.fromkeys(value))


class MenuItem(MenuItemFields):
    id: str = Field(..., min_length=1)


class MenuItemCreate(MenuItemFields):
    id: Optional[str] = None


class Category(BaseModel):
    id: str
    name: str
    icon: str = ""
    description: Optional[str] = None
    available: bool = True
