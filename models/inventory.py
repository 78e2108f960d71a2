from pydantic import BaseModel, Field
from typing import List, Optional, Union
from enum import Enum

class Unit(str, Enum):
    KILOGRAMS = "kilograms"
    POUNDS = "pounds"
    LITERS = "liters"
    DOZEN = "dozen"

class Category(str, Enum):
    PRODUCE = "Produce"
    CONDIMENTS = "Condiments"
    PHARMA = "Pharma"
    MEAT_POULTRY = "Meat & Poultry"

class InventoryItem(BaseModel):
    name: str
    quantity: Union[int, float] = Field(..., gt=0)
    unit: str
    expiry_date: str = ""
    category: str = ""
    image_url: str = ""

class QuantityAdjustment(BaseModel):
    delta: float = Field(..., description="Amount to add; negative values decrement")

class AdjustmentResult(BaseModel):
    name: str
    quantity: Optional[Union[int, float]] = None
    deleted: bool

class InventoryViewResponse(BaseModel):
    search_term: str
    items: List[InventoryItem]
    total: int
    categories: List[str]

class SearchUpdate(BaseModel):
    search_term: str = ""
