# product_form/schemas/product.py
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductType(str, Enum):
    TSHIRT = "TSHIRT"
    JEANS = "JEANS"
    SHIRT = "SHIRT"
    OTHER = "OTHER"

    @property
    def label(self) -> str:
        return PRODUCT_TYPE_LABELS[self]

    @classmethod
    def choices(cls) -> List[Tuple[str, str]]:
        """(value, label) pairs for the type select, in declaration order."""
        return [(m.value, m.label) for m in cls]


class ProductColor(str, Enum):
    RED = "RED"
    BLUE = "BLUE"
    GREEN = "GREEN"
    YELLOW = "YELLOW"
    PURPLE = "PURPLE"
    ORANGE = "ORANGE"
    PINK = "PINK"
    BROWN = "BROWN"

    @property
    def label(self) -> str:
        return PRODUCT_COLOR_LABELS[self]

    @classmethod
    def choices(cls) -> List[Tuple[str, str]]:
        """(value, label) pairs for the color select, in declaration order."""
        return [(m.value, m.label) for m in cls]


PRODUCT_TYPE_LABELS: Dict[ProductType, str] = {
    ProductType.TSHIRT: "T-shirt",
    ProductType.JEANS: "Jeans",
    ProductType.SHIRT: "Shirt",
    ProductType.OTHER: "Other",
}

PRODUCT_COLOR_LABELS: Dict[ProductColor, str] = {
    ProductColor.RED: "Red",
    ProductColor.BLUE: "Blue",
    ProductColor.GREEN: "Green",
    ProductColor.YELLOW: "Yellow",
    ProductColor.PURPLE: "Purple",
    ProductColor.ORANGE: "Orange",
    ProductColor.PINK: "Pink",
    ProductColor.BROWN: "Brown",
}

# adding an enum member without a label must fail loudly
for _enum, _labels in ((ProductType, PRODUCT_TYPE_LABELS), (ProductColor, PRODUCT_COLOR_LABELS)):
    _missing = set(_enum) - set(_labels)
    if _missing:
        raise RuntimeError(f"{_enum.__name__} members without a label: {sorted(m.value for m in _missing)}")


class ProductDraft(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    price: float = Field(..., ge=0.01, allow_inf_nan=False)
    type: ProductType
    color: ProductColor

    @field_validator("price", mode="before")
    @classmethod
    def reject_bool_price(cls, v):
        # bool is an int subclass
        if isinstance(v, bool):
            raise ValueError("price must be a number")
        return v


class ProductPayload(ProductDraft):
    """Body of POST /api/createProduct."""
    image: str = Field(..., min_length=1)


class ProductOut(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: str
    name: str
    description: Optional[str] = None
    price: float
    type: ProductType
    color: ProductColor
    image: str
    created_at: Optional[str] = None
