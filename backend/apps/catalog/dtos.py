from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class ProductDTO:
    """Transport shape of a product. ``category`` is the category name.

    Every field is optional so the same type carries partial updates:
    ``None`` means "not provided".
    """

    id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    image: Optional[str] = None
    deleted: bool = False
    deleted_on: Optional[datetime] = None
    category: Optional[str] = None


"""DTO dataclasses only. Mapping logic lives in mappers.py."""
