# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: ProductRecord
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class ProductRecord:
    """
    Product metadata joined onto ranked search hits.
    Numeric fields are never negative; missing values fall back to zero values.
    """
    id: str
    name: str = ""
    price: float = 0.0
    sku: str = ""
    stock_quantity: int = 0
    image_url: str = ""
    description: str = ""

    def to_result_fields(self) -> Dict[str, Any]:
        """camelCase view used in search responses."""
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "sku": self.sku,
            "stockQuantity": self.stock_quantity,
            "imageUrl": self.image_url,
            "description": self.description,
        }
