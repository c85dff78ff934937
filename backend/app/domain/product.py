"""
Product Domain Model

Represents a product listed by a vendor in the Kisan marketplace.
This is the single source of truth for product data structure.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional, Union
from datetime import datetime
from decimal import Decimal


# Backend-assigned identifiers are bigint on some tables and uuid on others
RecordId = Union[int, str]


class ProductImage(BaseModel):
    """Row of the product_img table"""

    id: Optional[RecordId] = Field(None, description="Image row ID")
    product_id: RecordId = Field(..., description="Owning product ID")
    img_url: str = Field(..., description="Public image URL")

    model_config = ConfigDict(from_attributes=True)


class Product(BaseModel):
    """
    Product domain model - represents a product in the catalog

    Fields:
        id: Product ID (assigned by the backend)
        name: Product name
        category: Category label used by the catalog filter
        price: Unit price (two-decimal display)
        quantity: Quantity on hand (informational only, never decremented by orders)
        vendor_id: Owning vendor (immutable once created)
        description: Free text description
        created_at: Creation timestamp
        image_urls: Associated image URLs in insertion order
    """

    id: RecordId = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    category: Optional[str] = Field(None, description="Product category")
    price: Decimal = Field(..., description="Unit price", ge=0)
    quantity: int = Field(0, description="Quantity on hand (informational)")
    vendor_id: RecordId = Field(..., description="Owning vendor ID")
    description: Optional[str] = Field(None, description="Product description")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    image_urls: List[str] = Field(default_factory=list, description="Image URLs")

    model_config = ConfigDict(
        from_attributes=True,
        json_encoders={
            Decimal: float,
            datetime: lambda v: v.isoformat()
        }
    )

    @property
    def display_price(self) -> str:
        return f"{self.price:.2f}"

    def to_dict(self) -> dict:
        """Convert to dictionary with Decimal to float conversion"""
        data = self.model_dump()
        data['price'] = float(self.price)
        data['display_price'] = self.display_price
        if data.get('created_at'):
            data['created_at'] = self.created_at.isoformat()
        return data


class ProductCreate(BaseModel):
    """Schema for listing a new product"""
    name: str
    category: str
    price: Decimal = Field(..., ge=0)
    quantity: int = Field(0, ge=0)
    description: Optional[str] = None
