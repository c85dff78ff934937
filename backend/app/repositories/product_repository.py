"""
Product Repository - Data Access Layer for Products

Handles all backend queries for products and their images and returns
Product domain models.
"""
from typing import List, Optional

from app.core.database import DataBackend
from app.domain.product import Product, ProductCreate, ProductImage, RecordId


class ProductRepository:
    """
    Repository for Product data access

    All table access for products and product_img is centralized here.
    """

    def __init__(self, backend: DataBackend):
        self.backend = backend

    def find_all(self, category: Optional[str] = None) -> List[Product]:
        """
        Find products, oldest listing first

        Args:
            category: Only products with this exact category

        Returns:
            List of products (images not loaded)
        """
        filters = {'category': category} if category else None
        rows = self.backend.query('products', filters=filters, order_by='created_at')
        return [Product(**row) for row in rows]

    def find_by_id(self, product_id: RecordId) -> Optional[Product]:
        """
        Find product by ID with all its images

        Returns:
            Product or None if not found
        """
        row = self.backend.query_one('products', {'id': product_id})
        if not row:
            return None
        return Product(**{**row, 'image_urls': self.find_image_urls(product_id)})

    def find_by_vendor(self, vendor_id: RecordId) -> List[Product]:
        rows = self.backend.query('products', filters={'vendor_id': vendor_id}, order_by='created_at')
        return [Product(**row) for row in rows]

    def find_image_urls(self, product_id: RecordId) -> List[str]:
        """All image URLs of a product in insertion order"""
        rows = self.backend.query(
            'product_img',
            filters={'product_id': product_id},
            columns='id, img_url',
            order_by='id'
        )
        return [row['img_url'] for row in rows]

    def find_first_image_url(self, product_id: RecordId) -> Optional[str]:
        """Fetch at most one image record for the product grid"""
        rows = self.backend.query(
            'product_img',
            filters={'product_id': product_id},
            columns='img_url',
            order_by='id',
            limit=1
        )
        return rows[0]['img_url'] if rows else None

    def create(self, vendor_id: RecordId, data: ProductCreate) -> Product:
        record = data.model_dump()
        record['price'] = float(data.price)
        record['vendor_id'] = vendor_id
        return Product(**self.backend.insert('products', record))

    def add_image(self, product_id: RecordId, img_url: str) -> ProductImage:
        """Append an image row (images are never replaced)"""
        row = self.backend.insert('product_img', {'product_id': product_id, 'img_url': img_url})
        return ProductImage(**row)

    def count(self) -> int:
        return len(self.backend.query('products', columns='id'))
