"""
Catalog Service
Product browsing for purchasers and product listing for vendors.

Browsing is read-only and reflects the backend at fetch time; clients
refetch to see changes.
"""
import logging
from typing import Any, Dict, List, Optional

from app.core.config import settings
from app.core.database import DataBackend
from app.core.exceptions import NotFoundError, ValidationError
from app.domain.catalog import (
    ALL_CATEGORY,
    build_gallery,
    derive_categories,
    filter_by_category,
    resolve_display_image,
)
from app.domain.product import Product, ProductCreate, ProductImage, RecordId
from app.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class CatalogService:
    """Service for the product catalog"""

    def __init__(self, backend: DataBackend, placeholder_image: Optional[str] = None):
        self.backend = backend
        self.products = ProductRepository(backend)
        self.placeholder_image = placeholder_image or settings.PLACEHOLDER_IMAGE

    def _grid_entry(self, product: Product) -> Dict[str, Any]:
        data = product.to_dict()
        image_url = self.products.find_first_image_url(product.id)
        data['display_image'] = resolve_display_image([image_url] if image_url else [], self.placeholder_image)
        return data

    def browse(self, category: Optional[str] = None) -> Dict[str, Any]:
        """
        Product grid for a category selection

        Categories are always derived from the full product list so the
        selector stays the same whichever category is shown.

        Returns:
            Dict with categories, selected category and products (each with display_image)
        """
        products = self.products.find_all()
        selected = category or ALL_CATEGORY
        shown = filter_by_category(products, selected)

        return {
            'categories': derive_categories(products),
            'selected': selected,
            'count': len(shown),
            'products': [self._grid_entry(product) for product in shown],
        }

    def categories(self) -> List[str]:
        return derive_categories(self.products.find_all())

    def get_product(self, product_id: RecordId) -> Dict[str, Any]:
        """
        Product detail with its image gallery

        Raises:
            NotFoundError: product does not exist
        """
        product = self.products.find_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found")

        data = product.to_dict()
        data['gallery'] = build_gallery(product.image_urls, self.placeholder_image)
        data['display_image'] = data['gallery'][0]
        return data

    def list_vendor_products(self, vendor_id: RecordId) -> List[Dict[str, Any]]:
        return [self._grid_entry(product) for product in self.products.find_by_vendor(vendor_id)]

    def create_product(self, vendor_id: RecordId, data: ProductCreate) -> Product:
        """
        List a new product owned by vendor_id

        Raises:
            ValidationError: name or category empty
        """
        if not data.name.strip():
            raise ValidationError("Product name is required")
        if not data.category.strip():
            raise ValidationError("Category is required")

        product = self.products.create(vendor_id, data)
        logger.info(f"Vendor {vendor_id} listed product {product.id} ({product.name})")
        return product

    def add_product_image(
        self,
        vendor_id: RecordId,
        product_id: RecordId,
        content: bytes,
        filename: str
    ) -> ProductImage:
        """
        Upload an image and append it to the product's gallery

        Raises:
            ValidationError: empty file
            NotFoundError: product missing or owned by another vendor
            BackendError: upload or insert failed
        """
        if not content:
            raise ValidationError("Image file is empty")

        product = self.products.find_by_id(product_id)
        if product is None or str(product.vendor_id) != str(vendor_id):
            raise NotFoundError(f"Product {product_id} not found")

        img_url = self.backend.upload_blob(content, filename, f"products/{product_id}")
        image = self.products.add_image(product_id, img_url)
        logger.info(f"Image added to product {product_id}: {img_url}")
        return image
