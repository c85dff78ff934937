"""
Catalog browsing rules

Category derivation, category filtering and image resolution for the
product grid. Pure functions over already-fetched products.
"""
from typing import Iterable, List, Optional

from app.domain.product import Product


# Pseudo-category that selects every product
ALL_CATEGORY = "All"


def derive_categories(products: Iterable[Product]) -> List[str]:
    """
    Distinct category labels in order of first occurrence, prefixed with "All"

    Products without a category, or labelled "All", are skipped.
    """
    categories = [ALL_CATEGORY]
    seen = {ALL_CATEGORY}
    for product in products:
        if product.category and product.category not in seen:
            seen.add(product.category)
            categories.append(product.category)
    return categories


def filter_by_category(products: List[Product], category: Optional[str]) -> List[Product]:
    """Products whose category equals the selection, original order kept"""
    if not category or category == ALL_CATEGORY:
        return list(products)
    return [product for product in products if product.category == category]


def resolve_display_image(image_urls: List[str], placeholder: str) -> str:
    """First image of a product, or the bundled placeholder"""
    return image_urls[0] if image_urls else placeholder


def build_gallery(image_urls: List[str], placeholder: str) -> List[str]:
    """All images in insertion order, or just the placeholder"""
    return list(image_urls) if image_urls else [placeholder]
