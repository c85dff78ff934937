"""
Products API Endpoints
Catalog browsing for purchasers, product listing for vendors
"""
from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from typing import Optional

from app.core.auth import TokenUser, require_vendor
from app.core.database import DataBackend, get_data_backend
from app.core.exceptions import MarketplaceError, to_http_exception
from app.domain.product import ProductCreate
from app.services.catalog_service import CatalogService

router = APIRouter()


@router.get("/")
async def get_products(
    category: Optional[str] = Query(None, description="Category to show ('All' or empty for every product)"),
    backend: DataBackend = Depends(get_data_backend)
):
    """
    Product grid

    Returns the category selector, the selected category and the matching
    products, each with a display image (placeholder when it has none)
    """
    try:
        return {"status": "success", "data": CatalogService(backend).browse(category)}
    except MarketplaceError as e:
        raise to_http_exception(e)


@router.get("/categories")
async def get_categories(backend: DataBackend = Depends(get_data_backend)):
    """Distinct categories in first-seen order, prefixed with 'All'"""
    try:
        return {"status": "success", "data": CatalogService(backend).categories()}
    except MarketplaceError as e:
        raise to_http_exception(e)


@router.get("/mine")
async def get_my_products(
    vendor: TokenUser = Depends(require_vendor),
    backend: DataBackend = Depends(get_data_backend)
):
    """Products listed by the calling vendor"""
    try:
        products = CatalogService(backend).list_vendor_products(vendor.id)
        return {"status": "success", "count": len(products), "data": products}
    except MarketplaceError as e:
        raise to_http_exception(e)


@router.get("/{product_id}")
async def get_product(product_id: str, backend: DataBackend = Depends(get_data_backend)):
    """Product detail with its image gallery"""
    try:
        return {"status": "success", "data": CatalogService(backend).get_product(product_id)}
    except MarketplaceError as e:
        raise to_http_exception(e)


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_product(
    data: ProductCreate,
    vendor: TokenUser = Depends(require_vendor),
    backend: DataBackend = Depends(get_data_backend)
):
    """List a new product owned by the calling vendor"""
    try:
        product = CatalogService(backend).create_product(vendor.id, data)
        return {"status": "success", "data": product.to_dict()}
    except MarketplaceError as e:
        raise to_http_exception(e)


@router.post("/{product_id}/images", status_code=status.HTTP_201_CREATED)
async def add_product_image(
    product_id: str,
    file: UploadFile = File(...),
    vendor: TokenUser = Depends(require_vendor),
    backend: DataBackend = Depends(get_data_backend)
):
    """Upload an image to products/{product_id} and append it to the gallery"""
    try:
        content = await file.read()
        image = CatalogService(backend).add_product_image(
            vendor.id, product_id, content, file.filename or "upload.jpg"
        )
        return {"status": "success", "data": image.model_dump()}
    except MarketplaceError as e:
        raise to_http_exception(e)
