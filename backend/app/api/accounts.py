"""
Account profile endpoints
- Purchaser profile (users table)
- Vendor dashboard profile (vendors table, password hash never returned)
"""
from fastapi import APIRouter, Depends

from app.core.auth import TokenUser, require_purchaser, require_vendor
from app.core.database import DataBackend, get_data_backend
from app.core.exceptions import MarketplaceError, NotFoundError, to_http_exception
from app.repositories.user_repository import UserRepository
from app.repositories.vendor_repository import VendorRepository

users_router = APIRouter(prefix="/api/v1/users", tags=["Users"])
vendors_router = APIRouter(prefix="/api/v1/vendors", tags=["Vendors"])


@users_router.get("/me")
async def get_purchaser_profile(
    user: TokenUser = Depends(require_purchaser),
    backend: DataBackend = Depends(get_data_backend)
):
    try:
        profile = UserRepository(backend).find_by_email(user.email)
        if profile is None:
            raise NotFoundError("Profile not found, please log in again")
        return {"status": "success", "data": profile.model_dump()}
    except MarketplaceError as e:
        raise to_http_exception(e)


@vendors_router.get("/me")
async def get_vendor_profile(
    vendor: TokenUser = Depends(require_vendor),
    backend: DataBackend = Depends(get_data_backend)
):
    """Vendor dashboard: personal and bank details"""
    try:
        record = VendorRepository(backend).find_by_id(vendor.id)
        if record is None:
            raise NotFoundError("Vendor not found")
        return {"status": "success", "data": record.to_dict()}
    except MarketplaceError as e:
        raise to_http_exception(e)
