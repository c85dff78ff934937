"""
Authentication API endpoints for Kisan Marketplace
- Purchaser registration and login (Supabase Auth)
- Vendor registration and login (bcrypt, checked server-side)
- Admin login (configured account)
"""
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from app.core.auth import TokenUser, get_current_user
from app.core.database import DataBackend, get_data_backend
from app.core.exceptions import MarketplaceError, to_http_exception
from app.core.rate_limit import login_rate_limit
from app.domain.user import PurchaserRegistration
from app.domain.vendor import VendorRegistration
from app.services.auth_service import AccountService

router = APIRouter()


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


# =============================================================================
# Purchasers
# =============================================================================

@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register_purchaser(
    form: PurchaserRegistration,
    backend: DataBackend = Depends(get_data_backend)
):
    """Register a purchaser (auth user + users profile)"""
    try:
        profile = AccountService(backend).register_purchaser(form)
        return {
            "status": "success",
            "message": "Registration successful! Please check your email for confirmation.",
            "data": profile.model_dump()
        }
    except MarketplaceError as e:
        raise to_http_exception(e)


@router.post("/login", dependencies=[Depends(login_rate_limit)])
async def login_purchaser(
    credentials: LoginRequest,
    backend: DataBackend = Depends(get_data_backend)
):
    """Purchaser login, returns a bearer token"""
    try:
        return AccountService(backend).login_purchaser(credentials.email, credentials.password)
    except MarketplaceError as e:
        raise to_http_exception(e)


# =============================================================================
# Vendors
# =============================================================================

@router.post("/vendor/register", status_code=status.HTTP_201_CREATED)
async def register_vendor(
    form: VendorRegistration,
    backend: DataBackend = Depends(get_data_backend)
):
    """Register a vendor; the password is hashed with bcrypt before insert"""
    try:
        vendor = AccountService(backend).register_vendor(form)
        return {
            "status": "success",
            "message": "Registration successful! Please Login",
            "data": vendor.to_dict()
        }
    except MarketplaceError as e:
        raise to_http_exception(e)


@router.post("/vendor/login", dependencies=[Depends(login_rate_limit)])
async def login_vendor(
    credentials: LoginRequest,
    backend: DataBackend = Depends(get_data_backend)
):
    """
    Vendor login

    Returns a bearer token plus the session payload ({id, email, name})
    a client may keep locally.
    """
    try:
        return AccountService(backend).login_vendor(credentials.email, credentials.password)
    except MarketplaceError as e:
        raise to_http_exception(e)


# =============================================================================
# Admin
# =============================================================================

@router.post("/admin/login", dependencies=[Depends(login_rate_limit)])
async def login_admin(credentials: LoginRequest):
    try:
        return AccountService.login_admin(credentials.email, credentials.password)
    except MarketplaceError as e:
        raise to_http_exception(e)


@router.get("/me")
async def get_me(user: TokenUser = Depends(get_current_user)):
    """Identity carried by the bearer token"""
    return {"status": "success", "data": user.model_dump()}
