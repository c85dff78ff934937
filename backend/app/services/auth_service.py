"""
Account Service
Registration and login for purchasers, vendors and the admin.

Purchasers authenticate against Supabase Auth. Vendor passwords are hashed
and compared here with bcrypt; the hash never leaves this service. The admin
account comes from configuration.
"""
import logging
import secrets
from typing import Any, Dict

from passlib.context import CryptContext

from app.core.auth import ROLE_ADMIN, ROLE_PURCHASER, ROLE_VENDOR, TokenUser, create_access_token
from app.core.config import settings
from app.core.database import DataBackend
from app.core.exceptions import AuthenticationError, ValidationError
from app.domain.user import PurchaserRegistration, UserProfile
from app.domain.vendor import Vendor, VendorRegistration, VendorSession
from app.repositories.user_repository import UserRepository
from app.repositories.vendor_repository import VendorRepository

logger = logging.getLogger(__name__)

# Password hashing context (bcrypt, salt embedded in the hash)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

INVALID_CREDENTIALS = "Invalid credentials"


def _require_fields(email: str, password: str):
    if not email or not password:
        raise ValidationError("Please fill in all fields")


class AccountService:
    """Service for account registration and login"""

    def __init__(self, backend: DataBackend):
        self.backend = backend
        self.users = UserRepository(backend)
        self.vendors = VendorRepository(backend)

    # =========================================================================
    # Purchasers
    # =========================================================================

    def register_purchaser(self, form: PurchaserRegistration) -> UserProfile:
        """
        Create the auth user, then the users profile row

        Raises:
            ValidationError: first invalid form field
            BackendError: sign-up or profile insert failed
        """
        error = form.first_error()
        if error:
            raise ValidationError(error)

        self.backend.sign_up(form.email, form.password)
        profile = self.users.create(form.to_profile_record())
        logger.info(f"Purchaser registered: {form.email}")
        return profile

    def login_purchaser(self, email: str, password: str) -> Dict[str, Any]:
        _require_fields(email, password)

        auth = self.backend.authenticate(email, password)
        user = TokenUser(id=auth['user_id'], email=auth['email'] or email, role=ROLE_PURCHASER)
        logger.info(f"Purchaser login: {user.email}")
        return {'access_token': create_access_token(user), 'token_type': 'bearer', 'user': user.model_dump()}

    # =========================================================================
    # Vendors
    # =========================================================================

    def register_vendor(self, form: VendorRegistration) -> Vendor:
        """
        Raises:
            ValidationError: one or more invalid fields (all reported)
            BackendError: insert failed (e.g. duplicate email)
        """
        errors = form.validation_errors()
        if errors:
            raise ValidationError("; ".join(errors.values()))

        vendor = self.vendors.create(form.to_record(pwd_context.hash(form.password)))
        logger.info(f"Vendor registered: {vendor.email} (id {vendor.id})")
        return vendor

    def authenticate_vendor(self, email: str, password: str) -> VendorSession:
        """
        Check vendor credentials against the stored bcrypt hash

        Raises:
            AuthenticationError: unknown email or wrong password (same message for both)
        """
        _require_fields(email, password)

        vendor = self.vendors.find_by_email(email)
        if vendor is None or not vendor.hashed_password:
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not pwd_context.verify(password, vendor.hashed_password):
            logger.warning(f"Failed vendor login for {email}")
            raise AuthenticationError(INVALID_CREDENTIALS)

        return VendorSession(id=vendor.id, email=vendor.email, name=vendor.full_name)

    def login_vendor(self, email: str, password: str) -> Dict[str, Any]:
        session = self.authenticate_vendor(email, password)
        user = TokenUser(id=str(session.id), email=session.email, name=session.name, role=ROLE_VENDOR)
        logger.info(f"Vendor login: {session.email}")
        return {
            'access_token': create_access_token(user),
            'token_type': 'bearer',
            'session': session.model_dump(),
        }

    # =========================================================================
    # Admin
    # =========================================================================

    @staticmethod
    def login_admin(email: str, password: str) -> Dict[str, Any]:
        _require_fields(email, password)

        if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
            raise AuthenticationError("Admin account not configured")

        email_ok = secrets.compare_digest(email.encode(), settings.ADMIN_EMAIL.encode())
        password_ok = secrets.compare_digest(password.encode(), settings.ADMIN_PASSWORD.encode())
        if not (email_ok and password_ok):
            logger.warning("Failed admin login")
            raise AuthenticationError("Invalid admin credentials")

        user = TokenUser(id="admin", email=email, name="Admin", role=ROLE_ADMIN)
        return {'access_token': create_access_token(user), 'token_type': 'bearer', 'user': user.model_dump()}
