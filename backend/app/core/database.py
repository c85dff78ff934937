"""
Data backend access (Supabase + Cloudinary)

All access to the managed backend goes through this module:
- Supabase client (tables and purchaser authentication)
- Cloudinary unsigned upload (product images)

Every failure reported by the backend is re-raised as BackendError with the
backend message kept verbatim.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx
import requests
from postgrest.exceptions import APIError
from supabase import AuthApiError, Client, create_client

from app.core.config import settings
from app.core.exceptions import AuthenticationError, BackendError

logger = logging.getLogger(__name__)


# ============================================================================
# Supabase Client
# ============================================================================

_supabase: Optional[Client] = None


def get_supabase() -> Client:
    """
    Return the shared Supabase client, creating it on first use

    Raises:
        BackendError if SUPABASE_URL or the service key is not configured
    """
    global _supabase
    if _supabase is None:
        if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
            raise BackendError("SUPABASE_URL not configured")
        _supabase = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
    return _supabase


# ============================================================================
# Data Backend
# ============================================================================

class DataBackend:
    """
    Generic table/auth/blob interface over the managed backend

    Repositories and services only talk to this class, never to the
    Supabase client directly.
    """

    def __init__(self, client: Client):
        self.client = client

    def _execute(self, request, table: str):
        try:
            return request.execute()
        except APIError as e:
            logger.warning(f"Backend error on '{table}': {e.message}")
            raise BackendError(e.message or str(e))
        except httpx.HTTPError as e:
            logger.warning(f"Transport error on '{table}': {e}")
            raise BackendError(str(e))

    def query(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        columns: str = "*",
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Read rows from a table

        Args:
            table: Table name (users, vendors, products, product_img, orders)
            filters: Column equality filters
            columns: Projection, PostgREST select syntax (embedded resources allowed)
            order_by: Column to sort by
            descending: Sort direction
            limit: Maximum rows to return

        Returns:
            List of row dicts (empty when nothing matches)
        """
        request = self.client.table(table).select(columns)
        for column, value in (filters or {}).items():
            request = request.eq(column, value)
        if order_by:
            request = request.order(order_by, desc=descending)
        if limit:
            request = request.limit(limit)

        response = self._execute(request, table)
        return response.data or []

    def query_one(
        self,
        table: str,
        filters: Dict[str, Any],
        columns: str = "*"
    ) -> Optional[Dict[str, Any]]:
        """Return the first matching row or None"""
        rows = self.query(table, filters=filters, columns=columns, limit=1)
        return rows[0] if rows else None

    def insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one record and return it as assigned by the backend"""
        response = self._execute(self.client.table(table).insert(record), table)
        if not response.data:
            raise BackendError(f"Insert into '{table}' returned no record")
        return response.data[0]

    def update(
        self,
        table: str,
        key: Dict[str, Any],
        patch: Dict[str, Any]
    ) -> List[Dict[str, Any]]:
        """
        Apply a patch to the rows matching every column in key

        Returns:
            Updated rows (empty when no row matched)
        """
        request = self.client.table(table).update(patch)
        for column, value in key.items():
            request = request.eq(column, value)
        response = self._execute(request, table)
        return response.data or []

    def authenticate(self, email: str, password: str) -> Dict[str, Any]:
        """
        Purchaser sign-in through Supabase Auth

        Returns:
            Dict with user_id, email and the backend access_token
        """
        try:
            response = self.client.auth.sign_in_with_password({"email": email, "password": password})
        except AuthApiError as e:
            raise AuthenticationError(e.message)
        except httpx.HTTPError as e:
            raise BackendError(str(e))

        if not response.user:
            raise AuthenticationError("Invalid login credentials")

        return {
            "user_id": str(response.user.id),
            "email": response.user.email,
            "access_token": response.session.access_token if response.session else None,
        }

    def sign_up(self, email: str, password: str) -> str:
        """Create a Supabase Auth user and return its id"""
        try:
            response = self.client.auth.sign_up({"email": email, "password": password})
        except AuthApiError as e:
            raise BackendError(e.message)
        except httpx.HTTPError as e:
            raise BackendError(str(e))

        if not response.user:
            raise BackendError("User registration failed")
        return str(response.user.id)

    def upload_blob(self, content: bytes, filename: str, folder: str) -> str:
        """
        Upload an image to Cloudinary and return its public URL

        Args:
            content: Raw file bytes
            filename: Original file name
            folder: Destination folder (e.g. products/42)
        """
        if not settings.CLOUDINARY_CLOUD_NAME or not settings.CLOUDINARY_UPLOAD_PRESET:
            raise BackendError("Image hosting not configured")

        url = f"https://api.cloudinary.com/v1_1/{settings.CLOUDINARY_CLOUD_NAME}/image/upload"
        try:
            response = requests.post(
                url,
                data={"upload_preset": settings.CLOUDINARY_UPLOAD_PRESET, "folder": folder},
                files={"file": (filename, content)},
                timeout=30
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning(f"Image upload to '{folder}' failed: {e}")
            raise BackendError(f"Upload failed: {e}")

        public_url = response.json().get("secure_url")
        if not public_url:
            raise BackendError("Upload failed: no URL returned")
        return public_url


def get_data_backend() -> DataBackend:
    """
    FastAPI dependency returning the data backend

    Usage:
        @router.get("/items")
        def read_items(backend: DataBackend = Depends(get_data_backend)):
            ...
    """
    return DataBackend(get_supabase())
