"""
Admin API - Marketplace data viewer
"""
from fastapi import APIRouter, Depends
from typing import Any, Dict

from app.core.auth import TokenUser, require_admin
from app.core.database import DataBackend, get_data_backend
from app.core.exceptions import MarketplaceError, to_http_exception
from app.services.admin_service import AdminService

router = APIRouter()


@router.get("/overview")
async def get_overview(
    admin: TokenUser = Depends(require_admin),
    backend: DataBackend = Depends(get_data_backend)
) -> Dict[str, Any]:
    """
    Dashboard counters

    Returns:
        users, vendors, products: row counts
        orders: total_orders, total_revenue, by_status
    """
    try:
        return {"status": "success", "data": AdminService(backend).overview()}
    except MarketplaceError as e:
        raise to_http_exception(e)


@router.get("/tables/{table}")
async def get_table(
    table: str,
    admin: TokenUser = Depends(require_admin),
    backend: DataBackend = Depends(get_data_backend)
) -> Dict[str, Any]:
    """Rows of users, vendors, products or orders"""
    try:
        rows = AdminService(backend).list_table(table)
        return {"status": "success", "table": table, "count": len(rows), "data": rows}
    except MarketplaceError as e:
        raise to_http_exception(e)
