"""
Repository Layer - Data Access

This layer handles all backend table access and returns domain models.
Repositories abstract away backend query details from business logic.
"""
from app.repositories.product_repository import ProductRepository
from app.repositories.order_repository import OrderRepository
from app.repositories.vendor_repository import VendorRepository
from app.repositories.user_repository import UserRepository

__all__ = [
    'ProductRepository',
    'OrderRepository',
    'VendorRepository',
    'UserRepository'
]
