"""
Domain Layer - Business Entities

This layer contains Pydantic models representing business entities.
These models enforce type safety and validation across the application.
"""
from app.domain.product import Product, ProductImage
from app.domain.order import Order, OrderStatus, PaymentMethod, ShippingInfo
from app.domain.vendor import Vendor, VendorSession
from app.domain.user import UserProfile

__all__ = [
    'Product',
    'ProductImage',
    'Order',
    'OrderStatus',
    'PaymentMethod',
    'ShippingInfo',
    'Vendor',
    'VendorSession',
    'UserProfile',
]
