"""
User Repository - Data Access Layer for purchaser profiles
"""
from typing import List, Optional

from app.core.database import DataBackend
from app.domain.user import UserProfile


class UserRepository:
    """Repository for the users table"""

    def __init__(self, backend: DataBackend):
        self.backend = backend

    def find_by_email(self, email: str) -> Optional[UserProfile]:
        row = self.backend.query_one('users', {'email': email})
        return UserProfile(**row) if row else None

    def create(self, record: dict) -> UserProfile:
        return UserProfile(**self.backend.insert('users', record))

    def find_all(self) -> List[UserProfile]:
        return [UserProfile(**row) for row in self.backend.query('users')]
