"""
Purchaser Domain Models
"""
from pydantic import BaseModel, ConfigDict
from typing import Optional

from app.domain.product import RecordId
from app.domain.vendor import EMAIL_RE, MOBILE_RE


class UserProfile(BaseModel):
    """Row of the users table (purchaser profile)"""
    id: Optional[RecordId] = None
    full_name: Optional[str] = None
    mobile: Optional[str] = None
    address: Optional[str] = None
    email: str

    model_config = ConfigDict(from_attributes=True)


class PurchaserRegistration(BaseModel):
    """Purchaser sign-up form"""
    full_name: str = ""
    mobile: str = ""
    address: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""

    def first_error(self) -> Optional[str]:
        """Checks run in form order; the first failure is reported"""
        if not all([self.full_name, self.mobile, self.address, self.email,
                    self.password, self.confirm_password]):
            return 'Please fill all fields'
        if self.password != self.confirm_password:
            return 'Passwords do not match'
        if not MOBILE_RE.match(self.mobile):
            return 'Mobile number must be 10 digits'
        if not EMAIL_RE.match(self.email):
            return 'Please enter a valid email address'
        return None

    def to_profile_record(self) -> dict:
        return {
            'full_name': self.full_name,
            'mobile': self.mobile,
            'address': self.address,
            'email': self.email,
        }
