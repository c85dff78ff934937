"""
Vendor Domain Models

A vendor is a registered seller who lists products and fulfills orders.
"""
import re
from pydantic import BaseModel, Field, ConfigDict
from typing import Dict, Optional
from datetime import datetime

from app.domain.product import RecordId


EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MOBILE_RE = re.compile(r"^\d{10}$")
GST_RE = re.compile(r"^[0-9]{6}$")
IFSC_RE = re.compile(r"^[0-9]{6}$")

MIN_PASSWORD_LENGTH = 6


class Vendor(BaseModel):
    """
    Vendor domain model

    The bcrypt hash is loaded for login checks but never serialized.
    """

    id: RecordId = Field(..., description="Vendor ID")
    full_name: str = Field(..., description="Vendor name")
    email: str = Field(..., description="Login email")
    mobile: Optional[str] = None
    gst_id: Optional[str] = None

    # Bank settlement
    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    ifsc_code: Optional[str] = None
    branch_name: Optional[str] = None

    hashed_password: Optional[str] = Field(None, exclude=True)
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        data = self.model_dump()
        if self.created_at:
            data['created_at'] = self.created_at.isoformat()
        return data


class VendorRegistration(BaseModel):
    """Vendor sign-up form"""
    full_name: str = ""
    mobile: str = ""
    email: str = ""
    gst_id: str = ""
    bank_name: str = ""
    account_number: str = ""
    ifsc_code: str = ""
    branch_name: str = ""
    password: str = ""
    confirm_password: str = ""

    def validation_errors(self) -> Dict[str, str]:
        """Field name -> message for every invalid field"""
        errors = {}
        if not self.full_name.strip():
            errors['full_name'] = 'Full Name is required'
        if not MOBILE_RE.match(self.mobile):
            errors['mobile'] = 'Invalid mobile number'
        if not EMAIL_RE.match(self.email):
            errors['email'] = 'Invalid email address'
        if not GST_RE.match(self.gst_id):
            errors['gst_id'] = 'Invalid GST ID'
        if not self.bank_name.strip():
            errors['bank_name'] = 'Bank name is required'
        if not self.account_number.strip():
            errors['account_number'] = 'Account number is required'
        if not IFSC_RE.match(self.ifsc_code):
            errors['ifsc_code'] = 'Invalid IFSC code'
        if len(self.password) < MIN_PASSWORD_LENGTH:
            errors['password'] = f'Password must be at least {MIN_PASSWORD_LENGTH} characters'
        if self.password != self.confirm_password:
            errors['confirm_password'] = 'Passwords do not match'
        return errors

    def to_record(self, hashed_password: str) -> dict:
        data = self.model_dump(exclude={'password', 'confirm_password'})
        data['hashed_password'] = hashed_password
        return data


class VendorSession(BaseModel):
    """Vendor identity kept by a client between launches"""
    id: RecordId
    email: str
    name: Optional[str] = None
