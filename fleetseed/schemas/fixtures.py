# fleetseed/schemas/fixtures.py
"""
Pydantic models for the static demo-data fixtures.
Each fixture file is a JSON array (or, for anchors, an array of city records).
"""

from pydantic import BaseModel, Field
from typing import Optional, Tuple


class OperatorFixture(BaseModel):
    first_name: str
    last_name: str
    email: str
    password: str
    phone_number: Optional[str] = None
    title: Optional[str] = None


class CustomerFixture(BaseModel):
    customer_name: str
    region: str              # must name a parking anchor city
    contact_email: Optional[str] = None


class UserFixture(BaseModel):
    username: str
    email: str
    password: str
    first_name: str
    last_name: str
    phone_number: Optional[str] = None


class LockFixture(BaseModel):
    name: str
    mac_id: str
    key: str


class ParkingSpotFixture(BaseModel):
    name: str
    description: Optional[str] = None
    pic: Optional[str] = None


class ParkingAnchor(BaseModel):
    """Region table entry: every spatial sample for a customer stays inside this disk."""
    city: str
    center: Tuple[float, float]          # (latitude, longitude)
    max_radius: float = Field(gt=0)      # meters
