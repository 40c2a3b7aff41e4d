# fleetseed/models/lock.py
"""
Lock devices. status: active | shipping | maintenance.
An active lock may be bound to a user; otherwise it belongs to the fleet's customer.
"""

from sqlalchemy import Column, Integer, String
from fleetseed.database import MainBase


class Lock(MainBase):
    __tablename__ = "locks"

    lock_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(128))
    mac_id = Column(String(32), unique=True, nullable=False)
    key = Column(String(128), nullable=False)
    battery_level = Column(Integer)
    status = Column(String(32), nullable=False, index=True)
    fleet_id = Column(Integer, index=True)
    operator_id = Column(Integer, index=True)
    customer_id = Column(Integer)
    user_id = Column(Integer, index=True)        # users.users (nullable)
    hub_id = Column(Integer)

    def __repr__(self):
        return f"<Lock {self.lock_id} {self.mac_id} status={self.status}>"
