# fleetseed/models/bike.py
"""Bikes, paired 1:1 with a lock (lock_id is unique)."""

from sqlalchemy import Column, Integer, BigInteger, String, Text
from fleetseed.database import MainBase


class Bike(MainBase):
    __tablename__ = "bikes"

    bike_id = Column(Integer, primary_key=True, autoincrement=True)
    bike_name = Column(String(128))
    lock_id = Column(Integer, unique=True, nullable=False)
    fleet_id = Column(Integer, index=True)
    status = Column(String(32), nullable=False)              # active | suspended | inactive | deleted
    current_status = Column(String(32))
    maintenance_status = Column(String(32))                  # field_maintenance | shop_maintenance
    battery_level = Column(Integer)
    make = Column(String(64))
    model = Column(String(64))
    type = Column(String(32))                                # regular | electric
    description = Column(Text)
    pic = Column(String(512))
    date_created = Column(BigInteger)

    def __repr__(self):
        return f"<Bike {self.bike_id} lock={self.lock_id} status={self.status}>"
