# fleetseed/models/maintenance.py
"""Service records for suspended bikes. service_end_date is always after service_start_date."""

from sqlalchemy import Column, Integer, BigInteger, String, Text
from fleetseed.database import MainBase


class Maintenance(MainBase):
    __tablename__ = "maintenance"

    maintenance_id = Column(Integer, primary_key=True, autoincrement=True)
    bike_id = Column(Integer, index=True)
    lock_id = Column(Integer)
    fleet_id = Column(Integer)
    customer_id = Column(Integer)
    operator_id = Column(Integer)
    status = Column(String(64))
    category = Column(String(64))
    rider_notes = Column(Text)
    service_start_date = Column(BigInteger)
    service_end_date = Column(BigInteger)

    def __repr__(self):
        return f"<Maintenance {self.maintenance_id} bike={self.bike_id} status={self.status}>"
