# fleetseed/models/fleet.py
"""Fleets (one per customer) and the operator <-> fleet access-control edges."""

from sqlalchemy import Column, Integer, BigInteger, String
from fleetseed.database import MainBase


class Fleet(MainBase):
    __tablename__ = "fleets"

    fleet_id = Column(Integer, primary_key=True, autoincrement=True)
    fleet_name = Column(String(128), nullable=False)
    operator_id = Column(Integer, nullable=False, index=True)   # users.operators
    customer_id = Column(Integer, nullable=False, index=True)   # users.customers
    meters_until_maintenance = Column(Integer)
    date_created = Column(BigInteger)

    def __repr__(self):
        return f"<Fleet {self.fleet_id} {self.fleet_name}>"


class FleetAssociation(MainBase):
    __tablename__ = "fleet_associations"

    fleet_association_id = Column(Integer, primary_key=True, autoincrement=True)
    operator_id = Column(Integer, nullable=False, index=True)
    fleet_id = Column(Integer, nullable=False, index=True)
    acl = Column(String(32), nullable=False)                   # admin | member
    on_call = Column(Integer, default=0, nullable=False)

    def __repr__(self):
        return f"<FleetAssociation op={self.operator_id} fleet={self.fleet_id} acl={self.acl}>"
