# fleetseed/models/geofence.py
"""
Fleet geofences (circle or polygon, one per fleet) and the hubs placed near them.
A hub references exactly one of geofence_circle_id / geofence_polygon_id.
"""

from sqlalchemy import Column, Integer, Float, String, Text
from fleetseed.database import MainBase


class GeofenceCircle(MainBase):
    __tablename__ = "geofence_circle"

    geofence_circle_id = Column(Integer, primary_key=True, autoincrement=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    radius = Column(Float, nullable=False)        # meters
    fleet_id = Column(Integer, index=True)
    operator_id = Column(Integer)
    customer_id = Column(Integer)

    def __repr__(self):
        return f"<GeofenceCircle {self.geofence_circle_id} fleet={self.fleet_id} r={self.radius}>"


class GeofencePolygon(MainBase):
    __tablename__ = "geofence_polygon"

    geofence_polygon_id = Column(Integer, primary_key=True, autoincrement=True)
    steps = Column(Text, nullable=False)          # JSON closed ring of {latitude, longitude}
    fleet_id = Column(Integer, index=True)
    operator_id = Column(Integer)
    customer_id = Column(Integer)

    def __repr__(self):
        return f"<GeofencePolygon {self.geofence_polygon_id} fleet={self.fleet_id}>"


class Hub(MainBase):
    __tablename__ = "hubs"

    hub_id = Column(Integer, primary_key=True, autoincrement=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    rule = Column(String(32))                     # anywhere | hub
    bike_racks = Column(Integer)
    geofence_circle_id = Column(Integer)
    geofence_polygon_id = Column(Integer)
    fleet_id = Column(Integer, index=True)
    operator_id = Column(Integer)
    customer_id = Column(Integer)

    def __repr__(self):
        return f"<Hub {self.hub_id} fleet={self.fleet_id} rule={self.rule}>"
