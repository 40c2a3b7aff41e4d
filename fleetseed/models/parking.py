# fleetseed/models/parking.py
"""
Parking areas (circle | polygon | rectangle) and parking spots.
A spot's parking_area_id is null when the spot fell outside the sampled area.
"""

from sqlalchemy import Column, Integer, Float, String, Text
from fleetseed.database import MainBase


class ParkingArea(MainBase):
    __tablename__ = "parking_areas"

    parking_area_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(256))
    type = Column(String(32), nullable=False)
    geometry = Column(Text, nullable=False)       # JSON list of {latitude, longitude[, radius]}
    fleet_id = Column(Integer, index=True)
    operator_id = Column(Integer)
    customer_id = Column(Integer)

    def __repr__(self):
        return f"<ParkingArea {self.parking_area_id} {self.type} fleet={self.fleet_id}>"


class ParkingSpot(MainBase):
    __tablename__ = "parking_spots"

    parking_spot_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(256))
    description = Column(Text)
    pic = Column(String(512))
    type = Column(String(32))                     # parking_meter | bike_rack | sheffield_stand
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    capacity = Column(Integer)
    parking_area_id = Column(Integer)
    fleet_id = Column(Integer, index=True)
    operator_id = Column(Integer)
    customer_id = Column(Integer)

    def __repr__(self):
        return f"<ParkingSpot {self.parking_spot_id} area={self.parking_area_id}>"
