# fleetseed/models/trip.py
"""
Trips. `steps` is a JSON array of [latitude, longitude, unix_seconds] waypoints.
The column caps the serialized path, so longer trips are never generated.
"""

from sqlalchemy import Column, Integer, BigInteger, String
from fleetseed.database import MainBase

STEPS_MAX_LENGTH = 10000


class Trip(MainBase):
    __tablename__ = "trips"

    trip_id = Column(Integer, primary_key=True, autoincrement=True)
    steps = Column(String(STEPS_MAX_LENGTH), nullable=False)
    start_address = Column(String(256))
    end_address = Column(String(256))
    parking_image = Column(String(512))
    user_id = Column(Integer, index=True)
    operator_id = Column(Integer)
    customer_id = Column(Integer)
    fleet_id = Column(Integer, index=True)
    lock_id = Column(Integer, index=True)
    bike_id = Column(Integer)
    date_created = Column(BigInteger)

    def __repr__(self):
        return f"<Trip {self.trip_id} lock={self.lock_id} user={self.user_id}>"
