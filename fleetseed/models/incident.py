# fleetseed/models/incident.py
"""
Theft and crash reports. Both are anchored at one waypoint of an existing trip
and carry tri-axis accelerometer averages / deviations.
"""

from sqlalchemy import Column, Integer, BigInteger, Float, Boolean
from fleetseed.database import MainBase


class Theft(MainBase):
    __tablename__ = "thefts"

    theft_id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(BigInteger)
    x_ave = Column(Float)
    y_ave = Column(Float)
    z_ave = Column(Float)
    x_dev = Column(Float)
    y_dev = Column(Float)
    z_dev = Column(Float)
    latitude = Column(Float)
    longitude = Column(Float)
    lock_id = Column(Integer, index=True)
    user_id = Column(Integer)
    trip_id = Column(Integer, index=True)
    confirmed = Column(Boolean, default=False)

    def __repr__(self):
        return f"<Theft {self.theft_id} trip={self.trip_id}>"


class Crash(MainBase):
    __tablename__ = "crashes"

    crash_id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(BigInteger)
    x_ave = Column(Float)
    y_ave = Column(Float)
    z_ave = Column(Float)
    x_dev = Column(Float)
    y_dev = Column(Float)
    z_dev = Column(Float)
    latitude = Column(Float)
    longitude = Column(Float)
    lock_id = Column(Integer, index=True)
    user_id = Column(Integer)
    trip_id = Column(Integer, index=True)
    message_sent = Column(Boolean, default=False)

    def __repr__(self):
        return f"<Crash {self.crash_id} trip={self.trip_id}>"
