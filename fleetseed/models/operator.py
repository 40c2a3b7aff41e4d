# fleetseed/models/operator.py
"""Operator accounts (users database). An operator owns customers and their fleets."""

from sqlalchemy import Column, Integer, String
from fleetseed.database import UsersBase


class Operator(UsersBase):
    __tablename__ = "operators"

    operator_id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(64))
    last_name = Column(String(64))
    email = Column(String(256), unique=True, nullable=False)
    password = Column(String(256), nullable=False)       # argon2 hash
    phone_number = Column(String(32))
    title = Column(String(64))

    def __repr__(self):
        return f"<Operator {self.operator_id} {self.email}>"
