# fleetseed/models/customer.py
"""
Customer organisations (users database).
`region` names a parking anchor city and bounds every spatial sample for the customer.
"""

from sqlalchemy import Column, Integer, String
from fleetseed.database import UsersBase


class Customer(UsersBase):
    __tablename__ = "customers"

    customer_id = Column(Integer, primary_key=True, autoincrement=True)
    customer_name = Column(String(128), nullable=False)
    operator_id = Column(Integer, nullable=False, index=True)
    region = Column(String(64), nullable=False)
    contact_email = Column(String(256))

    def __repr__(self):
        return f"<Customer {self.customer_id} {self.customer_name} op={self.operator_id}>"
