# fleetseed/models/user.py
"""
Rider accounts (users database).
Locks with status "active" may be bound to a user; trips inherit that user.
"""

from sqlalchemy import Column, Integer, BigInteger, String
from fleetseed.database import UsersBase


class User(UsersBase):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(128), unique=True, nullable=False)
    email = Column(String(256))
    password = Column(String(256), nullable=False)       # argon2 hash
    first_name = Column(String(64))
    last_name = Column(String(64))
    phone_number = Column(String(32))
    user_type = Column(String(32), default="ellipse")
    verified = Column(Integer, default=1, nullable=False)
    max_locks = Column(Integer, nullable=False)
    date_created = Column(BigInteger)                    # unix seconds

    def __repr__(self):
        return f"<User {self.user_id} {self.username}>"
