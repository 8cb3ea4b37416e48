from .store import db, init_db
from .user import User
from .vehicle import Vehicle

__all__ = ["db", "init_db", "User", "Vehicle"]
