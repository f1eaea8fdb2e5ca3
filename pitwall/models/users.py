from sqlalchemy import Column, Integer, String, Enum
from pitwall.core.enums import UserRole
from pitwall.db.base import Base


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, nullable=False, unique=True)
    avatar = Column(String, nullable=False, default="")
    role = Column(Enum(UserRole, native_enum=False, length=20), nullable=False, default=UserRole.user)
