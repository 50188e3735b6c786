"""User model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from fleamarket.database import Base
from fleamarket.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and listing ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    items = relationship("Item", back_populates="owner")
