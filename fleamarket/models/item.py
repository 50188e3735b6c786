"""Item model."""

from sqlalchemy import BigInteger, Boolean, Column, ForeignKey, Integer, String, false
from sqlalchemy.orm import relationship

from fleamarket.database import Base
from fleamarket.models.mixins import TimestampMixin


class Item(Base, TimestampMixin):
    """A marketplace listing owned by one user."""

    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    price = Column(BigInteger, nullable=False)
    description = Column(String, nullable=False, default="", server_default="")
    sold_out = Column(Boolean, nullable=False, default=False, server_default=false())
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    owner = relationship("User", back_populates="items")
