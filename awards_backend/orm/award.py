"""
awards_backend/orm/award.py
Award categories
"""
from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship

from awards_backend.orm.base import BaseModel


class Award(BaseModel):
    """
    Award category.

    `category` is the sector string used for judge expertise matching,
    e.g. "Technology" or "Export & International Trade".
    """
    __tablename__ = "awards"

    award_name = Column(String(255), nullable=False)
    category = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    entries = relationship("Entry", back_populates="award")

    def __repr__(self) -> str:
        return f"<Award {self.id} {self.award_name}>"
