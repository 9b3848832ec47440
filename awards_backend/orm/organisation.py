"""
awards_backend/orm/organisation.py
Organisations submitting award entries
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from awards_backend.orm.base import BaseModel


class Organisation(BaseModel):
    __tablename__ = "organisations"

    company_name = Column(String(255), nullable=False, index=True)
    website = Column(String(500), nullable=True)

    entries = relationship("Entry", back_populates="organisation")

    def __repr__(self) -> str:
        return f"<Organisation {self.company_name}>"
