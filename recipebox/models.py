from sqlalchemy import Column, String, Text

from .db import Base


class Slot(Base):
    """One named value in the local key-value store."""

    __tablename__ = "slots"
    key = Column(String(200), primary_key=True, index=True)
    value = Column(Text, nullable=False)  # JSON document
