# models/master_records.py

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB

from db.base import Base


class MasterRecord(Base):
    __tablename__ = "master_records"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)

    name = Column(String(255))
    email = Column(String(255))
    phone = Column(String(64))
    address = Column(Text)
    qualification = Column(String(255))
    experience = Column(Integer)                                # years
    skills = Column(Text)
    project_details = Column(Text)

    mapping_version = Column(Integer, nullable=False)
    unmapped_keys = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=list)
    submitted_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
