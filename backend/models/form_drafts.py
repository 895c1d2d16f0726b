# models/form_drafts.py

from sqlalchemy import JSON, Column, DateTime, Integer, func
from sqlalchemy.dialects.postgresql import JSONB

from db.base import Base


class FormDraft(Base):
    __tablename__ = "form_drafts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    form_number = Column(Integer, nullable=True)               # wizard tab / step
    form_data = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
    saved_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
