from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from sqlalchemy.sql import func
from readnlearn.core.db import Base


class SavedPhrase(Base):
    __tablename__ = "phrases"
    id = Column(String(64), primary_key=True)
    lang = Column(String(16), nullable=False, default="")
    text = Column(Text, nullable=False)
    translation = Column(Text, nullable=True)
    context = Column(Text, nullable=True)
    tags = Column(JSON, nullable=False, default=list)  # ["verbs", "travel"]
    added_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    source_file = Column(Text, nullable=True, index=True)
    content_hash = Column(String(32), nullable=True, index=True)
    # Saved position: 1-based line, 0-based column in the document as it was then
    line_no = Column(Integer, nullable=True)
    col_offset = Column(Integer, nullable=True)
