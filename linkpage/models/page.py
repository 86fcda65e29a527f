"""Page model"""

from sqlalchemy import Column, String, DateTime, JSON
from datetime import datetime, timezone
from linkpage.core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Page(Base):
    # un document par username, réécrit en entier à chaque sauvegarde
    __tablename__ = "pages"

    username = Column(String, primary_key=True, index=True)
    links = Column(JSON, default=list)  # [{id, platform, url, iconKey}]
    password = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
