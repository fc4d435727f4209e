"""Uploaded video. Media lives in object storage under video_key; the row holds ownership and visibility."""
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey
from app.database import Base


class Visibility(str, enum.Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    UNLISTED = "unlisted"


class Video(Base):
    __tablename__ = "videos"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    video_key = Column(String(512), nullable=False)  # object key in the upload bucket
    visibility = Column(String(20), nullable=False, default=Visibility.PRIVATE.value)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    thumbnail_url = Column(String(1024), nullable=True)
    duration = Column(Integer, nullable=True)  # seconds
    file_size = Column(Integer, nullable=True)  # bytes
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True, onupdate=datetime.utcnow)
