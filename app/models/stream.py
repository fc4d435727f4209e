"""Live broadcast wrapping a provider live input. status only moves idle -> live -> ended."""
import uuid
import enum
from datetime import datetime
from sqlalchemy import CheckConstraint, Column, String, Text, Integer, DateTime, ForeignKey
from app.database import Base


class StreamStatus(str, enum.Enum):
    IDLE = "idle"
    LIVE = "live"
    ENDED = "ended"


class Stream(Base):
    __tablename__ = "streams"
    __table_args__ = (
        CheckConstraint("status IN ('idle', 'live', 'ended')", name="ck_streams_status"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    cf_stream_id = Column(String(64), nullable=False)  # provider live input uid
    rtmp_url = Column(String(1024), nullable=False)
    stream_key = Column(String(255), nullable=False)  # only returned by create
    status = Column(String(20), nullable=False, default=StreamStatus.IDLE.value, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    viewer_count = Column(Integer, nullable=False, default=0)
    started_at = Column(DateTime, nullable=True)
    ended_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
