from datetime import datetime
from pydantic import BaseModel


class StreamCreate(BaseModel):
    title: str | None = None
    description: str | None = None


class StreamCreatedResponse(BaseModel):
    """Only response that carries stream_key."""
    id: str
    title: str
    description: str
    rtmp_url: str
    stream_key: str
    status: str
    created_at: datetime


class StreamResponse(BaseModel):
    id: str
    title: str
    description: str | None
    cf_stream_id: str
    rtmp_url: str
    status: str
    user_id: str
    viewer_count: int
    started_at: datetime | None
    ended_at: datetime | None
    created_at: datetime

    class Config:
        from_attributes = True


class StreamStartedResponse(BaseModel):
    id: str
    status: str
    started_at: datetime


class StreamEndedResponse(BaseModel):
    id: str
    status: str
    ended_at: datetime
    recording_url: str | None


class PlaybackResponse(BaseModel):
    hls_url: str | None
    dash_url: str | None
    embed_url: str
    message: str | None = None
