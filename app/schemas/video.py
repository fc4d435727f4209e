from datetime import datetime
from pydantic import BaseModel


class UploadUrlRequest(BaseModel):
    file_name: str | None = None
    content_type: str | None = None


class UploadUrlResponse(BaseModel):
    upload_url: str
    video_key: str


class VideoCreate(BaseModel):
    """Body for registering an uploaded video. visibility defaults to private."""
    title: str | None = None
    description: str | None = None
    video_key: str | None = None
    visibility: str | None = None


class VideoResponse(BaseModel):
    id: str
    title: str
    description: str | None
    video_key: str
    visibility: str
    user_id: str
    thumbnail_url: str | None = None
    duration: int | None = None
    file_size: int | None = None
    created_at: datetime
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class VideoDetailResponse(VideoResponse):
    playback_url: str | None


class VideoListResponse(BaseModel):
    videos: list[VideoResponse]
