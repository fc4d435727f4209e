"""
Videos: presigned upload, register, list own, read by id.
Reading applies visibility: public/unlisted for anyone, private for the owner only.
"""
import uuid
import logging
from datetime import datetime
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.auth import get_current_user_id, get_optional_user_id
from app.authorization import authorize_video_read
from app.config import get_settings
from app.database import get_db
from app.errors import InvalidRequest, NotFound, UpstreamUnavailable
from app.models.video import Video, Visibility
from app.schemas.video import (
    UploadUrlRequest,
    UploadUrlResponse,
    VideoCreate,
    VideoDetailResponse,
    VideoListResponse,
    VideoResponse,
)
from app.services.object_storage import R2Storage, get_object_storage, new_video_key, public_url

router = APIRouter(prefix="/videos", tags=["videos"])
logger = logging.getLogger(__name__)

VISIBILITY_VALUES = {v.value for v in Visibility}


@router.post("/upload-url", response_model=UploadUrlResponse)
def create_upload_url(
    body: UploadUrlRequest,
    _user_id: str = Depends(get_current_user_id),
    storage: R2Storage | None = Depends(get_object_storage),
):
    """Presigned PUT URL for the client to upload the file directly to R2."""
    if not body.file_name:
        raise InvalidRequest("file_name is required")
    if storage is None:
        raise UpstreamUnavailable(
            "R2 API credentials not configured. Set R2_ACCESS_KEY_ID and R2_SECRET_ACCESS_KEY for presigned upload URLs."
        )
    video_key = new_video_key(body.file_name)
    upload_url = storage.create_upload_url(video_key, body.content_type)
    return UploadUrlResponse(upload_url=upload_url, video_key=video_key)


@router.post("", response_model=VideoResponse, status_code=status.HTTP_201_CREATED)
def create_video(
    body: VideoCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    if not body.title or not body.video_key:
        raise InvalidRequest("title and video_key are required")
    visibility = body.visibility or Visibility.PRIVATE.value
    if visibility not in VISIBILITY_VALUES:
        raise InvalidRequest("visibility must be one of public, private, unlisted")

    video = Video(
        id=str(uuid.uuid4()),
        title=body.title,
        description=body.description,
        video_key=body.video_key,
        visibility=visibility,
        user_id=user_id,
        created_at=datetime.utcnow(),
    )
    db.add(video)
    db.commit()
    db.refresh(video)
    logger.info("Created video %s for user %s", video.id, user_id)
    return video


@router.get("", response_model=VideoListResponse)
def list_my_videos(
    visibility: str | None = None,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Caller's own videos, newest first. Optional ?visibility=public|private|unlisted."""
    q = db.query(Video).filter(Video.user_id == user_id)
    if visibility:
        q = q.filter(Video.visibility == visibility)
    videos = q.order_by(Video.created_at.desc()).all()
    return VideoListResponse(videos=[VideoResponse.model_validate(v) for v in videos])


@router.get("/{video_id}", response_model=VideoDetailResponse)
def get_video(
    video_id: str,
    user_id: str | None = Depends(get_optional_user_id),
    db: Session = Depends(get_db),
):
    video = db.query(Video).filter(Video.id == video_id).first()
    if not video:
        raise NotFound("Video not found")
    authorize_video_read(video, user_id)

    detail = VideoResponse.model_validate(video).model_dump()
    return VideoDetailResponse(**detail, playback_url=public_url(get_settings().r2_public_url, video.video_key))
