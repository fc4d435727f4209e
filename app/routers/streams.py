"""
Live streams. Create/start/end are owner operations; a stream the caller does not
own answers 404 like a missing one. Metadata needs a signed-in user; playback
is anonymous so spectators need no account.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.auth import get_current_user_id, get_optional_user_id
from app.authorization import can_read_stream
from app.config import get_settings
from app.database import get_db
from app.errors import Unauthenticated
from app.schemas.stream import (
    PlaybackResponse,
    StreamCreate,
    StreamCreatedResponse,
    StreamEndedResponse,
    StreamResponse,
    StreamStartedResponse,
)
from app.services.stream_lifecycle import create_stream, end_stream, get_playback, get_stream, start_stream
from app.services.stream_provider import CloudflareStreamClient, get_stream_provider

router = APIRouter(prefix="/streams", tags=["streams"])


@router.post("", response_model=StreamCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create(
    body: StreamCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    provider: CloudflareStreamClient | None = Depends(get_stream_provider),
):
    """Create a live input; the response is the only place stream_key is returned."""
    stream = await create_stream(db, provider, user_id, body.title, body.description)
    return StreamCreatedResponse(
        id=stream.id,
        title=stream.title,
        description=stream.description or "",
        rtmp_url=stream.rtmp_url,
        stream_key=stream.stream_key,
        status=stream.status,
        created_at=stream.created_at,
    )


@router.post("/{stream_id}/start", response_model=StreamStartedResponse)
def start(
    stream_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    stream, started_at = start_stream(db, stream_id, user_id)
    return StreamStartedResponse(id=stream.id, status="live", started_at=started_at)


@router.post("/{stream_id}/end", response_model=StreamEndedResponse)
async def end(
    stream_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    provider: CloudflareStreamClient | None = Depends(get_stream_provider),
):
    stream, ended_at, recording_url = await end_stream(db, provider, stream_id, user_id)
    return StreamEndedResponse(id=stream.id, status="ended", ended_at=ended_at, recording_url=recording_url)


@router.get("/{stream_id}", response_model=StreamResponse)
def get_one(
    stream_id: str,
    user_id: str | None = Depends(get_optional_user_id),
    db: Session = Depends(get_db),
):
    if not can_read_stream(user_id):
        raise Unauthenticated()
    return get_stream(db, stream_id)


@router.get("/{stream_id}/playback", response_model=PlaybackResponse)
async def playback(
    stream_id: str,
    db: Session = Depends(get_db),
    provider: CloudflareStreamClient | None = Depends(get_stream_provider),
):
    return await get_playback(db, provider, get_settings().cloudflare_account_id, stream_id)
