"""
Live stream lifecycle: idle -> live -> ended, owner only.

Transitions are compare-and-swap UPDATEs conditioned on the current status, so
racing start/end calls cannot move a stream backwards. On mutation paths a
stream the caller does not own is reported exactly like a missing one (404).
The recording lookup after end runs once the transition is committed and can
only degrade recording_url to None.
"""
import uuid
import logging
from datetime import datetime
from sqlalchemy.orm import Session
from app.authorization import can_mutate
from app.errors import Conflict, InternalFailure, InvalidRequest, NotFound, UpstreamUnavailable
from app.models.stream import Stream, StreamStatus
from app.services.stream_provider import CloudflareStreamClient, StreamProviderError, embed_url

logger = logging.getLogger(__name__)

STREAM_NOT_FOUND = "Stream not found"

# Allowed source states per target state
_TRANSITIONS = {
    StreamStatus.LIVE: (StreamStatus.IDLE,),
    StreamStatus.ENDED: (StreamStatus.IDLE, StreamStatus.LIVE),
}


def get_stream(db: Session, stream_id: str) -> Stream:
    stream = db.query(Stream).filter(Stream.id == stream_id).first()
    if not stream:
        raise NotFound(STREAM_NOT_FOUND)
    return stream


def _get_owned_stream(db: Session, stream_id: str, user_id: str) -> Stream:
    stream = db.query(Stream).filter(Stream.id == stream_id).first()
    if not stream or not can_mutate(stream, user_id):
        raise NotFound(STREAM_NOT_FOUND)
    return stream


def _transition(db: Session, stream: Stream, user_id: str, target: StreamStatus, timestamp_field: str) -> datetime:
    now = datetime.utcnow()
    sources = [s.value for s in _TRANSITIONS[target]]
    updated = (
        db.query(Stream)
        .filter(Stream.id == stream.id, Stream.user_id == user_id, Stream.status.in_(sources))
        .update({Stream.status: target.value, getattr(Stream, timestamp_field): now}, synchronize_session=False)
    )
    db.commit()
    if updated == 0:
        db.refresh(stream)
        raise Conflict(f"Cannot move stream from {stream.status} to {target.value}")
    logger.info("Stream %s -> %s", stream.id, target.value)
    return now


async def create_stream(
    db: Session,
    provider: CloudflareStreamClient | None,
    user_id: str,
    title: str | None,
    description: str | None = None,
) -> Stream:
    """Create the provider live input and an idle Stream row owned by user_id."""
    if not title:
        raise InvalidRequest("title is required")
    if provider is None:
        raise UpstreamUnavailable("Stream API not configured")

    try:
        result = await provider.create_live_input(title, recording_mode="automatic")
    except StreamProviderError as e:
        logger.warning("Create live input failed: %s", e)
        raise UpstreamUnavailable("Stream provider unavailable")

    rtmps = result.get("rtmps") or {}
    uid = result.get("uid")
    if not uid or not rtmps.get("url") or not rtmps.get("streamKey"):
        logger.error("Live input response missing uid/rtmps for user %s", user_id)
        raise InternalFailure("Failed to create stream")

    stream = Stream(
        id=str(uuid.uuid4()),
        title=title,
        description=description or "",
        cf_stream_id=uid,
        rtmp_url=rtmps["url"],
        stream_key=rtmps["streamKey"],
        status=StreamStatus.IDLE.value,
        user_id=user_id,
        created_at=datetime.utcnow(),
    )
    db.add(stream)
    db.commit()
    db.refresh(stream)
    logger.info("Created stream %s for user %s", stream.id, user_id)
    return stream


def start_stream(db: Session, stream_id: str, user_id: str) -> tuple[Stream, datetime]:
    stream = _get_owned_stream(db, stream_id, user_id)
    started_at = _transition(db, stream, user_id, StreamStatus.LIVE, "started_at")
    return stream, started_at


async def end_stream(
    db: Session,
    provider: CloudflareStreamClient | None,
    stream_id: str,
    user_id: str,
) -> tuple[Stream, datetime, str | None]:
    """End the stream, then try to find the recording. Returns (stream, ended_at, recording_url)."""
    stream = _get_owned_stream(db, stream_id, user_id)
    ended_at = _transition(db, stream, user_id, StreamStatus.ENDED, "ended_at")
    recording_url = await find_recording_url(provider, stream.cf_stream_id)
    return stream, ended_at, recording_url


async def find_recording_url(provider: CloudflareStreamClient | None, live_input_id: str) -> str | None:
    """Best effort: HLS URL of the first recording, None if unavailable for any reason."""
    if provider is None:
        return None
    try:
        recordings = await provider.list_recordings(live_input_id)
    except StreamProviderError as e:
        logger.warning("Recording lookup failed for live input %s: %s", live_input_id, e)
        return None
    if not recordings or not isinstance(recordings[0], dict):
        return None
    return _url_field(recordings[0].get("playback"), "hls")


def _url_field(playback, name: str) -> str | None:
    """playback[name] when it is a non-empty string, else None."""
    if not isinstance(playback, dict):
        return None
    value = playback.get(name)
    return value if isinstance(value, str) and value else None


async def get_playback(
    db: Session,
    provider: CloudflareStreamClient | None,
    account_id: str,
    stream_id: str,
) -> dict:
    """Anonymous: spectators only need the stream to exist."""
    stream = get_stream(db, stream_id)
    embed = embed_url(account_id, stream.cf_stream_id)
    if provider is None:
        return {
            "hls_url": None,
            "dash_url": None,
            "embed_url": embed,
            "message": "Playback URLs require CLOUDFLARE_STREAM_API_TOKEN",
        }
    try:
        result = await provider.get_live_input(stream.cf_stream_id)
    except StreamProviderError as e:
        logger.warning("Playback lookup failed for stream %s: %s", stream.id, e)
        raise UpstreamUnavailable("Stream provider unavailable")
    playback = result.get("playback")
    return {
        "hls_url": _url_field(playback, "hls"),
        "dash_url": _url_field(playback, "dash"),
        "embed_url": embed,
    }
