"""
Ownership and visibility rules for videos and streams.
Ownership is always checked against the stored user_id of the resource.
"""
from app.errors import Forbidden, Unauthenticated
from app.models.video import Video, Visibility

ANONYMOUS_VISIBILITIES = {Visibility.PUBLIC.value, Visibility.UNLISTED.value}


def can_mutate(resource, caller_user_id: str | None) -> bool:
    """Owner only; there is no admin override."""
    if not caller_user_id:
        return False
    return resource.user_id == caller_user_id


def can_read_video(video: Video, caller_user_id: str | None) -> bool:
    if video.visibility in ANONYMOUS_VISIBILITIES:
        return True
    return can_mutate(video, caller_user_id)


def authorize_video_read(video: Video, caller_user_id: str | None) -> None:
    """Raise 401 for an anonymous caller, 403 for a non-owner on a private video."""
    if can_read_video(video, caller_user_id):
        return
    if not caller_user_id:
        raise Unauthenticated()
    raise Forbidden()


def can_read_stream(caller_user_id: str | None) -> bool:
    # Stream metadata is for signed-in users only; playback is not gated here.
    return bool(caller_user_id)
