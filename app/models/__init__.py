from app.models.user import User
from app.models.video import Video, Visibility
from app.models.stream import Stream, StreamStatus

__all__ = ["User", "Video", "Visibility", "Stream", "StreamStatus"]
