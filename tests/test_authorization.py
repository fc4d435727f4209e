"""Tests for ownership and visibility rules."""
from types import SimpleNamespace

import pytest

from app.authorization import authorize_video_read, can_mutate, can_read_stream, can_read_video
from app.errors import Forbidden, Unauthenticated

OWNER = "owner-id"
OTHER = "other-id"


def video(visibility: str, owner: str = OWNER):
    return SimpleNamespace(visibility=visibility, user_id=owner)


class TestCanMutate:
    def test_owner_can_mutate(self):
        assert can_mutate(video("private"), OWNER) is True

    def test_non_owner_cannot_mutate(self):
        assert can_mutate(video("public"), OTHER) is False

    @pytest.mark.parametrize("caller", [None, ""])
    def test_anonymous_cannot_mutate(self, caller):
        assert can_mutate(video("public"), caller) is False


class TestVideoRead:
    @pytest.mark.parametrize("visibility", ["public", "unlisted"])
    @pytest.mark.parametrize("caller", [None, OTHER, OWNER])
    def test_public_and_unlisted_are_readable_by_anyone(self, visibility, caller):
        assert can_read_video(video(visibility), caller) is True
        authorize_video_read(video(visibility), caller)

    def test_private_readable_by_owner(self):
        assert can_read_video(video("private"), OWNER) is True
        authorize_video_read(video("private"), OWNER)

    def test_private_anonymous_is_unauthenticated(self):
        assert can_read_video(video("private"), None) is False
        with pytest.raises(Unauthenticated):
            authorize_video_read(video("private"), None)

    def test_private_non_owner_is_forbidden(self):
        assert can_read_video(video("private"), OTHER) is False
        with pytest.raises(Forbidden):
            authorize_video_read(video("private"), OTHER)


class TestStreamRead:
    def test_signed_in_caller_can_read(self):
        assert can_read_stream(OTHER) is True

    def test_anonymous_caller_cannot_read(self):
        assert can_read_stream(None) is False
