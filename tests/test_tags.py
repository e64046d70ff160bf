"""Tests for storage-network tag builders."""

import hashlib
from datetime import datetime, timezone

from momentvault.upload.tags import Tag, build_direct_tags, build_streaming_tags


def test_direct_tags_include_md5():
    """Direct uploads carry content type, filename and an advisory MD5."""
    data = b"encore"
    tags = build_direct_tags("song.mp3", "audio/mpeg", data)

    assert tags == [
        Tag("Content-Type", "audio/mpeg"),
        Tag("Filename", "song.mp3"),
        Tag("Original-MD5", hashlib.md5(data).hexdigest()),
    ]


def test_streaming_tags_include_size_and_timestamp():
    """Streaming uploads carry original size and an ISO-8601 timestamp."""
    uploaded_at = datetime(2024, 5, 1, 20, 30, tzinfo=timezone.utc)
    tags = build_streaming_tags("show.mkv", "video/x-matroska", 2048, uploaded_at)
    values = {tag.name: tag.value for tag in tags}

    assert values == {
        "Content-Type": "video/x-matroska",
        "Filename": "show.mkv",
        "Original-Size": "2048",
        "Upload-Timestamp": "2024-05-01T20:30:00+00:00",
    }


def test_streaming_timestamp_defaults_to_now():
    """Timestamp defaults to the current UTC time."""
    tags = build_streaming_tags("show.mkv", "video/x-matroska", 1)
    timestamp = datetime.fromisoformat(tags[-1].value)
    assert timestamp.tzinfo is not None


def test_tag_as_dict():
    """Tags serialize as name/value pairs."""
    assert Tag("Filename", "a.txt").as_dict() == {"name": "Filename", "value": "a.txt"}
