"""Storage-network tag builders, one per upload path."""

import hashlib
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional


@dataclass(frozen=True)
class Tag:
    """Name/value metadata pair attached to a stored object."""

    name: str
    value: str

    def as_dict(self) -> dict:
        return {"name": self.name, "value": self.value}


def build_direct_tags(filename: str, content_type: str, data: bytes) -> List[Tag]:
    """Tags for an in-memory upload, including an advisory MD5 of the payload."""
    return [
        Tag("Content-Type", content_type),
        Tag("Filename", filename),
        Tag("Original-MD5", hashlib.md5(data).hexdigest()),
    ]


def build_streaming_tags(
    filename: str,
    content_type: str,
    size_bytes: int,
    uploaded_at: Optional[datetime] = None,
) -> List[Tag]:
    """Tags for a staged streaming upload."""
    uploaded_at = uploaded_at or datetime.now(timezone.utc)
    return [
        Tag("Content-Type", content_type),
        Tag("Filename", filename),
        Tag("Original-Size", str(size_bytes)),
        Tag("Upload-Timestamp", uploaded_at.isoformat()),
    ]
