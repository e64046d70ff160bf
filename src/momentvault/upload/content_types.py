"""
Extension-based content type classifier.

Maps a filename's extension to the MIME type written into the
Content-Type tag of stored objects:
- video: mp4, mov, avi, webm, mkv, m4v
- image: jpg, jpeg, png, gif, webp, svg, heic
- audio: mp3, wav, flac, m4a, aac, ogg
- documents: txt, md, html, json, csv, pdf
Anything else falls back to application/octet-stream.
"""

from typing import Dict

DEFAULT_CONTENT_TYPE = "application/octet-stream"

EXTENSION_CONTENT_TYPES: Dict[str, str] = {
    # Video
    "mp4": "video/mp4",
    "mov": "video/quicktime",
    "avi": "video/x-msvideo",
    "webm": "video/webm",
    "mkv": "video/x-matroska",
    "m4v": "video/x-m4v",
    # Images
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
    "heic": "image/heic",
    # Audio
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "flac": "audio/flac",
    "m4a": "audio/mp4",
    "aac": "audio/aac",
    "ogg": "audio/ogg",
    # Documents
    "txt": "text/plain",
    "md": "text/markdown",
    "html": "text/html",
    "json": "application/json",
    "csv": "text/csv",
    "pdf": "application/pdf",
}


def classify(filename: str) -> str:
    """
    Classify a filename into a MIME content type by its extension.

    Args:
        filename: Original file name (only the extension is inspected)

    Returns:
        MIME type string, never empty

    Examples:
        >>> classify("video.MOV")
        'video/quicktime'
        >>> classify("notes.txt")
        'text/plain'
        >>> classify("README")
        'application/octet-stream'
    """
    if "." not in filename:
        return DEFAULT_CONTENT_TYPE

    extension = filename.rsplit(".", 1)[-1].lower()
    return EXTENSION_CONTENT_TYPES.get(extension, DEFAULT_CONTENT_TYPE)
