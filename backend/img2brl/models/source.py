"""Image sources: what the request asked for, and what was actually fetched.

A request names at most one source. ``Upload`` carries bytes that arrived with
the request, ``Remote`` a URL that still has to be fetched. Both are frozen and
consumed exactly once by the acquirer.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union


class Origin(str, enum.Enum):
    UPLOAD = "upload"
    REMOTE = "remote"


@dataclass(frozen=True)
class Upload:
    filename: str
    content_type: str
    data: bytes


@dataclass(frozen=True)
class Remote:
    url: str


SourceDescriptor = Union[Upload, Remote]


@dataclass(frozen=True)
class AcquiredImage:
    """Raw image bytes plus where they came from.

    ``data`` is never empty: an empty upload or body means no image was
    acquired at all, and no ``AcquiredImage`` is built.
    """

    origin: Origin
    identifier: str
    content_type: str
    data: bytes

    def __post_init__(self) -> None:
        if not self.data:
            raise ValueError("AcquiredImage requires non-empty data")

    @property
    def identifier_label(self) -> str:
        return "Filename" if self.origin is Origin.UPLOAD else "Url"

    @property
    def identifier_key(self) -> str:
        return "filename" if self.origin is Origin.UPLOAD else "url"


def select_source(
    upload: Upload | None = None,
    url: str | None = None,
) -> SourceDescriptor | None:
    """Pick the request's image source: a non-empty upload wins over a URL."""
    if upload is not None and upload.data:
        return upload
    if url and url.strip():
        return Remote(url=url.strip())
    return None
