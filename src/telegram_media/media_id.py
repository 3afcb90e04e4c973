# telegram_media/media_id.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

import struct
from enum import IntEnum
from typing import NamedTuple

from telegram_media.exceptions import MediaDecodingError

_MEDIA_ID = struct.Struct("<iq")


class Namespace(IntEnum):
    """Media id namespaces; a MediaId is only unique within its namespace."""

    CLOUD_IMAGE = 0
    CLOUD_FILE = 5
    LOCAL_IMAGE = 7
    LOCAL_FILE = 8


class MediaId(NamedTuple):
    namespace: int
    id: int

    def to_bytes(self) -> bytes:
        """Fixed-width form: int32 namespace followed by int64 id."""
        return _MEDIA_ID.pack(self.namespace, self.id)

    @classmethod
    def from_bytes(cls, data: bytes | memoryview) -> "MediaId":
        if len(data) != _MEDIA_ID.size:
            raise MediaDecodingError(
                f"MediaId needs {_MEDIA_ID.size} bytes, got {len(data)}"
            )
        namespace, media_id = _MEDIA_ID.unpack(data)
        return cls(namespace, media_id)
