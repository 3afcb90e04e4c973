# telegram_media/exceptions.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

"""
Exception types raised while decoding persisted media records.
"""


class MediaDecodingError(Exception):
    """
    Raised when a persisted payload cannot be interpreted.

    Decode errors are never recovered from inside the codec: the record being
    decoded is lost and the caller decides what to do with the stored entry.
    """


class MissingFieldError(MediaDecodingError):
    """A required slot is absent from the payload or holds the wrong value type."""

    def __init__(self, key: str, message: str | None = None):
        super().__init__(message or f"Missing required field {key!r}")
        self.key = key


class UnknownAttributeTypeError(MediaDecodingError):
    """The attribute discriminator is not one this model knows about."""

    def __init__(self, discriminator: int):
        super().__init__(f"Unknown media file attribute type {discriminator}")
        self.discriminator = discriminator


class UnknownObjectTypeError(MediaDecodingError):
    """An embedded object carries a type id with no registered decoder."""

    def __init__(self, type_id: int):
        super().__init__(f"No decoder registered for object type id {type_id}")
        self.type_id = type_id


class UnknownPackReferenceError(MediaDecodingError):
    """Unknown sticker pack reference kind, raised only in strict mode."""

    def __init__(self, kind: int):
        super().__init__(f"Unknown sticker pack reference kind {kind}")
        self.kind = kind


class UnexpectedObjectTypeError(MediaDecodingError):
    """An object slot holds a registered type that does not belong there."""

    def __init__(self, key: str, found: str):
        super().__init__(f"Field {key!r} holds an unexpected {found}")
        self.key = key
        self.found = found
