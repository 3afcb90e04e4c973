# telegram_media/media_file.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass

from telegram_media.attributes import (
    ATTRIBUTE_TYPES,
    Animated,
    Attribute,
    Audio,
    FileName,
    ImageSize,
    Sticker,
    Video,
)
from telegram_media.coding import Decoder, Encoder, register_encodable
from telegram_media.exceptions import MissingFieldError
from telegram_media.image_representation import (
    PixelDimensions,
    TelegramMediaImageRepresentation,
)
from telegram_media.media_id import MediaId
from telegram_media.resources import TelegramMediaResource


@register_encodable("TelegramMediaFile")
@dataclass(frozen=True, eq=False)
class TelegramMediaFile:
    """
    A document, sticker, video, voice note, song or animation.

    Equality covers the id, resource, previews, size and MIME type. Attributes
    are metadata and deliberately do not take part in equality or hashing.
    """

    file_id: MediaId
    resource: TelegramMediaResource
    preview_representations: tuple[TelegramMediaImageRepresentation, ...]
    mime_type: str
    size: int | None
    attributes: tuple[Attribute, ...]

    def __post_init__(self):
        # accept any iterable but store tuples so the record stays immutable
        object.__setattr__(
            self, "preview_representations", tuple(self.preview_representations)
        )
        object.__setattr__(self, "attributes", tuple(self.attributes))

    @property
    def id(self) -> MediaId:
        return self.file_id

    @property
    def peer_ids(self) -> tuple:
        return ()

    # ---------- persistence ----------

    def encode(self, encoder: Encoder) -> None:
        encoder.write_bytes("i", self.file_id.to_bytes())
        encoder.write_object("r", self.resource)
        encoder.write_object_array("pr", self.preview_representations)
        encoder.write_string("mt", self.mime_type)
        if self.size is None:
            encoder.write_nil("s")
        elif -(1 << 31) <= self.size < 1 << 31:
            encoder.write_int32("s", self.size)
        else:
            encoder.write_int64("s", self.size)
        encoder.write_object_array("at", self.attributes)

    @classmethod
    def decode(cls, decoder: Decoder) -> "TelegramMediaFile":
        file_id = decoder.read_bytes_no_copy("i")
        if file_id is None:
            raise MissingFieldError("i")
        return cls(
            file_id=MediaId.from_bytes(file_id),
            resource=decoder.read_object("r", TelegramMediaResource),
            preview_representations=decoder.read_object_array(
                "pr", TelegramMediaImageRepresentation
            ),
            mime_type=decoder.read_string("mt"),
            size=decoder.read_optional_int("s"),
            attributes=decoder.read_object_array("at", ATTRIBUTE_TYPES),
        )

    # ---------- derived queries ----------

    @property
    def file_name(self) -> str | None:
        for attribute in self.attributes:
            if isinstance(attribute, FileName):
                return attribute.file_name
        return None

    @property
    def is_sticker(self) -> bool:
        return any(isinstance(a, Sticker) for a in self.attributes)

    @property
    def is_video(self) -> bool:
        return any(isinstance(a, Video) for a in self.attributes)

    @property
    def is_animated(self) -> bool:
        return any(isinstance(a, Animated) for a in self.attributes)

    @property
    def is_music(self) -> bool:
        return any(isinstance(a, Audio) and not a.is_voice for a in self.attributes)

    @property
    def is_voice(self) -> bool:
        return any(isinstance(a, Audio) and a.is_voice for a in self.attributes)

    @property
    def dimensions(self) -> PixelDimensions | None:
        """Size of the first Video attribute, else of the first ImageSize."""
        for attribute in self.attributes:
            if isinstance(attribute, Video):
                return attribute.dimensions
        for attribute in self.attributes:
            if isinstance(attribute, ImageSize):
                return attribute.dimensions
        return None

    # ---------- equality & updates ----------

    def is_equal(self, other: object) -> bool:
        if not isinstance(other, TelegramMediaFile):
            return False
        return (
            self.file_id == other.file_id
            and self.resource.is_equal(other.resource)
            and self.preview_representations == other.preview_representations
            and self.size == other.size
            and self.mime_type == other.mime_type
        )

    def __eq__(self, other):
        if not isinstance(other, TelegramMediaFile):
            return NotImplemented
        return self.is_equal(other)

    def __hash__(self):
        return hash((self.file_id, self.mime_type, self.size))

    def with_updated_size(self, size: int | None) -> "TelegramMediaFile":
        return dataclasses.replace(self, size=size)

    def with_updated_preview_representations(
        self, preview_representations: Iterable[TelegramMediaImageRepresentation]
    ) -> "TelegramMediaFile":
        return dataclasses.replace(
            self, preview_representations=tuple(preview_representations)
        )
