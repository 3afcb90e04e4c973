# telegram_media/attributes.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

"""
Typed media file attributes and their binary codec.

Every attribute is written with an int32 discriminator under ``t`` followed by
the variant's own slots. Discriminators are persisted, so existing values must
never be reassigned; new variants get new numbers.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Union

from telegram_media import config
from telegram_media.coding import Decoder, Encoder, register_codec
from telegram_media.exceptions import (
    UnknownAttributeTypeError,
    UnknownPackReferenceError,
)
from telegram_media.image_representation import PixelDimensions

logger = logging.getLogger(__name__)


class AttributeType(IntEnum):
    FILE_NAME = 0
    STICKER = 1
    IMAGE_SIZE = 2
    ANIMATED = 3
    VIDEO = 4
    AUDIO = 5
    HAS_LINKED_STICKERS = 6


class PackReferenceKind(IntEnum):
    ID = 0
    NAME = 1


# ---------- sticker pack references ----------


@dataclass(frozen=True)
class StickerPackReferenceId:
    id: int
    access_hash: int


@dataclass(frozen=True)
class StickerPackReferenceName:
    name: str


StickerPackReference = Union[StickerPackReferenceId, StickerPackReferenceName]


def encode_pack_reference(reference: StickerPackReference, encoder: Encoder) -> None:
    if isinstance(reference, StickerPackReferenceId):
        encoder.write_int32("r", PackReferenceKind.ID)
        encoder.write_int64("i", reference.id)
        encoder.write_int64("h", reference.access_hash)
    else:
        encoder.write_int32("r", PackReferenceKind.NAME)
        encoder.write_string("n", reference.name)


def decode_pack_reference(decoder: Decoder) -> StickerPackReference:
    kind = decoder.read_int32("r")
    if kind == PackReferenceKind.ID:
        return StickerPackReferenceId(
            id=decoder.read_int64("i"), access_hash=decoder.read_int64("h")
        )
    if kind == PackReferenceKind.NAME:
        return StickerPackReferenceName(name=decoder.read_string("n"))
    if config.STRICT_PACK_REFERENCES:
        raise UnknownPackReferenceError(kind)
    logger.warning(
        "Unknown sticker pack reference kind %s; using an empty short name", kind
    )
    return StickerPackReferenceName(name="")


register_codec(
    "StickerPackReference",
    (StickerPackReferenceId, StickerPackReferenceName),
    encode_pack_reference,
    decode_pack_reference,
)


# ---------- attribute variants ----------


class VideoFlags(IntFlag):
    """Video options. Bits this model does not name are kept as-is."""

    INSTANT_ROUND_VIDEO = 1 << 0


@dataclass(frozen=True)
class FileName:
    file_name: str


@dataclass(frozen=True)
class Sticker:
    display_text: str
    pack_reference: StickerPackReference | None = None


@dataclass(frozen=True)
class ImageSize:
    dimensions: PixelDimensions


@dataclass(frozen=True)
class Animated:
    pass


@dataclass(frozen=True)
class Video:
    duration: int
    dimensions: PixelDimensions
    flags: VideoFlags = VideoFlags(0)


@dataclass(frozen=True)
class Audio:
    is_voice: bool
    duration: int
    title: str | None = None
    performer: str | None = None
    waveform: bytes | None = None  # always an owned copy, never a borrowed view


@dataclass(frozen=True)
class HasLinkedStickers:
    pass


ATTRIBUTE_TYPES = (
    FileName, Sticker, ImageSize, Animated, Video, Audio, HasLinkedStickers
)
Attribute = Union[
    FileName, Sticker, ImageSize, Animated, Video, Audio, HasLinkedStickers
]


# ---------- codec ----------


def _flags_to_int32(flags: int) -> int:
    value = int(flags) & 0xFFFFFFFF
    return value - (1 << 32) if value >= 1 << 31 else value


def encode_attribute(attribute: Attribute, encoder: Encoder) -> None:
    if isinstance(attribute, FileName):
        encoder.write_int32("t", AttributeType.FILE_NAME)
        encoder.write_string("fn", attribute.file_name)
    elif isinstance(attribute, Sticker):
        encoder.write_int32("t", AttributeType.STICKER)
        encoder.write_string("dt", attribute.display_text)
        if attribute.pack_reference is not None:
            encoder.write_object("pr", attribute.pack_reference)
        else:
            encoder.write_nil("pr")
    elif isinstance(attribute, ImageSize):
        encoder.write_int32("t", AttributeType.IMAGE_SIZE)
        encoder.write_int32("w", int(attribute.dimensions.width))
        encoder.write_int32("h", int(attribute.dimensions.height))
    elif isinstance(attribute, Animated):
        encoder.write_int32("t", AttributeType.ANIMATED)
    elif isinstance(attribute, Video):
        encoder.write_int32("t", AttributeType.VIDEO)
        encoder.write_int32("du", int(attribute.duration))
        encoder.write_int32("w", int(attribute.dimensions.width))
        encoder.write_int32("h", int(attribute.dimensions.height))
        encoder.write_int32("f", _flags_to_int32(attribute.flags))
    elif isinstance(attribute, Audio):
        encoder.write_int32("t", AttributeType.AUDIO)
        encoder.write_int32("iv", 1 if attribute.is_voice else 0)
        encoder.write_int32("du", int(attribute.duration))
        # optional audio slots are omitted, not nil-marked
        if attribute.title is not None:
            encoder.write_string("ti", attribute.title)
        if attribute.performer is not None:
            encoder.write_string("pe", attribute.performer)
        if attribute.waveform is not None:
            encoder.write_bytes("wf", attribute.waveform)
    elif isinstance(attribute, HasLinkedStickers):
        encoder.write_int32("t", AttributeType.HAS_LINKED_STICKERS)
    else:
        raise TypeError(f"Not a media file attribute: {attribute!r}")


def _decode_dimensions(decoder: Decoder) -> PixelDimensions:
    return PixelDimensions(decoder.read_int32("w"), decoder.read_int32("h"))


def _decode_audio(decoder: Decoder) -> Audio:
    waveform = decoder.read_bytes_no_copy("wf")
    return Audio(
        is_voice=decoder.read_int32("iv") != 0,
        duration=decoder.read_int32("du"),
        title=decoder.read_optional_string("ti"),
        performer=decoder.read_optional_string("pe"),
        waveform=bytes(waveform) if waveform is not None else None,
    )


_ATTRIBUTE_DECODERS = {
    AttributeType.FILE_NAME: lambda d: FileName(file_name=d.read_string("fn")),
    AttributeType.STICKER: lambda d: Sticker(
        display_text=d.read_string("dt"),
        pack_reference=d.read_optional_object(
            "pr", (StickerPackReferenceId, StickerPackReferenceName)
        ),
    ),
    AttributeType.IMAGE_SIZE: lambda d: ImageSize(dimensions=_decode_dimensions(d)),
    AttributeType.ANIMATED: lambda d: Animated(),
    AttributeType.VIDEO: lambda d: Video(
        duration=d.read_int32("du"),
        dimensions=_decode_dimensions(d),
        flags=VideoFlags(d.read_int32("f") & 0xFFFFFFFF),
    ),
    AttributeType.AUDIO: _decode_audio,
    AttributeType.HAS_LINKED_STICKERS: lambda d: HasLinkedStickers(),
}


def decode_attribute(decoder: Decoder) -> Attribute:
    """
    Decode one attribute. An unknown discriminator means the store was written
    by a newer or corrupt writer and raises UnknownAttributeTypeError.
    """
    discriminator = decoder.read_int32("t")
    decode = _ATTRIBUTE_DECODERS.get(discriminator)
    if decode is None:
        raise UnknownAttributeTypeError(discriminator)
    return decode(decoder)


register_codec(
    "TelegramMediaFileAttribute",
    ATTRIBUTE_TYPES,
    encode_attribute,
    decode_attribute,
)
