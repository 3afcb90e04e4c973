# telegram_media/api.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

"""
Conversion of Telegram API (Telethon TL) document objects into the media model.

Objects are duck-typed and dispatched on their class name, so lightweight fakes
and real ``telethon.tl.types`` instances are both accepted. Conversion never raises for
protocol input: attribute kinds this model does not know are skipped.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from telegram_media.attributes import (
    Animated,
    Attribute,
    Audio,
    FileName,
    HasLinkedStickers,
    ImageSize,
    Sticker,
    StickerPackReference,
    StickerPackReferenceId,
    StickerPackReferenceName,
    Video,
    VideoFlags,
)
from telegram_media.image_representation import (
    PixelDimensions,
    TelegramMediaImageRepresentation,
)
from telegram_media.media_file import TelegramMediaFile
from telegram_media.media_id import MediaId, Namespace
from telegram_media.resources import (
    CloudDocumentMediaResource,
    CloudDocumentSizeMediaResource,
)

logger = logging.getLogger(__name__)

# Bit positions in the MTProto ``flags`` word of documentAttributeVideo
VIDEO_FLAG_ROUND_MESSAGE_BIT = 0
VIDEO_FLAG_SUPPORTS_STREAMING_BIT = 1

# Bit positions in the MTProto ``flags`` word of documentAttributeAudio
AUDIO_FLAG_VOICE_BIT = 10

# Telethon splits the flags word into booleans; these map them back.
_VIDEO_FLAG_FIELDS = {
    "round_message": VIDEO_FLAG_ROUND_MESSAGE_BIT,
    "supports_streaming": VIDEO_FLAG_SUPPORTS_STREAMING_BIT,
}
_AUDIO_FLAG_FIELDS = {
    "voice": AUDIO_FLAG_VOICE_BIT,
}


def _protocol_flags(attr: Any, fields: dict[str, int]) -> int:
    """
    Return the raw flags word of a TL object.

    Uses an integer ``flags`` field when the object has one, otherwise rebuilds
    the word from the boolean fields Telethon exposes.
    """
    flags = getattr(attr, "flags", None)
    if isinstance(flags, int) and not isinstance(flags, bool):
        return flags
    word = 0
    for name, bit in fields.items():
        if getattr(attr, name, None):
            word |= 1 << bit
    return word


def _has_bit(flags: int, bit: int) -> bool:
    return (flags & (1 << bit)) != 0


def _copy_buffer(data: Any) -> bytes | None:
    if data is None:
        return None
    # bytes(memoryview(...)) always allocates, so mutable sources are not aliased
    return bytes(memoryview(data))


def _sticker_pack_reference(stickerset: Any) -> StickerPackReference | None:
    kind = stickerset.__class__.__name__ if stickerset is not None else None
    if kind == "InputStickerSetID":
        return StickerPackReferenceId(
            id=stickerset.id, access_hash=stickerset.access_hash
        )
    if kind == "InputStickerSetShortName":
        return StickerPackReferenceName(name=stickerset.short_name)
    if kind not in (None, "InputStickerSetEmpty"):
        # dice, animated emoji and other system sets have no stable reference
        logger.debug("Sticker set %s has no pack reference", kind)
    return None


# ---------- attribute converters ----------


def _from_filename(attr: Any) -> Attribute:
    return FileName(file_name=attr.file_name)


def _from_sticker(attr: Any) -> Attribute:
    return Sticker(
        display_text=attr.alt,
        pack_reference=_sticker_pack_reference(getattr(attr, "stickerset", None)),
    )


def _from_image_size(attr: Any) -> Attribute:
    return ImageSize(dimensions=PixelDimensions(int(attr.w), int(attr.h)))


def _from_animated(attr: Any) -> Attribute:
    return Animated()


def _from_has_stickers(attr: Any) -> Attribute:
    return HasLinkedStickers()


def _from_video(attr: Any) -> Attribute:
    flags = _protocol_flags(attr, _VIDEO_FLAG_FIELDS)
    video_flags = VideoFlags(0)
    if _has_bit(flags, VIDEO_FLAG_ROUND_MESSAGE_BIT):
        video_flags |= VideoFlags.INSTANT_ROUND_VIDEO
    return Video(
        duration=int(attr.duration),
        dimensions=PixelDimensions(int(attr.w), int(attr.h)),
        flags=video_flags,
    )


def _from_audio(attr: Any) -> Attribute:
    flags = _protocol_flags(attr, _AUDIO_FLAG_FIELDS)
    return Audio(
        is_voice=_has_bit(flags, AUDIO_FLAG_VOICE_BIT),
        duration=int(attr.duration),
        title=getattr(attr, "title", None),
        performer=getattr(attr, "performer", None),
        waveform=_copy_buffer(getattr(attr, "waveform", None)),
    )


_ATTRIBUTE_CONVERTERS: dict[str, Callable[[Any], Attribute]] = {
    "DocumentAttributeFilename": _from_filename,
    "DocumentAttributeSticker": _from_sticker,
    "DocumentAttributeImageSize": _from_image_size,
    "DocumentAttributeAnimated": _from_animated,
    "DocumentAttributeHasStickers": _from_has_stickers,
    "DocumentAttributeVideo": _from_video,
    "DocumentAttributeAudio": _from_audio,
}


def media_file_attributes_from_api_attributes(
    attributes: Iterable[Any] | None,
) -> list[Attribute]:
    """Map Telegram document attributes 1:1 onto media file attributes, in order."""
    result: list[Attribute] = []
    for attr in attributes or ():
        name = attr.__class__.__name__
        convert = _ATTRIBUTE_CONVERTERS.get(name)
        if convert is None:
            logger.debug("Skipping unsupported document attribute %s", name)
            continue
        result.append(convert(attr))
    return result


# ---------- thumbnails & documents ----------


def image_representations_from_api_sizes(
    sizes: Iterable[Any] | None, document: Any
) -> list[TelegramMediaImageRepresentation]:
    """
    Build preview representations for a document's thumbnails.

    Only sizes with real pixel dimensions are kept; stripped and vector
    previews are inlined blobs, not downloadable thumbnails.
    """
    result: list[TelegramMediaImageRepresentation] = []
    for size in sizes or ():
        kind = size.__class__.__name__
        if kind not in ("PhotoSize", "PhotoCachedSize", "PhotoSizeProgressive"):
            logger.debug("Skipping thumbnail of kind %s", kind)
            continue
        result.append(
            TelegramMediaImageRepresentation(
                dimensions=PixelDimensions(int(size.w), int(size.h)),
                resource=CloudDocumentSizeMediaResource(
                    datacenter_id=int(document.dc_id),
                    document_id=document.id,
                    access_hash=document.access_hash,
                    size_spec=size.type,
                ),
            )
        )
    return result


def media_file_from_api_document(document: Any) -> TelegramMediaFile | None:
    """
    Build a TelegramMediaFile from a Telegram document.

    Returns None for ``DocumentEmpty`` and anything else that is not a
    concrete document.
    """
    if document is None or document.__class__.__name__ != "Document":
        return None

    thumbs = getattr(document, "thumbs", None)
    if thumbs is None:
        # older layers carried a single thumbnail
        thumb = getattr(document, "thumb", None)
        thumbs = [thumb] if thumb is not None else []

    size = getattr(document, "size", None)
    return TelegramMediaFile(
        file_id=MediaId(Namespace.CLOUD_FILE, document.id),
        resource=CloudDocumentMediaResource(
            datacenter_id=int(document.dc_id),
            file_id=document.id,
            access_hash=document.access_hash,
            size=size,
        ),
        preview_representations=image_representations_from_api_sizes(thumbs, document),
        mime_type=document.mime_type or "",
        size=size,
        attributes=media_file_attributes_from_api_attributes(document.attributes),
    )
