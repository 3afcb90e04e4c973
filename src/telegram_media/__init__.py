# telegram_media/__init__.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

"""
Telegram media file records: typed attributes, their binary codec and the
conversion from Telegram API documents.
"""

# Importing these modules registers every persisted type with the codec.
from telegram_media.attributes import (  # noqa: F401
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
    decode_attribute,
    encode_attribute,
)
from telegram_media.coding import (  # noqa: F401
    Decoder,
    Encoder,
    decode_root_object,
    encode_root_object,
)
from telegram_media.exceptions import (  # noqa: F401
    MediaDecodingError,
    MissingFieldError,
    UnexpectedObjectTypeError,
    UnknownAttributeTypeError,
    UnknownObjectTypeError,
    UnknownPackReferenceError,
)
from telegram_media.image_representation import (  # noqa: F401
    PixelDimensions,
    TelegramMediaImageRepresentation,
)
from telegram_media.media_file import TelegramMediaFile  # noqa: F401
from telegram_media.media_id import MediaId, Namespace  # noqa: F401
from telegram_media.resources import (  # noqa: F401
    CloudDocumentMediaResource,
    CloudDocumentSizeMediaResource,
    LocalFileMediaResource,
    TelegramMediaResource,
)
