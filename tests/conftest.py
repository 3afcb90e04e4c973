# tests/conftest.py
#
# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.
#
import pytest

from telegram_media import config
from telegram_media.attributes import (
    Audio,
    FileName,
    ImageSize,
    Sticker,
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


@pytest.fixture(autouse=True)
def lenient_pack_references(monkeypatch):
    """Run every test with the default (non-strict) pack reference policy."""
    monkeypatch.setattr(config, "STRICT_PACK_REFERENCES", False)


@pytest.fixture
def cloud_resource():
    return CloudDocumentMediaResource(
        datacenter_id=2, file_id=5012345678901, access_hash=-77, size=48213
    )


@pytest.fixture
def preview():
    return TelegramMediaImageRepresentation(
        dimensions=PixelDimensions(90, 160),
        resource=CloudDocumentSizeMediaResource(
            datacenter_id=2, document_id=5012345678901, access_hash=-77, size_spec="m"
        ),
    )


@pytest.fixture
def media_file(cloud_resource, preview):
    return TelegramMediaFile(
        file_id=MediaId(Namespace.CLOUD_FILE, 5012345678901),
        resource=cloud_resource,
        preview_representations=[preview],
        mime_type="video/mp4",
        size=48213,
        attributes=[
            FileName("clip.mp4"),
            ImageSize(PixelDimensions(10, 20)),
            Video(5, PixelDimensions(30, 40), VideoFlags.INSTANT_ROUND_VIDEO),
            Sticker("👋", StickerPackReferenceName("HotCherry")),
            Audio(is_voice=False, duration=120, title="T", performer="P"),
        ],
    )
