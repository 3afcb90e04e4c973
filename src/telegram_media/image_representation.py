# telegram_media/image_representation.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

from dataclasses import dataclass
from typing import NamedTuple

from telegram_media.coding import Decoder, Encoder, register_encodable
from telegram_media.resources import TelegramMediaResource


class PixelDimensions(NamedTuple):
    width: int
    height: int


@register_encodable("TelegramMediaImageRepresentation")
@dataclass(frozen=True, eq=False)
class TelegramMediaImageRepresentation:
    """A preview image of a given size, backed by its own resource."""

    dimensions: PixelDimensions
    resource: TelegramMediaResource

    def __eq__(self, other):
        if not isinstance(other, TelegramMediaImageRepresentation):
            return NotImplemented
        return self.dimensions == other.dimensions and self.resource.is_equal(
            other.resource
        )

    def __hash__(self):
        return hash((self.dimensions, self.resource.id))

    def encode(self, encoder: Encoder) -> None:
        encoder.write_int32("dx", int(self.dimensions.width))
        encoder.write_int32("dy", int(self.dimensions.height))
        encoder.write_object("r", self.resource)

    @classmethod
    def decode(cls, decoder: Decoder) -> "TelegramMediaImageRepresentation":
        return cls(
            dimensions=PixelDimensions(decoder.read_int32("dx"), decoder.read_int32("dy")),
            resource=decoder.read_object("r", TelegramMediaResource),
        )
