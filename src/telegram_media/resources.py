# telegram_media/resources.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

"""
Resource references: where the bytes of a file or thumbnail live.

Resources are compared through ``is_equal`` rather than identity. Each concrete
type registers itself with the binary codec so records can embed any of them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from telegram_media.coding import Decoder, Encoder, register_encodable


class TelegramMediaResource(ABC):
    @property
    @abstractmethod
    def id(self) -> str:
        """Stable key identifying the bytes this resource points at."""

    @abstractmethod
    def is_equal(self, other: "TelegramMediaResource") -> bool: ...

    @abstractmethod
    def encode(self, encoder: Encoder) -> None: ...


@register_encodable("CloudDocumentMediaResource")
@dataclass(frozen=True)
class CloudDocumentMediaResource(TelegramMediaResource):
    datacenter_id: int
    file_id: int
    access_hash: int
    size: int | None = None

    @property
    def id(self) -> str:
        return f"telegram-cloud-document-{self.datacenter_id}-{self.file_id}"

    def is_equal(self, other: TelegramMediaResource) -> bool:
        # access hash and size do not change which bytes are addressed
        return (
            isinstance(other, CloudDocumentMediaResource)
            and self.datacenter_id == other.datacenter_id
            and self.file_id == other.file_id
        )

    def encode(self, encoder: Encoder) -> None:
        encoder.write_int32("d", self.datacenter_id)
        encoder.write_int64("f", self.file_id)
        encoder.write_int64("a", self.access_hash)
        if self.size is not None:
            encoder.write_int64("n", self.size)
        else:
            encoder.write_nil("n")

    @classmethod
    def decode(cls, decoder: Decoder) -> "CloudDocumentMediaResource":
        return cls(
            datacenter_id=decoder.read_int32("d"),
            file_id=decoder.read_int64("f"),
            access_hash=decoder.read_int64("a"),
            size=decoder.read_optional_int("n"),
        )


@register_encodable("CloudDocumentSizeMediaResource")
@dataclass(frozen=True)
class CloudDocumentSizeMediaResource(TelegramMediaResource):
    """A thumbnail of a cloud document, addressed by its photo size type."""

    datacenter_id: int
    document_id: int
    access_hash: int
    size_spec: str

    @property
    def id(self) -> str:
        return (
            f"telegram-cloud-document-size-{self.datacenter_id}-"
            f"{self.document_id}-{self.size_spec}"
        )

    def is_equal(self, other: TelegramMediaResource) -> bool:
        return (
            isinstance(other, CloudDocumentSizeMediaResource)
            and self.datacenter_id == other.datacenter_id
            and self.document_id == other.document_id
            and self.size_spec == other.size_spec
        )

    def encode(self, encoder: Encoder) -> None:
        encoder.write_int32("d", self.datacenter_id)
        encoder.write_int64("i", self.document_id)
        encoder.write_int64("h", self.access_hash)
        encoder.write_string("s", self.size_spec)

    @classmethod
    def decode(cls, decoder: Decoder) -> "CloudDocumentSizeMediaResource":
        return cls(
            datacenter_id=decoder.read_int32("d"),
            document_id=decoder.read_int64("i"),
            access_hash=decoder.read_int64("h"),
            size_spec=decoder.read_string("s"),
        )


@register_encodable("LocalFileMediaResource")
@dataclass(frozen=True)
class LocalFileMediaResource(TelegramMediaResource):
    """A file that exists only on this device (e.g. an upload in progress)."""

    file_id: int

    @property
    def id(self) -> str:
        return f"local-file-{self.file_id}"

    def is_equal(self, other: TelegramMediaResource) -> bool:
        return isinstance(other, LocalFileMediaResource) and self.file_id == other.file_id

    def encode(self, encoder: Encoder) -> None:
        encoder.write_int64("f", self.file_id)

    @classmethod
    def decode(cls, decoder: Decoder) -> "LocalFileMediaResource":
        return cls(file_id=decoder.read_int64("f"))
