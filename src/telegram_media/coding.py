# telegram_media/coding.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

"""
Keyed binary encoder/decoder used to persist media records.

A payload is a flat sequence of fields. Each field is a one-byte key length,
the UTF-8 key, a one-byte value type and the value. Integers are little-endian.
Embedded objects are written as a type id, a payload length and the nested
payload, so the decoder can dispatch to the decode function registered for
that type id without knowing the concrete class in advance.
"""

import logging
import struct
import zlib
from collections.abc import Callable, Iterable
from enum import IntEnum
from typing import Any

from telegram_media.exceptions import (
    MediaDecodingError,
    MissingFieldError,
    UnexpectedObjectTypeError,
    UnknownObjectTypeError,
)

logger = logging.getLogger(__name__)

_UINT8 = struct.Struct("<B")
_INT32 = struct.Struct("<i")
_INT64 = struct.Struct("<q")


class ValueType(IntEnum):
    INT32 = 0
    INT64 = 1
    STRING = 4
    OBJECT = 5
    OBJECT_ARRAY = 8
    BYTES = 10
    NIL = 11


EncodeFunc = Callable[[Any, "Encoder"], None]
DecodeFunc = Callable[["Decoder"], Any]
ExpectedType = type | tuple[type, ...]

_decoders: dict[int, DecodeFunc] = {}
_encoders: dict[type, tuple[int, EncodeFunc]] = {}
_type_names: dict[int, str] = {}


# ---------- type registry ----------


def type_id_for_name(name: str) -> int:
    """Return the stable signed 32-bit type id persisted for a type name."""
    value = zlib.crc32(name.encode("utf-8"))
    if value >= 1 << 31:
        value -= 1 << 32
    return value


def register_codec(
    name: str, classes: Iterable[type], encode: EncodeFunc, decode: DecodeFunc
) -> int:
    """
    Register encode/decode functions for one persisted type name.

    Several Python classes may share a type id (e.g. the variants of a tagged
    union); the payload itself then tells them apart.
    """
    type_id = type_id_for_name(name)
    previous = _type_names.get(type_id)
    if previous is not None and previous != name:
        raise ValueError(
            f"Type id {type_id} for {name!r} collides with {previous!r}"
        )
    _type_names[type_id] = name
    _decoders[type_id] = decode
    for cls in classes:
        _encoders[cls] = (type_id, encode)
    logger.debug("Registered persisted type %s (id %d)", name, type_id)
    return type_id


def register_encodable(name: str):
    """
    Class decorator for types with an ``encode(encoder)`` method and a
    ``decode(decoder)`` classmethod.
    """

    def wrap(cls):
        register_codec(name, (cls,), lambda obj, encoder: obj.encode(encoder), cls.decode)
        return cls

    return wrap


def _encoder_for(obj: Any) -> tuple[int, EncodeFunc]:
    for cls in type(obj).__mro__:
        entry = _encoders.get(cls)
        if entry is not None:
            return entry
    raise TypeError(f"{type(obj).__name__} is not a registered encodable type")


# ---------- encoding ----------


class Encoder:
    """Accumulates keyed fields into a byte payload."""

    def __init__(self):
        self._buffer = bytearray()

    def _write_key(self, key: str, value_type: ValueType) -> None:
        raw = key.encode("utf-8")
        if len(raw) > 255:
            raise ValueError(f"Key {key!r} is longer than 255 bytes")
        self._buffer += _UINT8.pack(len(raw))
        self._buffer += raw
        self._buffer += _UINT8.pack(value_type)

    def write_int32(self, key: str, value: int) -> None:
        try:
            packed = _INT32.pack(value)
        except struct.error as e:
            raise ValueError(f"{key!r}: {value!r} does not fit in int32") from e
        self._write_key(key, ValueType.INT32)
        self._buffer += packed

    def write_int64(self, key: str, value: int) -> None:
        try:
            packed = _INT64.pack(value)
        except struct.error as e:
            raise ValueError(f"{key!r}: {value!r} does not fit in int64") from e
        self._write_key(key, ValueType.INT64)
        self._buffer += packed

    def write_string(self, key: str, value: str) -> None:
        raw = value.encode("utf-8")
        self._write_key(key, ValueType.STRING)
        self._buffer += _INT32.pack(len(raw))
        self._buffer += raw

    def write_bytes(self, key: str, value: bytes | bytearray | memoryview) -> None:
        view = memoryview(value).cast("B")
        self._write_key(key, ValueType.BYTES)
        self._buffer += _INT32.pack(len(view))
        self._buffer += view

    def write_nil(self, key: str) -> None:
        self._write_key(key, ValueType.NIL)

    def write_object(self, key: str, obj: Any) -> None:
        payload = _encode_tagged(obj)
        self._write_key(key, ValueType.OBJECT)
        self._buffer += payload

    def write_object_array(self, key: str, objects: Iterable[Any]) -> None:
        encoded = [_encode_tagged(obj) for obj in objects]
        self._write_key(key, ValueType.OBJECT_ARRAY)
        self._buffer += _INT32.pack(len(encoded))
        for payload in encoded:
            self._buffer += payload

    def make_data(self) -> bytes:
        return bytes(self._buffer)


def _encode_tagged(obj: Any) -> bytes:
    type_id, encode = _encoder_for(obj)
    inner = Encoder()
    encode(obj, inner)
    payload = inner.make_data()
    return _INT32.pack(type_id) + _INT32.pack(len(payload)) + payload


# ---------- decoding ----------


class Decoder:
    """
    Reads keyed fields from a payload without copying it.

    The payload is indexed once on construction; reads are lookups by key.
    Buffers handed out by ``read_bytes_no_copy`` borrow from the input and
    must be copied by callers that keep them.
    """

    def __init__(self, data: bytes | bytearray | memoryview):
        self._data = memoryview(data).cast("B")
        self._fields: dict[str, tuple[ValueType, int, int]] = {}
        self._index()

    def _index(self) -> None:
        data = self._data
        size = len(data)
        offset = 0
        try:
            while offset < size:
                key_length = data[offset]
                offset += 1
                if offset + key_length + 1 > size:
                    raise MediaDecodingError(f"Truncated field key at offset {offset}")
                key = bytes(data[offset : offset + key_length]).decode("utf-8")
                offset += key_length
                value_type = ValueType(data[offset])
                offset += 1
                start = offset
                offset = start + _value_length(data, value_type, start)
                if offset > size:
                    raise MediaDecodingError(f"Truncated value for field {key!r}")
                # first occurrence wins
                self._fields.setdefault(key, (value_type, start, offset))
        except (struct.error, UnicodeDecodeError, ValueError) as e:
            raise MediaDecodingError(f"Malformed payload at offset {offset}") from e

    def __contains__(self, key: str) -> bool:
        return key in self._fields

    def _field(self, key: str, *types: ValueType) -> tuple[int, int]:
        field = self._fields.get(key)
        if field is None:
            raise MissingFieldError(key)
        value_type, start, end = field
        if value_type not in types:
            expected = "/".join(t.name for t in types)
            raise MissingFieldError(
                key, f"Field {key!r} holds {value_type.name}, expected {expected}"
            )
        return start, end

    def _is_absent(self, key: str) -> bool:
        field = self._fields.get(key)
        return field is None or field[0] == ValueType.NIL

    def read_int32(self, key: str) -> int:
        start, _ = self._field(key, ValueType.INT32)
        return _INT32.unpack_from(self._data, start)[0]

    def read_int64(self, key: str) -> int:
        start, _ = self._field(key, ValueType.INT64)
        return _INT64.unpack_from(self._data, start)[0]

    def read_optional_int(self, key: str) -> int | None:
        """Read an int32 or int64 slot; a missing or nil slot gives None."""
        if self._is_absent(key):
            return None
        if self._fields[key][0] == ValueType.INT64:
            return self.read_int64(key)
        return self.read_int32(key)

    def read_string(self, key: str) -> str:
        start, end = self._field(key, ValueType.STRING)
        try:
            return bytes(self._data[start + 4 : end]).decode("utf-8")
        except UnicodeDecodeError as e:
            raise MediaDecodingError(f"Field {key!r} is not valid UTF-8") from e

    def read_optional_string(self, key: str) -> str | None:
        if self._is_absent(key):
            return None
        return self.read_string(key)

    def read_bytes_no_copy(self, key: str) -> memoryview | None:
        """Return a view into the payload, or None when the slot is absent."""
        if self._is_absent(key):
            return None
        start, end = self._field(key, ValueType.BYTES)
        return self._data[start + 4 : end]

    def read_object(self, key: str, expected: ExpectedType | None = None) -> Any:
        """Read an object slot; with ``expected``, any other type is a decode error."""
        start, _ = self._field(key, ValueType.OBJECT)
        obj, _ = _decode_tagged(self._data, start)
        return _check_type(key, obj, expected)

    def read_optional_object(
        self, key: str, expected: ExpectedType | None = None
    ) -> Any | None:
        """Read an object slot; an explicit nil marker or a missing slot gives None."""
        if self._is_absent(key):
            return None
        return self.read_object(key, expected)

    def read_object_array(
        self, key: str, expected: ExpectedType | None = None
    ) -> list[Any]:
        start, _ = self._field(key, ValueType.OBJECT_ARRAY)
        count = _INT32.unpack_from(self._data, start)[0]
        offset = start + 4
        result = []
        for _ in range(count):
            obj, offset = _decode_tagged(self._data, offset)
            result.append(_check_type(key, obj, expected))
        return result


def _check_type(key: str, obj: Any, expected: ExpectedType | None) -> Any:
    if expected is not None and not isinstance(obj, expected):
        raise UnexpectedObjectTypeError(key, type(obj).__name__)
    return obj


def _value_length(data: memoryview, value_type: ValueType, start: int) -> int:
    if value_type == ValueType.INT32:
        return 4
    if value_type == ValueType.INT64:
        return 8
    if value_type == ValueType.NIL:
        return 0
    if value_type in (ValueType.STRING, ValueType.BYTES):
        return 4 + _read_length(data, start)
    if value_type == ValueType.OBJECT:
        return 8 + _read_length(data, start + 4)
    # ValueType.OBJECT_ARRAY
    count = _read_length(data, start)
    offset = start + 4
    for _ in range(count):
        offset += 8 + _read_length(data, offset + 4)
    return offset - start


def _read_length(data: memoryview, offset: int) -> int:
    length = _INT32.unpack_from(data, offset)[0]
    if length < 0:
        raise MediaDecodingError(f"Negative length {length} at offset {offset}")
    return length


def _decode_tagged(data: memoryview, offset: int) -> tuple[Any, int]:
    try:
        type_id, length = struct.unpack_from("<ii", data, offset)
    except struct.error as e:
        raise MediaDecodingError(f"Truncated object header at offset {offset}") from e
    start = offset + 8
    end = start + length
    if length < 0 or end > len(data):
        raise MediaDecodingError(f"Object at offset {offset} overruns the payload")
    decode = _decoders.get(type_id)
    if decode is None:
        raise UnknownObjectTypeError(type_id)
    return decode(Decoder(data[start:end])), end


def encode_root_object(obj: Any) -> bytes:
    """Serialize a registered object, tagged with its type id, for storage."""
    return _encode_tagged(obj)


def decode_root_object(data: bytes | bytearray | memoryview) -> Any:
    """Inverse of ``encode_root_object``; trailing bytes are a decode error."""
    view = memoryview(data).cast("B")
    obj, end = _decode_tagged(view, 0)
    if end != len(view):
        raise MediaDecodingError(f"{len(view) - end} trailing bytes after root object")
    return obj
