# tests/test_media_coding.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

import pytest

from telegram_media.coding import (
    Decoder,
    Encoder,
    decode_root_object,
    encode_root_object,
    type_id_for_name,
)
from telegram_media.exceptions import (
    MediaDecodingError,
    MissingFieldError,
    UnexpectedObjectTypeError,
    UnknownObjectTypeError,
)
from telegram_media.media_id import MediaId, Namespace
from telegram_media.resources import (
    CloudDocumentMediaResource,
    LocalFileMediaResource,
    TelegramMediaResource,
)


def test_scalar_fields_read_back_by_key():
    encoder = Encoder()
    encoder.write_int32("a", -5)
    encoder.write_int64("b", 1 << 40)
    encoder.write_string("c", "héllo")
    encoder.write_bytes("d", b"\x00\x01\x02")

    decoder = Decoder(encoder.make_data())
    # keys are looked up, not read in order
    assert decoder.read_string("c") == "héllo"
    assert decoder.read_int64("b") == 1 << 40
    assert decoder.read_int32("a") == -5
    assert bytes(decoder.read_bytes_no_copy("d")) == b"\x00\x01\x02"


def test_int32_is_little_endian():
    encoder = Encoder()
    encoder.write_int32("t", 1)
    assert encoder.make_data() == b"\x01t\x00\x01\x00\x00\x00"


def test_missing_required_field_raises():
    decoder = Decoder(Encoder().make_data())
    with pytest.raises(MissingFieldError) as excinfo:
        decoder.read_string("mt")
    assert excinfo.value.key == "mt"


def test_wrong_value_type_is_a_missing_field():
    encoder = Encoder()
    encoder.write_string("x", "not a number")
    with pytest.raises(MissingFieldError):
        Decoder(encoder.make_data()).read_int32("x")


def test_nil_and_missing_slots_read_as_none():
    encoder = Encoder()
    encoder.write_nil("n")
    decoder = Decoder(encoder.make_data())
    assert "n" in decoder
    assert "m" not in decoder
    assert decoder.read_optional_object("n") is None
    assert decoder.read_optional_object("m") is None
    assert decoder.read_optional_string("n") is None
    assert decoder.read_optional_int("m") is None
    assert decoder.read_bytes_no_copy("n") is None


def test_optional_int_accepts_both_widths():
    encoder = Encoder()
    encoder.write_int32("small", 7)
    encoder.write_int64("big", 1 << 33)
    decoder = Decoder(encoder.make_data())
    assert decoder.read_optional_int("small") == 7
    assert decoder.read_optional_int("big") == 1 << 33


def test_int32_overflow_is_rejected_on_write():
    with pytest.raises(ValueError):
        Encoder().write_int32("x", 1 << 31)


def test_bytes_no_copy_borrows_from_input():
    encoder = Encoder()
    encoder.write_bytes("wf", b"abc")
    data = bytearray(encoder.make_data())
    view = Decoder(data).read_bytes_no_copy("wf")
    assert isinstance(view, memoryview)
    data[-1] = ord("z")
    assert bytes(view) == b"abz"


def test_polymorphic_objects_keep_their_concrete_type():
    resources = [
        CloudDocumentMediaResource(datacenter_id=4, file_id=1, access_hash=2, size=None),
        LocalFileMediaResource(file_id=99),
    ]
    encoder = Encoder()
    encoder.write_object("one", resources[1])
    encoder.write_object_array("many", resources)
    decoder = Decoder(encoder.make_data())

    assert decoder.read_object("one") == resources[1]
    assert decoder.read_object_array("many") == resources


def test_expected_type_accepts_subclasses_and_rejects_others():
    encoder = Encoder()
    encoder.write_object("one", LocalFileMediaResource(file_id=99))
    encoder.write_object_array("many", [LocalFileMediaResource(file_id=1)])
    decoder = Decoder(encoder.make_data())

    assert decoder.read_object("one", TelegramMediaResource).file_id == 99
    assert decoder.read_optional_object("missing", CloudDocumentMediaResource) is None
    with pytest.raises(UnexpectedObjectTypeError) as excinfo:
        decoder.read_object("one", CloudDocumentMediaResource)
    assert excinfo.value.found == "LocalFileMediaResource"
    with pytest.raises(UnexpectedObjectTypeError):
        decoder.read_object_array("many", (CloudDocumentMediaResource,))


def test_empty_object_array():
    encoder = Encoder()
    encoder.write_object_array("pr", [])
    assert Decoder(encoder.make_data()).read_object_array("pr") == []


def test_unregistered_type_cannot_be_encoded():
    with pytest.raises(TypeError):
        Encoder().write_object("r", object())


def test_unknown_type_id_raises_on_decode():
    payload = encode_root_object(LocalFileMediaResource(file_id=1))
    unknown = type_id_for_name("NoSuchType").to_bytes(4, "little", signed=True)
    with pytest.raises(UnknownObjectTypeError):
        decode_root_object(unknown + payload[4:])


def test_root_object_round_trip():
    resource = CloudDocumentMediaResource(
        datacenter_id=1, file_id=10, access_hash=20, size=30
    )
    assert decode_root_object(encode_root_object(resource)) == resource


@pytest.mark.parametrize("cut", [1, 5, 9])
def test_truncated_payload_raises(cut):
    payload = encode_root_object(
        CloudDocumentMediaResource(datacenter_id=1, file_id=10, access_hash=20)
    )
    with pytest.raises(MediaDecodingError):
        decode_root_object(payload[:-cut])


def test_trailing_bytes_are_rejected():
    payload = encode_root_object(LocalFileMediaResource(file_id=1))
    with pytest.raises(MediaDecodingError):
        decode_root_object(payload + b"\x00")


def test_unknown_value_type_raises():
    with pytest.raises(MediaDecodingError):
        Decoder(b"\x01x\x7f")


def test_type_ids_are_stable_signed_int32():
    type_id = type_id_for_name("TelegramMediaFile")
    assert type_id == type_id_for_name("TelegramMediaFile")
    assert -(1 << 31) <= type_id < 1 << 31


def test_media_id_fixed_width_form():
    media_id = MediaId(Namespace.CLOUD_FILE, -2)
    data = media_id.to_bytes()
    assert len(data) == 12
    assert MediaId.from_bytes(data) == media_id
    with pytest.raises(MediaDecodingError):
        MediaId.from_bytes(data[:8])
