import pytest

from blegatt.uuids import (
    GAP_UUID,
    PRIMARY_SERVICE_UUID,
    UUID,
    attribute_name,
    characteristic_name,
    descriptor_name,
    parse_uuid,
    service_name,
    uuid16,
)


def test_uuid16_wire_order_is_little_endian():
    assert uuid16(0xFAFE).wire == bytes.fromhex("fefa")


def test_uuid16_string_and_length():
    u = uuid16(0x2A00)
    assert str(u) == "2a00"
    assert len(u) == 2


def test_parse_128_bit_wire_bytes():
    u = parse_uuid("09fc95c0-c111-11e3-9904-0002a5d5c51b")
    assert u.wire == bytes.fromhex("1bc5d5a502000499e31111c1c095fc09")
    assert len(u) == 16


def test_parse_string_round_trip():
    u = parse_uuid("11fac9e0-c111-11e3-9246-0002a5d5c51b")
    assert str(u) == "11fac9e0c11111e392460002a5d5c51b"
    assert parse_uuid(str(u)) == u


def test_parse_is_case_insensitive():
    assert parse_uuid("ABABABABABABABABABABABABABABABAB") == parse_uuid(
        "abababababababababababababababab"
    )


def test_parse_16_bit_equals_uuid16():
    assert parse_uuid("1800") == uuid16(0x1800) == GAP_UUID


def test_uuid_hashable_and_equal_by_bytes():
    seen = {uuid16(0x2800), UUID(bytes.fromhex("0028"))}
    assert seen == {PRIMARY_SERVICE_UUID}


@pytest.mark.parametrize("text", ["xyz", "abcdef", "", "12"])
def test_parse_rejects_bad_input(text):
    with pytest.raises(ValueError):
        parse_uuid(text)


@pytest.mark.parametrize("value", [-1, 0x10000])
def test_uuid16_range(value):
    with pytest.raises(ValueError):
        uuid16(value)


def test_known_names():
    assert service_name(uuid16(0x180F)) == "Battery Service"
    assert characteristic_name(uuid16(0x2A19)) == "Battery Level"
    assert descriptor_name(uuid16(0x2902)) == "Client Characteristic Configuration"
    assert attribute_name(uuid16(0x2803)) == "Characteristic"


def test_unknown_names_are_empty():
    u = parse_uuid("09fc95c0-c111-11e3-9904-0002a5d5c51b")
    assert service_name(u) == ""
    assert characteristic_name(u) == ""
    assert descriptor_name(uuid16(0x2A19)) == ""