import pytest

from blegatt.attr import Attr, AttrRange, generate_attributes
from blegatt.model import Property, Service
from blegatt.uuids import (
    CHARACTERISTIC_UUID,
    CLIENT_CHARACTERISTIC_CONFIG_UUID,
    DEVICE_NAME_UUID,
    GAP_UUID,
    PRIMARY_SERVICE_UUID,
    uuid16,
)


def _range(base):
    return AttrRange([Attr(handle=h, typ=uuid16(0x2A00)) for h in (4, 5, 6)], base)


@pytest.mark.parametrize("handle", [0, 2, 3, 7, 8, 100])
def test_get_out_of_range(handle):
    assert _range(4).get(handle) is None


@pytest.mark.parametrize("handle", [4, 5, 6])
def test_get_in_range(handle):
    a = _range(4).get(handle)
    assert a is not None
    assert a.handle == handle


@pytest.mark.parametrize(
    "start,end,base,want",
    [
        (0, 3, 4, []),
        (0, 4, 4, [0]),
        (0, 5, 4, [0, 1]),
        (4, 5, 4, [0, 1]),
        (4, 6, 4, [0, 1, 2]),
        (4, 100, 4, [0, 1, 2]),
        (5, 100, 4, [1, 2]),
        (5, 6, 4, [1, 2]),
        (5, 5, 4, [1]),
        (6, 6, 4, [2]),
        (6, 100, 4, [2]),
        (7, 100, 4, []),
        (100, 1000, 4, []),
        (1000, 100, 4, []),
        (5, 1, 4, []),
        (1, 65535, 4, [0, 1, 2]),
        (1, 65535, 0, [1, 2]),
    ],
)
def test_subrange(start, end, base, want):
    r = AttrRange([Attr(handle=i, typ=uuid16(0x2A00)) for i in range(3)], base)
    got = r.subrange(start, end)
    assert [a.handle for a in got] == want


def test_generate_attributes_layout():
    gap = Service(GAP_UUID)
    gap.add_characteristic(DEVICE_NAME_UUID).set_value(b"Gopher")
    svc = Service(uuid16(0x180F))
    notifying = svc.add_characteristic(uuid16(0x2A19))
    notifying.handle_notify(lambda req, n: None)

    table = generate_attributes([gap, svc], 1)

    assert [a.handle for a in table] == [1, 2, 3, 4, 5, 6, 7]
    assert [a.typ for a in table] == [
        PRIMARY_SERVICE_UUID,
        CHARACTERISTIC_UUID,
        DEVICE_NAME_UUID,
        PRIMARY_SERVICE_UUID,
        CHARACTERISTIC_UUID,
        uuid16(0x2A19),
        CLIENT_CHARACTERISTIC_CONFIG_UUID,
    ]
    assert table.get(1).value == bytes.fromhex("0018")
    assert table.get(2).value == bytes.fromhex("020300002a")
    assert table.get(3).value == b"Gopher"
    assert table.get(5).value == bytes.fromhex("300600192a")
    assert table.get(6).value is None
    assert table.get(7).value == b"\x00\x00"
    assert table.get(7).pvt is notifying.cccd


def test_generate_attributes_assigns_handles():
    gap = Service(GAP_UUID)
    name = gap.add_characteristic(DEVICE_NAME_UUID)
    name.set_value(b"x")
    svc = Service(uuid16(0x180F))
    level = svc.add_characteristic(uuid16(0x2A19))
    level.handle_notify(lambda req, n: None)

    generate_attributes([gap, svc], 1)

    assert (gap.handle, gap.end_handle) == (1, 3)
    assert (name.handle, name.value_handle) == (2, 3)
    assert (svc.handle, svc.end_handle) == (4, 0xFFFF)
    assert (level.handle, level.value_handle) == (5, 6)
    assert level.cccd.handle == 7


def test_generate_attributes_props():
    svc = Service(uuid16(0x180F))
    c = svc.add_characteristic(uuid16(0x2A19))
    c.handle_write(lambda req, data: 0)
    table = generate_attributes([svc], 10)
    assert table.base == 10
    assert table.get(10).props == Property.READ
    assert table.get(12).props == Property.WRITE | Property.WRITE_NR
    assert table.get(9) is None