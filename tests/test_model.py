import pytest

from blegatt.model import (
    STATUS_SUCCESS,
    Characteristic,
    Descriptor,
    NotificationsStopped,
    Notifier,
    Property,
    ReadRequest,
    Request,
    ResponseWriter,
    Service,
)
from blegatt.uuids import CLIENT_CHARACTERISTIC_CONFIG_UUID, parse_uuid, uuid16


class FakeCentral:
    def __init__(self):
        self.sent = []

    def send_notification(self, attr, data):
        self.sent.append((attr, data))
        return len(data)


def test_property_str_lists_flags_in_order():
    assert str(Property.WRITE | Property.READ) == "read write "
    assert str(Property(0)) == ""


def test_property_str_all_flags():
    every = Property(0xFF)
    text = str(every)
    assert text.split() == [
        "broadcast",
        "read",
        "writeWithoutResponse",
        "write",
        "notify",
        "indicate",
        "authenticateSignedWrites",
        "extendedProperties",
    ]


def test_property_from_value():
    assert str(Property(0x02)) == "read "
    assert str(Property(0x30)) == "notify indicate "


def test_read_request_defaults_and_fields():
    central = object()
    req = ReadRequest(central=central, cap=22, offset=5)
    assert req.central is central
    assert (req.cap, req.offset) == (22, 5)
    assert isinstance(req, Request)


def test_response_writer_collects_bytes():
    w = ResponseWriter(8)
    assert w.write(b"count") == 5
    assert w.write(": 1") == 3
    assert w.getvalue() == b"count: 1"
    assert w.status == STATUS_SUCCESS


def test_response_writer_rejects_overflow():
    w = ResponseWriter(4)
    w.write(b"ab")
    with pytest.raises(ValueError, match="requested write 3 bytes, 2 available"):
        w.write(b"xyz")
    assert w.getvalue() == b"ab"


def test_response_writer_set_status():
    w = ResponseWriter(4)
    w.set_status(2)
    assert w.status == 2


def test_notifier_sends_until_stopped():
    central = FakeCentral()
    n = Notifier(central, "attr", 20)
    assert n.cap() == 20
    assert n.done() is False
    assert n.write(b"Count: 0") == 8
    assert central.sent == [("attr", b"Count: 0")]
    n.stop()
    assert n.done() is True
    with pytest.raises(NotificationsStopped):
        n.write(b"more")
    assert len(central.sent) == 1


def test_service_add_characteristic():
    s = Service(uuid16(0x180F))
    c = s.add_characteristic(uuid16(0x2A19))
    assert s.characteristics == [c]
    assert c.service is s
    assert c.uuid == uuid16(0x2A19)
    assert s.name() == "Battery Service"
    assert c.name() == "Battery Level"


def test_service_rejects_duplicate_characteristic():
    s = Service(parse_uuid("09fc95c0-c111-11e3-9904-0002a5d5c51b"))
    s.add_characteristic(uuid16(0x2A00))
    with pytest.raises(ValueError):
        s.add_characteristic(uuid16(0x2A00))
    assert len(s.characteristics) == 1


def test_unknown_names_are_empty():
    s = Service(parse_uuid("09fc95c0-c111-11e3-9904-0002a5d5c51b"))
    assert s.name() == ""
    c = s.add_characteristic(parse_uuid("11fac9e0-c111-11e3-9246-0002a5d5c51b"))
    assert c.name() == ""


def test_characteristic_constructor_fields():
    s = Service(uuid16(0x1800))
    c = Characteristic(uuid16(0x2A00), s, Property.READ, 2, 3)
    assert (c.handle, c.value_handle) == (2, 3)
    assert c.props == Property.READ
    assert c.service is s


def test_set_value_enables_read_and_copies():
    c = Service(uuid16(0x1800)).add_characteristic(uuid16(0x2A00))
    data = bytearray(b"Gopher")
    c.set_value(data)
    data[0] = 0
    assert c.value == b"Gopher"
    assert c.props & Property.READ


def test_set_value_conflicts_with_read_handler():
    c = Characteristic(uuid16(0x2A00))
    c.handle_read(lambda rsp, req: None)
    with pytest.raises(RuntimeError):
        c.set_value(b"x")


def test_read_handler_conflicts_with_value():
    c = Characteristic(uuid16(0x2A00))
    c.set_value(b"")
    with pytest.raises(RuntimeError):
        c.handle_read(lambda rsp, req: None)


def test_read_handler_is_called():
    c = Characteristic(uuid16(0x2A19))
    c.handle_read(lambda rsp, req: rsp.write(bytes([req.offset])))
    rsp = ResponseWriter(22)
    c.read_handler(rsp, ReadRequest(cap=22, offset=7))
    assert rsp.getvalue() == bytes([7])
    assert c.props == Property.READ


def test_handle_write_sets_props():
    c = Characteristic(uuid16(0x2A06))
    got = []
    c.handle_write(lambda r, data: got.append(data) or STATUS_SUCCESS)
    assert c.props == Property.WRITE | Property.WRITE_NR
    assert c.write_handler(Request(), b"abcdef") == STATUS_SUCCESS
    assert got == [b"abcdef"]


def test_handle_notify_adds_ccc_descriptor():
    c = Characteristic(uuid16(0x2A37))
    c.handle_notify(lambda r, n: None)
    assert c.props == Property.NOTIFY | Property.INDICATE
    cd = c.cccd
    assert c.descriptors == [cd]
    assert cd.uuid == CLIENT_CHARACTERISTIC_CONFIG_UUID
    assert cd.value == b"\x00\x00"
    assert cd.props == Property.READ | Property.WRITE | Property.WRITE_NR
    assert cd.secure == Property(0)
    assert cd.characteristic is c
    assert cd.name() == "Client Characteristic Configuration"


def test_handle_notify_twice_is_noop():
    c = Characteristic(uuid16(0x2A37))
    first = lambda r, n: None  # noqa: E731
    c.handle_notify(first)
    c.handle_notify(lambda r, n: None)
    assert len(c.descriptors) == 1
    assert c.notify_handler is first


def test_handle_notify_secure():
    c = Characteristic(uuid16(0x2A37))
    c.secure = Property.NOTIFY
    c.handle_notify(lambda r, n: None)
    assert c.cccd.secure == Property.READ | Property.WRITE


def test_add_descriptor_and_duplicates():
    c = Characteristic(uuid16(0x2A19))
    d = c.add_descriptor(uuid16(0x2904))
    d.set_value(bytes([4, 1, 39, 173, 1, 0, 0]))
    assert d.value == bytes([4, 1, 39, 173, 1, 0, 0])
    assert d.props == Property.READ
    assert d.characteristic is c
    assert d.name() == "Characteristic Presentation Format"
    with pytest.raises(ValueError):
        c.add_descriptor(uuid16(0x2904))


def test_descriptor_read_and_write_config():
    d = Descriptor(uuid16(0x2901), None, 9)
    assert d.handle == 9
    d.handle_read(lambda rsp, req: rsp.write(b"x"))
    with pytest.raises(RuntimeError):
        d.set_value(b"y")
    d.handle_write(lambda r, data: STATUS_SUCCESS)
    assert d.props == Property.READ | Property.WRITE | Property.WRITE_NR


def test_descriptor_value_blocks_read_handler():
    d = Descriptor(uuid16(0x2901))
    d.set_value(b"desc")
    with pytest.raises(RuntimeError):
        d.handle_read(lambda rsp, req: None)
    assert d.value == b"desc"