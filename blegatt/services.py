"""Ready-made GATT services: GAP, GATT, battery level and a demo counter."""

from __future__ import annotations

import logging
import time

from .model import (
    STATUS_SUCCESS,
    Notifier,
    ReadRequest,
    Request,
    ResponseWriter,
    Service,
)
from .uuids import (
    APPEARANCE_UUID,
    DEVICE_NAME_UUID,
    GAP_UUID,
    GATT_UUID,
    PERIPHERAL_PRIVACY_UUID,
    PREFERRED_PARAMS_UUID,
    RECONNECTION_ADDR_UUID,
    SERVICE_CHANGED_UUID,
    parse_uuid,
    uuid16,
)

logger = logging.getLogger(__name__)

BATTERY_SERVICE_UUID = uuid16(0x180F)
BATTERY_LEVEL_UUID = uuid16(0x2A19)
PRESENTATION_FORMAT_UUID = uuid16(0x2904)

COUNT_SERVICE_UUID = parse_uuid("09fc95c0-c111-11e3-9904-0002a5d5c51b")
COUNT_READ_UUID = parse_uuid("11fac9e0-c111-11e3-9246-0002a5d5c51b")
COUNT_WRITE_UUID = parse_uuid("16fe0d80-c111-11e3-b8c8-0002a5d5c51b")
COUNT_NOTIFY_UUID = parse_uuid("1c927b50-c116-11e3-8a33-0800200c9a66")

# Appearance value for a generic computer.
GAP_APPEARANCE_GENERIC_COMPUTER = b"\x00\x80"

_NOTIFY_INTERVAL = 1.0


def new_gap_service(name: str) -> Service:
    """Return a Generic Access service advertising the given device name."""
    s = Service(GAP_UUID)
    s.add_characteristic(DEVICE_NAME_UUID).set_value(name.encode("utf-8"))
    s.add_characteristic(APPEARANCE_UUID).set_value(GAP_APPEARANCE_GENERIC_COMPUTER)
    s.add_characteristic(PERIPHERAL_PRIVACY_UUID).set_value(b"\x00")
    s.add_characteristic(RECONNECTION_ADDR_UUID).set_value(bytes(6))
    s.add_characteristic(PREFERRED_PARAMS_UUID).set_value(
        bytes([0x06, 0x00, 0x06, 0x00, 0x00, 0x00, 0xD0, 0x07])
    )
    return s


def new_gatt_service() -> Service:
    """Return a Generic Attribute service with a Service Changed characteristic."""

    def on_subscribe(request: Request, notifier: Notifier) -> None:
        logger.info("indicating service changes to the client is not supported")

    s = Service(GATT_UUID)
    s.add_characteristic(SERVICE_CHANGED_UUID).handle_notify(on_subscribe)
    return s


def new_battery_service() -> Service:
    """Return a battery service whose level starts at 100 and drops on each read."""
    level = 100

    def read_level(rsp: ResponseWriter, req: ReadRequest) -> None:
        nonlocal level
        rsp.write(bytes([level]))
        level = (level - 1) & 0xFF

    s = Service(BATTERY_SERVICE_UUID)
    c = s.add_characteristic(BATTERY_LEVEL_UUID)
    c.handle_read(read_level)
    c.add_descriptor(PRESENTATION_FORMAT_UUID).set_value(
        bytes([4, 1, 39, 173, 1, 0, 0])
    )
    return s


def new_count_service() -> Service:
    """Return a demo service with a read counter, a write sink and a notifier."""
    count = 0

    def read_count(rsp: ResponseWriter, req: ReadRequest) -> None:
        nonlocal count
        rsp.write(f"count: {count}")
        count += 1

    def write_data(request: Request, data: bytes) -> int:
        logger.info("Wrote: %s", data.decode("utf-8", errors="replace"))
        return STATUS_SUCCESS

    def notify_counts(request: Request, notifier: Notifier) -> None:
        sent = 0
        while not notifier.done():
            notifier.write(f"Count: {sent}")
            sent += 1
            time.sleep(_NOTIFY_INTERVAL)

    s = Service(COUNT_SERVICE_UUID)
    s.add_characteristic(COUNT_READ_UUID).handle_read(read_count)
    s.add_characteristic(COUNT_WRITE_UUID).handle_write(write_data)
    s.add_characteristic(COUNT_NOTIFY_UUID).handle_notify(notify_counts)
    return s