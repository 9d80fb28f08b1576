"""GATT services, characteristics, descriptors and request plumbing."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import IntFlag
from typing import Any, Callable, Optional, Protocol

from .uuids import (
    CLIENT_CHARACTERISTIC_CONFIG_UUID,
    UUID,
    characteristic_name,
    descriptor_name,
    service_name,
)

STATUS_SUCCESS = 0
STATUS_INVALID_OFFSET = 1
STATUS_UNEXPECTED_ERROR = 2


class Property(IntFlag):
    """Characteristic property flags."""

    BROADCAST = 0x01
    READ = 0x02
    WRITE_NR = 0x04
    WRITE = 0x08
    NOTIFY = 0x10
    INDICATE = 0x20
    SIGNED_WRITE = 0x40
    EXTENDED = 0x80

    def __str__(self) -> str:
        return "".join(
            f"{label} " for flag, label in _PROPERTY_LABELS if self & flag
        )


_PROPERTY_LABELS = (
    (Property.BROADCAST, "broadcast"),
    (Property.READ, "read"),
    (Property.WRITE_NR, "writeWithoutResponse"),
    (Property.WRITE, "write"),
    (Property.NOTIFY, "notify"),
    (Property.INDICATE, "indicate"),
    (Property.SIGNED_WRITE, "authenticateSignedWrites"),
    (Property.EXTENDED, "extendedProperties"),
)


@dataclass
class Request:
    """The context of a request from a connected central."""

    central: Any = None


@dataclass
class ReadRequest(Request):
    """A read request: cap is the maximum reply length, offset the value offset."""

    cap: int = 0
    offset: int = 0


class ResponseWriter:
    """Collects the value returned by a read handler, up to a fixed capacity."""

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        self._buf = bytearray()
        self.status = STATUS_SUCCESS

    def write(self, b: bytes | str) -> int:
        """Append b; raise ValueError if it does not fit in the remaining room."""
        if isinstance(b, str):
            b = b.encode("utf-8")
        avail = self.capacity - len(self._buf)
        if avail < len(b):
            raise ValueError(f"requested write {len(b)} bytes, {avail} available")
        self._buf += b
        return len(b)

    def set_status(self, status: int) -> None:
        """Record the result status of the read operation."""
        self.status = status

    def getvalue(self) -> bytes:
        """Return the bytes written so far."""
        return bytes(self._buf)


ReadHandler = Callable[[ResponseWriter, ReadRequest], None]
WriteHandler = Callable[[Request, bytes], int]


class _NotificationSink(Protocol):
    def send_notification(self, attr: Any, data: bytes) -> int: ...


class NotificationsStopped(Exception):
    """Raised when writing to a notifier the central has unsubscribed."""


class Notifier:
    """Sends value-change notifications for one attribute to one central."""

    def __init__(self, central: _NotificationSink, attr: Any, maxlen: int) -> None:
        self.central = central
        self.attr = attr
        self.maxlen = maxlen
        self._lock = threading.Lock()
        self._done = False

    def write(self, b: bytes | str) -> int:
        """Send b as a notification; raise NotificationsStopped once stopped."""
        if isinstance(b, str):
            b = b.encode("utf-8")
        with self._lock:
            if self._done:
                raise NotificationsStopped("central stopped notifications")
            return self.central.send_notification(self.attr, bytes(b))

    def done(self) -> bool:
        """Report whether the central asked for no more notifications."""
        with self._lock:
            return self._done

    def cap(self) -> int:
        """Return the maximum number of bytes in a single notification."""
        return self.maxlen

    def stop(self) -> None:
        """Mark the notifier as stopped."""
        with self._lock:
            self._done = True


NotifyHandler = Callable[[Request, Notifier], None]


class Service:
    """A BLE service holding characteristics."""

    def __init__(self, uuid: UUID) -> None:
        self.uuid = uuid
        self.characteristics: list[Characteristic] = []
        self.handle = 0
        self.end_handle = 0

    def add_characteristic(self, uuid: UUID) -> Characteristic:
        """Add and return a new characteristic; the UUID must be unique here."""
        if any(c.uuid == uuid for c in self.characteristics):
            raise ValueError(
                f"service already contains a characteristic with uuid {uuid}"
            )
        c = Characteristic(uuid, self)
        self.characteristics.append(c)
        return c

    def name(self) -> str:
        """Return the specification name of the service, or ''."""
        return service_name(self.uuid)

    def __repr__(self) -> str:
        return f"Service({self.uuid})"


class Characteristic:
    """A BLE characteristic."""

    def __init__(
        self,
        uuid: UUID,
        service: Optional[Service] = None,
        props: int = 0,
        handle: int = 0,
        value_handle: int = 0,
    ) -> None:
        self.uuid = uuid
        self.service = service
        self.props = Property(props)
        self.secure = Property(0)
        self.cccd: Optional[Descriptor] = None
        self.descriptors: list[Descriptor] = []
        self.value: Optional[bytes] = None
        self.read_handler: Optional[ReadHandler] = None
        self.write_handler: Optional[WriteHandler] = None
        self.notify_handler: Optional[NotifyHandler] = None
        self.handle = handle
        self.value_handle = value_handle
        self.end_handle = 0

    def name(self) -> str:
        """Return the specification name of the characteristic, or ''."""
        return characteristic_name(self.uuid)

    def add_descriptor(self, uuid: UUID) -> Descriptor:
        """Add and return a new descriptor; the UUID must be unique here."""
        if any(d.uuid == uuid for d in self.descriptors):
            raise ValueError(
                f"characteristic already contains a descriptor with uuid {uuid}"
            )
        d = Descriptor(uuid, self)
        self.descriptors.append(d)
        return d

    def set_value(self, b: bytes) -> None:
        """Serve reads with a static value."""
        if self.read_handler is not None:
            raise RuntimeError("characteristic has been configured with a read handler")
        self.props |= Property.READ
        self.value = bytes(b)

    def handle_read(self, handler: ReadHandler) -> None:
        """Serve reads by calling handler(response_writer, read_request)."""
        if self.value is not None:
            raise RuntimeError("characteristic has been configured with a static value")
        self.props |= Property.READ
        self.read_handler = handler

    def handle_write(self, handler: WriteHandler) -> None:
        """Serve writes, with or without response, by calling handler(request, data)."""
        self.props |= Property.WRITE | Property.WRITE_NR
        self.write_handler = handler

    def handle_notify(self, handler: NotifyHandler) -> None:
        """Serve subscriptions by calling handler(request, notifier).

        Adds a client characteristic configuration descriptor; does nothing
        if one is already present.
        """
        if self.cccd is not None:
            return
        p = Property.NOTIFY | Property.INDICATE
        self.props |= p
        self.notify_handler = handler

        secure = Property(0)
        if self.secure & p:
            secure = Property.READ | Property.WRITE
        cd = Descriptor(CLIENT_CHARACTERISTIC_CONFIG_UUID, self)
        cd.props = Property.READ | Property.WRITE | Property.WRITE_NR
        cd.secure = secure
        cd.value = b"\x00\x00"
        self.cccd = cd
        self.descriptors.append(cd)

    def __repr__(self) -> str:
        return f"Characteristic({self.uuid})"


class Descriptor:
    """A BLE descriptor."""

    def __init__(
        self,
        uuid: UUID,
        characteristic: Optional[Characteristic] = None,
        handle: int = 0,
    ) -> None:
        self.uuid = uuid
        self.characteristic = characteristic
        self.props = Property(0)
        self.secure = Property(0)
        self.handle = handle
        self.value: Optional[bytes] = None
        self.read_handler: Optional[ReadHandler] = None
        self.write_handler: Optional[WriteHandler] = None

    def name(self) -> str:
        """Return the specification name of the descriptor, or ''."""
        return descriptor_name(self.uuid)

    def set_value(self, b: bytes) -> None:
        """Serve reads with a static value."""
        if self.read_handler is not None:
            raise RuntimeError("descriptor has been configured with a read handler")
        self.props |= Property.READ
        self.value = bytes(b)

    def handle_read(self, handler: ReadHandler) -> None:
        """Serve reads by calling handler(response_writer, read_request)."""
        if self.value is not None:
            raise RuntimeError("descriptor has been configured with a static value")
        self.props |= Property.READ
        self.read_handler = handler

    def handle_write(self, handler: WriteHandler) -> None:
        """Serve writes by calling handler(request, data)."""
        self.props |= Property.WRITE | Property.WRITE_NR
        self.write_handler = handler

    def __repr__(self) -> str:
        return f"Descriptor({self.uuid})"