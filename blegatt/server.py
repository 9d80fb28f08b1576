"""Serving the ATT protocol to a connected central over an L2CAP channel."""

from __future__ import annotations

import threading
from enum import IntEnum
from typing import Any, Optional, Protocol

from .att import GATT_CCC_INDICATE_FLAG, GATT_CCC_NOTIFY_FLAG, AttEcode, Opcode, att_error_rsp
from .attr import Attr, AttrRange
from .l2cap import L2capWriter
from .model import (
    Characteristic,
    Descriptor,
    Notifier,
    Property,
    ReadRequest,
    Request,
    ResponseWriter,
)
from .uuids import CLIENT_CHARACTERISTIC_CONFIG_UUID, PRIMARY_SERVICE_UUID, UUID

# L2CAP implementations support at least 48 bytes; 672 is the default MTU.
_READ_SIZE = 672
_DEFAULT_MTU = 23
_MAX_MTU = 256


class Security(IntEnum):
    LOW = 0
    MEDIUM = 1
    HIGH = 2


class Connection(Protocol):
    def read(self, size: int) -> bytes: ...

    def write(self, data: bytes) -> Any: ...

    def close(self) -> Any: ...


def _u16(b: bytes, offset: int) -> int:
    if len(b) < offset + 2:
        raise ValueError("truncated ATT request")
    return int.from_bytes(b[offset : offset + 2], "little")


def _handle_range(b: bytes) -> tuple[int, int]:
    return _u16(b, 0), _u16(b, 2)


class Central:
    """A connected remote central, served from an attribute table."""

    def __init__(self, attrs: AttrRange, addr: bytes, conn: Connection) -> None:
        self.attrs = attrs if attrs is not None else AttrRange([], 1)
        self.addr = bytes(addr)
        self.security = Security.LOW
        self._mtu = _DEFAULT_MTU
        self._conn = conn
        self._notifiers: dict[int, Notifier] = {}
        self._notifiers_lock = threading.Lock()
        self._write_lock = threading.Lock()

    def id(self) -> str:
        """Return the central's hardware address as colon-separated hex."""
        return ":".join(f"{x:02x}" for x in self.addr)

    def mtu(self) -> int:
        """Return the current connection MTU."""
        return self._mtu

    def close(self) -> None:
        """Stop every notifier and close the connection."""
        with self._notifiers_lock:
            for n in self._notifiers.values():
                n.stop()
        self._conn.close()

    def loop(self) -> None:
        """Serve requests until the connection ends, then close it."""
        try:
            while True:
                try:
                    data = self._conn.read(_READ_SIZE)
                except OSError:
                    break
                if not data:
                    break
                rsp = self.handle_request(data)
                if rsp is not None:
                    self._write(rsp)
        finally:
            self.close()

    def _write(self, pdu: bytes) -> int:
        with self._write_lock:
            written = self._conn.write(pdu)
        return len(pdu) if written is None else written

    def handle_request(self, b: bytes) -> Optional[bytes]:
        """Dispatch one raw ATT request and return the response, if any."""
        if not b:
            raise ValueError("empty ATT request")
        op, req = b[0], bytes(b[1:])
        if op in (Opcode.WRITE_REQ, Opcode.WRITE_CMD):
            return self._handle_write(op, req)
        handlers = {
            Opcode.MTU_REQ: self._handle_mtu,
            Opcode.FIND_INFO_REQ: self._handle_find_info,
            Opcode.FIND_BY_TYPE_VALUE_REQ: self._handle_find_by_type_value,
            Opcode.READ_BY_TYPE_REQ: self._handle_read_by_type,
            Opcode.READ_REQ: self._handle_read,
            Opcode.READ_BLOB_REQ: self._handle_read_blob,
            Opcode.READ_BY_GROUP_REQ: self._handle_read_by_group,
        }
        handler = handlers.get(op)
        if handler is None:
            return att_error_rsp(op, 0x0000, AttEcode.REQ_NOT_SUPP)
        return handler(req)

    def _handle_mtu(self, b: bytes) -> bytes:
        self._mtu = min(max(_u16(b, 0), _DEFAULT_MTU), _MAX_MTU)
        return bytes([Opcode.MTU_RSP]) + self._mtu.to_bytes(2, "little")

    def _handle_find_info(self, b: bytes) -> bytes:
        start, end = _handle_range(b)
        w = L2capWriter(self._mtu)
        w.write_byte_fit(Opcode.FIND_INFO_RSP)
        uuid_len = -1
        for a in self.attrs.subrange(start, end):
            if uuid_len == -1:
                uuid_len = len(a.typ)
                w.write_byte_fit(0x01 if uuid_len == 2 else 0x02)
            if len(a.typ) != uuid_len:
                break
            w.chunk()
            w.write_uint16_fit(a.handle)
            w.write_uuid_fit(a.typ)
            if not w.commit():
                break
        if uuid_len == -1:
            return att_error_rsp(Opcode.FIND_INFO_REQ, start, AttEcode.ATTR_NOT_FOUND)
        return w.getvalue()

    def _handle_find_by_type_value(self, b: bytes) -> bytes:
        start, end = _handle_range(b)
        typ = UUID(b[4:6])
        wanted = UUID(b[6:])
        # Only "Discover Primary Services By Service UUID" is supported.
        if typ != PRIMARY_SERVICE_UUID:
            return att_error_rsp(
                Opcode.FIND_BY_TYPE_VALUE_REQ, start, AttEcode.ATTR_NOT_FOUND
            )
        w = L2capWriter(self._mtu)
        w.write_byte_fit(Opcode.FIND_BY_TYPE_VALUE_RSP)
        wrote = False
        for a in self.attrs.subrange(start, end):
            if a.typ != PRIMARY_SERVICE_UUID or UUID(a.value or b"") != wanted:
                continue
            service = a.pvt
            w.chunk()
            w.write_uint16_fit(service.handle)
            w.write_uint16_fit(service.end_handle)
            if not w.commit():
                break
            wrote = True
        if not wrote:
            return att_error_rsp(
                Opcode.FIND_BY_TYPE_VALUE_REQ, start, AttEcode.ATTR_NOT_FOUND
            )
        return w.getvalue()

    def _read_value(self, a: Attr, offset: int) -> bytes:
        """Return the static value of a, or ask its read handler for one."""
        if a.value is not None:
            return a.value
        cap = self._mtu - 1
        rsp = ResponseWriter(cap)
        req = ReadRequest(central=self, cap=cap, offset=offset)
        if isinstance(a.pvt, (Characteristic, Descriptor)) and a.pvt.read_handler:
            a.pvt.read_handler(rsp, req)
        return rsp.getvalue()

    def _read_denied(self, a: Attr) -> bool:
        return bool(a.secure & Property.READ) and self.security > Security.LOW

    def _handle_read_by_type(self, b: bytes) -> bytes:
        start, end = _handle_range(b)
        typ = UUID(b[4:])
        w = L2capWriter(self._mtu)
        w.write_byte_fit(Opcode.READ_BY_TYPE_RSP)
        value_len = -1
        for a in self.attrs.subrange(start, end):
            if a.typ != typ:
                continue
            if self._read_denied(a):
                return att_error_rsp(
                    Opcode.READ_BY_TYPE_REQ, start, AttEcode.AUTHENTICATION
                )
            v = self._read_value(a, 0)
            if value_len == -1:
                value_len = len(v)
                w.write_byte_fit((value_len + 2) & 0xFF)
            if len(v) != value_len:
                break
            w.chunk()
            w.write_uint16_fit(a.handle)
            w.write_fit(v)
            if not w.commit():
                break
        if value_len == -1:
            return att_error_rsp(Opcode.READ_BY_TYPE_REQ, start, AttEcode.ATTR_NOT_FOUND)
        return w.getvalue()

    def _check_readable(self, op: int, handle: int) -> tuple[Optional[Attr], Optional[bytes]]:
        a = self.attrs.get(handle)
        if a is None:
            return None, att_error_rsp(op, handle, AttEcode.INVALID_HANDLE)
        if not a.props & Property.READ:
            return None, att_error_rsp(op, handle, AttEcode.READ_NOT_PERM)
        if self._read_denied(a):
            return None, att_error_rsp(op, handle, AttEcode.AUTHENTICATION)
        return a, None

    def _handle_read(self, b: bytes) -> bytes:
        handle = _u16(b, 0)
        a, error = self._check_readable(Opcode.READ_REQ, handle)
        if a is None:
            return error
        v = self._read_value(a, 0)
        w = L2capWriter(self._mtu)
        w.write_byte_fit(Opcode.READ_RSP)
        w.chunk()
        w.write_fit(v)
        w.commit_fit()
        return w.getvalue()

    def _handle_read_blob(self, b: bytes) -> bytes:
        handle = _u16(b, 0)
        offset = _u16(b, 2)
        a, error = self._check_readable(Opcode.READ_BLOB_REQ, handle)
        if a is None:
            return error
        if a.value is not None:
            v = a.value
        else:
            v = self._read_value(a, offset)
            offset = 0  # the handler has already applied the offset
        w = L2capWriter(self._mtu)
        w.write_byte_fit(Opcode.READ_BLOB_RSP)
        w.chunk()
        w.write_fit(v)
        if not w.chunk_seek(offset):
            w.commit_fit()
            return att_error_rsp(Opcode.READ_BLOB_REQ, handle, AttEcode.INVALID_OFFSET)
        w.commit_fit()
        return w.getvalue()

    def _handle_read_by_group(self, b: bytes) -> bytes:
        start, end = _handle_range(b)
        typ = UUID(b[4:])
        # Only "Discover All Primary Services" is supported.
        if typ != PRIMARY_SERVICE_UUID:
            return att_error_rsp(
                Opcode.READ_BY_GROUP_REQ, start, AttEcode.UNSUPP_GRP_TYPE
            )
        w = L2capWriter(self._mtu)
        w.write_byte_fit(Opcode.READ_BY_GROUP_RSP)
        uuid_len = -1
        for a in self.attrs.subrange(start, end):
            if a.typ != PRIMARY_SERVICE_UUID:
                continue
            value = a.value or b""
            if uuid_len == -1:
                uuid_len = len(value)
                w.write_byte_fit((uuid_len + 4) & 0xFF)
            if len(value) != uuid_len:
                break
            service = a.pvt
            w.chunk()
            w.write_uint16_fit(service.handle)
            w.write_uint16_fit(service.end_handle)
            w.write_fit(value)
            if not w.commit():
                break
        if uuid_len == -1:
            return att_error_rsp(
                Opcode.READ_BY_GROUP_REQ, start, AttEcode.ATTR_NOT_FOUND
            )
        return w.getvalue()

    def _handle_write(self, req_type: int, b: bytes) -> Optional[bytes]:
        handle = _u16(b, 0)
        value = b[2:]
        a = self.attrs.get(handle)
        if a is None:
            return att_error_rsp(req_type, handle, AttEcode.INVALID_HANDLE)

        no_rsp = req_type == Opcode.WRITE_CMD
        flag = Property.WRITE_NR if no_rsp else Property.WRITE
        if not a.props & flag:
            return att_error_rsp(req_type, handle, AttEcode.WRITE_NOT_PERM)
        if not a.secure & flag and self.security > Security.LOW:
            return att_error_rsp(req_type, handle, AttEcode.AUTHENTICATION)

        if a.typ != CLIENT_CHARACTERISTIC_CONFIG_UUID:
            if isinstance(a.pvt, (Characteristic, Descriptor)) and a.pvt.write_handler:
                a.pvt.write_handler(Request(central=self), value)
            return None if no_rsp else bytes([Opcode.WRITE_RSP])

        if len(value) != 2:
            return att_error_rsp(req_type, handle, AttEcode.INVAL_ATTR_VALUE_LEN)
        ccc = int.from_bytes(value, "little")
        if ccc & (GATT_CCC_NOTIFY_FLAG | GATT_CCC_INDICATE_FLAG):
            self._start_notify(a, self._mtu - 3)
        else:
            self._stop_notify(a)
        return None if no_rsp else bytes([Opcode.WRITE_RSP])

    def send_notification(self, attr: Attr, data: bytes) -> int:
        """Send a value notification for the characteristic owning attr's CCC."""
        w = L2capWriter(self._mtu)
        w.write_byte_fit(Opcode.HANDLE_NOTIFY)
        w.write_uint16_fit(attr.pvt.characteristic.value_handle)
        w.write_fit(data)
        return self._write(w.getvalue())

    def _start_notify(self, a: Attr, maxlen: int) -> None:
        with self._notifiers_lock:
            if a.handle in self._notifiers:
                return
            char = a.pvt.characteristic
            n = Notifier(self, a, maxlen)
            self._notifiers[a.handle] = n
        if char.notify_handler is not None:
            threading.Thread(
                target=char.notify_handler,
                args=(Request(central=self), n),
                daemon=True,
            ).start()

    def _stop_notify(self, a: Attr) -> None:
        with self._notifiers_lock:
            n = self._notifiers.pop(a.handle, None)
        if n is not None:
            n.stop()