"""Advertising and scan-response packet building and parsing."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum, IntFlag

from .uuids import GAP_UUID, GATT_UUID, UUID

logger = logging.getLogger(__name__)

MAX_EIR_PACKET_LENGTH = 31


class AdType(IntEnum):
    """Advertising data field types."""

    FLAGS = 0x01
    SOME_UUID16 = 0x02
    ALL_UUID16 = 0x03
    SOME_UUID32 = 0x04
    ALL_UUID32 = 0x05
    SOME_UUID128 = 0x06
    ALL_UUID128 = 0x07
    SHORT_NAME = 0x08
    COMPLETE_NAME = 0x09
    TX_POWER = 0x0A
    CLASS_OF_DEVICE = 0x0D
    SIMPLE_PAIRING_C192 = 0x0E
    SIMPLE_PAIRING_R192 = 0x0F
    SEC_MANAGER_TK = 0x10
    SEC_MANAGER_OOB = 0x11
    SLAVE_CONN_INT = 0x12
    SERVICE_SOL16 = 0x14
    SERVICE_SOL128 = 0x15
    SERVICE_DATA16 = 0x16
    PUB_TARGET_ADDR = 0x17
    RAND_TARGET_ADDR = 0x18
    APPEARANCE = 0x19
    ADV_INTERVAL = 0x1A
    LE_DEVICE_ADDR = 0x1B
    LE_ROLE = 0x1C
    SERVICE_SOL32 = 0x1F
    SERVICE_DATA32 = 0x20
    SERVICE_DATA128 = 0x21
    LE_SEC_CONFIRM = 0x22
    LE_SEC_RANDOM = 0x23
    MANUFACTURER_DATA = 0xFF


class AdFlag(IntFlag):
    """Advertising flags field bits."""

    LIMITED_DISCOVERABLE = 0x01
    GENERAL_DISCOVERABLE = 0x02
    LE_ONLY = 0x04
    BOTH_CONTROLLER = 0x08
    BOTH_HOST = 0x10


_SERVICE_LISTS = {
    AdType.SOME_UUID16: 2,
    AdType.ALL_UUID16: 2,
    AdType.SOME_UUID32: 4,
    AdType.ALL_UUID32: 4,
    AdType.SOME_UUID128: 16,
    AdType.ALL_UUID128: 16,
}

_SOLICITED_LISTS = {
    AdType.SERVICE_SOL16: 2,
    AdType.SERVICE_SOL32: 4,
    AdType.SERVICE_SOL128: 16,
}


def _uuid_list(d: bytes, width: int) -> list[UUID]:
    if len(d) % width:
        raise ValueError("invalid advertise data")
    return [UUID(d[i : i + width]) for i in range(0, len(d), width)]


@dataclass
class ServiceData:
    uuid: UUID
    data: bytes


@dataclass
class Advertisement:
    """Fields decoded from a peripheral's advertising data."""

    local_name: str = ""
    manufacturer_data: bytes = b""
    service_data: list[ServiceData] = field(default_factory=list)
    services: list[UUID] = field(default_factory=list)
    overflow_service: list[UUID] = field(default_factory=list)
    tx_power_level: int = 0
    connectable: bool = False
    solicited_service: list[UUID] = field(default_factory=list)

    def unmarshal(self, b: bytes) -> Advertisement:
        """Decode advertising data fields into this advertisement.

        Raises ValueError if the data is malformed.
        """
        b = bytes(b)
        while b:
            if len(b) < 2:
                raise ValueError("invalid advertise data")
            length, typ = b[0], b[1]
            if length == 0 or len(b) < 1 + length:
                raise ValueError("invalid advertise data")
            d = b[2 : 1 + length]
            if typ == AdType.FLAGS:
                pass
            elif typ in _SERVICE_LISTS:
                self.services.extend(_uuid_list(d, _SERVICE_LISTS[typ]))
            elif typ in (AdType.SHORT_NAME, AdType.COMPLETE_NAME):
                self.local_name = d.decode("utf-8", errors="replace")
            elif typ == AdType.TX_POWER:
                if not d:
                    raise ValueError("invalid advertise data")
                self.tx_power_level = d[0]
            elif typ in _SOLICITED_LISTS:
                self.solicited_service.extend(_uuid_list(d, _SOLICITED_LISTS[typ]))
            elif typ == AdType.MANUFACTURER_DATA:
                self.manufacturer_data = d
            else:
                logger.debug("DATA: [ %s ]", d.hex(" ").upper())
            b = b[1 + length :]
        return self


class AdvPacket:
    """Builder for advertising or scan-response data of at most 31 bytes."""

    def __init__(self, data: bytes = b"") -> None:
        self._data = bytearray(data)

    def to_bytes(self) -> bytes:
        """Return exactly 31 bytes: the packet, zero-padded or cut."""
        return bytes(self._data[:MAX_EIR_PACKET_LENGTH]).ljust(
            MAX_EIR_PACKET_LENGTH, b"\x00"
        )

    def __len__(self) -> int:
        return min(len(self._data), MAX_EIR_PACKET_LENGTH)

    def append_field(self, typ: int, b: bytes) -> AdvPacket:
        """Append a length/type/data field, truncating data to fit."""
        b = bytes(b)
        if len(self._data) + 2 + len(b) > MAX_EIR_PACKET_LENGTH:
            room = MAX_EIR_PACKET_LENGTH - len(self._data) - 2
            if room < 0:
                raise ValueError(
                    f"max packet length is {MAX_EIR_PACKET_LENGTH}"
                )
            b = b[:room]
        self._data.append(len(b) + 1)
        self._data.append(typ)
        self._data += b
        return self

    def append_flags(self, flags: int) -> AdvPacket:
        """Append a flags field."""
        return self.append_field(AdType.FLAGS, bytes([flags]))

    def append_name(self, name: str) -> AdvPacket:
        """Append a complete name field, or a shortened one if it does not fit."""
        raw = name.encode("utf-8")
        typ = AdType.COMPLETE_NAME
        if len(self._data) + 2 + len(raw) > MAX_EIR_PACKET_LENGTH:
            typ = AdType.SHORT_NAME
        return self.append_field(typ, raw)

    def append_manufacturer_data(self, company_id: int, b: bytes) -> AdvPacket:
        """Append manufacturer data prefixed by the little-endian company id."""
        return self.append_field(
            AdType.MANUFACTURER_DATA, company_id.to_bytes(2, "little") + bytes(b)
        )

    def append_uuid_fit(self, uuids: list[UUID]) -> bool:
        """Append service UUID fields while they fit; report whether all fit.

        GAP and GATT service UUIDs are never advertised.
        """
        advertised = [u for u in uuids if u != GAP_UUID and u != GATT_UUID]

        total = len(self._data)
        fit = True
        for u in advertised:
            total += 2 + len(u)
            if total > MAX_EIR_PACKET_LENGTH:
                fit = False
                break

        types = {
            (2, True): AdType.ALL_UUID16,
            (16, True): AdType.ALL_UUID128,
            (2, False): AdType.SOME_UUID16,
            (16, False): AdType.SOME_UUID128,
        }
        for u in advertised:
            if len(self._data) + 2 + len(u) > MAX_EIR_PACKET_LENGTH:
                break
            typ = types.get((len(u), fit))
            if typ is not None:
                self.append_field(typ, u.wire)
        return fit