"""The GATT attribute table and its generation from services."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional

from .model import Characteristic, Descriptor, Property, Service
from .uuids import CHARACTERISTIC_UUID, PRIMARY_SERVICE_UUID, UUID

logger = logging.getLogger(__name__)


@dataclass
class Attr:
    """One attribute: handle, type, permissions, value and owning object."""

    handle: int
    typ: UUID
    props: Property = Property(0)
    secure: Property = Property(0)
    value: Optional[bytes] = None
    pvt: Any = None


class AttrRange:
    """A contiguous run of attributes whose first handle is base."""

    def __init__(self, attrs: Iterable[Attr], base: int) -> None:
        self.attrs = list(attrs)
        self.base = base

    def __len__(self) -> int:
        return len(self.attrs)

    def __iter__(self) -> Iterator[Attr]:
        return iter(self.attrs)

    def get(self, handle: int) -> Optional[Attr]:
        """Return the attribute with the given handle, or None if out of range."""
        index = handle - self.base
        if 0 <= index < len(self.attrs):
            return self.attrs[index]
        return None

    def subrange(self, start: int, end: int) -> list[Attr]:
        """Return the attributes with handles in [start, end]; possibly empty."""
        count = len(self.attrs)
        if start >= self.base + count:
            return []
        stop = end + 1
        if stop < self.base:
            return []
        lo = max(start - self.base, 0)
        hi = min(stop - self.base, count)
        return self.attrs[lo:hi]


def _dump_attributes(attrs: list[Attr]) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug("Generating attribute table:")
    logger.debug("handle\ttype\tprops\tsecure\tpvt\tvalue")
    for a in attrs:
        value = (a.value or b"").hex(" ").upper()
        logger.debug(
            "0x%04X\t0x%s\t0x%02X\t0x%02x\t%s\t[ %s ]",
            a.handle,
            a.typ,
            int(a.props),
            int(a.secure),
            type(a.pvt).__name__,
            value,
        )


def _descriptor_attr(d: Descriptor, handle: int) -> Attr:
    d.handle = handle
    return Attr(handle=handle, typ=d.uuid, props=d.props, value=d.value, pvt=d)


def _characteristic_attrs(c: Characteristic, handle: int) -> tuple[int, list[Attr]]:
    c.handle = handle
    c.value_handle = handle + 1
    vh = c.value_handle
    declaration = Attr(
        handle=c.handle,
        typ=CHARACTERISTIC_UUID,
        props=c.props,
        value=bytes([int(c.props) & 0xFF, vh & 0xFF, (vh >> 8) & 0xFF]) + c.uuid.wire,
        pvt=c,
    )
    value = Attr(handle=vh, typ=c.uuid, props=c.props, value=c.value, pvt=c)
    handle += 2
    attrs = [declaration, value]
    for d in c.descriptors:
        attrs.append(_descriptor_attr(d, handle))
        handle += 1
    return handle, attrs


def _service_attrs(s: Service, handle: int, last: bool) -> tuple[int, list[Attr]]:
    s.handle = handle
    attrs = [
        Attr(
            handle=handle,
            typ=PRIMARY_SERVICE_UUID,
            props=Property.READ,
            value=s.uuid.wire,
            pvt=s,
        )
    ]
    handle += 1
    for c in s.characteristics:
        handle, char_attrs = _characteristic_attrs(c, handle)
        attrs.extend(char_attrs)
    s.end_handle = handle - 1
    if last:
        handle = 0xFFFF
        s.end_handle = handle
    return handle, attrs


def generate_attributes(services: list[Service], base: int) -> AttrRange:
    """Lay out the attribute table for services, assigning handles from base."""
    attrs: list[Attr] = []
    handle = base
    for position, service in enumerate(services):
        handle, service_attrs = _service_attrs(
            service, handle, position == len(services) - 1
        )
        attrs.extend(service_attrs)
    _dump_attributes(attrs)
    return AttrRange(attrs, base)