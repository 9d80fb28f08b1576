"""A bounded writer for building L2CAP/ATT response PDUs."""

from __future__ import annotations

from .uuids import UUID


class L2capWriter:
    """Accumulate response bytes without exceeding the connection MTU.

    Bytes can be written directly, truncating at the MTU, or staged in a
    chunk that is kept only if it fits whole when committed.
    """

    def __init__(self, mtu: int) -> None:
        self.mtu = int(mtu)
        self._buf = bytearray()
        self._chunk = bytearray()
        self._chunked = False

    def chunk(self) -> None:
        """Start a new chunk; it is not kept until committed."""
        if self._chunked:
            raise RuntimeError("l2cap writer: chunk called twice without committing")
        self._chunked = True
        self._chunk.clear()

    def commit(self) -> bool:
        """Append the current chunk if it fits whole; report whether it did."""
        if not self._chunked:
            raise RuntimeError("l2cap writer: commit without starting a chunk")
        success = len(self._buf) + len(self._chunk) <= self.mtu
        if success:
            self._buf += self._chunk
        self._chunk.clear()
        self._chunked = False
        return success

    def commit_fit(self) -> None:
        """Append as much of the current chunk as fits, truncating the rest."""
        if not self._chunked:
            raise RuntimeError("l2cap writer: commit_fit without starting a chunk")
        writeable = min(self.mtu - len(self._buf), len(self._chunk))
        self._buf += self._chunk[: max(writeable, 0)]
        self._chunk.clear()
        self._chunked = False

    def write_byte_fit(self, b: int) -> bool:
        """Write a single byte, with the semantics of write_fit."""
        return self.write_fit(bytes([b]))

    def write_uint16_fit(self, v: int) -> bool:
        """Write v as a little-endian 16-bit value, with the semantics of write_fit."""
        return self.write_fit(v.to_bytes(2, "little"))

    def write_uuid_fit(self, u: UUID) -> bool:
        """Write a UUID in its wire byte order, with the semantics of write_fit."""
        return self.write_fit(u.wire)

    def writeable(self, pad: int, b: bytes) -> int:
        """Return how many bytes of b would be written after pad bytes."""
        if self._chunked:
            return len(b)
        avail = self.mtu - len(self._buf) - pad
        if avail > len(b):
            return len(b)
        if avail < 0:
            return 0
        return avail

    def write_fit(self, b: bytes) -> bool:
        """Write as much of b as fits; report whether nothing was truncated.

        While a chunk is in progress every byte goes into the chunk.
        """
        if self._chunked:
            self._chunk += b
            return True
        avail = self.mtu - len(self._buf)
        if avail >= len(b):
            self._buf += b
            return True
        self._buf += b[: max(avail, 0)]
        return False

    def chunk_seek(self, offset: int) -> bool:
        """Drop the first offset bytes of the chunk; report whether there were enough."""
        if not self._chunked:
            raise RuntimeError(
                "l2cap writer: chunk_seek requested without chunked write in progress"
            )
        if len(self._chunk) < offset:
            self._chunk.clear()
            return False
        del self._chunk[:offset]
        return True

    def getvalue(self) -> bytes:
        """Return the bytes written so far; not allowed while a chunk is open."""
        if self._chunked:
            raise RuntimeError(
                "l2cap writer: bytes requested while chunked write in progress"
            )
        return bytes(self._buf)