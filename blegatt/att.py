"""ATT protocol opcodes, error codes and error responses."""

from __future__ import annotations

from enum import IntEnum

GATT_CCC_NOTIFY_FLAG = 0x0001
GATT_CCC_INDICATE_FLAG = 0x0002


class Opcode(IntEnum):
    ERROR = 0x01
    MTU_REQ = 0x02
    MTU_RSP = 0x03
    FIND_INFO_REQ = 0x04
    FIND_INFO_RSP = 0x05
    FIND_BY_TYPE_VALUE_REQ = 0x06
    FIND_BY_TYPE_VALUE_RSP = 0x07
    READ_BY_TYPE_REQ = 0x08
    READ_BY_TYPE_RSP = 0x09
    READ_REQ = 0x0A
    READ_RSP = 0x0B
    READ_BLOB_REQ = 0x0C
    READ_BLOB_RSP = 0x0D
    READ_MULTI_REQ = 0x0E
    READ_MULTI_RSP = 0x0F
    READ_BY_GROUP_REQ = 0x10
    READ_BY_GROUP_RSP = 0x11
    WRITE_REQ = 0x12
    WRITE_RSP = 0x13
    WRITE_CMD = 0x52
    PREP_WRITE_REQ = 0x16
    PREP_WRITE_RSP = 0x17
    EXEC_WRITE_REQ = 0x18
    EXEC_WRITE_RSP = 0x19
    HANDLE_NOTIFY = 0x1B
    HANDLE_IND = 0x1D
    HANDLE_CNF = 0x1E
    SIGNED_WRITE_CMD = 0xD2


RESPONSE_FOR: dict[Opcode, Opcode] = {
    Opcode.MTU_REQ: Opcode.MTU_RSP,
    Opcode.FIND_INFO_REQ: Opcode.FIND_INFO_RSP,
    Opcode.FIND_BY_TYPE_VALUE_REQ: Opcode.FIND_BY_TYPE_VALUE_RSP,
    Opcode.READ_BY_TYPE_REQ: Opcode.READ_BY_TYPE_RSP,
    Opcode.READ_REQ: Opcode.READ_RSP,
    Opcode.READ_BLOB_REQ: Opcode.READ_BLOB_RSP,
    Opcode.READ_MULTI_REQ: Opcode.READ_MULTI_RSP,
    Opcode.READ_BY_GROUP_REQ: Opcode.READ_BY_GROUP_RSP,
    Opcode.WRITE_REQ: Opcode.WRITE_RSP,
    Opcode.PREP_WRITE_REQ: Opcode.PREP_WRITE_RSP,
    Opcode.EXEC_WRITE_REQ: Opcode.EXEC_WRITE_RSP,
}


class AttEcode(IntEnum):
    SUCCESS = 0x00
    INVALID_HANDLE = 0x01
    READ_NOT_PERM = 0x02
    WRITE_NOT_PERM = 0x03
    INVALID_PDU = 0x04
    AUTHENTICATION = 0x05
    REQ_NOT_SUPP = 0x06
    INVALID_OFFSET = 0x07
    AUTHORIZATION = 0x08
    PREP_QUEUE_FULL = 0x09
    ATTR_NOT_FOUND = 0x0A
    ATTR_NOT_LONG = 0x0B
    INSUFF_ENCR_KEY_SIZE = 0x0C
    INVAL_ATTR_VALUE_LEN = 0x0D
    UNLIKELY = 0x0E
    INSUFF_ENC = 0x0F
    UNSUPP_GRP_TYPE = 0x10
    INSUFF_RESOURCES = 0x11


_ECODE_NAMES: dict[AttEcode, str] = {
    AttEcode.SUCCESS: "success",
    AttEcode.INVALID_HANDLE: "invalid handle",
    AttEcode.READ_NOT_PERM: "read not permitted",
    AttEcode.WRITE_NOT_PERM: "write not permitted",
    AttEcode.INVALID_PDU: "invalid PDU",
    AttEcode.AUTHENTICATION: "insufficient authentication",
    AttEcode.REQ_NOT_SUPP: "request not supported",
    AttEcode.INVALID_OFFSET: "invalid offset",
    AttEcode.AUTHORIZATION: "insufficient authorization",
    AttEcode.PREP_QUEUE_FULL: "prepare queue full",
    AttEcode.ATTR_NOT_FOUND: "attribute not found",
    AttEcode.ATTR_NOT_LONG: "attribute not long",
    AttEcode.INSUFF_ENCR_KEY_SIZE: "insufficient encryption key size",
    AttEcode.INVAL_ATTR_VALUE_LEN: "invalid attribute value length",
    AttEcode.UNLIKELY: "unlikely error",
    AttEcode.INSUFF_ENC: "insufficient encryption",
    AttEcode.UNSUPP_GRP_TYPE: "unsupported group type",
    AttEcode.INSUFF_RESOURCES: "insufficient resources",
}


def ecode_message(code: int) -> str:
    """Describe an ATT error code (a single byte)."""
    if not 0 <= code <= 0xFF:
        raise ValueError(f"ATT error code out of range: {code}")
    if code < 0x11:
        return _ECODE_NAMES[AttEcode(code)]
    if 0x12 <= code <= 0xDF:
        return "reserved error code"
    if 0xE0 <= code <= 0xFF:
        return "profile or service error"
    return "unknown error"


class AttError(Exception):
    """An ATT error response for a request opcode and attribute handle."""

    def __init__(self, opcode: int, handle: int, status: int) -> None:
        self.opcode = opcode
        self.handle = handle
        self.status = status
        super().__init__(ecode_message(status))

    def marshal(self) -> bytes:
        """Encode the error response PDU; the handle is little-endian."""
        return bytes(
            [
                Opcode.ERROR,
                self.opcode & 0xFF,
                self.handle & 0xFF,
                (self.handle >> 8) & 0xFF,
                self.status & 0xFF,
            ]
        )


def att_error_rsp(opcode: int, handle: int, status: int) -> bytes:
    """Return the encoded ATT error response."""
    return AttError(opcode, handle, status).marshal()