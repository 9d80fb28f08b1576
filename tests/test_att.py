import pytest

from blegatt.att import (
    RESPONSE_FOR,
    AttEcode,
    AttError,
    Opcode,
    att_error_rsp,
    ecode_message,
)


def test_error_rsp_unsupported_request():
    assert att_error_rsp(0xFF, 0x0000, AttEcode.REQ_NOT_SUPP) == bytes.fromhex(
        "01ff000006"
    )


def test_error_rsp_unsupported_group_type():
    rsp = att_error_rsp(Opcode.READ_BY_GROUP_REQ, 1, AttEcode.UNSUPP_GRP_TYPE)
    assert rsp == bytes.fromhex("0110010010")


def test_error_rsp_attr_not_found():
    rsp = att_error_rsp(Opcode.READ_BY_TYPE_REQ, 4, AttEcode.ATTR_NOT_FOUND)
    assert rsp == bytes.fromhex("010804000a")


def test_error_handle_is_little_endian():
    rsp = AttError(Opcode.READ_REQ, 0x1234, AttEcode.INVALID_HANDLE).marshal()
    assert rsp[0] == Opcode.ERROR
    assert int.from_bytes(rsp[2:4], "little") == 0x1234
    assert len(rsp) == 5


def test_att_error_is_exception_with_message():
    err = AttError(Opcode.READ_REQ, 3, AttEcode.READ_NOT_PERM)
    assert "read not permitted" in str(err)
    assert err.status == AttEcode.READ_NOT_PERM
    assert err.handle == 3
    assert err.marshal() == bytes.fromhex("010a030002")


@pytest.mark.parametrize(
    "code, message",
    [
        (AttEcode.SUCCESS, "success"),
        (AttEcode.INVALID_OFFSET, "invalid offset"),
        (AttEcode.UNSUPP_GRP_TYPE, "unsupported group type"),
        (0x12, "reserved error code"),
        (0x80, "reserved error code"),
        (0xA0, "reserved error code"),
        (0xE0, "profile or service error"),
        (0xFF, "profile or service error"),
    ],
)
def test_ecode_message(code, message):
    assert ecode_message(code) == message


def test_ecode_message_out_of_range():
    with pytest.raises(ValueError):
        ecode_message(0x100)


def test_response_for_maps_to_next_opcode():
    for req, rsp in RESPONSE_FOR.items():
        assert rsp == req + 1
    assert RESPONSE_FOR[Opcode.WRITE_REQ] == Opcode.WRITE_RSP