import io

import pytest

from panpcs.pcserror import (
    STR_SUCCESS,
    DlinkErrInfo,
    ErrType,
    PanErrorInfo,
    PCSErrInfo,
    decode_pan_json_error,
    decode_pcs_json_error,
    find_pan_err,
    find_pcs_err,
    handle_json_parse,
)


def test_find_pcs_err_known_codes():
    assert find_pcs_err(31066, "file does not exist") == (31066, "文件或目录不存在")
    assert find_pcs_err(31079, "x") == (31079, "秒传文件失败")
    assert find_pcs_err(0, "anything") == (0, "")


def test_find_pcs_err_passes_unknown_through():
    assert find_pcs_err(12345, "raw message") == (12345, "raw message")


def test_find_pcs_err_user_not_exists_keeps_message():
    code, msg = find_pcs_err(31045, "user not exists")
    assert code == 31045
    assert msg.endswith("user not exists")


def test_find_pan_err():
    assert find_pan_err(-9) == "文件不存在"
    assert find_pan_err(113) == "签名错误"
    assert find_pan_err(0) == STR_SUCCESS
    assert find_pan_err(987654) == "未知错误"


def test_handle_json_parse_success_returns_object():
    info = PCSErrInfo("op")
    obj = handle_json_parse("op", b'{"quota": 10, "used": 3}', info)
    assert obj["quota"] == 10
    assert info.err_type == ErrType.NO_ERROR


def test_handle_json_parse_remote_error_raises_info():
    info = PCSErrInfo("list")
    with pytest.raises(PCSErrInfo) as excinfo:
        handle_json_parse("list", b'{"error_code": 31066, "error_msg": "file does not exist"}', info)
    assert excinfo.value is info
    assert info.err_type == ErrType.REMOTE
    assert info.remote_err_code() == 31066
    assert info.remote_err_msg() == "文件或目录不存在"
    assert "文件或目录不存在" in str(info)
    assert str(info).startswith("list: ")


def test_handle_json_parse_bad_json():
    with pytest.raises(PCSErrInfo) as excinfo:
        handle_json_parse("meta", "{not json", None)
    assert excinfo.value.err_type == ErrType.JSON_PARSE
    assert excinfo.value.operation == "meta"
    assert excinfo.value.err is not None and str(excinfo.value).startswith("meta: json 数据解析失败")


def test_handle_json_parse_wrong_field_type_is_json_error():
    info = PanErrorInfo("op")
    with pytest.raises(PanErrorInfo) as excinfo:
        handle_json_parse("op", '{"errno": "abc"}', info)
    assert excinfo.value.err_type == ErrType.JSON_PARSE


def test_handle_json_parse_reads_file_like():
    stream = io.BytesIO(b'{"errno": -9}')
    with pytest.raises(PanErrorInfo) as excinfo:
        decode_pan_json_error("share", stream)
    assert excinfo.value.remote_err_code() == -9
    assert excinfo.value.remote_err_msg() == "文件不存在"


def test_decode_pcs_json_error_without_error():
    assert decode_pcs_json_error("mkdir", b'{"path": "/a"}') == {"path": "/a"}


def test_dlink_remote_message():
    info = DlinkErrInfo("dlink")
    with pytest.raises(DlinkErrInfo):
        handle_json_parse("dlink", '{"errno": 5, "msg": "bad"}', info)
    assert info.remote_err_msg() == "bad"
    assert str(info).endswith("消息: bad")


def test_str_without_operation_uses_err():
    info = PCSErrInfo("", ErrType.OTHERS, ValueError("boom"))
    assert str(info) == "boom"
    assert str(PCSErrInfo("")) == STR_SUCCESS


def test_str_others_and_net():
    assert str(PanErrorInfo("op", ErrType.OTHERS)) == "op: " + STR_SUCCESS
    assert str(PanErrorInfo("op", ErrType.OTHERS, ValueError("bad"))) == "op, 遇到错误, bad"
    info = PCSErrInfo("op")
    info.set_net_error(OSError("down"))
    assert info.err_type == ErrType.NET
    assert str(info) == "op: 网络错误, down"


def test_str_remote_with_zero_code_is_success():
    info = PCSErrInfo("op")
    info.set_remote_error()
    assert str(info) == "op: " + STR_SUCCESS


def test_str_unknown_type_raises():
    with pytest.raises(ValueError):
        str(PCSErrInfo("op"))