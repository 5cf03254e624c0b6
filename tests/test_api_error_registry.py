import pytest
from fastapi import HTTPException

from errors import ErrorCode, NOT_FOUND_CODES, error_body, raise_api_error
from license import NotFoundReason


def test_error_codes_are_unique():
    codes = [member.code for member in ErrorCode]
    assert len(codes) == len(set(codes))


def test_every_not_found_reason_has_a_404_code():
    for reason in NotFoundReason:
        assert NOT_FOUND_CODES[reason].status_code == 404


def test_raise_api_error_uses_default_message():
    with pytest.raises(HTTPException) as exc_info:
        raise_api_error(ErrorCode.LICENSE_SOURCE_UNAVAILABLE)
    assert exc_info.value.status_code == 502
    assert exc_info.value.detail == {
        "error_code": "SRC_5001",
        "message": "The license page could not be retrieved.",
        "details": None,
    }


def test_raise_api_error_custom_message_and_details():
    with pytest.raises(HTTPException) as exc_info:
        raise_api_error(ErrorCode.INVALID_EXPIRATION, message="bad", details={"expiration": "x"})
    assert exc_info.value.status_code == 400
    assert exc_info.value.detail["message"] == "bad"
    assert exc_info.value.detail["details"] == {"expiration": "x"}


def test_error_body():
    body = error_body(ErrorCode.INTERNAL_SERVER_ERROR)
    assert body["error_code"] == "SYS_1001"
    assert body["details"] is None
