# tests/test_response.py

from core.response import ErrorCode, Response


def test_succeed_defaults():
    response = Response.succeed(data={"record": 1})

    assert response.success
    assert response.status_code == 200
    assert response.error is None
    assert response.data == {"record": 1}


def test_fail_defaults_to_empty_payload():
    response = Response.fail(detail="nope", error=ErrorCode.INVALID_FIELD_VALUE)

    assert not response.success
    assert response.status_code == 400
    assert response.detail == "nope"
    assert response.data == {}


def test_not_found():
    response = Response.not_found("No student found.")

    assert response.error == ErrorCode.NOT_FOUND
    assert response.status_code == 404
    assert not hasattr(response, "to_dict")
