"""
Unit tests for client/models.py.
"""

import dataclasses

import pytest

from client.models import DecodeError, Response


class TestResponse:
    def test_from_dict(self):
        resp = Response.from_dict({
            "RequestId": "8906582E-6722",
            "Code": "OK",
            "Message": "OK",
            "BizId": "134523^4351232",
        })
        assert resp == Response(
            request_id="8906582E-6722", code="OK", message="OK", biz_id="134523^4351232",
        )

    def test_null_and_missing_become_empty(self):
        resp = Response.from_dict({"Code": None})
        assert resp.code == ""
        assert resp.message == ""
        assert resp.call_id == ""

    @pytest.mark.parametrize("body", [
        {"Code": 404, "RequestId": "r"},
        {"Code": {"x": 1}},
        {"Code": "OK", "BizId": 12345},
        {"Code": "OK", "Message": ["a"]},
        {"Code": True},
    ])
    def test_non_string_field_raises(self, body):
        with pytest.raises(DecodeError):
            Response.from_dict(body)

    def test_immutable(self):
        resp = Response(code="OK")
        with pytest.raises(dataclasses.FrozenInstanceError):
            resp.code = "X"

    @pytest.mark.parametrize("code,expected", [
        ("OK", True),
        ("ok", True),
        ("Ok", True),
        ("SignatureDoesNotMatch", False),
        ("", False),
    ])
    def test_ok(self, code, expected):
        assert Response(code=code).ok is expected
