"""
Response model for POP API calls. Pure data, no behavior beyond decoding.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


class PopError(Exception):
    """Base class for local (non-business) failures of a POP call."""
    pass


class TransportError(PopError):
    """Request could not be built, sent, or its body read. No Response exists."""
    pass


class DecodeError(PopError):
    """Response body is not a JSON object of string fields."""
    pass


def _str_field(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"Expected string for {key}, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Response:
    """Decoded response body. Code is "OK" on success, e.g. "SignatureDoesNotMatch" otherwise."""

    request_id: str = ""
    code: str = ""
    message: str = ""
    biz_id: str = ""  # SMS only; use it to query delivery status
    call_id: str = ""  # voice calls only

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Response:
        """Map the JSON body onto a Response. Unknown keys ignored, missing keys -> ""."""
        return cls(
            request_id=_str_field(data, "RequestId"),
            code=_str_field(data, "Code"),
            message=_str_field(data, "Message"),
            biz_id=_str_field(data, "BizId"),
            call_id=_str_field(data, "CallId"),
        )

    @property
    def ok(self) -> bool:
        return self.code.upper() == "OK"
