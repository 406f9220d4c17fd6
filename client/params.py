"""
Request parameters for POP API calls.

A parameter set is a plain dict[str, str] built fresh for every call:
defaults first, then caller overrides (Param), then required fields.
Overrides are inspectable (key, value) records instead of callbacks.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Mapping, Sequence


@dataclass(frozen=True)
class Param:
    """A single override: set `key` to `value`, replacing any earlier value."""

    key: str
    value: str


def gen_timestamp(dt: datetime) -> str:
    """
    Format a timestamp as YYYY-MM-DDThh:mm:ssZ in UTC.
    Naive datetimes are interpreted as local time.
    """
    gmt = dt.astimezone(timezone.utc)
    return (
        f"{gmt.year:04d}-{gmt.month:02d}-{gmt.day:02d}"
        f"T{gmt.hour:02d}:{gmt.minute:02d}:{gmt.second:02d}Z"
    )


def gen_phone_numbers_str(nums: Iterable[str]) -> str:
    """Join phone numbers with "," (no leading/trailing delimiter)."""
    return ",".join(nums)


def apply_params(base: Mapping[str, str], params: Sequence[Param]) -> dict[str, str]:
    """Return a copy of `base` with every override applied in order."""
    result = dict(base)
    for param in params:
        result[param.key] = param.value
    return result


# -- Common parameters --

def timestamp(dt: datetime) -> Param:
    """Use a fixed timestamp instead of the current time."""
    return Param("Timestamp", gen_timestamp(dt))


def signature_method(method: str) -> Param:
    """Default: HMAC-SHA1."""
    return Param("SignatureMethod", method)


def signature_version(ver: str) -> Param:
    """Default: 1.0."""
    return Param("SignatureVersion", ver)


def signature_nonce(nonce: str) -> Param:
    """Use a caller-supplied nonce instead of a generated UUID."""
    return Param("SignatureNonce", nonce)


def action(name: str) -> Param:
    return Param("Action", name)


def version(ver: str) -> Param:
    return Param("Version", ver)


def region_id(region: str) -> Param:
    """Default: cn-hangzhou."""
    return Param("RegionId", region)


# -- SMS parameters --

def out_id(value: str) -> Param:
    """Caller-side tracking ID echoed back in delivery receipts."""
    return Param("OutId", value)


def phone_numbers(nums: Iterable[str]) -> Param:
    return Param("PhoneNumbers", gen_phone_numbers_str(nums))
