"""
Aliyun POP (RPC-style) HMAC-SHA1 request signing.

  canonical      = "&".join(sorted(enc(k) + "=" + enc(v)))   (Signature excluded)
  string_to_sign = "GET" + "&" + enc("/") + "&" + enc(canonical)
  signature      = enc(base64(HMAC-SHA1(secret + "&", string_to_sign)))

enc() is form-style percent-encoding with three corrections applied on top:
"+" -> "%20", "*" -> "%2A", "%7E" -> "~". The server recomputes all of this
independently, so every byte matters.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import urllib.parse
from dataclasses import dataclass
from typing import Mapping

SIGNATURE_KEY = "Signature"
HTTP_METHOD = "GET"
RESOURCE_PATH = "/"


def special_url_encode(value: str) -> str:
    """Percent-encode a key or value the way the POP verifier does."""
    encoded = urllib.parse.quote_plus(str(value), safe="")
    encoded = encoded.replace("+", "%20")
    encoded = encoded.replace("*", "%2A")
    encoded = encoded.replace("%7E", "~")
    return encoded


def canonical_query_string(params: Mapping[str, str]) -> str:
    """
    Build the sorted, encoded query string that gets signed.

    Pairs are ordered by the encoded key, not the raw one. Any Signature
    entry is dropped.
    """
    pairs = [
        (special_url_encode(k), special_url_encode(v))
        for k, v in params.items()
        if k != SIGNATURE_KEY
    ]
    pairs.sort(key=lambda p: p[0])
    return "&".join(f"{k}={v}" for k, v in pairs)


def string_to_sign(canonical: str, method: str = HTTP_METHOD, path: str = RESOURCE_PATH) -> str:
    return f"{method.upper()}&{special_url_encode(path)}&{special_url_encode(canonical)}"


def compute_signature(
    canonical: str,
    access_key_secret: str,
    method: str = HTTP_METHOD,
    path: str = RESOURCE_PATH,
) -> str:
    """
    Sign a canonical query string.

    Args:
        canonical: Output of canonical_query_string()
        access_key_secret: Account secret (the "&" suffix is added here)
        method: HTTP method token
        path: Resource path

    Returns:
        Signature already escaped for direct use as the Signature query value.
    """
    payload = string_to_sign(canonical, method, path)
    digest = hmac.new(
        f"{access_key_secret}&".encode("utf-8"),
        payload.encode("utf-8"),
        hashlib.sha1,
    ).digest()
    sig_b64 = base64.b64encode(digest).decode("utf-8")
    return special_url_encode(sig_b64)


@dataclass(frozen=True)
class PopAuth:
    """Credential pair plus the POP signing routine."""

    access_key_id: str
    access_key_secret: str

    def sign(self, params: Mapping[str, str]) -> tuple[str, str]:
        """Return (escaped signature, canonical query string) for a parameter set."""
        canonical = canonical_query_string(params)
        return compute_signature(canonical, self.access_key_secret), canonical

    def __repr__(self) -> str:
        return f"PopAuth(access_key_id={self.access_key_id!r}, access_key_secret='***')"
