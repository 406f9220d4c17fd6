"""
Base client for Aliyun POP (RPC-style) APIs: one signed GET per call.

Each call builds its own parameter set (defaults -> overrides -> required
fields), signs it, and decodes the JSON body. Only the httpx transport is
shared between calls, so one client can be used from several threads.
No retries: every call is a single attempt.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Mapping, Sequence

import httpx

from client.models import DecodeError, PopError, Response, TransportError
from client.params import Param, apply_params, gen_timestamp
from client.pop_auth import SIGNATURE_KEY, PopAuth

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
DEFAULT_REGION_ID = "cn-hangzhou"


def _new_nonce() -> str:
    return str(uuid.uuid4())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def decode_response(body: bytes) -> Response:
    """Decode a response body. Raises DecodeError on anything but a JSON object."""
    try:
        data = json.loads(body)
    except ValueError as e:
        raise DecodeError(f"Response body is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise DecodeError(f"Expected JSON object, got {type(data).__name__}")
    return Response.from_dict(data)


class PopClient:
    """
    Signs and sends POP requests to a single service endpoint.

    Subclasses set ACTION and VERSION and expose typed operations on top
    of call().

    `timeout` only applies to the httpx.Client created here. An injected
    `http` client keeps its own timeout and is not closed by close().
    """

    ACTION = ""
    VERSION = ""

    def __init__(
        self,
        access_key_id: str,
        access_key_secret: str,
        endpoint: str,
        region_id: str = DEFAULT_REGION_ID,
        http: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        clock: Callable[[], datetime] | None = None,
        nonce_factory: Callable[[], str] | None = None,
    ) -> None:
        self._auth = PopAuth(access_key_id, access_key_secret)
        self._endpoint = endpoint if endpoint.endswith("/") else endpoint + "/"
        self._region_id = region_id
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(timeout=timeout)
        self._clock = clock or _utc_now
        self._nonce_factory = nonce_factory or _new_nonce

    @property
    def access_key_id(self) -> str:
        return self._auth.access_key_id

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def default_params(self) -> dict[str, str]:
        """Common and service defaults. Generates a fresh timestamp and nonce."""
        nonce = self._nonce_factory()
        if not nonce:
            raise ValueError("Nonce factory returned an empty SignatureNonce")
        return {
            "Timestamp": gen_timestamp(self._clock()),
            "Format": "JSON",
            "SignatureMethod": "HMAC-SHA1",
            "SignatureVersion": "1.0",
            "SignatureNonce": nonce,
            "Action": self.ACTION,
            "Version": self.VERSION,
            "RegionId": self._region_id,
        }

    def build_params(
        self,
        required: Mapping[str, str],
        params: Sequence[Param] = (),
    ) -> dict[str, str]:
        """
        Build the call's parameter set.

        Required fields (AccessKeyId plus the operation's business fields)
        are written last, so overrides can never replace them.
        """
        values = apply_params(self.default_params(), params)
        values["AccessKeyId"] = self._auth.access_key_id
        values.update(required)
        return values

    def signed_url(
        self,
        required: Mapping[str, str],
        params: Sequence[Param] = (),
    ) -> str:
        """Build, sign and assemble the request URL without sending it."""
        values = self.build_params(required, params)
        signature, canonical = self._auth.sign(values)
        logger.debug("POP canonical query for %s: %s", values.get("Action"), canonical)
        return f"{self._endpoint}?{SIGNATURE_KEY}={signature}&{canonical}"

    def call(
        self,
        required: Mapping[str, str],
        params: Sequence[Param] = (),
    ) -> tuple[bool, Response]:
        """
        Perform one signed GET.

        Returns (ok, response). ok is False for business failures such as
        "SignatureDoesNotMatch"; those are not raised.

        Raises:
            TransportError: URL, connection, or body read failure.
            DecodeError: Body is not a JSON object.
        """
        url = self.signed_url(required, params)
        try:
            resp = self._http.get(url)
            body = resp.content
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"POP request to {self._endpoint} failed: {e}") from e

        response = decode_response(body)
        ok = response.ok
        if ok:
            logger.info(
                "%s ok (request_id=%s, id=%s)",
                self.ACTION, response.request_id, response.biz_id or response.call_id,
            )
        else:
            logger.warning(
                "%s rejected: HTTP %d, code=%s, message=%s (request_id=%s)",
                self.ACTION, resp.status_code, response.code, response.message,
                response.request_id,
            )
        return ok, response

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> PopClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
