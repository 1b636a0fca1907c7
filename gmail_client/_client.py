# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""OAuth 2.0 client for the JWT bearer grant.

This is a client for interacting with an OAuth 2.0 authorization server's
token endpoint, limited to the `JWT Profile for OAuth 2.0 Authorization
Grants`_ that service accounts use.

The request body and the response handling are shared with
:mod:`gmail_client.aio._client`, so the blocking and asyncio forms send the
same bytes and classify errors the same way.

.. _JWT Profile for OAuth 2.0 Authorization Grants:
    https://tools.ietf.org/html/rfc7523#section-2.1
"""

import dataclasses
import datetime
import json
import logging
from typing import Any, Mapping, MutableMapping, Optional, Union
import urllib.parse

from gmail_client import _helpers
from gmail_client import exceptions
from gmail_client import jwt
from gmail_client import transport

_LOGGER = logging.getLogger(__name__)

_JWT_GRANT_TYPE = "urn:ietf:params:oauth:grant-type:jwt-bearer"
_URLENCODED_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclasses.dataclass(frozen=True)
class AccessToken:
    """An OAuth 2.0 bearer token.

    The token value is opaque. It is only ever attached to requests with
    :meth:`apply`.

    Attributes:
        token (str): The bearer token.
        expiry (Optional[datetime.datetime]): When the token stops being
            valid, in UTC, if the token endpoint said so.
    """

    token: str
    expiry: Optional[datetime.datetime] = None

    @property
    def expired(self) -> bool:
        """bool: True if the token has an expiry that is in the past."""
        if self.expiry is None:
            return False
        return _helpers.utcnow() >= self.expiry

    def apply(self, headers: MutableMapping[str, str]) -> None:
        """Apply the token to the authentication header.

        Args:
            headers (MutableMapping[str, str]): The HTTP request headers.
        """
        headers["authorization"] = "Bearer {}".format(self.token)

    def __repr__(self):
        return "AccessToken(token=<redacted>, expiry={!r})".format(self.expiry)


def _assertion_bytes(assertion: Union[jwt.JwtAssertion, str, bytes]) -> bytes:
    if isinstance(assertion, jwt.JwtAssertion):
        return assertion.token
    return _helpers.to_bytes(assertion)


def _token_request_body(assertion: Union[jwt.JwtAssertion, str, bytes]) -> bytes:
    """Builds the form encoded token request body.

    Args:
        assertion (Union[JwtAssertion, str, bytes]): The signed assertion.

    Returns:
        bytes: The ``application/x-www-form-urlencoded`` request body.
    """
    body = urllib.parse.urlencode(
        [
            ("grant_type", _JWT_GRANT_TYPE),
            ("assertion", _helpers.from_bytes(_assertion_bytes(assertion))),
        ]
    )
    return body.encode("utf-8")


def _token_request_headers() -> Mapping[str, str]:
    return {"content-type": _URLENCODED_CONTENT_TYPE}


def _handle_error_response(status: int, response_body: str) -> None:
    """Translates an error response into an exception.

    Args:
        status (int): The HTTP status code.
        response_body (str): The decoded response data.

    Raises:
        gmail_client.exceptions.TokenExchangeError
    """
    try:
        error_data = json.loads(response_body)
        error_details = "{}: {}".format(
            error_data["error"], error_data.get("error_description")
        )
    # If no details could be extracted, use the response data.
    except (KeyError, TypeError, ValueError):
        error_details = response_body

    raise exceptions.TokenExchangeError(
        "Token endpoint returned HTTP {}: {}".format(status, error_details),
        response_body,
        status=status,
        retryable=status in transport.DEFAULT_RETRYABLE_STATUS_CODES,
    )


def _parse_expiry(
    response_data: Mapping[str, Any], now: datetime.datetime
) -> Optional[datetime.datetime]:
    """Parses the expiry field from a response into a datetime.

    Args:
        response_data (Mapping): The JSON-parsed response data.
        now (datetime.datetime): The time the response was received.

    Returns:
        Optional[datetime]: The expiration or ``None`` if no expiration was
            specified.

    Raises:
        ValueError: If ``expires_in`` is not a number of seconds.
        OverflowError: If ``expires_in`` is too large for a datetime.
    """
    expires_in = response_data.get("expires_in", None)
    if expires_in is None:
        return None

    # Some services return expires_in as a string.
    if isinstance(expires_in, str):
        expires_in = float(expires_in)
    if isinstance(expires_in, bool) or not isinstance(expires_in, (int, float)):
        raise ValueError("expires_in is not a number: {!r}".format(expires_in))

    return now + datetime.timedelta(seconds=expires_in)


def _handle_token_response(
    status: int, data: bytes, now: datetime.datetime
) -> AccessToken:
    """Turns a token endpoint response into an :class:`AccessToken`.

    Args:
        status (int): The HTTP status code.
        data (bytes): The raw response body.
        now (datetime.datetime): The time the response was received.

    Returns:
        AccessToken: The access token.

    Raises:
        gmail_client.exceptions.TokenExchangeError: If the status is not 2xx
            or the body does not hold an access token.
    """
    response_body = _helpers.to_bytes(data).decode("utf-8", errors="replace")

    if not 200 <= status < 300:
        _handle_error_response(status, response_body)

    try:
        response_data = json.loads(response_body)
    except ValueError as caught_exc:
        new_exc = exceptions.TokenExchangeError(
            "Token endpoint returned a response that is not JSON.",
            response_body,
            status=status,
        )
        raise new_exc from caught_exc

    if not isinstance(response_data, Mapping):
        raise exceptions.TokenExchangeError(
            "Token endpoint returned a response that is not a JSON object.",
            response_body,
            status=status,
        )

    access_token = response_data.get("access_token")
    if not isinstance(access_token, str) or not access_token:
        raise exceptions.TokenExchangeError(
            "No access token in response.", response_body, status=status
        )

    try:
        expiry = _parse_expiry(response_data, now)
    except (OverflowError, ValueError) as caught_exc:
        new_exc = exceptions.TokenExchangeError(
            "Token endpoint returned an invalid expires_in.",
            response_body,
            status=status,
        )
        raise new_exc from caught_exc

    return AccessToken(token=access_token, expiry=expiry)


def exchange(request, token_uri, assertion, timeout=None, clock=_helpers.utcnow):
    """Redeems a JWT bearer assertion for an access token.

    For more details, see `rfc7523 section 4`_. The request is made exactly
    once; retrying is left to the caller.

    Args:
        request (gmail_client.transport.Request): A callable used to make
            HTTP requests.
        token_uri (str): The OAuth 2.0 authorization server's token endpoint
            URI.
        assertion (Union[JwtAssertion, str, bytes]): The OAuth 2.0 assertion.
        timeout (Optional[float]): Seconds to wait for the token endpoint. If
            None, the transport's default is used.
        clock (Callable[[], datetime.datetime]): Returns the current UTC time,
            used to compute the token expiry.

    Returns:
        AccessToken: The access token.

    Raises:
        gmail_client.exceptions.TokenExchangeError: If the token endpoint
            returned an error or an unusable response.
        gmail_client.exceptions.TransportError: If the token endpoint could
            not be reached.

    .. _rfc7523 section 4: https://tools.ietf.org/html/rfc7523#section-4
    """
    response = request(
        url=token_uri,
        method="POST",
        headers=_token_request_headers(),
        body=_token_request_body(assertion),
        timeout=timeout,
    )
    access_token = _handle_token_response(response.status, response.data, clock())
    _LOGGER.debug("Obtained access token from %s", token_uri)
    return access_token
