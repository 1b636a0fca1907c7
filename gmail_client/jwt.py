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

"""JSON Web Tokens for the OAuth 2.0 JWT bearer grant.

This module builds the signed assertion a service account presents to the
token endpoint (`rfc7523`_) in order to act as a Workspace user::

    from gmail_client import _helpers
    from gmail_client import jwt

    assertion = jwt.build_assertion(
        credential, "someone@example.com", _helpers.utcnow())
    assertion.token  # b'eyJhbGciOiJSUzI1NiIs...'

The time of issue is always supplied by the caller, so the same inputs always
produce the same token.

.. _rfc7523: https://tools.ietf.org/html/rfc7523
"""

from collections.abc import Mapping as CollectionsMapping
import dataclasses
import datetime
import json
import logging
from typing import Any, Mapping, Optional, Tuple, Union, cast

from gmail_client import _helpers
from gmail_client import crypt
from gmail_client import exceptions

_LOGGER = logging.getLogger(__name__)

_DEFAULT_TOKEN_LIFETIME_SECS: int = 3600  # 1 hour in seconds
GMAIL_SEND_SCOPE: str = "https://www.googleapis.com/auth/gmail.send"


@dataclasses.dataclass(frozen=True)
class JwtAssertion:
    """A signed authorization grant assertion.

    Attributes:
        token (bytes): The compact ``header.claims.signature`` JWT.
        issued_at (datetime.datetime): The ``iat`` claim.
        expiry (datetime.datetime): The ``exp`` claim.
    """

    token: bytes
    issued_at: datetime.datetime
    expiry: datetime.datetime

    def __str__(self) -> str:
        return _helpers.from_bytes(self.token)


def _json_segment(value: Mapping[str, Any]) -> bytes:
    serialized = json.dumps(value, separators=(",", ":"))
    return _helpers.unpadded_urlsafe_b64encode(serialized.encode("utf-8"))


def encode(
    signer: crypt.Signer,
    payload: Mapping[str, Any],
    header: Optional[Mapping[str, Any]] = None,
    key_id: Optional[str] = None,
) -> bytes:
    """Make a signed JWT.

    Args:
        signer (gmail_client.crypt.Signer): The signer used to sign the JWT.
        payload (Mapping[str, str]): The JWT payload.
        header (Mapping[str, str]): Additional JWT header payload.
        key_id (str): The key id to add to the JWT header. If the
            signer has a key id it will be used as the default. If this is
            specified it will override the signer's key id.

    Returns:
        bytes: The encoded JWT.

    Raises:
        gmail_client.exceptions.SigningError: If the signer fails.
    """
    if key_id is None:
        key_id = signer.key_id

    jwt_header = {"alg": "RS256", "typ": "JWT"}
    if key_id is not None:
        jwt_header["kid"] = key_id
    jwt_header.update(header or {})

    segments = [_json_segment(jwt_header), _json_segment(payload)]

    signing_input = b".".join(segments)
    try:
        signature = signer.sign(signing_input)
    except Exception as caught_exc:
        new_exc = exceptions.SigningError(
            "Unable to sign JWT assertion: {}".format(caught_exc)
        )
        raise new_exc from caught_exc
    segments.append(_helpers.unpadded_urlsafe_b64encode(signature))

    return b".".join(segments)


def _decode_jwt_segment(encoded_section: bytes) -> Any:
    try:
        section_bytes = _helpers.padded_urlsafe_b64decode(encoded_section)
        return json.loads(section_bytes.decode("utf-8"))
    except ValueError as caught_exc:
        msg = "Can't parse segment: {}".format(
            encoded_section.decode("utf-8", errors="replace")
        )
        raise exceptions.MalformedError(msg) from caught_exc


def _unverified_decode(
    token: Union[str, bytes]
) -> Tuple[Mapping[str, Any], Mapping[str, Any], bytes, bytes]:
    token = _helpers.to_bytes(token)

    if token.count(b".") != 2:
        msg = "Wrong number of segments in token: {}".format(
            token.decode("utf-8", errors="replace")
        )
        raise exceptions.MalformedError(msg)

    encoded_header, encoded_payload, signature = token.split(b".")
    signed_section = encoded_header + b"." + encoded_payload
    try:
        signature = _helpers.padded_urlsafe_b64decode(signature)
    except ValueError as caught_exc:
        raise exceptions.MalformedError("Can't decode signature.") from caught_exc

    header = _decode_jwt_segment(encoded_header)
    payload = _decode_jwt_segment(encoded_payload)

    if not isinstance(header, CollectionsMapping):
        raise exceptions.MalformedError("Header segment should be a JSON object.")

    if not isinstance(payload, CollectionsMapping):
        raise exceptions.MalformedError("Payload segment should be a JSON object.")

    return (
        cast(Mapping[str, Any], header),
        cast(Mapping[str, Any], payload),
        signed_section,
        signature,
    )


def decode_header(token: Union[str, bytes]) -> Mapping[str, Any]:
    """Return the decoded header of a token.

    No verification is done. This is useful to extract the key id from
    the header in order to acquire the appropriate certificate to verify
    the token.

    Args:
        token (Union[str, bytes]): the encoded JWT.

    Returns:
        Mapping: The decoded JWT header.
    """
    header, _, _, _ = _unverified_decode(token)
    return header


def decode_unverified(token: Union[str, bytes]) -> Mapping[str, Any]:
    """Return the decoded claims of a token without verifying its signature.

    Args:
        token (Union[str, bytes]): the encoded JWT.

    Returns:
        Mapping: The decoded JWT claims.

    Raises:
        gmail_client.exceptions.MalformedError: If the token is not a three
            segment JWT with JSON object segments.
    """
    _, payload, _, _ = _unverified_decode(token)
    return payload


def build_assertion(credential, impersonated_email, now):
    """Create the OAuth 2.0 assertion used to request a Gmail send token.

    The assertion is issued by the service account, on behalf of
    ``impersonated_email`` (domain-wide delegation), for the token endpoint
    of the credential.

    Args:
        credential (gmail_client.service_account.ServiceAccountCredential):
            The service account to sign with.
        impersonated_email (str): The mailbox to act as (``sub`` claim).
        now (datetime.datetime): The time of issue, in UTC.

    Returns:
        JwtAssertion: The signed assertion.

    Raises:
        gmail_client.exceptions.SigningError: If the private key cannot
            produce a signature.
    """
    expiry = now + datetime.timedelta(seconds=_DEFAULT_TOKEN_LIFETIME_SECS)

    payload = {
        # The issuer must be the service account email.
        "iss": credential.client_email,
        "sub": impersonated_email,
        "scope": GMAIL_SEND_SCOPE,
        # The audience must be the auth token endpoint's URI
        "aud": credential.token_uri,
        "iat": _helpers.datetime_to_secs(now),
        "exp": _helpers.datetime_to_secs(expiry),
    }

    token = encode(credential.signer, payload)
    _LOGGER.debug(
        "Built JWT assertion for %s as %s", credential.client_email, impersonated_email
    )

    return JwtAssertion(token=token, issued_at=now, expiry=expiry)
