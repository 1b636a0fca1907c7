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

import base64
import datetime
import json
import os

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding
import mock
import pytest

from gmail_client import _helpers
from gmail_client import crypt
from gmail_client import exceptions
from gmail_client import jwt


DATA_DIR = os.path.join(os.path.dirname(__file__), "data")

with open(os.path.join(DATA_DIR, "privatekey.pem"), "rb") as fh:
    PRIVATE_KEY_BYTES = fh.read()

with open(os.path.join(DATA_DIR, "public_key.pem"), "rb") as fh:
    PUBLIC_KEY_BYTES = fh.read()

SENDER = "sender@example.com"
NOW = datetime.datetime(2026, 1, 1, 12, 0, 0)
NOW_SECS = 1767268800


@pytest.fixture
def signer():
    return crypt.RSASigner.from_string(PRIVATE_KEY_BYTES, "1")


def verify_signature(token):
    signed_section, _, signature = token.rpartition(b".")
    public_key = serialization.load_pem_public_key(PUBLIC_KEY_BYTES)
    public_key.verify(
        _helpers.padded_urlsafe_b64decode(signature),
        signed_section,
        padding.PKCS1v15(),
        hashes.SHA256(),
    )


def test_encode_basic(signer):
    test_payload = {"test": "value"}
    encoded = jwt.encode(signer, test_payload)
    header, payload, _, _ = jwt._unverified_decode(encoded)
    assert payload == test_payload
    assert header == {"typ": "JWT", "alg": "RS256", "kid": signer.key_id}


def test_encode_extra_headers(signer):
    encoded = jwt.encode(signer, {}, header={"extra": "value"})
    header = jwt.decode_header(encoded)
    assert header == {
        "typ": "JWT",
        "alg": "RS256",
        "kid": signer.key_id,
        "extra": "value",
    }


def test_encode_custom_key_id(signer):
    encoded = jwt.encode(signer, {}, key_id="override")
    assert jwt.decode_header(encoded)["kid"] == "override"


def test_encode_no_key_id():
    signer = crypt.RSASigner.from_string(PRIVATE_KEY_BYTES)
    encoded = jwt.encode(signer, {})
    assert jwt.decode_header(encoded) == {"alg": "RS256", "typ": "JWT"}


def test_encode_compact_json(signer):
    encoded = jwt.encode(signer, {"a": 1, "b": "two"})
    header_segment, payload_segment, _ = encoded.split(b".")
    assert _helpers.padded_urlsafe_b64decode(payload_segment) == b'{"a":1,"b":"two"}'
    assert (
        _helpers.padded_urlsafe_b64decode(header_segment)
        == b'{"alg":"RS256","typ":"JWT","kid":"1"}'
    )


def test_encode_signature_verifies(signer):
    verify_signature(jwt.encode(signer, {"test": "value"}))


def test_encode_signer_failure():
    signer = mock.Mock()
    signer.key_id = "1"
    signer.sign.side_effect = ValueError("broken key")

    with pytest.raises(exceptions.SigningError) as excinfo:
        jwt.encode(signer, {})
    assert excinfo.match(r"broken key")


def test_decode_bad_token_wrong_number_of_segments():
    with pytest.raises(ValueError) as excinfo:
        jwt.decode_unverified("1.2")
    assert excinfo.match(r"Wrong number of segments")


def test_decode_bad_token_not_json():
    token = b".".join([base64.urlsafe_b64encode(b"123!")] * 3)
    with pytest.raises(exceptions.MalformedError) as excinfo:
        jwt.decode_unverified(token)
    assert excinfo.match(r"Can\'t parse segment")


def test_decode_bad_token_segment_not_base64():
    # A five character segment cannot be valid base64.
    with pytest.raises(exceptions.MalformedError) as excinfo:
        jwt.decode_header(b"abcde.e30.c2ln")
    assert excinfo.match(r"Can\'t parse segment")


def test_decode_bad_token_not_object(signer):
    token = jwt.encode(signer, [1, 2])
    with pytest.raises(exceptions.MalformedError) as excinfo:
        jwt.decode_unverified(token)
    assert excinfo.match(r"Payload segment should be a JSON object")


def test_build_assertion_claims(credential):
    assertion = jwt.build_assertion(credential, SENDER, NOW)

    assert jwt.decode_unverified(assertion.token) == {
        "iss": credential.client_email,
        "sub": SENDER,
        "scope": "https://www.googleapis.com/auth/gmail.send",
        "aud": credential.token_uri,
        "iat": NOW_SECS,
        "exp": NOW_SECS + 3600,
    }


def test_build_assertion_header(credential):
    assertion = jwt.build_assertion(credential, SENDER, NOW)

    assert jwt.decode_header(assertion.token) == {
        "alg": "RS256",
        "typ": "JWT",
        "kid": credential.private_key_id,
    }


def test_build_assertion_times(credential):
    assertion = jwt.build_assertion(credential, SENDER, NOW)

    assert assertion.issued_at == NOW
    assert assertion.expiry == NOW + datetime.timedelta(seconds=3600)


def test_build_assertion_is_deterministic(credential):
    first = jwt.build_assertion(credential, SENDER, NOW)
    second = jwt.build_assertion(credential, SENDER, NOW)

    assert first.token == second.token
    assert first == second


@pytest.mark.parametrize(
    "now",
    [
        datetime.datetime(1970, 1, 1),
        datetime.datetime(2026, 1, 1, 12, 0, 0),
        datetime.datetime(2099, 12, 31, 23, 59, 59),
    ],
)
def test_build_assertion_lifetime(credential, now):
    claims = jwt.decode_unverified(jwt.build_assertion(credential, SENDER, now).token)

    assert claims["exp"] - claims["iat"] == jwt._DEFAULT_TOKEN_LIFETIME_SECS
    assert claims["exp"] > claims["iat"]


def test_build_assertion_unpadded_segments(credential):
    assertion = jwt.build_assertion(credential, SENDER, NOW)
    segments = assertion.token.split(b".")

    assert len(segments) == 3
    for segment in segments:
        assert b"=" not in segment

    for segment in segments[:2]:
        decoded = _helpers.padded_urlsafe_b64decode(segment)
        assert _helpers.unpadded_urlsafe_b64encode(decoded) == segment
        json.loads(decoded.decode("utf-8"))


def test_build_assertion_signature_verifies(credential):
    verify_signature(jwt.build_assertion(credential, SENDER, NOW).token)


def test_build_assertion_different_senders(credential):
    first = jwt.build_assertion(credential, SENDER, NOW)
    second = jwt.build_assertion(credential, "other@example.com", NOW)

    assert first.token != second.token
    assert jwt.decode_unverified(second.token)["sub"] == "other@example.com"


def test_assertion_str(credential):
    assertion = jwt.build_assertion(credential, SENDER, NOW)
    assert str(assertion) == assertion.token.decode("utf-8")
