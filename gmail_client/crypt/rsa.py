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

"""RSA signer backed by the ``cryptography`` library."""

from typing import Optional, Union

from cryptography import exceptions as crypto_exceptions
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric import rsa

from gmail_client import _helpers
from gmail_client.crypt import base

_PADDING = padding.PKCS1v15()
_SHA256 = hashes.SHA256()


class RSASigner(base.Signer):
    """Signs messages with an RSA private key using RS256
    (RSASSA-PKCS1-v1_5 with SHA-256).

    Args:
        private_key (cryptography.hazmat.primitives.asymmetric.rsa.RSAPrivateKey):
            The private key to sign with.
        key_id (str): Optional key ID used to identify this private key. This
            can be useful to associate the private key with its associated
            public key or certificate.
    """

    def __init__(self, private_key: rsa.RSAPrivateKey, key_id: Optional[str] = None):
        self._key = private_key
        self._key_id = key_id

    @property  # type: ignore
    @_helpers.copy_docstring(base.Signer)
    def key_id(self):
        return self._key_id

    @_helpers.copy_docstring(base.Signer)
    def sign(self, message):
        message = _helpers.to_bytes(message)
        return self._key.sign(message, _PADDING, _SHA256)

    @classmethod
    def from_string(
        cls, key: Union[str, bytes], key_id: Optional[str] = None
    ) -> "RSASigner":
        """Construct a Signer instance from a private key in PEM format.

        Args:
            key (Union[str, bytes]): Private key in PEM format.
            key_id (str): An optional key id used to identify the private key.

        Returns:
            gmail_client.crypt.RSASigner: The constructed signer.

        Raises:
            ValueError: If the key cannot be parsed as an unencrypted PKCS#1
                or PKCS#8 RSA private key in PEM format.
        """
        key = _helpers.to_bytes(key)
        try:
            private_key = serialization.load_pem_private_key(key, password=None)
        except (TypeError, crypto_exceptions.UnsupportedAlgorithm) as caught_exc:
            # Password protected keys and unknown key formats.
            raise ValueError(str(caught_exc)) from caught_exc

        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise ValueError(
                "Expected an RSA private key, got {}.".format(
                    type(private_key).__name__
                )
            )

        return cls(private_key, key_id=key_id)
