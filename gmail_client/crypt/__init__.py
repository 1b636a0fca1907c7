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

"""Cryptography helpers for signing JWT assertions.

A :class:`Signer` produces a signature over arbitrary bytes. Service account
credentials are always RSA keys, so :class:`RSASigner` is the only
implementation::

    from gmail_client import crypt

    signer = crypt.RSASigner.from_string(private_key_pem, key_id="1")
    signature = signer.sign(b"header.payload")
"""

from gmail_client.crypt import base
from gmail_client.crypt import rsa

Signer = base.Signer
RSASigner = rsa.RSASigner

__all__ = ["RSASigner", "Signer"]
