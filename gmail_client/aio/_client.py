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

"""Async OAuth 2.0 client for the JWT bearer grant.

Coroutine counterpart of :mod:`gmail_client._client`. The request body and
response handling are the blocking module's.
"""

import logging

from gmail_client import _client
from gmail_client import _helpers

_LOGGER = logging.getLogger(__name__)


async def exchange(request, token_uri, assertion, timeout=None, clock=_helpers.utcnow):
    """Redeems a JWT bearer assertion for an access token.

    Args:
        request (gmail_client.transport.aio.Request): A coroutine used to
            make HTTP requests.
        token_uri (str): The OAuth 2.0 authorization server's token endpoint
            URI.
        assertion (Union[JwtAssertion, str, bytes]): The OAuth 2.0 assertion.
        timeout (Optional[float]): Seconds to wait for the token endpoint. If
            None, the transport's default is used.
        clock (Callable[[], datetime.datetime]): Returns the current UTC time,
            used to compute the token expiry.

    Returns:
        gmail_client._client.AccessToken: The access token.

    Raises:
        gmail_client.exceptions.TokenExchangeError: If the token endpoint
            returned an error or an unusable response.
        gmail_client.exceptions.TransportError: If the token endpoint could
            not be reached.
    """
    # pylint: disable=protected-access
    response = await request(
        url=token_uri,
        method="POST",
        headers=_client._token_request_headers(),
        body=_client._token_request_body(assertion),
        timeout=timeout,
    )
    access_token = _client._handle_token_response(
        response.status, response.data, clock()
    )
    _LOGGER.debug("Obtained access token from %s", token_uri)
    return access_token
