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

"""Aiohttp transport adapter.

Uses aiohttp as the http client for token exchange and email dispatch.
"""

import asyncio
import logging
from typing import Any, Mapping, Optional

import aiohttp

from gmail_client import exceptions
import gmail_client.transport.aio as aio_transport

_LOGGER = logging.getLogger(__name__)


class Request(aio_transport.Request):
    """Aiohttp transport request adapter.

    Aiohttp recommends using application-wide sessions, so a ClientSession can
    be optionally passed into the creation of these requests. If no session is
    provided, one is created on first use and closed by :meth:`close`.

    Args:
      session: ClientSession which will be used in requests if provided.
    """

    def __init__(self, session: Optional[aiohttp.ClientSession] = None):
        self._session = session
        self._owns_session = session is None

    async def __call__(
        self,
        url: str,
        method: str = "GET",
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        **kwargs: Any
    ) -> aio_transport.Response:
        """Make an HTTP request using aiohttp.

        Args:
          url: The URI to be requested.
          method: The HTTP method to use for the request. Defaults to 'GET'.
          body: The payload / body in HTTP request.
          headers: Request headers.
          timeout: The number of seconds to wait for the whole exchange. If
            None, the aiohttp session default is used.
          **kwargs: Additionally arguments passed on to
            :meth:`aiohttp.ClientSession.request`.

        Returns:
          Response: The HTTP response.

        Raises:
          gmail_client.exceptions.TransportError: If any exception occurred.
        """
        if self._session is None:
            self._session = aiohttp.ClientSession()

        if timeout is not None:
            kwargs["timeout"] = aiohttp.ClientTimeout(total=timeout)

        try:
            _LOGGER.debug("Making request: %s %s", method, url)
            async with self._session.request(
                method, url, data=body, headers=headers, **kwargs
            ) as response:
                content = await response.read()
                return aio_transport.Response(
                    response.status, dict(response.headers), content
                )
        except aiohttp.ClientError as caught_exc:
            new_exc = exceptions.TransportError(caught_exc, retryable=True)
            raise new_exc from caught_exc
        except asyncio.TimeoutError as caught_exc:
            new_exc = exceptions.TransportError(
                "Request to {} timed out.".format(url), retryable=True
            )
            raise new_exc from caught_exc

    async def close(self) -> None:
        """Close the session if it was created by this adapter."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
