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

"""Transport - HTTP client library support.

:mod:`gmail_client` is designed to work with various HTTP client libraries.
This module provides two interfaces that are implemented by transport
adapters. :class:`Request` defines the interface expected by
:mod:`gmail_client` to make requests. :class:`Response` defines the interface
for the return value of :class:`Request`.

The blocking adapter lives in :mod:`gmail_client.transport.requests`; the
asyncio one in :mod:`gmail_client.transport.aio.aiohttp`.
"""

import abc
import http.client as http_client
from typing import Any, Mapping, Optional


DEFAULT_RETRYABLE_STATUS_CODES = (
    http_client.INTERNAL_SERVER_ERROR,
    http_client.SERVICE_UNAVAILABLE,
    http_client.REQUEST_TIMEOUT,
    http_client.TOO_MANY_REQUESTS,
)


class Response(metaclass=abc.ABCMeta):
    """HTTP Response data."""

    @property
    @abc.abstractmethod
    def status(self) -> int:
        """int: The HTTP status code."""
        raise NotImplementedError("status must be implemented.")

    @property
    @abc.abstractmethod
    def headers(self) -> Mapping[str, str]:
        """Mapping[str, str]: The HTTP response headers."""
        raise NotImplementedError("headers must be implemented.")

    @property
    @abc.abstractmethod
    def data(self) -> bytes:
        """bytes: The response body."""
        raise NotImplementedError("data must be implemented.")


class Request(metaclass=abc.ABCMeta):
    """Interface for a callable that makes HTTP requests.

    Specific transport implementations should provide an implementation of
    this that adapts their specific request / response API.
    """

    @abc.abstractmethod
    def __call__(
        self,
        url: str,
        method: str = "GET",
        body: Optional[bytes] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        **kwargs: Any
    ) -> Response:
        """Make an HTTP request.

        Args:
            url (str): The URI to be requested.
            method (str): The HTTP method to use for the request. Defaults
                to 'GET'.
            body (bytes): The payload or body in HTTP request.
            headers (Mapping[str, str]): Request headers.
            timeout (Optional[float]): The number of seconds to wait for a
                response from the server. If not specified or if None, the
                transport-specific default timeout will be used.
            kwargs: Additionally arguments passed on to the transport's
                request method.

        Returns:
            Response: The HTTP response.

        Raises:
            gmail_client.exceptions.TransportError: If any exception occurred.
        """
        # pylint: disable=redundant-returns-doc, missing-raises-doc
        # (pylint doesn't play well with abstract docstrings.)
        raise NotImplementedError("__call__ must be implemented.")

    def close(self) -> None:
        """Release any resources held by the transport."""
