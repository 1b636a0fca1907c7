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

"""Async HTTP client library support.

Interfaces for asynchronous HTTP libraries. This provides a request adapter for
libraries built on top of asyncio, where HTTP requests are written as
coroutines.
"""

import abc
from typing import Any, Mapping, Optional


class Response(object):
    """HTTP Response data, fully read.

    Args:
        status (int): The HTTP status code.
        headers (Mapping[str, str]): The HTTP response headers.
        data (bytes): The response body.
    """

    def __init__(
        self,
        status: int,
        headers: Optional[Mapping[str, str]] = None,
        data: bytes = b"",
    ):
        self.status = status
        self.headers = headers or {}
        self.data = data


class Request(metaclass=abc.ABCMeta):
    """Interface for a callable that makes HTTP requests.

    Specific transport implementations should provide an implementation of
    this that adapts their specific request / response API.
    """

    @abc.abstractmethod
    async def __call__(
        self,
        url: str,
        method: str = "GET",
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        **kwargs: Any
    ) -> Response:
        """Make an HTTP request.

        Same as :class:`gmail_client.transport.Request`, but the call is a
        coroutine and the returned response body is already read.

        Args:
          url: The URI to be requested.
          method: The HTTP method to use for the request. Defaults to 'GET'.
          body: The payload / body in HTTP request.
          headers: Request headers.
          timeout: The number of seconds to wait for the whole exchange. If
            None, the transport's default is used.
          **kwargs: Additionally arguments passed on to the transport's request
            method.

        Returns:
          Response: The HTTP response.

        Raises:
          gmail_client.exceptions.TransportError: If any exception occurred.
        """
        raise NotImplementedError("__call__ must be implemented.")

    async def close(self) -> None:
        """Release any resources held by the transport."""
