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

"""Exceptions used in the gmail_client package."""

from typing import Any, Optional


class GmailClientError(Exception):
    """Base class for all gmail_client errors."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args)
        self._retryable: bool = kwargs.get("retryable", False)

    @property
    def retryable(self) -> bool:
        return self._retryable


class CredentialParseError(GmailClientError, ValueError):
    """Used to indicate that a service account document is malformed or
    incomplete."""


class SigningError(GmailClientError):
    """Used to indicate that the private key could not sign an assertion."""


class TransportError(GmailClientError):
    """Used to indicate an error occurred during an HTTP request."""


class _ResponseError(GmailClientError):
    """An endpoint was reachable but its response could not be used.

    Args:
        message (str): A description of the failure.
        response_body (str): The raw response text, as received.
        status (Optional[int]): The HTTP status code of the response.
    """

    def __init__(
        self,
        message: str,
        response_body: str,
        status: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, response_body, **kwargs)
        self.response_body = response_body
        self.status = status


class TokenExchangeError(_ResponseError):
    """Used to indicate the OAuth 2.0 token endpoint returned an error or a
    response without an access token."""


class EmailSendError(_ResponseError):
    """Used to indicate the Gmail send endpoint returned an error or an
    unparseable response."""


class MalformedError(GmailClientError, ValueError):
    """An exception for malformed data, such as an undecodable JWT or an
    email header that cannot be encoded."""

    def __init__(self, message: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message or "Malformed input.", **kwargs)
