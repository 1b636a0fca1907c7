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

"""Async Gmail ``users.messages.send`` dispatch.

Coroutine counterparts of the strategies in :mod:`gmail_client._send_email`.
"""

import abc
import logging
import sys
from typing import Optional, TextIO

from gmail_client import _helpers
from gmail_client import _send_email

_LOGGER = logging.getLogger(__name__)


class Dispatcher(metaclass=abc.ABCMeta):
    """Interface for sending one email from a coroutine."""

    @abc.abstractmethod
    async def send(
        self, send_from_email: str, send_to_email: str, subject: str, content: str
    ) -> Optional[_send_email.SentMessage]:
        """Sends an email.

        Args:
            send_from_email (str): The sender.
            send_to_email (str): The recipient.
            subject (str): The subject line.
            content (str): The HTML body.

        Returns:
            Optional[gmail_client._send_email.SentMessage]: The sent message,
                if one was created.

        Raises:
            gmail_client.exceptions.EmailSendError: If Gmail rejected the
                request or answered with an unusable response.
            gmail_client.exceptions.TransportError: If Gmail could not be
                reached.
            gmail_client.exceptions.MalformedError: If a header value holds a
                line break or cannot otherwise be encoded.
        """
        raise NotImplementedError("send must be implemented.")


class GmailDispatcher(Dispatcher):
    """Sends emails through the Gmail API.

    Args:
        request (gmail_client.transport.aio.Request): A coroutine used to
            make HTTP requests.
        token (gmail_client._client.AccessToken): The bearer token for the
            sender's mailbox.
        timeout (Optional[float]): Seconds to wait for Gmail. If None, the
            transport's default is used.
    """

    def __init__(self, request, token, timeout=None):
        self._request = request
        self._token = token
        self._timeout = timeout

    @_helpers.copy_docstring(Dispatcher)
    async def send(self, send_from_email, send_to_email, subject, content):
        # pylint: disable=protected-access
        response = await self._request(
            url=_send_email._send_email_url(),
            method="POST",
            headers=_send_email._send_email_request_headers(self._token),
            body=_send_email._send_email_request_body(
                send_from_email, send_to_email, subject, content
            ),
            timeout=self._timeout,
        )
        sent = _send_email._handle_send_response(response.status, response.data)
        _LOGGER.debug("Sent message %s to %s", sent.id, send_to_email)
        return sent


class MockDispatcher(Dispatcher):
    """Prints emails instead of sending them. Never fails.

    Args:
        stream (Optional[TextIO]): Where to write the email. Defaults to the
            current ``sys.stdout``.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    async def send(self, send_from_email, send_to_email, subject, content):
        """Writes the email to the stream and returns ``None``."""
        _LOGGER.debug("Mock mode: not sending email to %s", send_to_email)
        print(
            _send_email.render_mock_email(
                send_from_email, send_to_email, subject, content
            ),
            file=self._stream or sys.stdout,
        )
        return None
