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

"""Asyncio client that sends email as a Workspace user.

Created by :meth:`gmail_client.client.GmailClientBuilder.build_async`::

    async with await builder.build_async() as client:
        await client.send_email("you@example.com", "Hi", "<p>hello</p>")
"""


class GmailClient(object):
    """An asyncio client ready to send emails through the Gmail API.

    Instances are immutable; concurrent :meth:`send_email` calls are safe.

    Args:
        send_from_email (str): The mailbox emails are sent as.
        token (gmail_client._client.AccessToken): The access token.
        dispatcher (gmail_client.aio._send_email.Dispatcher): Sends the
            emails.
        mock_mode (bool): Whether ``dispatcher`` only prints emails.
        request (Optional[gmail_client.transport.aio.Request]): A transport
            owned by this client, closed by :meth:`close`.
    """

    def __init__(
        self, send_from_email, token, dispatcher, mock_mode=False, request=None
    ):
        self._send_from_email = send_from_email
        self._token = token
        self._dispatcher = dispatcher
        self._mock_mode = mock_mode
        self._request = request

    @property
    def send_from_email(self):
        """str: The mailbox emails are sent as."""
        return self._send_from_email

    @property
    def token(self):
        """gmail_client._client.AccessToken: The access token."""
        return self._token

    @property
    def mock_mode(self):
        """bool: Whether emails are printed instead of sent."""
        return self._mock_mode

    async def send_email(self, send_to_email, subject, content):
        """Send an HTML email.

        Args:
            send_to_email (str): The recipient.
            subject (str): The subject line.
            content (str): The HTML body.

        Returns:
            Optional[gmail_client._send_email.SentMessage]: The sent message,
                or None in mock mode.

        Raises:
            gmail_client.exceptions.EmailSendError: If Gmail rejected the
                email or answered with an unusable response.
            gmail_client.exceptions.TransportError: If Gmail could not be
                reached.
            gmail_client.exceptions.MalformedError: If a header value holds a
                line break or cannot otherwise be encoded.
        """
        return await self._dispatcher.send(
            self._send_from_email, send_to_email, subject, content
        )

    async def close(self):
        """Close the transport, if this client owns it."""
        if self._request is not None:
            await self._request.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_value, traceback):
        await self.close()
