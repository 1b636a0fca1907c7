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

"""Clients that send email as a Workspace user.

Build a client from a service account key and the address to send as. The
build step exchanges a signed JWT assertion for an access token, so it makes
one request to the token endpoint::

    from gmail_client import GmailClient

    client = GmailClient.builder(service_account_json, "me@example.com").build()
    client.send_email("you@example.com", "Hi", "<p>hello</p>")

The same builder produces an asyncio client::

    client = await GmailClient.builder(
        service_account_json, "me@example.com").build_async()
    await client.send_email("you@example.com", "Hi", "<p>hello</p>")

In mock mode the email is printed instead of sent::

    client = GmailClient.builder(key, "me@example.com").mock_mode(True).build()

The access token is never refreshed. Once :attr:`GmailClient.token` has
expired, build a new client.
"""

import logging

from gmail_client import _client
from gmail_client import _helpers
from gmail_client import _send_email
from gmail_client import jwt
from gmail_client import service_account
from gmail_client.aio import _client as _aio_client
from gmail_client.aio import _send_email as _aio_send_email
from gmail_client.aio import client as aio_client
import gmail_client.transport.aio.aiohttp
import gmail_client.transport.requests

_LOGGER = logging.getLogger(__name__)


class GmailClientBuilder(object):
    """Configures and builds :class:`GmailClient` instances.

    The service account document is parsed immediately, so configuration
    errors surface here rather than at build time.

    Args:
        service_account_json (Union[str, ServiceAccountCredential]): The
            service account key document, or an already parsed credential.
        send_from_email (str): The mailbox to send as. The service account
            must have domain-wide delegation for it.

    Raises:
        gmail_client.exceptions.CredentialParseError: If the document is
            malformed or incomplete.
    """

    def __init__(self, service_account_json, send_from_email):
        if isinstance(service_account_json, service_account.ServiceAccountCredential):
            self._credential = service_account_json
        else:
            self._credential = service_account.load_from_str(service_account_json)
        self._send_from_email = send_from_email
        self._mock_mode = False
        self._mock_stream = None
        self._timeout = None
        self._clock = _helpers.utcnow

    @classmethod
    def from_file(cls, filename, send_from_email):
        """Creates a builder from a service account JSON file.

        Args:
            filename (str): The path to the service account .json file.
            send_from_email (str): The mailbox to send as.

        Returns:
            GmailClientBuilder: The builder.
        """
        return cls(
            service_account.ServiceAccountCredential.from_file(filename),
            send_from_email,
        )

    @classmethod
    def from_info(cls, info, send_from_email):
        """Creates a builder from parsed service account info.

        Args:
            info (Mapping[str, str]): The service account info in Google
                format.
            send_from_email (str): The mailbox to send as.

        Returns:
            GmailClientBuilder: The builder.
        """
        return cls(
            service_account.ServiceAccountCredential.from_info(info),
            send_from_email,
        )

    @property
    def credential(self):
        """gmail_client.service_account.ServiceAccountCredential: The parsed
        service account."""
        return self._credential

    @property
    def send_from_email(self):
        """str: The mailbox to send as."""
        return self._send_from_email

    def mock_mode(self, enabled=True):
        """Print emails instead of sending them.

        Args:
            enabled (bool): Whether mock mode is on.

        Returns:
            GmailClientBuilder: This builder.
        """
        self._mock_mode = bool(enabled)
        return self

    def mock_stream(self, stream):
        """Set where mock mode writes emails. Defaults to ``sys.stdout``.

        Returns:
            GmailClientBuilder: This builder.
        """
        self._mock_stream = stream
        return self

    def timeout(self, seconds):
        """Set the timeout for the token exchange and every send.

        Args:
            seconds (Optional[float]): The timeout. None uses the HTTP
                library's default.

        Returns:
            GmailClientBuilder: This builder.
        """
        self._timeout = seconds
        return self

    def clock(self, clock):
        """Set the time source used for JWT claims and token expiry.

        Args:
            clock (Callable[[], datetime.datetime]): Returns the current UTC
                time.

        Returns:
            GmailClientBuilder: This builder.
        """
        self._clock = clock
        return self

    def _make_assertion(self, now):
        return jwt.build_assertion(self._credential, self._send_from_email, now)

    def build(self, request=None):
        """Build a blocking :class:`GmailClient`.

        This retrieves an access token from the token endpoint.

        Args:
            request (Optional[gmail_client.transport.Request]): The transport
                used for the token exchange and every send. Defaults to a new
                :class:`gmail_client.transport.requests.Request`, owned
                and closed by the returned client.

        Returns:
            GmailClient: The client.

        Raises:
            gmail_client.exceptions.SigningError: If the assertion could not
                be signed.
            gmail_client.exceptions.TokenExchangeError: If the token endpoint
                refused the assertion.
            gmail_client.exceptions.TransportError: If the token endpoint
                could not be reached.
        """
        owns_request = request is None
        if owns_request:
            request = gmail_client.transport.requests.Request()

        # The assertion's iat and the token expiry share one instant.
        now = self._clock()
        try:
            token = _client.exchange(
                request,
                self._credential.token_uri,
                self._make_assertion(now),
                timeout=self._timeout,
                clock=lambda: now,
            )
        except Exception:
            if owns_request:
                request.close()
            raise
        _LOGGER.debug("Built Gmail client for %s", self._send_from_email)

        if self._mock_mode:
            dispatcher = _send_email.MockDispatcher(self._mock_stream)
        else:
            dispatcher = _send_email.GmailDispatcher(
                request, token, timeout=self._timeout
            )

        return GmailClient(
            self._send_from_email,
            token,
            dispatcher,
            mock_mode=self._mock_mode,
            request=request if owns_request else None,
        )

    async def build_async(self, request=None):
        """Build an asyncio :class:`gmail_client.aio.client.GmailClient`.

        This retrieves an access token from the token endpoint.

        Args:
            request (Optional[gmail_client.transport.aio.Request]): The
                transport used for the token exchange and every send.
                Defaults to a new
                :class:`gmail_client.transport.aio.aiohttp.Request`, owned
                and closed by the returned client.

        Returns:
            gmail_client.aio.client.GmailClient: The client.

        Raises:
            gmail_client.exceptions.SigningError: If the assertion could not
                be signed.
            gmail_client.exceptions.TokenExchangeError: If the token endpoint
                refused the assertion.
            gmail_client.exceptions.TransportError: If the token endpoint
                could not be reached.
        """
        owns_request = request is None
        if owns_request:
            request = gmail_client.transport.aio.aiohttp.Request()

        now = self._clock()
        try:
            token = await _aio_client.exchange(
                request,
                self._credential.token_uri,
                self._make_assertion(now),
                timeout=self._timeout,
                clock=lambda: now,
            )
        except Exception:
            if owns_request:
                await request.close()
            raise
        _LOGGER.debug("Built async Gmail client for %s", self._send_from_email)

        if self._mock_mode:
            dispatcher = _aio_send_email.MockDispatcher(self._mock_stream)
        else:
            dispatcher = _aio_send_email.GmailDispatcher(
                request, token, timeout=self._timeout
            )

        return aio_client.GmailClient(
            self._send_from_email,
            token,
            dispatcher,
            mock_mode=self._mock_mode,
            request=request if owns_request else None,
        )


class GmailClient(object):
    """A client ready to send emails through the Gmail API.

    Instances are immutable and can be shared between threads. Use
    :meth:`builder` to create one.

    Args:
        send_from_email (str): The mailbox emails are sent as.
        token (gmail_client._client.AccessToken): The access token.
        dispatcher (gmail_client._send_email.Dispatcher): Sends the emails.
        mock_mode (bool): Whether ``dispatcher`` only prints emails.
        request (Optional[gmail_client.transport.Request]): A transport owned
            by this client, closed by :meth:`close`.
    """

    def __init__(
        self, send_from_email, token, dispatcher, mock_mode=False, request=None
    ):
        self._send_from_email = send_from_email
        self._token = token
        self._dispatcher = dispatcher
        self._mock_mode = mock_mode
        self._request = request

    @staticmethod
    def builder(service_account_json, send_from_email):
        """Alias for :class:`GmailClientBuilder`."""
        return GmailClientBuilder(service_account_json, send_from_email)

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

    def send_email(self, send_to_email, subject, content):
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
        return self._dispatcher.send(
            self._send_from_email, send_to_email, subject, content
        )

    def close(self):
        """Close the transport, if this client owns it."""
        if self._request is not None:
            self._request.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
