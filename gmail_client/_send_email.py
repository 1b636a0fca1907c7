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

"""Gmail ``users.messages.send`` dispatch.

Two interchangeable strategies implement :class:`Dispatcher`:
:class:`GmailDispatcher` calls the Gmail API with a bearer token, and
:class:`MockDispatcher` writes the would-be email to a text stream instead.
The client picks one when it is built.

Message encoding and response parsing are shared with
:mod:`gmail_client.aio._send_email`.
"""

import abc
import base64
import dataclasses
import email.errors
import email.message
import json
import logging
import sys
from typing import Any, List, Mapping, Optional, TextIO, Tuple
import urllib.parse

from gmail_client import _helpers
from gmail_client import exceptions
from gmail_client import transport

_LOGGER = logging.getLogger(__name__)

SEND_EMAIL_ENDPOINT = "https://gmail.googleapis.com/gmail/v1/users/me/messages/send"
SEND_EMAIL_QUERY_PARAMETERS: Tuple[Tuple[str, str], ...] = (
    ("alt", "json"),
    ("prettyPrint", "false"),
)
_JSON_CONTENT_TYPE = "application/json"
_EMAIL_CONTENT_TYPE = "text/html"


@dataclasses.dataclass(frozen=True)
class SentMessage:
    """The message resource returned by Gmail for a sent email.

    Attributes:
        id (str): The immutable ID of the message.
        thread_id (Optional[str]): The ID of the thread the message belongs to.
        label_ids (List[str]): The labels applied to the message.
    """

    id: str
    thread_id: Optional[str] = None
    label_ids: List[str] = dataclasses.field(default_factory=list)


def _send_email_url() -> str:
    return "{}?{}".format(
        SEND_EMAIL_ENDPOINT, urllib.parse.urlencode(SEND_EMAIL_QUERY_PARAMETERS)
    )


def _build_message(
    send_from_email: str, send_to_email: str, subject: str, content: str
) -> Mapping[str, str]:
    """Builds the Gmail message resource for an HTML email.

    Args:
        send_from_email (str): The sender, which is also the impersonated
            mailbox.
        send_to_email (str): The recipient.
        subject (str): The subject line.
        content (str): The HTML body.

    Returns:
        Mapping[str, str]: The ``{"raw": ...}`` message resource, holding the
            base64url encoded RFC 2822 message.

    Raises:
        gmail_client.exceptions.MalformedError: If a header value cannot be
            encoded, for example because it holds a line break.
    """
    message = email.message.EmailMessage()
    try:
        message["From"] = send_from_email
        message["To"] = send_to_email
        message["Subject"] = subject
    except (ValueError, email.errors.MessageError) as caught_exc:
        new_exc = exceptions.MalformedError(
            "Invalid email header: {}".format(caught_exc)
        )
        raise new_exc from caught_exc
    message.set_content(content, subtype="html")

    raw = base64.urlsafe_b64encode(message.as_bytes()).decode("ascii")
    return {"raw": raw}


def _send_email_request_body(
    send_from_email: str, send_to_email: str, subject: str, content: str
) -> bytes:
    message = _build_message(send_from_email, send_to_email, subject, content)
    return json.dumps(message).encode("utf-8")


def _send_email_request_headers(token) -> Mapping[str, str]:
    """Builds the request headers for a send call.

    Args:
        token (gmail_client._client.AccessToken): The bearer token.

    Returns:
        Mapping[str, str]: The request headers.
    """
    headers = {
        "content-type": _JSON_CONTENT_TYPE,
        "contentType": _EMAIL_CONTENT_TYPE,
    }
    token.apply(headers)
    return headers


def _handle_send_response(status: int, data: bytes) -> SentMessage:
    """Turns a Gmail send response into a :class:`SentMessage`.

    Args:
        status (int): The HTTP status code.
        data (bytes): The raw response body.

    Returns:
        SentMessage: The sent message.

    Raises:
        gmail_client.exceptions.EmailSendError: If the status is not 2xx or
            the body is not a message resource.
    """
    response_body = _helpers.to_bytes(data).decode("utf-8", errors="replace")

    if not 200 <= status < 300:
        raise exceptions.EmailSendError(
            "Gmail returned HTTP {}: {}".format(status, response_body),
            response_body,
            status=status,
            retryable=status in transport.DEFAULT_RETRYABLE_STATUS_CODES,
        )

    try:
        response_data: Any = json.loads(response_body)
    except ValueError as caught_exc:
        new_exc = exceptions.EmailSendError(
            "Gmail returned a response that is not JSON.", response_body, status=status
        )
        raise new_exc from caught_exc

    if not isinstance(response_data, Mapping) or not isinstance(
        response_data.get("id"), str
    ):
        raise exceptions.EmailSendError(
            "Gmail returned a response without a message id.",
            response_body,
            status=status,
        )

    return SentMessage(
        id=response_data["id"],
        thread_id=response_data.get("threadId"),
        label_ids=list(response_data.get("labelIds") or []),
    )


def render_mock_email(
    send_from_email: str, send_to_email: str, subject: str, content: str
) -> str:
    """Renders an email the way mock mode prints it.

    Returns:
        str: A human readable rendering of the email.
    """
    return "\n".join(
        [
            "---------- MOCK EMAIL ----------",
            "From: {}".format(send_from_email),
            "To: {}".format(send_to_email),
            "Subject: {}".format(subject),
            "",
            content,
            "--------------------------------",
        ]
    )


class Dispatcher(metaclass=abc.ABCMeta):
    """Interface for sending one email."""

    @abc.abstractmethod
    def send(
        self, send_from_email: str, send_to_email: str, subject: str, content: str
    ) -> Optional[SentMessage]:
        """Sends an email.

        Args:
            send_from_email (str): The sender.
            send_to_email (str): The recipient.
            subject (str): The subject line.
            content (str): The HTML body.

        Returns:
            Optional[SentMessage]: The sent message, if one was created.

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
        request (gmail_client.transport.Request): A callable used to make
            HTTP requests.
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
    def send(self, send_from_email, send_to_email, subject, content):
        response = self._request(
            url=_send_email_url(),
            method="POST",
            headers=_send_email_request_headers(self._token),
            body=_send_email_request_body(
                send_from_email, send_to_email, subject, content
            ),
            timeout=self._timeout,
        )
        sent = _handle_send_response(response.status, response.data)
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

    def send(self, send_from_email, send_to_email, subject, content):
        """Writes the email to the stream and returns ``None``."""
        _LOGGER.debug("Mock mode: not sending email to %s", send_to_email)
        print(
            render_mock_email(send_from_email, send_to_email, subject, content),
            file=self._stream or sys.stdout,
        )
        return None
