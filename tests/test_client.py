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

import datetime
import http.client as http_client
import io
import json
import os
import urllib.parse

import freezegun
import mock
import pytest

import gmail_client
from gmail_client import _client
from gmail_client import _send_email
from gmail_client import client
from gmail_client import exceptions
from gmail_client import jwt
import gmail_client.transport.requests


DATA_DIR = os.path.join(os.path.dirname(__file__), "data")
SERVICE_ACCOUNT_JSON_FILE = os.path.join(DATA_DIR, "service_account.json")

SENDER = "sender@example.com"
NOW = datetime.datetime(2026, 1, 1, 12, 0, 0)
TOKEN_RESPONSE = b'{"access_token":"abc123","expires_in":3599,"token_type":"Bearer"}'
SEND_RESPONSE = b'{"id":"msg-1","threadId":"thread-1","labelIds":["SENT"]}'


def make_response(data, status=http_client.OK):
    response = mock.Mock()
    response.status = status
    response.data = data
    return response


def make_request(token_response=None, send_response=None):
    responses = [token_response or make_response(TOKEN_RESPONSE)]
    responses.append(send_response or make_response(SEND_RESPONSE))
    return mock.Mock(side_effect=responses)


@pytest.fixture
def builder(service_account_json):
    return client.GmailClientBuilder(service_account_json, SENDER).clock(lambda: NOW)


class TestGmailClientBuilder(object):
    def test_constructor(self, service_account_json, credential):
        builder = client.GmailClientBuilder(service_account_json, SENDER)
        assert builder.credential == credential
        assert builder.send_from_email == SENDER

    def test_constructor_with_credential(self, credential):
        builder = client.GmailClientBuilder(credential, SENDER)
        assert builder.credential is credential

    def test_constructor_invalid_document(self):
        with pytest.raises(exceptions.CredentialParseError):
            client.GmailClientBuilder("{}", SENDER)

    def test_from_file(self, credential):
        builder = client.GmailClientBuilder.from_file(SERVICE_ACCOUNT_JSON_FILE, SENDER)
        assert builder.credential == credential

    def test_from_info(self, service_account_info, credential):
        builder = client.GmailClientBuilder.from_info(service_account_info, SENDER)
        assert builder.credential == credential

    def test_options_return_builder(self, builder):
        assert builder.mock_mode(True) is builder
        assert builder.mock_stream(io.StringIO()) is builder
        assert builder.timeout(10) is builder
        assert builder.clock(lambda: NOW) is builder

    def test_build(self, builder, credential):
        request = make_request()

        gmail = builder.build(request)

        assert isinstance(gmail, client.GmailClient)
        assert gmail.send_from_email == SENDER
        assert gmail.token == _client.AccessToken(
            "abc123", NOW + datetime.timedelta(seconds=3599)
        )
        assert not gmail.mock_mode

        kwargs = request.call_args[1]
        assert kwargs["url"] == credential.token_uri
        assert kwargs["method"] == "POST"
        assert kwargs["timeout"] is None
        params = urllib.parse.parse_qs(kwargs["body"].decode("utf-8"))
        assert params["grant_type"] == [_client._JWT_GRANT_TYPE]
        assert params["assertion"] == [
            jwt.build_assertion(credential, SENDER, NOW).token.decode("utf-8")
        ]

    def test_build_fresh_assertion_each_time(self, builder):
        times = iter([NOW, NOW + datetime.timedelta(seconds=30)])
        builder.clock(lambda: next(times))
        request = mock.Mock(
            side_effect=[make_response(TOKEN_RESPONSE), make_response(TOKEN_RESPONSE)]
        )

        builder.build(request)
        gmail = builder.build(request)

        first, second = [
            urllib.parse.parse_qs(call[1]["body"].decode("utf-8"))["assertion"][0]
            for call in request.call_args_list
        ]
        assert first != second
        assert jwt.decode_unverified(second)["iat"] == (
            jwt.decode_unverified(first)["iat"] + 30
        )
        assert gmail.token.expiry == NOW + datetime.timedelta(seconds=30 + 3599)

    def test_build_reads_clock_once(self, builder):
        clock = mock.Mock(return_value=NOW)

        gmail = builder.clock(clock).build(make_request())

        clock.assert_called_once_with()
        assert gmail.token.expiry == NOW + datetime.timedelta(seconds=3599)

    def test_build_timeout(self, builder):
        request = make_request()

        gmail = builder.timeout(4).build(request)
        gmail.send_email("a@b.com", "Hi", "<p>hello</p>")

        assert [call[1]["timeout"] for call in request.call_args_list] == [4, 4]

    def test_build_token_error(self, builder):
        request = make_request(
            token_response=make_response(
                b'{"error":"unauthorized_client"}', status=http_client.UNAUTHORIZED
            )
        )

        with pytest.raises(exceptions.TokenExchangeError) as excinfo:
            builder.build(request)

        assert excinfo.value.response_body == '{"error":"unauthorized_client"}'

    def test_build_transport_error(self, builder):
        request = mock.Mock(side_effect=exceptions.TransportError("refused"))

        with pytest.raises(exceptions.TransportError):
            builder.build(request)

        assert request.call_count == 1

    def test_build_signing_error(self, builder):
        with mock.patch.object(
            jwt, "encode", side_effect=exceptions.SigningError("bad key")
        ):
            with pytest.raises(exceptions.SigningError):
                builder.build(make_request())

    def test_build_default_transport(self, builder):
        with mock.patch.object(
            gmail_client.transport.requests, "Request"
        ) as request_cls:
            request_cls.return_value.side_effect = [make_response(TOKEN_RESPONSE)]
            builder.build()

        request_cls.assert_called_once_with()

    def test_close_default_transport(self, builder):
        with mock.patch.object(
            gmail_client.transport.requests, "Request"
        ) as request_cls:
            request_cls.return_value.side_effect = [make_response(TOKEN_RESPONSE)]
            with builder.build() as gmail:
                request_cls.return_value.close.assert_not_called()

        assert gmail.send_from_email == SENDER
        request_cls.return_value.close.assert_called_once_with()

    def test_close_default_transport_on_error(self, builder):
        with mock.patch.object(
            gmail_client.transport.requests, "Request"
        ) as request_cls:
            request_cls.return_value.side_effect = exceptions.TransportError("refused")
            with pytest.raises(exceptions.TransportError):
                builder.build()

        request_cls.return_value.close.assert_called_once_with()

    def test_close_leaves_supplied_transport_open(self, builder):
        request = make_request()

        builder.build(request).close()

        request.close.assert_not_called()

    @freezegun.freeze_time("2026-01-01 12:00:00")
    def test_build_default_clock(self, service_account_json):
        request = make_request()

        gmail = client.GmailClientBuilder(service_account_json, SENDER).build(request)

        assert gmail.token.expiry == NOW + datetime.timedelta(seconds=3599)
        body = urllib.parse.parse_qs(request.call_args[1]["body"].decode("utf-8"))
        claims = jwt.decode_unverified(body["assertion"][0])
        assert claims["iat"] == 1767268800


class TestGmailClient(object):
    def test_builder_alias(self, service_account_json):
        builder = gmail_client.GmailClient.builder(service_account_json, SENDER)
        assert isinstance(builder, gmail_client.GmailClientBuilder)

    def test_send_email(self, builder):
        request = make_request()
        gmail = builder.build(request)

        sent = gmail.send_email("a@b.com", "Hi", "<p>hello</p>")

        assert sent == _send_email.SentMessage("msg-1", "thread-1", ["SENT"])
        kwargs = request.call_args[1]
        assert kwargs["url"] == _send_email._send_email_url()
        assert kwargs["headers"]["authorization"] == "Bearer abc123"
        assert kwargs["headers"]["contentType"] == "text/html"
        assert kwargs["body"] == _send_email._send_email_request_body(
            SENDER, "a@b.com", "Hi", "<p>hello</p>"
        )

    def test_send_email_not_json(self, builder):
        request = make_request(send_response=make_response(b"<html>Bad Gateway</html>"))
        gmail = builder.build(request)

        with pytest.raises(exceptions.EmailSendError) as excinfo:
            gmail.send_email("a@b.com", "Hi", "<p>hello</p>")

        assert excinfo.value.response_body == "<html>Bad Gateway</html>"

    def test_send_email_mock_mode(self, builder):
        stream = io.StringIO()
        request = make_request()
        gmail = builder.mock_mode(True).mock_stream(stream).build(request)

        result = gmail.send_email("a@b.com", "Hi", "<p>hello</p>")

        assert result is None
        assert gmail.mock_mode
        # Only the token exchange reached the transport.
        assert request.call_count == 1
        assert "To: a@b.com" in stream.getvalue()
        assert "<p>hello</p>" in stream.getvalue()

    def test_send_email_mock_mode_stdout(self, builder, capsys):
        gmail = builder.mock_mode(True).build(make_request())

        gmail.send_email("a@b.com", "Hi", "<p>hello</p>")

        assert "Subject: Hi" in capsys.readouterr().out

    def test_client_is_read_only(self, builder):
        gmail = builder.build(make_request())

        with pytest.raises(AttributeError):
            gmail.token = _client.AccessToken("other")


def test_token_response_fixture_is_json():
    assert json.loads(TOKEN_RESPONSE)["access_token"] == "abc123"
