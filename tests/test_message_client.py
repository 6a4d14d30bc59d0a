import json
from unittest.mock import Mock

import requests

import message_client
from message_client import MessageServiceClient


def make_response(status_code, body=b"", content_type="application/json"):
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.headers["content-type"] = content_type
    response.url = "http://service.test/"
    return response


def make_client(response):
    session = Mock()
    session.request.return_value = response
    return MessageServiceClient(base_url="http://service.test/", session=session), session


def test_post_message_returns_timestamp():
    client, session = make_client(make_response(200, json.dumps({"timestamp": 42}).encode()))
    timestamp, error = client.post_message("hello", username="alice")
    assert (timestamp, error) == (42, None)
    kwargs = session.request.call_args.kwargs
    assert kwargs["method"] == "POST"
    assert kwargs["url"] == "http://service.test/"
    assert kwargs["data"] == {"message": "hello", "username": "alice"}


def test_post_message_without_username():
    client, session = make_client(make_response(200, b'{"timestamp": 1}'))
    client.post_message("hello")
    assert session.request.call_args.kwargs["data"] == {"message": "hello"}


def test_error_body_message_is_reported():
    client, _ = make_client(make_response(400, b'{"error": "Missing field \'message\'"}'))
    timestamp, error = client.post_message("")
    assert timestamp is None
    assert error == {"status_code": 400, "message": "Missing field 'message'"}


def test_bare_error_status_is_reported():
    client, _ = make_client(make_response(404))
    page, error = client.list_user_messages("alice")
    assert page is None
    assert error["status_code"] == 404
    assert "404" in error["message"]


def test_list_messages_passes_bounds():
    client, session = make_client(make_response(200, b"<html></html>", "text/html"))
    page, error = client.list_messages(before=10, after=5)
    assert (page, error) == ("<html></html>", None)
    kwargs = session.request.call_args.kwargs
    assert kwargs["url"] == "http://service.test/"
    assert kwargs["params"] == {"before": 10, "after": 5}


def test_list_messages_without_bounds():
    client, session = make_client(make_response(200, b"ok", "text/html"))
    client.list_messages()
    assert session.request.call_args.kwargs["params"] is None


def test_list_user_messages_path():
    client, session = make_client(make_response(200, b"ok", "text/html"))
    client.list_user_messages("alice")
    kwargs = session.request.call_args.kwargs
    assert kwargs["url"] == "http://service.test/user"
    assert kwargs["params"] == {"username": "alice"}


def test_connection_error_is_reported():
    session = Mock()
    session.request.side_effect = requests.ConnectionError("refused")
    client = MessageServiceClient(session=session)
    page, error = client.list_messages()
    assert page is None
    assert error == {"status_code": None, "message": "refused"}


def test_cli_post(monkeypatch, capsys):
    session = Mock()
    session.request.return_value = make_response(200, b'{"timestamp": 7}')
    monkeypatch.setattr(message_client.requests, "Session", lambda: session)
    assert message_client.main(["--url", "http://service.test", "post", "hi", "--username", "bob"]) == 0
    assert capsys.readouterr().out.strip() == "7"


def test_cli_failure_exit_code(monkeypatch, capsys):
    session = Mock()
    session.request.return_value = make_response(400, b'{"error": "Error parsing \'before\'"}')
    monkeypatch.setattr(message_client.requests, "Session", lambda: session)
    assert message_client.main(["list", "--before", "1"]) == 1
    assert "before" in capsys.readouterr().err


def test_base_url_is_positional():
    client = MessageServiceClient("http://service.test/")
    assert client.base_url == "http://service.test"
