import json

from message_service_api.app.api.responses import (
    build_empty_response,
    build_error_response,
    build_insert_response,
    build_list_response,
)
from message_service_api.app.schemas.message import Message
from message_service_api.app.services.rendering import format_timestamp, render_page


def test_format_timestamp_is_utc():
    assert format_timestamp(0) == "1970-01-01 00:00:00"
    assert format_timestamp(1700000000) == "2023-11-14 22:13:20"


def test_render_page_lists_messages():
    page = render_page([
        Message(id=1, username="alice", message="hello", timestamp=0),
        Message(id=2, username="bob", message="hi", timestamp=60),
    ])
    assert "<title>Message Service</title>" in page
    assert "alice (1970-01-01 00:00:00): hello" in page
    assert "bob (1970-01-01 00:01:00): hi" in page
    assert "No messages found" not in page


def test_render_page_empty():
    page = render_page([])
    assert "<h1>No messages found</h1>" in page
    assert "<ul>" not in page


def test_render_page_escapes_markup():
    page = render_page([Message(id=1, username="<i>eve</i>", message="<script>x</script>", timestamp=0)])
    assert "<script>" not in page
    assert "&lt;script&gt;x&lt;/script&gt;" in page
    assert "&lt;i&gt;eve&lt;/i&gt;" in page


def test_insert_response():
    response = build_insert_response(1234)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert json.loads(response.body) == {"timestamp": 1234}


def test_list_response_success_and_empty():
    response = build_list_response([])
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert b"No messages found" in response.body


def test_list_response_failure():
    response = build_list_response(None)
    assert response.status_code == 500
    assert response.body == b""


def test_error_response():
    response = build_error_response("Missing field 'message'")
    assert response.status_code == 400
    assert json.loads(response.body) == {"error": "Missing field 'message'"}

    assert build_error_response("service error", 500).status_code == 500


def test_empty_response():
    response = build_empty_response(404)
    assert response.status_code == 404
    assert response.body == b""
