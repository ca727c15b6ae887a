import re

import pytest
import requests

from googlechat.webhook import ChatClient, WebhookResponseError
from tests.fakes import make_response
from utils.proxy import ProxyConfig

THREAD_KEY_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$")


@pytest.mark.parametrize("name", sorted(ChatClient.CHAT_COLORS))
def test_known_color_tokens_resolve_to_hex(name):
    client = ChatClient("http://x")

    assert client.resolve_color_tokens("${" + name + "}") == ChatClient.CHAT_COLORS[name]


@pytest.mark.parametrize("text", ["${PURPLE}", "${red}", "${}", "${ RED }", "$RED", "{RED}"])
def test_unknown_color_tokens_are_left_untouched(text):
    assert ChatClient("http://x").resolve_color_tokens(text) == text


def test_text_without_tokens_is_unchanged():
    text = "Deploy finished in 42s <b>ok</b>"

    assert ChatClient("http://x").resolve_color_tokens(text) == text


def test_every_occurrence_of_a_token_is_replaced():
    text = '<font color="${RED}">a</font> ${PURPLE} <font color="${RED}">b</font> ${GREY}'

    resolved = ChatClient("http://x").resolve_color_tokens(text)

    assert resolved == '<font color="#d81111">a</font> ${PURPLE} <font color="#d81111">b</font> #a5a5a5'


def test_chat_colors_cannot_be_modified():
    client = ChatClient("http://x")

    with pytest.raises(TypeError):
        client.CHAT_COLORS["RED"] = "#000000"
    assert ChatClient("http://y").CHAT_COLORS is client.CHAT_COLORS


def test_new_client_has_no_proxy():
    client = ChatClient("not a url")

    assert client.url == "not a url"
    assert client.proxy is None


def test_set_proxy_from_mapping_and_dataclass(proxy_dict):
    client = ChatClient("http://x")
    client.set_proxy(proxy_dict)
    assert client.proxy == "http://u:pw@p:8080"

    client.set_proxy(ProxyConfig(proxy="h", port="3128", user="a", password="b"))
    assert client.proxy == "http://a:b@h:3128"


def test_set_proxy_with_missing_fields_is_not_validated():
    client = ChatClient("http://x")

    client.set_proxy({"proxy": "p", "port": 8080})

    assert client.proxy == "http://None:None@p:8080"


def test_send_text_posts_plain_text_body(fake_post):
    client = ChatClient("https://chat.example/webhook")

    client.send_text("hi", "thread-1").result(timeout=5)

    call = fake_post.last
    assert call["url"] == "https://chat.example/webhook"
    assert call["json"] == {"text": "hi"}
    assert call["params"] == {"threadKey": "thread-1"}
    assert call["proxies"] is None


def test_send_card_wraps_resolved_text(fake_post):
    client = ChatClient("http://x")

    client.send_card("${RED}alert${RED}").result(timeout=5)

    body = fake_post.last["json"]
    widget = body["cards"][0]["sections"][0]["widgets"][0]
    assert widget["textParagraph"]["text"] == "#d81111alert#d81111"


def test_send_without_thread_generates_distinct_keys(fake_post):
    client = ChatClient("http://x")

    client.send({"text": "one"}).result(timeout=5)
    client.send({"text": "two"}).result(timeout=5)

    first, second = (call["params"]["threadKey"] for call in fake_post.calls)
    assert THREAD_KEY_PATTERN.match(first)
    assert THREAD_KEY_PATTERN.match(second)
    assert first != second


def test_send_routes_through_proxy(fake_post, proxy_dict):
    client = ChatClient("http://x")
    client.set_proxy(proxy_dict)

    client.send_text("hi").result(timeout=5)

    assert fake_post.last["proxies"] == {"http": "http://u:pw@p:8080", "https": "http://u:pw@p:8080"}


def test_status_200_resolves_with_parsed_body(fake_post):
    fake_post.response = make_response(200, {"name": "spaces/a/messages/b"})

    result = ChatClient("http://x").send_text("hi").result(timeout=5)

    assert result == {"name": "spaces/a/messages/b"}


def test_status_200_with_empty_body_resolves_to_none(fake_post):
    fake_post.response = make_response(200)

    assert ChatClient("http://x").send_text("hi").result(timeout=5) is None


@pytest.mark.parametrize("status", [201, 204, 404, 500])
def test_non_200_status_fails_with_response(fake_post, status):
    fake_post.response = make_response(status, {"error": "nope"})

    future = ChatClient("http://x").send_text("hi")

    with pytest.raises(WebhookResponseError) as excinfo:
        future.result(timeout=5)
    assert excinfo.value.response is fake_post.response
    assert excinfo.value.status_code == status
    assert str(status) in str(excinfo.value)


def test_transport_error_is_propagated_unchanged(fake_post):
    error = requests.ConnectionError("proxy refused")
    fake_post.error = error

    future = ChatClient("http://x").send_text("hi")

    assert future.exception(timeout=5) is error
    assert len(fake_post.calls) == 1


def test_url_can_be_changed_after_construction(fake_post):
    client = ChatClient("http://old")
    client.url = "http://new"

    client.send_text("hi").result(timeout=5)

    assert fake_post.last["url"] == "http://new"
