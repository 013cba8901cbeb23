from types import SimpleNamespace

import pytest

from shut.moderation.message_classifier import contains_link, is_exempt


def make_message(content="", attachments=None):
    return SimpleNamespace(content=content, attachments=attachments or [])


@pytest.mark.parametrize(
    "text",
    [
        "https://example.com/a?b=1",
        "look at this https://example.com/a?b=1 wow",
        "http://www.example.org",
        "https://sub.domain.co.uk/path/to/page.html#anchor",
        "two links http://a.io and https://b.dev/x",
    ],
)
def test_links_are_detected(text):
    assert contains_link(text) is True
    assert is_exempt(make_message(text)) is True


@pytest.mark.parametrize(
    "text",
    [
        "",
        "hello there",
        "http://",
        "https://localhost",
        "www.example.com",
        "example.com/path",
        "ftp://example.com/file",
    ],
)
def test_text_without_a_link_is_not_exempt(text):
    assert contains_link(text) is False
    assert is_exempt(make_message(text)) is False


def test_attachment_makes_message_exempt_regardless_of_text():
    attachment = SimpleNamespace(filename="cat.png")

    assert is_exempt(make_message("", [attachment])) is True
    assert is_exempt(make_message("no link here", [attachment])) is True
    assert is_exempt(make_message("x", [attachment, attachment])) is True


def test_empty_message_is_not_exempt():
    assert is_exempt(make_message()) is False


def test_missing_content_is_treated_as_empty():
    assert is_exempt(SimpleNamespace(content=None, attachments=[])) is False
    assert contains_link(None) is False


def test_classification_is_deterministic():
    message = make_message("see https://example.com/a?b=1")
    assert {is_exempt(message) for _ in range(10)} == {True}
