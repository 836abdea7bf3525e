"""
Bookmarks API — Sanitizer Unit Tests
=====================================

What:  Tests for services/sanitizer.py.
Why:   The sanitizer is the only thing standing between stored client markup
       and whatever renders our responses.
"""

import pytest

from bookmark_api.services.sanitizer import sanitize

XSS_TITLE = 'Bad Title <script>alert("xss");</script>'
XSS_DESCRIPTION = (
    'Bad image <img src="https://url.to.file.which/does-not.exist" '
    'onerror="alert(document.cookie);">. But not <strong>all</strong> bad.'
)


class TestSanitize:

    def test_script_tag_is_escaped(self):
        assert sanitize(XSS_TITLE) == 'Bad Title &lt;script&gt;alert("xss");&lt;/script&gt;'

    def test_event_handler_attribute_is_removed(self):
        assert sanitize(XSS_DESCRIPTION) == (
            'Bad image <img src="https://url.to.file.which/does-not.exist">. '
            'But not <strong>all</strong> bad.'
        )

    def test_plain_text_is_unchanged(self):
        assert sanitize("test bookmark 1 desc") == "test bookmark 1 desc"

    def test_benign_tags_survive(self):
        text = "<em>a</em> <strong>b</strong> <code>c</code>"
        assert sanitize(text) == text

    def test_javascript_link_loses_href(self):
        assert sanitize('<a href="javascript:alert(1)">x</a>') == "<a>x</a>"

    def test_comments_are_stripped(self):
        assert sanitize("a<!-- hidden -->b") == "ab"

    def test_none_passes_through(self):
        assert sanitize(None) is None

    @pytest.mark.parametrize("text", [
        XSS_TITLE,
        XSS_DESCRIPTION,
        "Tom & Jerry < 3 > 2",
        '<a href="https://example.com" onclick="x()">link</a>',
        "<iframe src='https://evil.example'></iframe>",
        "plain",
    ])
    def test_idempotent(self, text):
        once = sanitize(text)
        assert sanitize(once) == once
