"""
Bookmarks API — Output Sanitizer
=================================

What:  Neutralizes markup in bookmark titles and descriptions on the way out.
Why:   Both fields come from untrusted clients and are stored verbatim; any
       page rendering them must not execute what a client typed.
How:   bleach's Cleaner with an allowlist. Benign tags survive, disallowed
       tags are escaped (not dropped) so the reader still sees what was
       typed, and attributes outside the per-tag allowlist are removed.

Examples:
    'Bad <script>alert("x");</script>'  → 'Bad &lt;script&gt;alert("x");&lt;/script&gt;'
    '<img src="a.png" onerror="x()">'   → '<img src="a.png">'
    '<strong>all</strong>'              → '<strong>all</strong>'

Stored data is never modified; sanitize() runs on every response that
carries a bookmark. Running it twice gives the same result as running it once.
"""

from typing import Optional

from bleach.sanitizer import Cleaner

ALLOWED_TAGS = frozenset({
    "a", "abbr", "b", "blockquote", "br", "code", "del", "em",
    "h1", "h2", "h3", "h4", "h5", "h6", "hr", "i", "img", "ins",
    "li", "ol", "p", "pre", "s", "small", "span", "strong",
    "sub", "sup", "u", "ul",
})

ALLOWED_ATTRIBUTES = {
    "a": ["href", "title", "target"],
    "abbr": ["title"],
    "img": ["src", "alt", "title", "width", "height"],
}

ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto"})

_cleaner = Cleaner(
    tags=ALLOWED_TAGS,
    attributes=ALLOWED_ATTRIBUTES,
    protocols=ALLOWED_PROTOCOLS,
    strip=False,
    strip_comments=True,
)


def sanitize(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    return _cleaner.clean(text)
