"""
Text filters applied to admin-supplied notification fields.

`sanitize_text` is for single-line plain fields (title, button text, ids).
`sanitize_rich_text` keeps a small allow-list of inline/block markup for the
notification body and drops everything else, including the contents of
script-like elements.
"""
from __future__ import annotations

import re
from html.parser import HTMLParser

from django.utils.html import escape, strip_tags

_WHITESPACE_RE = re.compile(r"\s+")

_GLOBAL_ATTRS = {"class", "title"}

ALLOWED_TAGS = {
    "a": {"href", "target", "rel"},
    "abbr": set(),
    "b": set(),
    "blockquote": {"cite"},
    "br": set(),
    "code": set(),
    "del": set(),
    "em": set(),
    "h1": set(),
    "h2": set(),
    "h3": set(),
    "h4": set(),
    "h5": set(),
    "h6": set(),
    "i": set(),
    "img": {"src", "alt", "width", "height"},
    "ins": set(),
    "li": set(),
    "ol": set(),
    "p": set(),
    "s": set(),
    "small": set(),
    "span": set(),
    "strong": set(),
    "sub": set(),
    "sup": set(),
    "u": set(),
    "ul": set(),
}

VOID_TAGS = {"br", "img"}

# Dropped together with everything inside them.
DROP_CONTENT_TAGS = {
    "script",
    "style",
    "iframe",
    "object",
    "embed",
    "template",
    "noscript",
    "textarea",
    "title",
}

URL_ATTRS = {"href", "src", "cite"}
SAFE_SCHEMES = {"http", "https", "mailto", "tel"}


def sanitize_text(value) -> str:
    """Strip markup and collapse whitespace, the way a single-line input is stored."""
    if value is None:
        return ""
    text = strip_tags(str(value))
    return _WHITESPACE_RE.sub(" ", text).strip()


def sanitize_rich_text(value) -> str:
    if value is None:
        return ""
    parser = _RichTextFilter()
    parser.feed(str(value))
    parser.close()
    return parser.result()


def is_safe_url(value: str) -> bool:
    candidate = "".join(ch for ch in value if ch > " ").lower()
    scheme, sep, _ = candidate.partition(":")
    if not sep:
        return True
    # "a/b:c" or "?x=1:2" are relative references, not schemes
    if any(ch in scheme for ch in "/?#"):
        return True
    return scheme in SAFE_SCHEMES


def _escape_text(data: str) -> str:
    return data.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class _RichTextFilter(HTMLParser):
    def __init__(self):
        super().__init__(convert_charrefs=True)
        self._out = []
        self._open = []
        self._skip_depth = 0

    def handle_starttag(self, tag, attrs):
        if tag in DROP_CONTENT_TAGS:
            self._skip_depth += 1
            return
        if self._skip_depth or tag not in ALLOWED_TAGS:
            return
        rendered = "".join(
            f' {name}="{escape(value)}"' for name, value in self._clean_attrs(tag, attrs)
        )
        self._out.append(f"<{tag}{rendered}>")
        if tag not in VOID_TAGS:
            self._open.append(tag)

    def handle_endtag(self, tag):
        if tag in DROP_CONTENT_TAGS:
            self._skip_depth = max(0, self._skip_depth - 1)
            return
        if self._skip_depth or tag not in self._open:
            return
        while self._open:
            current = self._open.pop()
            self._out.append(f"</{current}>")
            if current == tag:
                break

    def handle_data(self, data):
        if not self._skip_depth:
            self._out.append(_escape_text(data))

    def result(self) -> str:
        while self._open:
            self._out.append(f"</{self._open.pop()}>")
        return "".join(self._out)

    @staticmethod
    def _clean_attrs(tag, attrs):
        allowed = ALLOWED_TAGS[tag] | _GLOBAL_ATTRS
        for name, value in attrs:
            if name not in allowed or value is None:
                continue
            if name in URL_ATTRS and not is_safe_url(value):
                continue
            yield name, value
