"""Allow-list HTML sanitizer for rendered READMEs.

Tags and per-tag attributes are allow-listed; URL attributes keep only
http(s), mailto or relative URLs. The policy also re-applies README URL
handling (image CDN/raw resolution, external link hardening) so HTML that
never went through the Markdown renderer is still safe and consistent.
Sanitizing already-sanitized output is a no-op.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Mapping, Optional

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from ..common.logging_utils import extra_context, is_debug_enabled
from ..constants import Constants
from .urls import github_blob_to_raw, has_protocol, resolve_image_url, url_scheme

logger = logging.getLogger(__name__)

# Headings stop at h3: README headings are shifted below the page's h1/h2.
ALLOWED_TAGS = frozenset([
    "h3", "h4", "h5", "h6",
    "p", "br", "hr",
    "ul", "ol", "li",
    "blockquote", "pre", "code",
    "a", "strong", "em", "del", "s",
    "table", "thead", "tbody", "tr", "th", "td",
    "img", "picture", "source",
    "details", "summary",
    "div", "span",
    "sup", "sub",
    "kbd", "mark",
])

_HEADING_ATTRS = ("id", "data-level")
ALLOWED_ATTRIBUTES: Mapping[str, frozenset] = {
    "a": frozenset(["href", "title", "target", "rel"]),
    "img": frozenset(["src", "alt", "title", "width", "height"]),
    "source": frozenset(["src", "srcset", "type", "media"]),
    "th": frozenset(["colspan", "rowspan", "align"]),
    "td": frozenset(["colspan", "rowspan", "align"]),
    "h3": frozenset(_HEADING_ATTRS),
    "h4": frozenset(_HEADING_ATTRS),
    "h5": frozenset(_HEADING_ATTRS),
    "h6": frozenset(_HEADING_ATTRS),
    "blockquote": frozenset(["data-callout"]),
    "details": frozenset(["open"]),
    "code": frozenset(["class"]),
    "pre": frozenset(["class", "style"]),
    "span": frozenset(["class", "style"]),
    "div": frozenset(["class", "style"]),
}

# Disallowed tags are normally unwrapped; these lose their content as well.
DISCARD_CONTENT_TAGS = frozenset([
    "script", "style", "textarea", "option", "noscript",
    "iframe", "object", "embed", "template", "title",
])

URL_ATTRIBUTES = frozenset(["href", "src"])

# The HTML parser keeps whitespace-only text verbatim inside these.
PRESERVE_WHITESPACE_TAGS = frozenset(["pre", "textarea"])
_HTML_SPACES = " \t\n\r\f"

_URL_NOISE_RE = re.compile(r"[\x00-\x20\x7f]+")
_UNSAFE_STYLE_RE = re.compile(r"url\s*\(|expression\s*\(|@import|behavior\s*:", re.IGNORECASE)


class SanitizerPolicy:
    """Allow-list policy applied to an HTML fragment."""

    def __init__(
        self,
        allowed_tags: Iterable[str] = ALLOWED_TAGS,
        allowed_attributes: Mapping[str, Iterable[str]] = ALLOWED_ATTRIBUTES,
        allowed_schemes: Optional[Iterable[str]] = None,
    ):
        self.allowed_tags = frozenset(allowed_tags)
        self.allowed_attributes = {tag: frozenset(attrs) for tag, attrs in allowed_attributes.items()}
        schemes = allowed_schemes if allowed_schemes is not None else Constants.README_ALLOWED_SCHEMES
        self.allowed_schemes = frozenset(s.lower() for s in schemes)

    def is_allowed_url(self, value: str) -> bool:
        """Relative and protocol-relative URLs pass; absolute ones need an allowed scheme."""
        cleaned = _URL_NOISE_RE.sub("", value)
        if cleaned.startswith("//"):
            return True
        scheme = url_scheme(cleaned)
        return not scheme or scheme in self.allowed_schemes

    def _is_allowed_srcset(self, value: str) -> bool:
        for candidate in value.split(","):
            parts = candidate.strip().split()
            if parts and not self.is_allowed_url(parts[0]):
                return False
        return True

    def sanitize(self, html: str, package_name: Optional[str] = None) -> str:
        """Return the sanitized fragment.

        ``package_name`` enables resolving relative image paths to the CDN;
        without it only GitHub blob URLs are rewritten.
        """
        if not html:
            return ""
        soup = BeautifulSoup(html, "html.parser", multi_valued_attributes=None)

        for node in soup.find_all(string=lambda s: isinstance(s, PreformattedString)):
            node.extract()
        for tag in soup.find_all(list(DISCARD_CONTENT_TAGS)):
            tag.extract()

        removed = 0
        # Reverse document order visits descendants before their ancestors.
        for tag in reversed(soup.find_all(True)):
            if tag.name not in self.allowed_tags:
                tag.unwrap()
                removed += 1
                continue
            self._transform(tag, package_name)
            self._filter_attributes(tag)

        if removed and is_debug_enabled(logger):
            logger.debug(
                "Unwrapped disallowed tags",
                extra=extra_context(
                    event="sanitize",
                    component="sanitizer",
                    action="unwrap",
                    outcome="modified",
                    count=removed,
                ),
            )
        _normalize_whitespace(soup)
        return soup.decode(formatter="minimal")

    @staticmethod
    def _transform(tag: Tag, package_name: Optional[str]) -> None:
        if tag.name == "img":
            src = tag.get("src")
            if src:
                tag["src"] = resolve_image_url(src, package_name) if package_name else github_blob_to_raw(src)
        elif tag.name == "a":
            href = tag.get("href")
            if href and has_protocol(href):
                tag["rel"] = Constants.EXTERNAL_LINK_REL
                tag["target"] = Constants.EXTERNAL_LINK_TARGET

    def _filter_attributes(self, tag: Tag) -> None:
        allowed = self.allowed_attributes.get(tag.name, frozenset())
        for name in list(tag.attrs):
            value = tag.attrs[name]
            if name not in allowed:
                del tag.attrs[name]
            elif name in URL_ATTRIBUTES and not self.is_allowed_url(value):
                del tag.attrs[name]
            elif name == "srcset" and not self._is_allowed_srcset(value):
                del tag.attrs[name]
            elif name == "style" and _UNSAFE_STYLE_RE.search(value):
                del tag.attrs[name]


def _normalize_whitespace(soup: BeautifulSoup) -> None:
    """Collapse whitespace-only text the way a fresh parse of the output would.

    Removing nodes can leave neighbouring text nodes such as "\n" and "\n";
    reparsing joins and collapses them, so they are collapsed here up front.
    """
    soup.smooth()
    for node in soup.find_all(string=True):
        if type(node) is not NavigableString or node.strip(_HTML_SPACES):
            continue
        if any(parent.name in PRESERVE_WHITESPACE_TAGS for parent in node.parents):
            continue
        if not node:
            node.extract()
        else:
            node.replace_with("\n" if "\n" in node else " ")


def sanitize_html(html: str, package_name: Optional[str] = None) -> str:
    """Sanitize with the default README policy (built from current Constants)."""
    return SanitizerPolicy().sanitize(html, package_name)
