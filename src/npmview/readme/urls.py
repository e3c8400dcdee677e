"""URL resolution for README links and images."""

from __future__ import annotations

import re

from ..constants import Constants

_ABSOLUTE_PREFIXES = ("http://", "https://", "//")
# Only the repository-level "blob" segment: github.com/<owner>/<repo>/blob/...
_GITHUB_BLOB_RE = re.compile(r"^((?:https?:)?//(?:www\.)?github\.com/[^/?#]+/[^/?#]+)/blob/", re.IGNORECASE)
_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")
# Loose "has protocol" check: any scheme, or a protocol-relative prefix.
_HAS_PROTOCOL_RE = re.compile(r"^[\s\w\0+.\-]{2,}:|^([/\\]\s*){2,}[^/\\]")


def is_http_url(url: str) -> bool:
    return url.startswith("http://") or url.startswith("https://")


def has_protocol(url: str) -> bool:
    """True for ``scheme:...`` URLs and protocol-relative ``//host`` URLs."""
    return bool(url) and bool(_HAS_PROTOCOL_RE.match(url))


def resolve_url(url: str, package_name: str) -> str:
    """Resolve a README URL against the package's files on the CDN.

    Fragments, protocol-relative URLs and URLs with a scheme pass through
    (unsafe schemes are the sanitizer's job); anything else is treated as a
    path inside the published package.
    """
    if not url or url.startswith("#"):
        return url
    if url.startswith(_ABSOLUTE_PREFIXES) or url_scheme(url):
        return url
    path = url[2:] if url.startswith("./") else url.lstrip("/")
    return f"{Constants.README_CDN_BASE_URL.rstrip('/')}/{package_name}/{path}"


def github_blob_to_raw(url: str) -> str:
    """Point GitHub file-viewer URLs at the raw file so images render."""
    return _GITHUB_BLOB_RE.sub(r"\1/raw/", url, count=1)


def resolve_image_url(url: str, package_name: str) -> str:
    return github_blob_to_raw(resolve_url(url, package_name))


def url_scheme(url: str) -> str:
    """Lower-cased scheme of ``url``, or ``""`` for relative URLs."""
    match = _SCHEME_RE.match(url)
    return match.group(0)[:-1].lower() if match else ""
