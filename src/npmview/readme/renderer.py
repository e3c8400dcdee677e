"""README Markdown -> sanitized HTML.

Markdown is parsed with markdown-it-py into a ``SyntaxTreeNode`` tree, which a
generic walker renders. Node types listed in ``RenderRules`` (headings, code,
images, links, blockquotes, table cells) are rendered by those functions; every
other node falls back to markdown-it's default token rendering. The result
always goes through ``sanitize_html`` last so the sanitizer sees final URLs
and attributes.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, MutableMapping, Optional

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml, unescapeAll
from markdown_it.token import Token
from markdown_it.tree import SyntaxTreeNode

from ..common.logging_utils import extra_context, is_debug_enabled
from ..constants import Constants
from .highlighter import Highlighter, get_highlighter
from .sanitizer import sanitize_html
from .urls import is_http_url, resolve_image_url, resolve_url

logger = logging.getLogger(__name__)

RenderRule = Callable[[SyntaxTreeNode, "ReadmeRenderer"], str]

CALLOUT_TYPES = ("NOTE", "TIP", "IMPORTANT", "WARNING", "CAUTION")
_CALLOUT_RE = re.compile(
    r"^<p>\[!(" + "|".join(CALLOUT_TYPES) + r")\](?:<br\s*/?>)?\s*",
    re.IGNORECASE,
)
_TEXT_ALIGN_RE = re.compile(r"text-align:\s*(left|center|right)", re.IGNORECASE)


def render_heading(node: SyntaxTreeNode, renderer: "ReadmeRenderer") -> str:
    """Shift headings down two levels, keeping the original level as data.

    The host page already uses h1 (package name) and h2 ("Readme"), so a
    README h1 becomes h3; everything is capped at h6.
    """
    level = int(node.tag[1:])
    semantic = min(level + 2, 6)
    body = renderer.render_children(node)
    return f'<h{semantic} data-level="{level}">{body}</h{semantic}>\n'


def _plain_code_block(code: str, language: str) -> str:
    return f'<pre><code class="language-{escapeHtml(language)}">{escapeHtml(code)}</code></pre>\n'


def render_code(node: SyntaxTreeNode, renderer: "ReadmeRenderer") -> str:
    """Highlight fenced code when its language is loaded, else a plain block."""
    info = unescapeAll(node.info or "").strip()
    language = info.split()[0] if info else "text"
    code = node.content
    highlighter = renderer.highlighter
    if highlighter.is_loaded(language):
        try:
            return highlighter.code_to_html(code, language)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.debug(
                "Highlighting failed; using plain code block",
                exc_info=True,
                extra=extra_context(
                    event="render",
                    component="readme",
                    action="highlight",
                    outcome="fallback",
                    language=language,
                ),
            )
    return _plain_code_block(code, language)


def render_image(node: SyntaxTreeNode, renderer: "ReadmeRenderer") -> str:
    src = resolve_image_url(str(node.attrs.get("src", "")), renderer.package_name)
    alt = renderer.inline_text(node)
    title = node.attrs.get("title")
    html = f'<img src="{escapeHtml(src)}"'
    if alt:
        html += f' alt="{escapeHtml(alt)}"'
    if title:
        html += f' title="{escapeHtml(str(title))}"'
    return html + ">"


def render_link(node: SyntaxTreeNode, renderer: "ReadmeRenderer") -> str:
    href = resolve_url(str(node.attrs.get("href", "")), renderer.package_name)
    html = f'<a href="{escapeHtml(href)}"'
    title = node.attrs.get("title")
    if title:
        html += f' title="{escapeHtml(str(title))}"'
    if is_http_url(href):
        html += f' rel="{Constants.EXTERNAL_LINK_REL}" target="{Constants.EXTERNAL_LINK_TARGET}"'
    return f"{html}>{renderer.render_children(node)}</a>"


def render_blockquote(node: SyntaxTreeNode, renderer: "ReadmeRenderer") -> str:
    """GitHub-style callouts: a leading ``[!NOTE]`` etc. becomes ``data-callout``."""
    body = renderer.render_children(node)
    match = _CALLOUT_RE.match(body)
    if match is None:
        return f"<blockquote>\n{body}</blockquote>\n"
    callout = match.group(1).lower()
    rest = body[match.end():]
    if rest.startswith("</p>"):
        # The marker was the whole first paragraph.
        rest = rest[len("</p>"):].lstrip("\n")
    else:
        rest = "<p>" + rest
    return f'<blockquote data-callout="{callout}">\n{rest}</blockquote>\n'


def render_table_cell(node: SyntaxTreeNode, renderer: "ReadmeRenderer") -> str:
    """Column alignment is written as ``align`` rather than an inline style."""
    match = _TEXT_ALIGN_RE.search(str(node.attrs.get("style", "")))
    align = f' align="{match.group(1).lower()}"' if match else ""
    return f"<{node.tag}{align}>{renderer.render_children(node)}</{node.tag}>\n"


@dataclass(frozen=True)
class RenderRules:
    """Pluggable render functions, one per overridden node kind."""
    heading: RenderRule = render_heading
    code: RenderRule = render_code
    image: RenderRule = render_image
    link: RenderRule = render_link
    blockquote: RenderRule = render_blockquote
    table_cell: RenderRule = render_table_cell

    def as_mapping(self) -> Dict[str, RenderRule]:
        """Map markdown-it node types onto the rules."""
        return {
            "heading": self.heading,
            "fence": self.code,
            "code_block": self.code,
            "image": self.image,
            "link": self.link,
            "blockquote": self.blockquote,
            "th": self.table_cell,
            "td": self.table_cell,
        }


def create_parser() -> MarkdownIt:
    """CommonMark plus GFM tables and strikethrough; raw HTML is kept for the sanitizer."""
    return MarkdownIt("commonmark", {"html": True}).enable(["table", "strikethrough"])


class ReadmeRenderer:
    """Tree-walking renderer driven by a node type -> rule mapping."""

    def __init__(
        self,
        package_name: str,
        rules: Optional[RenderRules] = None,
        highlighter: Optional[Highlighter] = None,
        parser: Optional[MarkdownIt] = None,
    ):
        self.package_name = package_name
        self._rules: Mapping[str, RenderRule] = (rules or RenderRules()).as_mapping()
        self._highlighter = highlighter
        self._md = parser or create_parser()
        self._env: MutableMapping[str, Any] = {}

    @property
    def highlighter(self) -> Highlighter:
        if self._highlighter is None:
            self._highlighter = get_highlighter()
        return self._highlighter

    def render(self, source: str) -> str:
        """Render Markdown to unsanitized HTML."""
        self._env = {}
        tokens = self._md.parse(source, self._env)
        return self.render_children(SyntaxTreeNode(tokens))

    def render_children(self, node: SyntaxTreeNode) -> str:
        return "".join(self.render_node(child) for child in node.children)

    def render_node(self, node: SyntaxTreeNode) -> str:
        rule = self._rules.get(node.type)
        if rule is not None:
            return rule(node, self)
        return self.render_default(node)

    def render_default(self, node: SyntaxTreeNode) -> str:
        """Render a node the way markdown-it would, recursing through the walker."""
        renderer = self._md.renderer
        options = self._md.options
        if node.nester_tokens is not None:
            opening = node.nester_tokens.opening
            closing = node.nester_tokens.closing
            # renderToken peeks at the next token to decide on newlines.
            stream = [opening, *self._first_token(node), closing]
            return (
                renderer.renderToken(stream, 0, options, self._env)
                + self.render_children(node)
                + renderer.renderToken(stream, len(stream) - 1, options, self._env)
            )
        token = node.token
        if token is None:
            return self.render_children(node)
        if token.type == "inline":
            return self.render_children(node)
        rule = renderer.rules.get(token.type)
        if rule is not None:
            return rule([token], 0, options, self._env)
        return renderer.renderToken([token], 0, options, self._env)

    def inline_text(self, node: SyntaxTreeNode) -> str:
        """Plain text of an inline node (used for image alt text)."""
        children = node.token.children if node.token is not None else None
        return self._md.renderer.renderInlineAsText(children or [], self._md.options, self._env)

    @staticmethod
    def _first_token(node: SyntaxTreeNode) -> List[Token]:
        if not node.children:
            return []
        child = node.children[0]
        if child.token is not None:
            return [child.token]
        if child.nester_tokens is not None:
            return [child.nester_tokens.opening]
        return []


def render_readme_html(
    content: str,
    package_name: str,
    rules: Optional[RenderRules] = None,
    highlighter: Optional[Highlighter] = None,
) -> str:
    """Render README Markdown for ``package_name`` into sanitized HTML."""
    if not content:
        return ""
    renderer = ReadmeRenderer(package_name, rules=rules, highlighter=highlighter)
    raw_html = renderer.render(content)
    if is_debug_enabled(logger):
        logger.debug(
            "README rendered",
            extra=extra_context(
                event="render",
                component="readme",
                action="render",
                outcome="success",
                package=package_name,
                size=len(raw_html),
            ),
        )
    return sanitize_html(raw_html, package_name)
