"""Shared syntax highlighter for README code blocks.

Resolving lexers and the style is the expensive part, so one process-wide
instance is built lazily on first use by ``get_highlighter()`` and reused
afterwards. It is read-only once constructed and never torn down.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, List, Optional

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from ..common.logging_utils import Timer, extra_context
from ..constants import Constants

logger = logging.getLogger(__name__)


class Highlighter:
    """Pygments-backed highlighter with a fixed set of loaded languages."""

    def __init__(self, languages: Iterable[str], theme: str):
        """Load lexers for ``languages`` and build the inline-style formatter.

        Args:
            languages: Language names; each lexer's aliases become loaded too.
            theme: Pygments style name, falling back to ``default`` when unknown.
        """
        self._lexers: Dict[str, Lexer] = {}
        with Timer() as timer:
            for name in languages:
                try:
                    lexer = get_lexer_by_name(name)
                except ClassNotFound:
                    logger.debug("No lexer available for %s; skipping", name)
                    continue
                for alias in [name, *lexer.aliases]:
                    self._lexers.setdefault(alias.lower(), lexer)
            try:
                self._formatter = HtmlFormatter(style=theme, noclasses=True, wrapcode=True)
                self.theme = theme
            except ClassNotFound:
                logger.warning("Unknown highlight theme %s; using default", theme)
                self._formatter = HtmlFormatter(style="default", noclasses=True, wrapcode=True)
                self.theme = "default"
        logger.debug(
            "Highlighter initialized",
            extra=extra_context(
                event="init",
                component="highlighter",
                action="load_languages",
                outcome="success",
                count=len(self._lexers),
                duration_ms=timer.duration_ms(),
            ),
        )

    def loaded_languages(self) -> List[str]:
        return sorted(self._lexers)

    def is_loaded(self, language: Optional[str]) -> bool:
        return bool(language) and language.lower() in self._lexers

    def code_to_html(self, code: str, language: str) -> str:
        """Highlight ``code``; raises ``ClassNotFound`` for unloaded languages."""
        lexer = self._lexers.get(language.lower())
        if lexer is None:
            raise ClassNotFound(f"language not loaded: {language}")
        return highlight(code, lexer, self._formatter)


_highlighter: Optional[Highlighter] = None
_highlighter_lock = threading.Lock()


def get_highlighter() -> Highlighter:
    """Return the process-wide highlighter, creating it on first use."""
    global _highlighter  # pylint: disable=global-statement
    if _highlighter is None:
        with _highlighter_lock:
            if _highlighter is None:
                _highlighter = Highlighter(Constants.HIGHLIGHT_LANGUAGES, Constants.HIGHLIGHT_THEME)
    return _highlighter
