"""Markdown to HTML via markdown-it-py, with anchor and diagram hooks."""

from __future__ import annotations

import re
from typing import Any, Dict, List, MutableMapping, Protocol

from markdown_it import MarkdownIt
from mdit_py_plugins.dollarmath import dollarmath_plugin
from mdit_py_plugins.tasklists import tasklists_plugin
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from md_engine.outline import match_heading, slugify

from .diagrams import DiagramJob

DIAGRAM_LANGUAGES = frozenset({"mermaid"})

# Same line breaks markdown-it normalizes, so token line maps index this split.
LINE_BREAK = re.compile(r"\r\n?|\n")


class MarkupTransformer(Protocol):
    def render(self, text: str, env: MutableMapping[str, Any]) -> str:
        """Render ``text``; diagram fences are appended to ``env["diagrams"]``.

        ``env["lines"]``, when present, holds the source lines heading anchors
        are computed from.
        """
        ...


def source_lines(text: str) -> List[str]:
    return LINE_BREAK.split(text)


def fence_language(info: str) -> str:
    parts = info.strip().split(maxsplit=1)
    return parts[0].lower() if parts else ""


class MarkdownTransformer:
    """CommonMark plus tables, strikethrough, task lists, and dollar math.

    Heading elements receive ``id`` attributes from ``slugify`` so they match
    the outline links; diagram fences become placeholders recorded in the
    render env for the pipeline to resolve later.
    """

    def __init__(
        self,
        *,
        highlight_style: str = "default",
        diagram_languages: frozenset[str] = DIAGRAM_LANGUAGES,
    ) -> None:
        self.diagram_languages = diagram_languages
        self._formatter = HtmlFormatter(nowrap=True, noclasses=True, style=highlight_style)
        self._lexer_cache: Dict[str, Any] = {}
        self._md = (
            MarkdownIt("commonmark", {"html": False, "highlight": self._highlight})
            .enable("table")
            .enable("strikethrough")
        )
        self._md.use(tasklists_plugin)
        self._md.use(dollarmath_plugin)

        default_fence = self._md.renderer.rules["fence"]
        render_token = self._md.renderer.renderToken

        def heading_open(tokens, idx, options, env):
            token = tokens[idx]
            anchor = self._heading_anchor(tokens, idx, env)
            if anchor is not None:
                token.attrSet("id", anchor)
            return render_token(tokens, idx, options, env)

        def fence(tokens, idx, options, env):
            token = tokens[idx]
            language = fence_language(token.info or "")
            if language in self.diagram_languages:
                jobs: List[DiagramJob] = env.setdefault("diagrams", [])
                job = DiagramJob(
                    index=len(jobs),
                    language=language,
                    source=token.content.rstrip("\n"),
                )
                jobs.append(job)
                return job.placeholder + "\n"
            return default_fence(tokens, idx, options, env)

        self._md.renderer.rules["heading_open"] = heading_open
        self._md.renderer.rules["fence"] = fence

    def render(self, text: str, env: MutableMapping[str, Any]) -> str:
        env.setdefault("diagrams", [])
        env.setdefault("lines", source_lines(text))
        return self._md.render(text, env)

    def _heading_anchor(self, tokens, idx: int, env) -> str | None:
        token = tokens[idx]
        lines = env.get("lines")
        if token.map and lines:
            start = token.map[0]
            if 0 <= start < len(lines):
                entry = match_heading(lines[start])
                if entry is not None:
                    return entry.id
        inline = tokens[idx + 1] if idx + 1 < len(tokens) else None
        if inline is None or inline.type != "inline":
            return None
        return slugify(inline.content.strip())

    def _highlight(self, code: str, lang: str, attrs: str) -> str:
        del attrs
        if not lang:
            return ""
        lexer = self._lexer_cache.get(lang)
        if lexer is None:
            try:
                lexer = get_lexer_by_name(lang)
            except ClassNotFound:
                return ""
            self._lexer_cache[lang] = lexer
        return highlight(code, lexer, self._formatter)


__all__ = [
    "DIAGRAM_LANGUAGES",
    "LINE_BREAK",
    "MarkdownTransformer",
    "MarkupTransformer",
    "fence_language",
    "source_lines",
]
