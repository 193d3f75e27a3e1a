"""Standalone HTML page around a rendered view."""

from __future__ import annotations

import html

from .pipeline import RenderedView

MERMAID_SCRIPT = "https://cdn.jsdelivr.net/npm/mermaid@11/dist/mermaid.min.js"

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ max-width: 52em; margin: 2em auto; font-family: sans-serif; line-height: 1.6; }}
pre {{ padding: 0.8em; overflow-x: auto; background: #f6f8fa; }}
.toc-container {{ border: 1px solid #ddd; padding: 0.8em 1em; margin-bottom: 1.5em; }}
.toc-title {{ font-weight: bold; margin-bottom: 0.4em; }}
.toc-link {{ display: block; text-decoration: none; }}
.mermaid-error pre {{ color: #b00020; background: #fdecea; }}
</style>
</head>
<body>
{body}
{scripts}
</body>
</html>
"""


def html_page(view: RenderedView, *, title: str = "Markdown") -> str:
    scripts = ""
    if view.diagrams:
        scripts = (
            f'<script src="{MERMAID_SCRIPT}"></script>\n'
            "<script>mermaid.initialize({startOnLoad: true});</script>"
        )
    return PAGE_TEMPLATE.format(title=html.escape(title), body=view.html, scripts=scripts)


__all__ = ["html_page"]
