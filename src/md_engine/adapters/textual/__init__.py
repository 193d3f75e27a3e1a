"""Textual host: widget capability adapters.

The runnable app lives in ``md_engine.adapters.textual.app``.
"""

from .controller import TextualClipboard, TextualSurface

__all__ = ["TextualClipboard", "TextualSurface"]
