"""UI-agnostic Markdown editing engine."""

__all__ = [
    "adapters",
    "buffer",
    "commands",
    "outline",
    "persistence",
    "render",
    "runtime",
    "scroll",
    "session",
]

__version__ = "0.1.0"
