"""Built-in toolbar commands that seed a registry."""

from __future__ import annotations

from .models import TextCommand
from .registry import CommandRegistry

DEFAULT_COMMANDS: tuple[TextCommand, ...] = (
    TextCommand.insert("heading_1", "# ", title="Heading 1", group="heading"),
    TextCommand.insert("heading_2", "## ", title="Heading 2", group="heading"),
    TextCommand.insert("heading_3", "### ", title="Heading 3", group="heading"),
    TextCommand.wrap(
        "bold", "**", "**", "bold text", title="Bold", shortcut="ctrl+b"
    ),
    TextCommand.wrap(
        "italic", "*", "*", "italic text", title="Italic"
    ),
    TextCommand.wrap(
        "strikethrough", "~~", "~~", "deleted text", title="Strikethrough"
    ),
    TextCommand.wrap(
        "link",
        "[",
        "](https://example.com)",
        "link text",
        title="Link",
        shortcut="ctrl+k",
    ),
    TextCommand.insert(
        "code_block", "```javascript\n// code\n```\n", title="Code block", group="block"
    ),
    TextCommand.insert("quote", "> ", title="Quote", group="block"),
    TextCommand.insert("bullet_list", "- ", title="Bullet list", group="block"),
    TextCommand.insert("ordered_list", "1. ", title="Ordered list", group="block"),
    TextCommand.insert("task_list", "- [ ] ", title="Task list", group="block"),
    TextCommand.insert(
        "table",
        "| Column 1 | Column 2 |\n|------|------|\n| Cell | Cell |\n",
        title="Table",
        group="block",
    ),
    TextCommand.insert("horizontal_rule", "\n---\n", title="Divider", group="block"),
    TextCommand.insert(
        "math_block", "$$\n\\frac{1}{2}\n$$\n", title="Formula", group="block"
    ),
    TextCommand.insert(
        "mermaid",
        "```mermaid\ngraph TD\n  A[Start] --> B[End]\n```\n",
        title="Mermaid diagram",
        group="block",
    ),
    TextCommand.insert("outline", "[TOC]\n\n", title="Table of contents", group="block"),
    TextCommand.insert("indent", "  ", title="Indent", group="edit", shortcut="tab"),
)


def load_default_commands(registry: CommandRegistry) -> CommandRegistry:
    for command in DEFAULT_COMMANDS:
        registry.register(command, replace=True)
    return registry


__all__ = ["DEFAULT_COMMANDS", "load_default_commands"]
