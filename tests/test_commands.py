from __future__ import annotations

import pytest

from md_engine.buffer import SelectionRange
from md_engine.commands import (
    DEFAULT_COMMANDS,
    CommandConflictError,
    CommandKind,
    CommandRegistry,
    TextCommand,
    TextMutationEngine,
    load_default_commands,
)

SCENARIO = "# Title\n\ntext\n## Sub\n"


def make_registry() -> CommandRegistry:
    return load_default_commands(CommandRegistry())


def make_engine() -> TextMutationEngine:
    return TextMutationEngine()


def selection_of(text: str, needle: str) -> SelectionRange:
    start = text.index(needle)
    return SelectionRange(start, start + len(needle))


def test_insert_at_caret_scenario() -> None:
    engine = make_engine()
    command = TextCommand.insert("snippet", "**" + "bold" + "**")

    result = engine.apply(SCENARIO, SelectionRange.caret(0), command)

    assert result.text == "**bold**" + SCENARIO
    assert result.selection == SelectionRange.caret(8)


def test_wrap_without_selection_places_caret_after_insert() -> None:
    engine = make_engine()
    bold = TextCommand.wrap("bold", "**", "**", "bold")

    result = engine.apply(SCENARIO, SelectionRange.caret(0), bold)

    assert result.text.startswith("**bold**# Title")
    assert result.selection == SelectionRange.caret(8)


def test_wrap_selection_returns_inner_range() -> None:
    engine = make_engine()
    italic = make_registry().get("italic")
    selection = selection_of(SCENARIO, "text")

    result = engine.apply(SCENARIO, selection, italic)

    assert "*text*" in result.text
    assert result.selection is not None
    assert len(result.selection) == 4
    assert result.text[result.selection.start : result.selection.end] == "text"
    assert result.text[result.selection.end] == "*"


def test_second_wrap_encloses_only_original_content() -> None:
    engine = make_engine()
    registry = make_registry()
    first = engine.apply(SCENARIO, selection_of(SCENARIO, "text"), registry.get("italic"))

    second = engine.apply(first.text, first.selection, registry.get("bold"))

    assert "***text***" in second.text
    assert second.selection is not None
    assert second.text[second.selection.start : second.selection.end] == "text"


@pytest.mark.parametrize("command_id", ["bold", "italic", "strikethrough", "link"])
def test_wrap_cursor_rule_is_marker_independent(command_id: str) -> None:
    engine = make_engine()
    command = make_registry().get(command_id)
    text = "say hello now"

    result = engine.apply(text, selection_of(text, "hello"), command)

    assert result.text == "say " + command.prefix + "hello" + command.suffix + " now"
    assert result.selection is not None
    assert result.selection.end == len("say ") + len(command.prefix) + len("hello")


def test_link_wrap_uses_placeholder_when_nothing_selected() -> None:
    engine = make_engine()
    link = make_registry().get("link")

    result = engine.apply("", SelectionRange.caret(0), link)

    assert result.text == "[link text](https://example.com)"
    assert result.selection == SelectionRange.caret(len(result.text))


def test_insert_replaces_selection() -> None:
    engine = make_engine()
    text = "hello world"

    result = engine.apply(text, SelectionRange(0, 5), TextCommand.insert("bye", "bye"))

    assert result.text == "bye world"
    assert result.selection == SelectionRange.caret(3)


def test_insert_round_trip_keeps_every_character() -> None:
    engine = make_engine()
    text = "abcdef"
    payload = "XYZ"

    result = engine.insert_text(text, SelectionRange.caret(3), payload)

    assert result.text == text[:3] + payload + text[3:]
    assert len(result.text) == len(text) + len(payload)


def test_stale_selection_is_clamped() -> None:
    engine = make_engine()

    result = engine.insert_text("abc", SelectionRange(10, 20), "X")

    assert result.text == "abcX"
    assert result.selection == SelectionRange.caret(4)


def test_reversed_selection_is_ordered() -> None:
    engine = make_engine()
    bold = make_registry().get("bold")

    result = engine.apply("abcd", SelectionRange(3, 1), bold)

    assert result.text == "a**bc**d"
    assert result.selection == SelectionRange(3, 5)


def test_missing_cursor_target_appends() -> None:
    engine = make_engine()
    bold = make_registry().get("bold")

    result = engine.apply("start ", None, bold)

    assert result.text == "start **bold text**"
    assert result.selection is None


def test_registry_loads_defaults() -> None:
    registry = make_registry()

    assert len(registry) == len(DEFAULT_COMMANDS)
    assert registry.get("heading_2").prefix == "## "
    assert registry.get("outline").snippet == "[TOC]\n\n"
    assert registry.get("bold").kind is CommandKind.WRAP
    assert registry.by_shortcut("CTRL+B") is registry.get("bold")
    assert "block" in registry.stats().groups


def test_registry_rejects_duplicates_and_unknown_ids() -> None:
    registry = make_registry()

    with pytest.raises(ValueError):
        registry.register(TextCommand.insert("bold", "!!"))
    with pytest.raises(KeyError):
        registry.get("does_not_exist")


def test_registry_shortcut_conflict() -> None:
    registry = make_registry()
    clash = TextCommand.insert("shout", "!", shortcut="ctrl+b")

    with pytest.raises(CommandConflictError):
        registry.register(clash)


def test_registry_replace_moves_shortcut() -> None:
    registry = make_registry()
    revision = registry.revision()

    registry.register(TextCommand.wrap("bold", "__", "__", "x", shortcut="ctrl+u"), replace=True)

    assert registry.by_shortcut("ctrl+b") is None
    assert registry.by_shortcut("ctrl+u") is registry.get("bold")
    assert registry.revision() == revision + 1


def test_unregister_and_group_filter() -> None:
    registry = make_registry()

    removed = registry.unregister("heading_1")

    assert removed is not None and removed.id == "heading_1"
    assert "heading_1" not in registry
    assert [cmd.id for cmd in registry.iter_commands("heading")] == [
        "heading_2",
        "heading_3",
    ]


def test_text_command_requires_id() -> None:
    with pytest.raises(ValueError):
        TextCommand.insert("", "x")
