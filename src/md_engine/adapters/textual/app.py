"""Executable Textual app that hosts the Markdown editing engine."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Horizontal, Vertical, VerticalScroll
    from textual.screen import ModalScreen
    from textual.widgets import (
        Button,
        Footer,
        Header,
        Input,
        Label,
        Markdown,
        Static,
        TextArea,
    )
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use md_engine.adapters.textual.app"
    ) from exc

from md_engine.buffer import Pane
from md_engine.commands import DEFAULT_COMMANDS
from md_engine.persistence import FileSlotStorage, MemoryStorage, Storage
from md_engine.render import RenderedView, html_page
from md_engine.runtime import telemetry
from md_engine.runtime.config import EngineSettings
from md_engine.session import DocumentSession, SessionHooks

from .controller import TextualClipboard, TextualSurface

TIMER_INTERVAL = 0.05


class ConfirmScreen(ModalScreen[bool]):
    DEFAULT_CSS = """
    ConfirmScreen { align: center middle; }
    #dialog { width: 60; height: auto; border: thick $error; padding: 1 2; background: $surface; }
    #dialog Horizontal { height: auto; margin-top: 1; }
    """

    def __init__(self, message: str) -> None:
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Label(self.message)
            with Horizontal():
                yield Button("OK", variant="error", id="ok")
                yield Button("Cancel", id="cancel")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "ok")


class PromptScreen(ModalScreen[Optional[str]]):
    DEFAULT_CSS = """
    PromptScreen { align: center middle; }
    #dialog { width: 70; height: auto; border: thick $accent; padding: 1 2; background: $surface; }
    """

    def __init__(self, message: str, default: Optional[str] = None) -> None:
        super().__init__()
        self.message = message
        self.default = default

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Label(self.message)
            yield Input(value=self.default or "", id="answer")
            yield Button("Cancel", id="cancel")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        del event
        self.dismiss(None)


class TextualPrompts:
    """``HostPrompts`` backed by modal screens; must run inside a worker."""

    def __init__(self, app: App) -> None:
        self.app = app

    async def confirm(self, message: str) -> bool:
        return bool(await self.app.push_screen_wait(ConfirmScreen(message)))

    async def prompt_text(
        self, message: str, default: Optional[str] = None
    ) -> Optional[str]:
        return await self.app.push_screen_wait(PromptScreen(message, default))


HOST_BUTTONS = (
    ("image_url", "Image URL"),
    ("image_file", "Image file"),
    ("copy", "Copy"),
    ("paste", "Paste"),
    ("clear", "Clear"),
    ("download", "Download"),
)


class MarkdownEditorApp(App[None]):
    """Editor pane, live preview, and a toolbar driven by the command registry."""

    CSS = """
    #toolbar { height: auto; max-height: 6; }
    #toolbar Button { min-width: 6; height: 3; margin: 0 1 0 0; }
    #panes { height: 1fr; }
    #editor { width: 1fr; }
    #preview { width: 1fr; border: round $accent; padding: 0 1; }
    #outline { color: $text-muted; margin-bottom: 1; }
    #status-line { height: 1; background: $surface-darken-1; padding: 0 1; }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        *(
            Binding(cmd.shortcut, f"command('{cmd.id}')", cmd.title, priority=True)
            for cmd in DEFAULT_COMMANDS
            if cmd.shortcut
        ),
    ]

    def __init__(self, storage: Storage, settings: EngineSettings) -> None:
        super().__init__()
        self.storage = storage
        self.settings = settings
        self.session: DocumentSession | None = None
        self._status = ""

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="toolbar"):
            for command in DEFAULT_COMMANDS:
                yield Button(command.title, id=f"cmd-{command.id}")
            for host_id, label in HOST_BUTTONS:
                yield Button(label, id=f"host-{host_id}")
        with Horizontal(id="panes"):
            yield TextArea(id="editor", soft_wrap=True)
            with VerticalScroll(id="preview"):
                yield Static("", id="outline")
                yield Markdown("", id="preview-body")
        yield Static("", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        editor = self.query_one("#editor", TextArea)
        preview = self.query_one("#preview", VerticalScroll)
        self.session = DocumentSession(
            self.storage,
            settings=self.settings,
            editor=TextualSurface(editor),
            preview=TextualSurface(preview),
            prompts=TextualPrompts(self),
            clipboard=TextualClipboard(self),
            hooks=SessionHooks(
                rendered_view=self._show_view,
                status=self._set_status,
            ),
        )
        self.session.start()
        self.watch(editor, "scroll_y", lambda _value: self._pane_scrolled(Pane.EDITOR), init=False)
        self.watch(preview, "scroll_y", lambda _value: self._pane_scrolled(Pane.PREVIEW), init=False)
        self.set_interval(TIMER_INTERVAL, self.session.process_timeouts)
        editor.focus()

    def on_unmount(self) -> None:
        if self.session:
            self.session.close()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.session:
            self.session.on_buffer_change(event.text_area.text)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id.startswith("cmd-"):
            self.action_command(button_id[len("cmd-"):])
        elif button_id.startswith("host-"):
            self._run_host_action(button_id[len("host-"):])

    def action_command(self, command_id: str) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.session:
            self.session.on_command(command_id)
            self.query_one("#editor", TextArea).focus()

    def _run_host_action(self, name: str) -> None:
        session = self.session
        if session is None:
            return
        if name == "download":
            target = session.download(Path.cwd())
            self._set_status(f"Saved {target.name}")
            return
        coroutines = {
            "image_url": session.insert_image_url,
            "image_file": self._insert_image_file,
            "copy": session.copy_all,
            "paste": session.paste,
            "clear": session.clear,
        }
        self.run_worker(coroutines[name](), exclusive=True, group="host")

    async def _insert_image_file(self) -> None:
        assert self.session is not None
        path = await TextualPrompts(self).prompt_text("Image file path:")
        if path:
            await self.session.insert_image_file(Path(path).expanduser())

    def _pane_scrolled(self, pane: Pane) -> None:
        if self.session:
            self.session.on_surface_scroll(pane)

    def _show_view(self, view: RenderedView) -> None:
        editor = self.query_one("#editor", TextArea)
        session = self.session
        # Commands replace the buffer before the widget knows; push it back.
        if session is not None and editor.text != session.text:
            editor.load_text(session.text)
        outline = self.query_one("#outline", Static)
        if view.has_outline_marker and view.outline:
            outline.update(
                "\n".join(f"{'  ' * (entry.level - 1)}{entry.text}" for entry in view.outline)
            )
            outline.display = True
        else:
            outline.display = False
        self.call_later(self.query_one("#preview-body", Markdown).update, view.source)
        self._refresh_status_line()

    def _set_status(self, message: str) -> None:
        self._status = message
        self._refresh_status_line()

    def _refresh_status_line(self) -> None:
        count = self.session.character_count if self.session else 0
        parts = [f"{count} chars"]
        if self._status:
            parts.append(self._status)
        self.query_one("#status-line", Static).update(" | ".join(parts))


def export_html(session: DocumentSession, target: Path) -> Path:
    view = session.start()
    resolved = asyncio.run(session.refresh_diagrams()) or view
    target.write_text(html_page(resolved), encoding="utf-8")
    session.close()
    return target


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the Markdown editor.")
    parser.add_argument(
        "--storage-dir",
        type=Path,
        default=None,
        help="Directory holding the saved document (default: $MD_ENGINE_STORAGE_DIR)",
    )
    parser.add_argument("--slot", default=None, help="Storage slot name")
    parser.add_argument(
        "--memory",
        action="store_true",
        help="Do not read or write the saved document",
    )
    parser.add_argument(
        "--export-html",
        type=Path,
        default=None,
        metavar="PATH",
        help="Render the saved document to an HTML page and exit",
    )
    parser.add_argument(
        "--log-preset",
        default=None,
        help="Telemetry preset (development, production, quiet)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    settings = EngineSettings.from_env().with_overrides(
        storage_dir=args.storage_dir, storage_slot=args.slot
    )
    storage: Storage = (
        MemoryStorage()
        if args.memory
        else FileSlotStorage(settings.storage_dir, settings.storage_slot)
    )

    if args.export_html is not None:
        if args.log_preset:
            telemetry.configure(preset=args.log_preset)
        target = export_html(DocumentSession(storage, settings=settings), args.export_html)
        print(target)
        return

    # The terminal belongs to Textual; keep console logging off unless asked.
    telemetry.configure(preset=args.log_preset or "quiet")
    MarkdownEditorApp(storage, settings).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
