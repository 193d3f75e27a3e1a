"""Document session: the composition root that owns the buffer-of-record."""

from __future__ import annotations

import asyncio
import base64
import mimetypes
import time
from pathlib import Path
from typing import Dict, Optional

from md_engine.buffer import (
    DocumentBuffer,
    EditingSurface,
    Pane,
    SelectionRange,
)
from md_engine.commands import (
    CommandRegistry,
    MutationResult,
    TextCommand,
    TextMutationEngine,
    load_default_commands,
)
from md_engine.outline import HeadingEntry, OutlineExtractor
from md_engine.persistence import PersistenceScheduler, Storage
from md_engine.render import MarkdownTransformer, RenderedView, RenderPipeline
from md_engine.runtime import telemetry
from md_engine.runtime.config import DEFAULT_OUTLINE_MARKER, EngineSettings
from md_engine.runtime.timers import Clock
from md_engine.scroll import ScrollSyncController, offset_for_fraction, scroll_fraction

from .host import Clipboard, ClipboardError, DeclinePrompts, HostPrompts, SessionHooks
from .sample import SAMPLE_DOCUMENT

CLEAR_CONFIRMATION = "Clear all content? This cannot be undone."


class DocumentSession:
    """Single writer of the document buffer.

    Every other component receives the text by value and hands back a
    proposal; only this class replaces the buffer and pushes selections and
    scroll offsets onto the host surfaces.
    """

    def __init__(
        self,
        storage: Storage,
        *,
        settings: Optional[EngineSettings] = None,
        editor: Optional[EditingSurface] = None,
        preview: Optional[EditingSurface] = None,
        prompts: Optional[HostPrompts] = None,
        clipboard: Optional[Clipboard] = None,
        hooks: Optional[SessionHooks] = None,
        pipeline: Optional[RenderPipeline] = None,
        commands: Optional[CommandRegistry] = None,
        clock: Optional[Clock] = None,
        default_document: str = SAMPLE_DOCUMENT,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.storage = storage
        self.prompts: HostPrompts = prompts or DeclinePrompts()
        self.clipboard = clipboard
        self.hooks = hooks or SessionHooks()
        self.default_document = default_document
        self.logger = telemetry.get_logger("md_engine.session")
        self.pipeline = pipeline or RenderPipeline(
            extractor=OutlineExtractor(marker=self.settings.outline_marker),
            transformer=MarkdownTransformer(
                highlight_style=self.settings.highlight_style
            ),
        )
        self.commands = (
            commands if commands is not None else load_default_commands(CommandRegistry())
        )
        marker = self.settings.outline_marker
        if marker != DEFAULT_OUTLINE_MARKER and "outline" in self.commands:
            self.commands.register(
                TextCommand.insert(
                    "outline",
                    f"{marker}\n\n",
                    title="Table of contents",
                    group="block",
                ),
                replace=True,
            )
        self.engine = TextMutationEngine()
        self.scroll = ScrollSyncController(
            window_ms=self.settings.scroll_window_ms, clock=clock
        )
        self.scheduler = PersistenceScheduler(
            storage, delay_ms=self.settings.save_delay_ms, clock=clock
        )
        self._surfaces: Dict[Pane, Optional[EditingSurface]] = {
            Pane.EDITOR: editor,
            Pane.PREVIEW: preview,
        }
        self._buffer = DocumentBuffer()
        self._view: Optional[RenderedView] = None

    # -- state ---------------------------------------------------------------

    @property
    def text(self) -> str:
        return self._buffer.text

    @property
    def revision(self) -> int:
        return self._buffer.revision

    @property
    def buffer(self) -> DocumentBuffer:
        return self._buffer

    @property
    def view(self) -> Optional[RenderedView]:
        return self._view

    @property
    def outline(self) -> tuple[HeadingEntry, ...]:
        return self._view.outline if self._view else ()

    @property
    def character_count(self) -> int:
        return len(self._buffer.text)

    def attach_surface(self, pane: Pane | str, surface: Optional[EditingSurface]) -> None:
        self._surfaces[Pane(pane)] = surface

    # -- lifecycle -----------------------------------------------------------

    def start(self) -> RenderedView:
        with telemetry.span(
            "session::start", logger_name="md_engine.session", component="session"
        ) as handle:
            stored = self.storage.load()
            initial = self.default_document if stored is None else stored
            handle.add_metadata("source", "default" if stored is None else "storage")
            self._buffer = DocumentBuffer(text=initial, revision=0)
            self.scheduler.establish(initial)
            return self._render()

    def close(self) -> None:
        self.scheduler.shutdown()
        self.scroll.reset()

    def process_timeouts(self) -> None:
        self.scroll.process_timeouts()
        self.scheduler.process_timeouts()

    # -- inbound API ---------------------------------------------------------

    def on_buffer_change(self, text: str) -> RenderedView:
        if text == self._buffer.text and self._view is not None:
            return self._view
        return self._replace(text)

    def on_scroll(self, pane: Pane | str, fraction: float) -> Optional[float]:
        """Mirror ``fraction`` onto the other pane; return the applied fraction."""

        target = self.scroll.handle_scroll(pane, fraction)
        if target is None:
            return None
        surface = self._surfaces.get(target.pane)
        if surface is not None:
            metrics = surface.get_scroll_metrics()
            surface.set_scroll_offset(offset_for_fraction(metrics, target.fraction))
        self.hooks.scroll_target(target.pane, target.fraction)
        return target.fraction

    def on_surface_scroll(self, pane: Pane | str) -> Optional[float]:
        surface = self._surfaces.get(Pane(pane))
        if surface is None:
            return None
        return self.on_scroll(pane, scroll_fraction(surface.get_scroll_metrics()))

    def on_command(self, command: TextCommand | str) -> MutationResult:
        resolved = self.commands.get(command) if isinstance(command, str) else command
        with telemetry.span(
            "session::command",
            logger_name="md_engine.session",
            component="commands",
            metadata={"command": resolved.id, "kind": resolved.kind.value},
        ):
            result = self.engine.apply(self._buffer.text, self._live_selection(), resolved)
            self._commit(result)
        return result

    def insert_text(self, payload: str) -> MutationResult:
        result = self.engine.insert_text(self._buffer.text, self._live_selection(), payload)
        self._commit(result)
        return result

    # -- host-assisted commands ----------------------------------------------

    async def clear(self) -> bool:
        if not await self.prompts.confirm(CLEAR_CONFIRMATION):
            return False
        self._replace("")
        if not self.storage.clear():
            self.logger.warning("storage clear failed")
        return True

    async def insert_image_url(self) -> Optional[MutationResult]:
        url = await self.prompts.prompt_text("Image URL:")
        if not url:
            return None
        alt = await self.prompts.prompt_text("Image description (optional):", "image")
        return self.insert_text(f"![{alt or 'image'}]({url})\n")

    async def insert_image_file(self, path: Path | str) -> Optional[MutationResult]:
        source = Path(path)
        mime, _ = mimetypes.guess_type(source.name)
        if not mime or not mime.startswith("image/"):
            self.hooks.status("Please choose an image file.")
            return None
        try:
            data = await asyncio.to_thread(source.read_bytes)
        except OSError as exc:
            self.hooks.status(f"Could not read image: {exc}")
            return None
        encoded = base64.b64encode(data).decode("ascii")
        # Merged against whatever the buffer and caret are now, not at call time.
        return self.insert_text(f"![{source.name}](data:{mime};base64,{encoded})\n")

    async def copy_all(self) -> bool:
        if self.clipboard is None:
            self.hooks.status("Copy failed, please copy manually.")
            return False
        try:
            await self.clipboard.write_text(self._buffer.text)
        except (ClipboardError, OSError) as exc:
            self.logger.warning(f"clipboard write failed: {exc}")
            self.hooks.status("Copy failed, please copy manually.")
            return False
        self.hooks.status("Content copied to clipboard.")
        return True

    async def paste(self) -> Optional[MutationResult]:
        if self.clipboard is None:
            self.hooks.status("Paste failed, check clipboard permissions.")
            return None
        try:
            text = await self.clipboard.read_text()
        except (ClipboardError, OSError) as exc:
            self.logger.warning(f"clipboard read failed: {exc}")
            self.hooks.status("Paste failed, check clipboard permissions.")
            return None
        if not text:
            return None
        return self.insert_text(text)

    def download(self, directory: Path | str) -> Path:
        target = Path(directory) / f"markdown-{int(time.time() * 1000)}.md"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self._buffer.text, encoding="utf-8")
        telemetry.record_event(
            "session.download",
            data={"path": str(target), "chars": self.character_count},
            logger_name="md_engine.session",
        )
        return target

    async def refresh_diagrams(self) -> Optional[RenderedView]:
        view = self._view
        if view is None or not view.diagrams:
            return view
        resolved = await self.pipeline.resolve_diagrams(view)
        if self._view is None or self._view.revision != resolved.revision:
            self.logger.debug("diagram results dropped for stale revision")
            return None
        self._view = resolved
        self.hooks.rendered_view(resolved)
        return resolved

    # -- internals -----------------------------------------------------------

    def _live_selection(self) -> Optional[SelectionRange]:
        surface = self._surfaces.get(Pane.EDITOR)
        if surface is None:
            return None
        return surface.get_selection()

    def _commit(self, result: MutationResult) -> None:
        self._replace(result.text)
        surface = self._surfaces.get(Pane.EDITOR)
        if surface is not None and result.selection is not None:
            surface.set_selection(result.selection)

    def _replace(self, text: str) -> RenderedView:
        self._buffer = self._buffer.replace(text)
        view = self._render()
        self.scheduler.notify_change(text)
        return view

    def _render(self) -> RenderedView:
        view = self.pipeline.render(self._buffer.text, revision=self._buffer.revision)
        self._view = view
        self.hooks.rendered_view(view)
        self.hooks.outline(view.outline)
        return view


__all__ = ["CLEAR_CONFIRMATION", "DocumentSession"]
