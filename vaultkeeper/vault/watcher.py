"""Vault change notifications with debouncing."""

import asyncio
import logging
import os
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

from watchdog.events import (
    DirMovedEvent,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

logger = logging.getLogger(__name__)

# Callback receiving (path, old_path), both vault-relative
ChangeCallback = Callable[[str | None, str | None], None]


class Debouncer:
    """Coalesces bursts of events into a single call.

    Holds one pending slot. Every new event restarts the quiet-period
    timer; when it elapses the callback runs with the arguments of the
    first event of the burst.
    """

    def __init__(self, callback: Callable[..., Awaitable[None]], delay: float) -> None:
        self.callback = callback
        self.delay = delay
        self._timer: asyncio.TimerHandle | None = None
        self._pending_args: tuple[Any, ...] = ()
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def trigger(self, *args: Any) -> None:
        """Register an event. Must be called on the event loop thread."""
        loop = asyncio.get_running_loop()

        if self._timer is None:
            self._pending_args = args
        else:
            self._timer.cancel()

        self._timer = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._timer:
            self._timer.cancel()
        self._timer = None
        self._pending_args = ()

    def _fire(self) -> None:
        args = self._pending_args
        self._timer = None
        self._pending_args = ()

        task = asyncio.ensure_future(self.callback(*args))
        self._tasks.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Debounced callback failed: {error}", exc_info=error)


class VaultEventHandler(FileSystemEventHandler):
    """Translates watchdog events into vault-relative change notifications."""

    def __init__(
        self,
        vault_path: Path,
        loop: asyncio.AbstractEventLoop,
        on_change: ChangeCallback,
    ) -> None:
        super().__init__()
        self.vault_path = vault_path.resolve()
        self.loop = loop
        self.on_change = on_change

    def _relative(self, raw_path: str | bytes) -> str | None:
        """Return the vault-relative path, or None for paths the vault ignores."""
        try:
            rel = Path(os.fsdecode(raw_path)).resolve().relative_to(self.vault_path)
        except ValueError:
            return None

        if any(part.startswith(".") for part in rel.parts):
            return None
        return rel.as_posix()

    def _is_relevant(self, event: FileSystemEvent, raw_path: str | bytes) -> bool:
        return event.is_directory or os.fsdecode(raw_path).endswith(".md")

    def _notify(self, path: str | None, old_path: str | None = None) -> None:
        logger.debug(f"Vault change: {old_path} -> {path}")
        self.loop.call_soon_threadsafe(self.on_change, path, old_path)

    def on_created(self, event: FileSystemEvent) -> None:
        if not self._is_relevant(event, event.src_path):
            return
        path = self._relative(event.src_path)
        if path:
            self._notify(path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if not self._is_relevant(event, event.src_path):
            return
        path = self._relative(event.src_path)
        if path:
            self._notify(path)

    def on_moved(self, event: FileSystemEvent) -> None:
        if isinstance(event, DirMovedEvent):
            self._notify(*self._representative_move(event))
            return

        if not (self._is_relevant(event, event.src_path) or self._is_relevant(event, event.dest_path)):
            return
        path = self._relative(event.dest_path)
        old_path = self._relative(event.src_path)
        if path or old_path:
            self._notify(path, old_path)

    def _representative_move(self, event: DirMovedEvent) -> tuple[str | None, str | None]:
        """Report a folder move as the move of one document inside it.

        Folder rename inference compares document paths, so a folder move
        is expressed through the first markdown file found in the moved tree.
        """
        dest = Path(os.fsdecode(event.dest_path))
        src = Path(os.fsdecode(event.src_path))

        for md_file in sorted(dest.rglob("*.md")):
            inner = md_file.relative_to(dest)
            path = self._relative(md_file)
            old_path = self._relative(src / inner)
            if path and old_path:
                return path, old_path

        return self._relative(dest), self._relative(src)


class VaultWatcher:
    """Watches a vault directory and reports document and folder changes."""

    def __init__(self, vault_path: Path, on_change: ChangeCallback) -> None:
        self.vault_path = vault_path
        self.on_change = on_change
        self._observer: Observer | None = None

    @property
    def running(self) -> bool:
        return self._observer is not None

    def start(self, loop: asyncio.AbstractEventLoop) -> None:
        if self._observer:
            return

        handler = VaultEventHandler(self.vault_path, loop, self.on_change)
        self._observer = Observer()
        self._observer.schedule(handler, str(self.vault_path), recursive=True)
        self._observer.start()
        logger.info(f"Watching vault: {self.vault_path}")

    def stop(self) -> None:
        if not self._observer:
            return

        self._observer.stop()
        self._observer.join(timeout=5)
        self._observer = None
        logger.info("Stopped watching vault")
