"""watchdog bridge feeding filesystem changes into a :class:`ContentIndex`.

The observer runs in its own thread. The handler never touches index state;
it hands each event to the event loop with ``call_soon_threadsafe`` and the
index processes it on the loop's thread.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from notedex.models.event import EventKind, FileEvent
from notedex.services.index import ContentIndex
from notedex.services.slugs import DOCUMENT_EXTENSION, is_document_path

logger = logging.getLogger(__name__)


class DocumentEventHandler(FileSystemEventHandler):
    """Translates watchdog events for document files and folders into :class:`FileEvent`."""

    def __init__(self, index: ContentIndex, loop: asyncio.AbstractEventLoop) -> None:
        super().__init__()
        self._index = index
        self._loop = loop
        self._root = Path(index.content_dir).resolve()

    def _relative(self, path, *, document: bool = True) -> Optional[str]:
        path = os.fsdecode(path)
        if document and not is_document_path(path):
            return None
        try:
            relative_path = Path(path).resolve().relative_to(self._root).as_posix()
        except ValueError:
            return None
        return None if relative_path == "." else relative_path

    def _emit(self, kind: EventKind, path) -> None:
        relative_path = self._relative(path, document=kind != "remove_folder")
        if relative_path is None:
            return
        self._loop.call_soon_threadsafe(self._index.enqueue, FileEvent(kind, relative_path))

    def _emit_folder_contents(self, path) -> None:
        # Some backends report a folder moved into the tree as one event
        for child in sorted(Path(os.fsdecode(path)).rglob("*" + DOCUMENT_EXTENSION)):
            if child.is_file():
                self._emit("add", child)

    def on_created(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            self._emit_folder_contents(event.src_path)
        else:
            self._emit("add", event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._emit("modify", event.src_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        self._emit("remove_folder" if event.is_directory else "remove", event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            self._emit("remove_folder", event.src_path)
            self._emit_folder_contents(event.dest_path)
        else:
            self._emit("remove", event.src_path)
            self._emit("add", event.dest_path)


class ContentWatcher:
    """Recursive watchdog observer on the index's content directory."""

    def __init__(self, index: ContentIndex, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._index = index
        self._loop = loop
        self._observer: Optional[Observer] = None

    @property
    def running(self) -> bool:
        return self._observer is not None

    def start(self) -> None:
        if self._observer is not None:
            return
        loop = self._loop or asyncio.get_running_loop()
        handler = DocumentEventHandler(self._index, loop)
        observer = Observer()
        observer.schedule(handler, str(self._index.content_dir), recursive=True)
        observer.daemon = True
        observer.start()
        self._observer = observer
        logger.info("Watching for markdown file changes in %s", self._index.content_dir)

    def stop(self) -> None:
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join()
        self._observer = None
