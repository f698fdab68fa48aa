"""Content index: page store + navigation tree kept in sync with the content directory.

Filesystem events are queued and drained one at a time. Each drain step
runs its store mutation *and* the following tree rebuild to completion
before the next event is taken, so the published tree never lags behind a
store mutation that has already finished. A forced :meth:`ContentIndex.reload`
takes the same lock and cannot interleave with an event either.
"""

import asyncio
import logging
from pathlib import Path, PurePosixPath
from typing import List, Optional

from notedex.models.event import FileEvent
from notedex.models.page import PageRecord
from notedex.models.response import SearchResult
from notedex.models.tree import NavigationNode
from notedex.services.loader import load_document
from notedex.services.parser import DocumentParser, MarkdownParser
from notedex.services.search import search as search_records
from notedex.services.slugs import is_document_path, path_to_slug, validate_slug
from notedex.services.store import PageStore
from notedex.services.tree_builder import build_tree, list_documents

logger = logging.getLogger(__name__)


def _normalise_relative(relative_path: str) -> Optional[str]:
    """Return *relative_path* as a POSIX path inside the root, or None if it escapes."""
    posix = PurePosixPath(relative_path.replace("\\", "/"))
    if posix.is_absolute() or not posix.parts or ".." in posix.parts:
        return None
    return str(posix)


class ContentIndex:
    """Owns the page store and the published navigation tree for one content root.

    Lifecycle: construct, ``await start()`` (initial load + event drain task),
    ``await shutdown()``. ``reload()`` may be called at any time to rebuild
    everything from disk.
    """

    def __init__(
        self,
        content_dir: Path,
        *,
        parser: Optional[DocumentParser] = None,
        store: Optional[PageStore] = None,
    ) -> None:
        self.content_dir = Path(content_dir)
        self._parser = parser or MarkdownParser()
        self._store = store or PageStore()
        self._tree: List[NavigationNode] = []
        self._queue: "asyncio.Queue[FileEvent]" = asyncio.Queue()
        self._lock = asyncio.Lock()
        self._worker: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # Query surface
    # ------------------------------------------------------------------

    @property
    def store(self) -> PageStore:
        return self._store

    @property
    def page_count(self) -> int:
        return len(self._store)

    def get_tree(self) -> List[NavigationNode]:
        """Return the last published navigation tree."""
        return self._tree

    def get_page(self, slug: str) -> Optional[PageRecord]:
        """Return the record for an externally supplied *slug*, or None.

        Raises:
            SlugValidationError: if *slug* is malformed.
        """
        return self._store.get(validate_slug(slug))

    def search(self, query: Optional[str]) -> List[SearchResult]:
        """Search a snapshot of the store; see :func:`notedex.services.search.search`."""
        return search_records(query, self._store.snapshot())

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Run the initial load and start draining filesystem events.

        Raises:
            OSError: if the content directory cannot be read.
        """
        await self.reload()
        if self._worker is None:
            self._worker = asyncio.create_task(self._drain(), name="content-index-drain")

    async def shutdown(self) -> None:
        """Stop the drain task. Events still queued are discarded."""
        if self._worker is None:
            return
        self._worker.cancel()
        try:
            await self._worker
        except asyncio.CancelledError:
            pass
        self._worker = None

    async def reload(self) -> None:
        """Rebuild the store and the tree from the content directory.

        Documents that fail to parse are logged and skipped. A directory or
        document that cannot be read aborts the reload and leaves the
        previous state intact.

        Raises:
            OSError: if the content directory or one of its documents
                cannot be read.
        """
        async with self._lock:
            if not self.content_dir.exists():
                self.content_dir.mkdir(parents=True, exist_ok=True)
                logger.info("Created content directory at %s", self.content_dir)

            records: List[PageRecord] = []
            for relative_path in await list_documents(self.content_dir):
                try:
                    record = await load_document(self.content_dir / relative_path, relative_path, self._parser)
                except ValueError as exc:
                    logger.warning("Skipping %s – %s", relative_path, exc)
                    continue
                records.append(record)

            tree_store = PageStore()
            for record in records:
                tree_store.upsert(record)
            tree = await build_tree(self.content_dir, tree_store)

            # Swap in the new state without awaiting in between
            self._store.clear()
            for record in records:
                self._store.upsert(record)
            self._tree = tree

        logger.info("Loaded %d markdown files", len(records))

    # ------------------------------------------------------------------
    # Synchronization
    # ------------------------------------------------------------------

    def enqueue(self, event: FileEvent) -> None:
        """Queue a filesystem event for serialized processing.

        Events for paths outside the content root or for non-document files
        are dropped. ``remove_folder`` events name a folder, not a document.
        """
        relative_path = _normalise_relative(event.relative_path)
        if relative_path is None or (event.kind != "remove_folder" and not is_document_path(relative_path)):
            logger.debug("Ignoring event for %s", event.relative_path)
            return
        self._queue.put_nowait(FileEvent(event.kind, relative_path))

    async def join(self) -> None:
        """Wait until every queued event has been fully processed."""
        await self._queue.join()

    async def apply(self, event: FileEvent) -> None:
        """Process one event now, serialized with queued events and reloads."""
        async with self._lock:
            await self._apply(event)

    async def _drain(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                async with self._lock:
                    await self._apply(event)
            except Exception:
                logger.exception("Unexpected error while processing %s", event)
            finally:
                self._queue.task_done()

    async def _apply(self, event: FileEvent) -> None:
        slug = path_to_slug(event.relative_path)

        if event.kind == "remove_folder":
            prefix = slug + "/"
            removed = [s for s in self._store.slugs() if s.startswith(prefix)]
            for s in removed:
                self._store.delete(s)
            logger.info("Folder removed: %s (%d documents)", event.relative_path, len(removed))
        elif event.kind == "remove":
            logger.info("File removed: %s", event.relative_path)
            self._store.delete(slug)
        else:
            logger.info("File %s: %s", "added" if event.kind == "add" else "changed", event.relative_path)
            record = await self._load(event.relative_path)
            if record is not None:
                self._store.upsert(record)

        await self._rebuild_tree()

    async def _load(self, relative_path: str) -> Optional[PageRecord]:
        """Load one document, returning None (and logging) when it cannot be read or parsed."""
        try:
            return await load_document(self.content_dir / relative_path, relative_path, self._parser)
        except (OSError, ValueError) as exc:
            logger.warning("Skipping %s – %s", relative_path, exc)
            return None

    async def _rebuild_tree(self) -> None:
        try:
            tree = await build_tree(self.content_dir, self._store)
        except OSError as exc:
            logger.warning("Tree rebuild failed, keeping previous tree – %s", exc)
            return
        self._tree = tree
