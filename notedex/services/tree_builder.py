"""Navigation tree construction from the content directory."""

import asyncio
import locale
import os
from pathlib import Path
from typing import List, Tuple

from notedex.models.tree import NavigationNode
from notedex.services.slugs import DOCUMENT_EXTENSION, is_document_path, path_to_slug
from notedex.services.store import PageStore

_KIND_RANK = {"folder": 0, "file": 1}


def _sort_key(node: NavigationNode) -> Tuple[int, str, str]:
    """Folders before files, then a case-insensitive name order under ``LC_COLLATE``.

    Without a ``setlocale`` call (the CLI makes one) this is code point order.
    """
    return (_KIND_RANK[node.kind], locale.strxfrm(node.name.casefold()), node.name)


def _scan(directory: Path) -> List[Tuple[str, str]]:
    """Return ``(name, kind)`` for folders and document files in *directory*.

    Symlinks and special files are skipped.
    """
    entries: List[Tuple[str, str]] = []
    with os.scandir(directory) as it:
        for entry in it:
            if entry.is_symlink():
                continue
            if entry.is_dir(follow_symlinks=False):
                entries.append((entry.name, "folder"))
            elif entry.is_file(follow_symlinks=False) and is_document_path(entry.name):
                entries.append((entry.name, "file"))
    return entries


async def list_documents(root: Path, relative_path: str = "") -> List[str]:
    """Return the POSIX relative paths of every document below *root*.

    Raises:
        OSError: if a directory cannot be read.
    """
    directory = root / relative_path if relative_path else root
    found: List[str] = []
    for name, kind in sorted(await asyncio.to_thread(_scan, directory)):
        rel = f"{relative_path}/{name}" if relative_path else name
        if kind == "folder":
            found.extend(await list_documents(root, rel))
        else:
            found.append(rel)
    return found


async def build_tree(root: Path, store: PageStore, relative_path: str = "") -> List[NavigationNode]:
    """Build the sorted navigation tree for *root*.

    File titles come from the page store when the document has a metadata
    title, otherwise from the filename. Every folder level is sorted
    independently.

    Raises:
        OSError: if a directory cannot be read.
    """
    directory = root / relative_path if relative_path else root
    nodes: List[NavigationNode] = []

    for name, kind in await asyncio.to_thread(_scan, directory):
        rel = f"{relative_path}/{name}" if relative_path else name
        if kind == "folder":
            children = await build_tree(root, store, rel)
            nodes.append(NavigationNode(name=name, path=rel, kind="folder", children=children))
            continue

        slug = path_to_slug(rel)
        stem = name[: -len(DOCUMENT_EXTENSION)]
        record = store.get(slug)
        title = record.metadata.title if record is not None and record.metadata.title else stem
        nodes.append(NavigationNode(name=stem, path=rel, kind="file", slug=slug, title=title))

    nodes.sort(key=_sort_key)
    return nodes


def iter_file_nodes(nodes: List[NavigationNode]):
    """Yield every file node of a tree, depth first."""
    for node in nodes:
        if node.kind == "folder":
            yield from iter_file_nodes(node.children or [])
        else:
            yield node
