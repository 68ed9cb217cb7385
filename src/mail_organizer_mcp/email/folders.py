"""Folder hierarchy helpers."""

from collections.abc import Iterable
from typing import Protocol

from mail_organizer_mcp.email.models import Folder


class FolderEntry(Protocol):
    """One row of an IMAP LIST response (as returned by imap-tools)."""

    name: str
    delim: str | None
    flags: tuple[str, ...]


def build_folder_tree(entries: Iterable[FolderEntry]) -> list[Folder]:
    """Build a folder tree from flat, delimiter-joined LIST entries.

    Server order is kept at every level. Parents the server did not list
    explicitly are created so that every entry has a place in the tree.
    """
    roots: list[Folder] = []
    nodes: dict[tuple[str, ...], Folder] = {}

    for entry in entries:
        delimiter = entry.delim or "/"
        path = tuple(entry.name.split(entry.delim)) if entry.delim else (entry.name,)

        siblings = roots
        for depth in range(1, len(path) + 1):
            key = path[:depth]
            node = nodes.get(key)
            if node is None:
                node = Folder(name=path[depth - 1], delimiter=delimiter)
                nodes[key] = node
                siblings.append(node)
            siblings = node.children

        nodes[path].flags = list(entry.flags)

    return roots


def flatten_folder_tree(folders: Iterable[Folder], prefix: str = "") -> list[str]:
    """Flatten a folder tree depth-first into fully-qualified names.

    Each parent comes before its children; children keep their order.
    """
    names: list[str] = []
    for folder in folders:
        full_name = f"{prefix}{folder.delimiter}{folder.name}" if prefix else folder.name
        names.append(full_name)
        names.extend(flatten_folder_tree(folder.children, full_name))
    return names
