from typing import Literal, NamedTuple

# "remove_folder" drops every document below a folder that vanished as a whole
EventKind = Literal["add", "modify", "remove", "remove_folder"]


class FileEvent(NamedTuple):
    """A change to one document (or one folder), relative to the content root."""

    kind: EventKind
    relative_path: str
