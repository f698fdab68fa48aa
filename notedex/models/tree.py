from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict

NodeKind = Literal["file", "folder"]


class NavigationNode(BaseModel):
    """One entry of the sidebar tree.

    Folders carry ``children``; files carry ``slug`` and ``title``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    path: str  # POSIX path relative to the content root
    kind: NodeKind
    slug: Optional[str] = None
    title: Optional[str] = None
    children: Optional[List["NavigationNode"]] = None


NavigationNode.model_rebuild()
