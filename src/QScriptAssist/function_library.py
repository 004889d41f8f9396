from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Optional, Sequence, Union

from .utils import dedupe_name, function_name, unique_default_name

logger = logging.getLogger(__name__)

ROOT = 0
NOT_FOUND = -1

NAME_COLUMN = 0
TOOLTIP_COLUMN = 1
CLOSER_COLUMN = 2


@dataclass
class FunctionLibraryNode:
    name: str = ""
    tooltip: str = ""
    closer: str = ""
    parent: int = NOT_FOUND  # lookup only, the tree owns every node
    depth: int = 0
    children: list[int] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.depth == 0

    def column(self, column: int) -> Optional[str]:
        if column == NAME_COLUMN:
            return self.name
        if column == TOOLTIP_COLUMN:
            return self.tooltip
        if column == CLOSER_COLUMN:
            return self.closer
        return None


class FunctionLibraryTree:
    """An ordered tree of the callables and members a script can reference

    Nodes live in an arena and are addressed by index. Index ``ROOT`` is a
    sentinel with no data whose children are the top level symbols, and
    ``NOT_FOUND`` is returned by any lookup that fails. Sibling order is
    insertion order, and is both the display and the matching order.
    """

    def __init__(self):
        self._nodes: list[FunctionLibraryNode] = [FunctionLibraryNode()]
        self._version = 0

    def __len__(self) -> int:
        """The number of symbols, not counting the root"""
        return len(self._nodes) - 1

    def __contains__(self, index: int) -> bool:
        return 0 <= index < len(self._nodes)

    @property
    def version(self) -> int:
        """Bumped whenever a node is added, so cached views know to refresh"""
        return self._version

    def add(
        self, name: str, tooltip: str = "", closer: str = "", parent: int = ROOT
    ) -> int:
        """Append a child to the given parent and return its index"""
        for key, value in (("name", name), ("tooltip", tooltip), ("closer", closer)):
            if not isinstance(value, str):
                raise TypeError(
                    f"Library node {key} must be a string, not {type(value).__name__}"
                )
        if not name:
            raise ValueError("Library nodes must have a name")
        if parent not in self:
            raise IndexError(f"No library node at index {parent}")
        par = self._nodes[parent]
        node = FunctionLibraryNode(
            name=name,
            tooltip=tooltip,
            closer=closer,
            parent=parent,
            depth=par.depth + 1,
        )
        self._nodes.append(node)
        index = len(self._nodes) - 1
        par.children.append(index)
        self._version += 1
        return index

    def add_labeled(
        self, label: str, tooltip: str = "", closer: str = "", parent: int = ROOT
    ) -> int:
        """Add a function named after a free text label

        The name is made unique among the parent's children
        """
        siblings = [self._nodes[c].name for c in self.children(parent)]
        name = function_name(label)
        if not name:
            name = unique_default_name("function", siblings)
        return self.add(dedupe_name(name, siblings), tooltip, closer, parent)

    def node(self, index: int) -> Optional[FunctionLibraryNode]:
        if index not in self:
            return None
        return self._nodes[index]

    def is_root(self, index: int) -> bool:
        return index in self and self._nodes[index].is_root

    def child_count(self, index: int) -> int:
        if index not in self:
            return 0
        return len(self._nodes[index].children)

    def child(self, index: int, row: int) -> int:
        if index not in self:
            return NOT_FOUND
        children = self._nodes[index].children
        if not 0 <= row < len(children):
            return NOT_FOUND
        return children[row]

    def children(self, index: int) -> list[int]:
        if index not in self:
            return []
        return list(self._nodes[index].children)

    def parent(self, index: int) -> int:
        if index not in self:
            return NOT_FOUND
        return self._nodes[index].parent

    def row(self, index: int) -> int:
        """The position of the node among its siblings"""
        par = self.parent(index)
        if par == NOT_FOUND:
            return NOT_FOUND
        return self._nodes[par].children.index(index)

    def data(self, index: int, column: int) -> Optional[str]:
        """Get a node's name, tooltip or closer by column"""
        if index not in self:
            return None
        return self._nodes[index].column(column)

    def get_item(self, path: Sequence[int]) -> int:
        """Resolve a path of child rows starting at the root"""
        index = ROOT
        for row in path:
            index = self.child(index, row)
            if index == NOT_FOUND:
                return NOT_FOUND
        return index

    def find(self, names: Sequence[str]) -> int:
        """Resolve a sequence of names starting at the root"""
        index = ROOT
        for name in names:
            for child in self._nodes[index].children:
                if self._nodes[child].name == name:
                    index = child
                    break
            else:
                return NOT_FOUND
        return index

    def walk(self, index: int = ROOT) -> Iterator[int]:
        """Depth first iteration of the descendants of a node in sibling order

        The starting node itself is not yielded.
        """
        if index not in self:
            return
        stack = list(reversed(self._nodes[index].children))
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(self._nodes[current].children))

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: list[dict[str, Any]]) -> FunctionLibraryTree:
        """Build a tree from a nested list of node dicts

        Each dict has a ``name`` and optionally ``tooltip``, ``closer`` and a
        ``children`` list of the same shape.
        """
        tree = cls()
        tree.extend(data, ROOT)
        return tree

    def extend(self, data: list[dict[str, Any]], parent: int = ROOT):
        if not isinstance(data, list):
            raise TypeError(f"Library data must be a list, not {type(data).__name__}")
        stack = [(parent, item) for item in reversed(data)]
        while stack:
            par, item = stack.pop()
            if not isinstance(item, dict):
                raise TypeError(f"Library nodes must be dicts, not {type(item).__name__}")
            index = self.add(
                item["name"],
                tooltip=item.get("tooltip", ""),
                closer=item.get("closer", ""),
                parent=par,
            )
            children = item.get("children", [])
            if not isinstance(children, list):
                raise TypeError(f"Children of {item['name']!r} must be a list")
            stack.extend((index, child) for child in reversed(children))

    def to_dict(self, index: int = ROOT) -> list[dict[str, Any]]:
        out = []
        for child in self.children(index):
            node = self._nodes[child]
            item: dict[str, Any] = {"name": node.name}
            if node.tooltip:
                item["tooltip"] = node.tooltip
            if node.closer:
                item["closer"] = node.closer
            if node.children:
                item["children"] = self.to_dict(child)
            out.append(item)
        return out

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> FunctionLibraryTree:
        """Load a library from a json file

        An unreadable or malformed file gives an empty library
        """
        path = Path(path)
        try:
            with path.open() as f:
                data = json.load(f)
            return cls.from_dict(data)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as err:
            logger.warning("Could not load function library %s: %s", path, err)
            return cls()
