"""Category hierarchy helpers.

Records are anything with ``id`` and ``parent_id`` attributes (ORM rows or
pydantic models). The forest is rebuilt from the flat list on every load and
is never persisted.
"""

from dataclasses import dataclass, field
from typing import Any, Hashable, Iterable, Iterator, Sequence


@dataclass
class CategoryNode:
    category: Any
    children: list["CategoryNode"] = field(default_factory=list)

    @property
    def id(self):
        return self.category.id


def build(records: Iterable) -> list[CategoryNode]:
    """Build a forest of roots from a flat, unordered list of categories.

    Children keep input order. A record whose parent id does not exist is
    dropped together with its subtree. Records on a parent cycle never reach
    a root and are therefore unreachable.
    """
    records = list(records)
    nodes = {record.id: CategoryNode(record) for record in records}
    roots: list[CategoryNode] = []

    for record in records:
        node = nodes[record.id]
        if record.parent_id is None:
            roots.append(node)
            continue
        parent = nodes.get(record.parent_id)
        if parent is not None:
            parent.children.append(node)

    return roots


def walk(forest: Sequence[CategoryNode]) -> Iterator[tuple[CategoryNode, int]]:
    """Depth-first, parent before children, yielding ``(node, depth)``."""
    stack = [(node, 0) for node in reversed(forest)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        stack.extend((child, depth + 1) for child in reversed(node.children))


def flatten(forest: Sequence[CategoryNode]) -> list:
    return [node.category for node, _ in walk(forest)]


def toggle_expand(node_id: Hashable, expanded: Iterable[Hashable]) -> frozenset:
    current = frozenset(expanded)
    if node_id in current:
        return current - {node_id}
    return current | {node_id}


def descendant_ids(records: Iterable, root_id: Hashable) -> set:
    children_by_parent: dict = {}
    for record in records:
        children_by_parent.setdefault(record.parent_id, []).append(record.id)

    found: set = set()
    stack = list(children_by_parent.get(root_id, []))
    while stack:
        current = stack.pop()
        if current in found:
            continue
        found.add(current)
        stack.extend(children_by_parent.get(current, []))
    found.discard(root_id)
    return found


def would_create_cycle(
    records: Iterable, category_id: Hashable, new_parent_id: Hashable | None
) -> bool:
    if new_parent_id is None:
        return False
    if new_parent_id == category_id:
        return True
    return new_parent_id in descendant_ids(records, category_id)


def parent_options(
    records: Iterable, exclude_id: Hashable | None = None
) -> list[tuple[Any, int]]:
    """Flattened categories with depth, usable as a parent for ``exclude_id``."""
    records = list(records)
    excluded: set = set()
    if exclude_id is not None:
        excluded = descendant_ids(records, exclude_id) | {exclude_id}
    return [
        (node.category, depth)
        for node, depth in walk(build(records))
        if node.id not in excluded
    ]
