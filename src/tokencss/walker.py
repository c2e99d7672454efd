"""
Generic traversal of nested token trees.

Both the color primitive capture and the override scan walk the same shape of
document, so they share one walker parameterised by a leaf predicate and a
leaf handler.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

Path = tuple[str, ...]
LeafPredicate = Callable[[Any], bool]
LeafHandler = Callable[[Path, Mapping[str, Any]], None]


def is_token_leaf(node: Any) -> bool:
    """A token leaf is an object carrying a ``$type``."""
    return isinstance(node, Mapping) and "$type" in node


def walk(
    tree: Any,
    handler: LeafHandler,
    *,
    is_leaf: LeafPredicate = is_token_leaf,
    prefix: Path = (),
) -> None:
    """Call ``handler(path, leaf)`` for every leaf below ``tree``.

    Keys are visited in sorted order. Non-mapping values that are not leaves
    are ignored.
    """
    if not isinstance(tree, Mapping):
        return
    for key in sorted(tree, key=str):
        node = tree[key]
        path = (*prefix, str(key))
        if is_leaf(node):
            handler(path, node)
        elif isinstance(node, Mapping):
            walk(node, handler, is_leaf=is_leaf, prefix=path)
