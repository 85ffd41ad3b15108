"""Flattening of nested source parameters into dotted keys."""

from __future__ import annotations

from typing import Any, Mapping


def flatten_json(value: Any) -> list[tuple[str, Any]]:
    """
    Flatten a JSON value into `(dotted_path, leaf)` pairs.

    Mappings are walked member by member; every other value (including
    lists) is a leaf. The walk uses an explicit stack, so deeply nested
    input cannot exhaust the call stack. The returned order follows the
    stack and is not meaningful: callers sort by path.

    Examples:
        >>> sorted(flatten_json({"topic": "t1", "auth": {"user": "bob"}}))
        [('auth.user', 'bob'), ('topic', 't1')]
        >>> flatten_json(42)
        [('', 42)]
    """
    acc: list[tuple[str, Any]] = []
    stack: list[tuple[str, Any]] = [("", value)]

    while stack:
        root, node = stack.pop()
        if isinstance(node, Mapping):
            for key, child in node.items():
                stack.append((f"{root}.{key}" if root else str(key), child))
            continue
        acc.append((root, node))

    return acc
