"""Mermaid identifiers and edge annotations for package names.

Mermaid treats ``@`` and ``/`` as syntax, so scoped packages get a
derived identifier (``@npmcli/fs`` -> ``npmcli-fs``) and keep their real
name as the node label. Unscoped names are used as-is.
"""

from __future__ import annotations

from depstrata.domain.tree import split_scope


def node_id(name: str) -> str:
    """Collision-safe Mermaid identifier for *name*.

    Examples:
        >>> node_id("@npmcli/arborist")
        'npmcli-arborist'
        >>> node_id("semver")
        'semver'
    """
    scope, local = split_scope(name)
    if scope is None:
        return name
    return f"{scope}-{local}"


def node_ref(name: str) -> str:
    """Identifier plus label, used for edge targets.

    Examples:
        >>> node_ref("@npmcli/arborist")
        'npmcli-arborist["@npmcli/arborist"]'
        >>> node_ref("semver")
        'semver'
    """
    if name.startswith("@"):
        return f'{node_id(name)}["{name}"]'
    return name


def edge_annotation(source: str, target: str) -> str:
    """Render one ``source-->target;`` line of a ``graph LR`` block."""
    return f"  {node_id(source)}-->{node_ref(target)};"
