"""Ownership rules: is a package part of the project's own family?

Pure functions, no infrastructure dependencies. The reference set is
passed in explicitly so classifiers can be built per run (and per test)
instead of relying on module-level tables.

Rules are evaluated in order, first match wins:

1. organization prefix (``@npmcli``)      -> owned
2. family prefix (``libnpm``)             -> owned
3. alias (published name != repo name)    -> owned
4. namespace exclusion (bare ``config``)  -> NOT owned
5. listed in the known repositories       -> owned
6. anything else                          -> not owned
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, eq=False)
class OwnershipClassifier:
    """Classifies package names against an ownership reference set."""

    org_prefixes: tuple[str, ...] = ()
    family_prefixes: tuple[str, ...] = ()
    aliases: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    namespaced: frozenset[str] = frozenset()
    known: frozenset[str] = frozenset()

    @classmethod
    def build(
        cls,
        *,
        org_prefixes: Iterable[str] = (),
        family_prefixes: Iterable[str] = (),
        aliases: Mapping[str, str] | None = None,
        namespaced: Iterable[str] = (),
        known: Iterable[str] = (),
    ) -> OwnershipClassifier:
        """Construct a classifier from any iterables, freezing them."""
        return cls(
            org_prefixes=tuple(p for p in org_prefixes if p),
            family_prefixes=tuple(p for p in family_prefixes if p),
            aliases=MappingProxyType(dict(aliases or {})),
            namespaced=frozenset(namespaced),
            known=frozenset(known),
        )

    def with_known(self, names: Iterable[str]) -> OwnershipClassifier:
        """Return a copy with *names* added to the known repositories."""
        return OwnershipClassifier(
            org_prefixes=self.org_prefixes,
            family_prefixes=self.family_prefixes,
            aliases=self.aliases,
            namespaced=self.namespaced,
            known=self.known | frozenset(names),
        )

    def is_owned(self, name: str | None) -> bool:
        """Return True if *name* belongs to the project family."""
        if not name:
            return False
        if name.startswith(self.org_prefixes):
            return True
        if name.startswith(self.family_prefixes):
            return True
        if name in self.aliases:
            return True
        # a bare name shadowing a namespaced repo (e.g. ``fs``) is someone else's
        if name in self.namespaced:
            return False
        return name in self.known

    def __call__(self, name: str | None) -> bool:
        return self.is_owned(name)
