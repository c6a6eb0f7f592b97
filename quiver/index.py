"""
Quiver definition index: exact lookup of declarations by alias.

The index answers one question: which declaration, if any, does a textual flag or
command name refer to? Matching is exact and case-sensitive; approximate matching
lives in quiver.assembler and is only used to phrase "did you mean" messages.

Declarations are scanned in the order they were declared and the first match wins.
Trees are small, so no hashing is done here; the scan order is the tie-break.
"""
from .declarations import DefinitionTree

_KINDS = ("options", "commands")


class DefinitionIndex:
    """
    Read-only lookup over a DefinitionTree.

    Parameters
    - tree: DefinitionTree

    Methods
    - resolve(name, kind) → declaration | None
    - aliases(kind) → every alias declared for that kind, in declaration order
    """

    def __init__(self, tree, /):
        if not isinstance(tree, DefinitionTree):
            raise TypeError("DefinitionIndex() argument must be a DefinitionTree")
        self._tree = tree

    @property
    def tree(self):
        return self._tree

    def resolve(self, name, kind, /):
        """
        return the first declaration of `kind` answering to `name`, or None.

        parameters
        - name: str — bare alias ("f", "file") or command name ("build").
        - kind: "options" | "commands"
        """
        if kind not in _KINDS:
            raise ValueError("resolve() kind must be one of %s" % ", ".join(map(repr, _KINDS)))
        for declaration in getattr(self._tree, kind):
            if name in declaration.aliases:
                return declaration
        return None

    def aliases(self, kind, /):
        if kind not in _KINDS:
            raise ValueError("aliases() kind must be one of %s" % ", ".join(map(repr, _KINDS)))
        return [alias for declaration in getattr(self._tree, kind) for alias in declaration.aliases]


__all__ = (
    "DefinitionIndex",
)
