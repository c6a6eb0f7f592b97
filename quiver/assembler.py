"""
Quiver options assembler: build the resolved options map of one invocation.

Passes
1. defaults: every declared option with a default is resolved, so it always appears
   in the output even when unused.
2. positionals: raw["_"] is copied into an independent list. Values recorded by the
   defaults pass are part of that copy; later recordings only reach raw["_"].
3. overlay: every used alias is looked up; known options are resolved again (user input
   wins, options without a default pass through), the first unknown one is reported.

Unknown options
- outside a subcommand, the first unknown alias stops the overlay and produces
  unknownOptionMessage: the closest declared option (difflib ratio ≥ 0.5) rendered on
  one line, or the whole options list when nothing is close enough.
- inside a subcommand, unknown aliases are ignored; they may belong to the child.
"""
import difflib

from rich.text import Text

from .declarations import DefinitionTree
from .index import DefinitionIndex
from .render import Renderer
from .resolver import resolve
from .utils import Unset

THRESHOLD = 0.5
"""minimum similarity (0..1) for an alias to be suggested."""

MESSAGE_KEY = "unknownOptionMessage"
POSITIONALS_KEY = "_"


def similarity(first, second, /):
    return difflib.SequenceMatcher(None, first, second).ratio()


def best_match(name, candidates, /):
    """
    return (candidate, rating) of the closest candidate to `name`.

    ties keep the earliest candidate; an empty candidate list yields (None, 0.0).
    """
    best, rating = None, 0.0
    for candidate in candidates:
        if (score := similarity(name, candidate)) > rating:
            best, rating = candidate, score
    return best, rating


def unknown(name, index, renderer, /):
    """
    build the message reported for an unknown option `name`.
    """
    message = Text()
    message.append(' the option "%s" is unknown.\n' % name)

    target, rating = best_match(name, index.aliases("options"))
    if target is not None and rating >= THRESHOLD:
        message.append(" did you mean the following one?\n")
        suggestion = index.resolve(target, "options")
        message.append_text(renderer.details([suggestion], indent=0)[0]).append("\n")
    else:
        message.append(" here's a list of all available options:\n")
        for line in renderer.details("options"):
            message.append_text(line).append("\n")
    return message


def assemble(raw, tree, inside_subcommand=False, /, *, colorful=True):
    """
    resolve every declared option against a raw invocation.

    parameters
    - raw: Mapping — "_" (list of positional tokens) plus one entry per used alias.
    - tree: DefinitionTree
    - inside_subcommand: bool — suppress unknown-option reporting.
    - colorful: bool — style the rendered suggestion.

    returns
    - dict: canonical option names to values, "_" and, when an unknown option was
      used outside a subcommand, "unknownOptionMessage" (rich Text).
    """
    if not isinstance(tree, DefinitionTree):
        raise TypeError("assemble() second argument must be a DefinitionTree")

    index = DefinitionIndex(tree)
    options = {}
    message = None

    for declaration in tree.options:
        if declaration.default is Unset:
            continue
        options.update(resolve(declaration, raw))

    positionals = list(raw[POSITIONALS_KEY])

    for name in [key for key in raw if key != POSITIONALS_KEY]:
        if (declaration := index.resolve(name, "options")) is not None:
            options.update(resolve(declaration, raw))
        elif not inside_subcommand:
            message = unknown(name, index, Renderer(tree, colorful=colorful))
            break

    options[POSITIONALS_KEY] = positionals
    if message is not None:
        options[MESSAGE_KEY] = message
    return options


__all__ = (
    "THRESHOLD",
    "MESSAGE_KEY",
    "POSITIONALS_KEY",
    "similarity",
    "best_match",
    "assemble",
)
