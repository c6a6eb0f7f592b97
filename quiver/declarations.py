r"""
Quiver declarations: the static description of a command-line surface.

Overview
- Declarations
  • OptionDeclaration: one option and its aliases (e.g. ["f", "file"] or "-f, --file"),
    an optional default value, an optional initializer and a help description.
  • CommandDeclaration: one command name (plus optional extra names), its handler and description.
  • ExampleDeclaration: a sample invocation shown in help output.
  • DefinitionTree: the immutable set of options, commands and examples for one CLI
    (or one subcommand) that the resolution engine reads from.

- Default kinds
  • DefaultKind tags a runtime value as UNSET, STRING, NUMBER, BOOLEAN, LIST or OBJECT.
  • kindof(value) computes the tag; coercion in quiver.resolver is a match over these tags.

- Initializers
  • number(value): integer parsing with shell-like leniency (leading digits, truncation,
    nan when nothing parses). It is the initializer attached to numeric defaults.

Validation highlights
- Every declaration must carry at least one alias/name; aliases are normalized by
  stripping leading dashes ("--file" → "file").
- A DefinitionTree rejects aliases declared twice among its options (or names declared
  twice among its commands), so lookups are never ambiguous.
- init must be callable when given; descr must be a string when given.

Quick example:
    >>> from quiver.declarations import OptionDeclaration, DefinitionTree
    >>> output = OptionDeclaration(["o", "output"], "where to write", default="out.txt")
    >>> tree = DefinitionTree(options=[output])
    >>> output.aliases
    ('o', 'output')
"""
import copy
import functools
import math
import operator
import re
from collections.abc import Sequence
from enum import Enum

from .faults import FaultCode
from .utils import *


class DefaultKind(Enum):
    """
    tag of a default (or captured) value, used to drive coercion.

    members
    - UNSET:   no value was declared (the Unset sentinel).
    - STRING:  str.
    - NUMBER:  int or float (bool excluded).
    - BOOLEAN: bool.
    - LIST:    list or tuple (repeated flags arrive as a list).
    - OBJECT:  anything else, None included.
    """
    UNSET = "unset"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    LIST = "list"
    OBJECT = "object"


def kindof(value, /):
    """
    return the DefaultKind tag of a runtime value.

    bool is checked before numbers since it is an int subclass.
    """
    match value:
        case _ if value is Unset:
            return DefaultKind.UNSET
        case bool():
            return DefaultKind.BOOLEAN
        case int() | float():
            return DefaultKind.NUMBER
        case str():
            return DefaultKind.STRING
        case list() | tuple():
            return DefaultKind.LIST
        case _:
            return DefaultKind.OBJECT


_LEADING_INTEGER = re.compile(r"\s*([+-]?)(?:0[xX]([0-9a-fA-F]*)|(\d+))")


@rename("number")
def number(value, /):
    """
    parse an integer the lenient way shells do.

    behavior
    - int/float: truncated toward zero (nan and infinities yield nan).
    - anything else: its string form is scanned for a leading (optionally signed)
      run of digits after whitespace; a "0x" prefix reads hexadecimal digits. when
      no digit is found the result is nan.

    examples
    - number(7.9)      -> 7
    - number("42px")   -> 42
    - number("0x1A")   -> 26
    - number("px")     -> nan
    """
    if kindof(value) is DefaultKind.NUMBER:
        if not math.isfinite(value):
            return math.nan
        return int(value)
    if match := _LEADING_INTEGER.match(str(value)):
        sign, hexadecimal, decimal = match.groups()
        if hexadecimal == "":
            return math.nan
        result = int(decimal) if hexadecimal is None else int(hexadecimal, 16)
        return -result if sign == "-" else result
    return math.nan


def aliases(usage, /):
    """
    normalize a usage declaration into a tuple of bare alias strings.

    forms
    - sequence: ["f", "file"] or ["-f", "--file"] → ("f", "file")
    - compact string: "-f, --file" → split on ", " → ("f", "file")

    only leading dashes are stripped; inner dashes belong to the alias ("dry-run").
    """
    if isinstance(usage, str):
        usage = usage.split(", ")
    return tuple(name.lstrip("-") for name in usage)


class Declaration:
    """
    Base class for declarations: validation helpers and stable representations.

    Conventions
    - public fields are read-only properties mirrored from "_<name>" backing attributes.
    - __fields__ lists the fields shown by __repr__/__rich_repr__, in order.
    """
    __fields__ = ()

    def __repr__(self):
        return "%s(%s)" % (
            type(self).__name__,
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        )

    def __rich_repr__(self):
        for field in self.__fields__:
            yield field, getattr(self, field)

    @staticmethod
    def _check_usage(caller, usage, /):
        if isinstance(usage, str):
            names = aliases(usage)
        elif isinstance(usage, Sequence) and all(isinstance(name, str) for name in usage):
            names = aliases(usage)
        else:
            raise TypeError("%s() usage must be a string or a sequence of strings" % caller)
        if not names or not all(names):
            raise ValueError("%s() usage must name at least one non-empty alias" % caller)
        if len(set(names)) != len(names):
            raise ValueError("%s() usage must not repeat an alias" % caller)
        return names

    @staticmethod
    def _check_descr(caller, descr, /):
        if descr is Unset:
            return ""
        if not isinstance(descr, str):
            raise TypeError("%s() descr must be a string" % caller)
        return descr.strip()

    @staticmethod
    def _check_init(caller, init, /):
        if init is not Unset and not callable(init):
            raise TypeError("%s() init must be callable" % caller)
        return init


class OptionDeclaration(Declaration):
    """
    A declared option.

    Fields
    - usage: the usage as declared (sequence of aliases or compact "-f, --file" string).
    - aliases: normalized bare aliases, short alias first.
    - descr: help description ("" when not given).
    - default: declared default value, or Unset.
    - kind: DefaultKind of the default.
    - init: initializer applied to the resolved value, or Unset.
    """
    __fields__ = ("aliases", "descr", "default", "init")

    usage = mirror("usage")
    aliases = mirror("aliases")
    descr = mirror("descr")
    init = mirror("init")

    def __init__(self, usage, descr=Unset, /, *, default=Unset, init=Unset):
        self._aliases = self._check_usage("OptionDeclaration", usage)
        self._usage = usage if isinstance(usage, str) else tuple(usage)
        self._descr = self._check_descr("OptionDeclaration", descr)
        self._default = default
        self._init = self._check_init("OptionDeclaration", init)

    @property
    def default(self):
        # containers are copied so a resolved list never aliases the declared one
        return copy.copy(self._default)

    @property
    def kind(self):
        return kindof(self._default)


class CommandDeclaration(Declaration):
    """
    A declared command.

    Fields
    - usage: the primary name, or the names sequence as declared.
    - name: the primary (first) name.
    - aliases: every name the command answers to.
    - descr: help description.
    - init: handler called as init(name, remaining, options), or Unset.
    """
    __fields__ = ("name", "aliases", "descr", "init")

    usage = mirror("usage")
    aliases = mirror("aliases")
    descr = mirror("descr")
    init = mirror("init")

    def __init__(self, usage, descr=Unset, /, init=Unset):
        self._aliases = self._check_usage("CommandDeclaration", usage)
        self._usage = usage if isinstance(usage, str) else tuple(usage)
        self._descr = self._check_descr("CommandDeclaration", descr)
        self._init = self._check_init("CommandDeclaration", init)

    @property
    def name(self):
        return self._aliases[0]


class ExampleDeclaration(Declaration):
    """A sample invocation ("usage") with a short description."""
    __fields__ = ("usage", "descr")

    usage = mirror("usage")
    descr = mirror("descr")

    def __init__(self, usage, descr=Unset, /):
        if not isinstance(usage, str) or not usage.strip():
            raise ValueError("ExampleDeclaration() usage must be a non-empty string")
        self._usage = usage.strip()
        self._descr = self._check_descr("ExampleDeclaration", descr)


class DefinitionTree:
    """
    Immutable set of declarations for one CLI surface.

    Parameters
    - options: Iterable[OptionDeclaration]
    - commands: Iterable[CommandDeclaration]
    - examples: Iterable[ExampleDeclaration]

    Rules
    - aliases are unique among options, and names are unique among commands;
      a repeat raises ValueError carrying FaultCode.DUPLICATED_ALIAS in its notes.
    - the tree is never mutated after construction; resolution only reads it.
    """
    options = mirror("options")
    commands = mirror("commands")
    examples = mirror("examples")

    def __init__(self, options=(), commands=(), examples=()):
        self._options = self._collect(options, OptionDeclaration, "options")
        self._commands = self._collect(commands, CommandDeclaration, "commands")
        self._examples = self._collect(examples, ExampleDeclaration, "examples")

    @staticmethod
    def _collect(items, type, kind, /):
        items = tuple(items)
        seen = set()
        for item in items:
            if not isinstance(item, type):
                raise TypeError("DefinitionTree() %s must be %s instances" % (kind, type.__name__))
            if kind == "examples":
                continue
            for alias in item.aliases:
                if alias in seen:
                    error = ValueError("DefinitionTree() %s declare %r more than once" % (kind, alias))
                    error.add_note("fault code: %s" % FaultCode.DUPLICATED_ALIAS.normalize())
                    raise error
                seen.add(alias)
        return items

    def __repr__(self):
        return "DefinitionTree(options=%r, commands=%r, examples=%r)" % (
            self._options, self._commands, self._examples
        )

    def __rich_repr__(self):
        yield "options", self._options
        yield "commands", self._commands
        yield "examples", self._examples


__all__ = (
    "DefaultKind",
    "kindof",
    "number",
    "aliases",
    "Declaration",
    "OptionDeclaration",
    "CommandDeclaration",
    "ExampleDeclaration",
    "DefinitionTree",
)
