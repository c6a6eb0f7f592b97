"""
Quiver help/usage renderer.

Formats declarations into aligned, two-column rich Text blocks:
- options:  "-f, --file [value]  description" (sorted by long alias)
- commands: "build, b            description" (sorted by name)
- examples: "- description" followed by an indented "$ usage" line

Palette keys
- usage-label, program-name, section-label
- usage-name, usage-descr
- example-descr, example-usage

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed and only plain text is produced.
"""
import math
from collections import defaultdict

from rich.text import Text

from .declarations import DefinitionTree, OptionDeclaration, DefaultKind, kindof, number
from .utils import *


def handle_type(value, /):
    """
    return (placeholder, initializer) for a default value or an initializer.

    mapping
    - str / strings             → ("[value]", Unset)
    - list / lists              → ("<list>", Unset)
    - int, float, number / nums → ("<n>", number)
    - anything else             → ("", Unset)
    """
    if value is number or value is int or value is float:
        return "<n>", number
    if value is str:
        return "[value]", Unset
    if value is list or value is tuple:
        return "<list>", Unset
    if callable(value):
        return "", Unset
    match kindof(value):
        case DefaultKind.STRING:
            return "[value]", Unset
        case DefaultKind.LIST:
            return "<list>", Unset
        case DefaultKind.NUMBER:
            return "<n>", number
        case _:
            return "", Unset


def blank(value, /):
    """
    true for values that carry nothing to show: Unset, None, False, 0, nan and "".

    empty lists are not blank: a list default still advertises a <list> placeholder.
    """
    match kindof(value):
        case DefaultKind.UNSET:
            return True
        case DefaultKind.BOOLEAN:
            return not value
        case DefaultKind.NUMBER:
            return value == 0 or math.isnan(value)
        case DefaultKind.STRING:
            return not value
        case DefaultKind.LIST:
            return False
        case _:
            return value is None


class Renderer:
    """
    Render a DefinitionTree as help text.

    Parameters
    - tree: DefinitionTree
    - colorful: bool — apply the palette (default True).

    Methods
    - usage(declaration) → str: first-column text for one declaration.
    - details(kind_or_items, indent=2) → list[Text]: aligned lines, sorted.
    - examples() → list[Text]
    - help(name) → Text: full help page.
    """

    def __init__(self, tree, /, *, colorful=True):
        if not isinstance(tree, DefinitionTree):
            raise TypeError("Renderer() argument must be a DefinitionTree")
        self._tree = tree
        self._colorful = bool(colorful)
        self._styles = defaultdict(str, {
            "usage-label": "bold #00E6FF",
            "program-name": "bold #FF4D94",
            "section-label": "bold #FFFFFF",
            "usage-name": "bold #FFD600",   # amber first column
            "usage-descr": "#9CA3AF",       # muted gray descriptions
            "example-descr": "#D1D5DB",
            "example-usage": "#22C55E",
        } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(self, style, /):
        return self._styles[style] if self._colorful else ""

    def text(self, fragment, style="", /):
        return Text(str(fragment), self.styler(style) if style else "")

    def usage(self, declaration, /):
        """
        first-column text of a declaration.

        - compact string usages ("-f, --file") are shown verbatim.
        - commands join their names with ", ".
        - options show "-s", then ", --long" when the second alias is a long one, then
          the placeholder of the default (or of the initializer when the default is
          blank); the option answering to "v" never shows a placeholder.
        """
        if isinstance(declaration.usage, str):
            return declaration.usage
        if not isinstance(declaration, OptionDeclaration):
            return ", ".join(declaration.aliases)

        aliases = declaration.aliases
        usage = "-" + aliases[0]
        if len(aliases) > 1 and len(aliases[1]) > 1:
            usage += ", --" + aliases[1]

        initial = declaration.default
        if blank(initial):
            initial = declaration.init
        if not blank(initial) and "v" not in aliases:
            if placeholder := handle_type(initial)[0]:
                usage += " " + placeholder
        return usage

    def details(self, kind, /, *, indent=2):
        """
        render declarations as aligned two-column lines.

        parameters
        - kind: "options" | "commands" | Iterable of declarations.
        - indent: leading spaces before the first column.

        the first column is padded to the widest usage of the group.
        """
        if isinstance(kind, str):
            items = list(getattr(self._tree, kind))
        else:
            items = list(kind)

        def key(item):
            if isinstance(item, OptionDeclaration):
                return item.aliases[1] if len(item.aliases) > 1 else item.aliases[0]
            return item.aliases[0]

        items.sort(key=key)
        usages = [self.usage(item) for item in items]
        if not usages:
            return []
        longest = max(map(len, usages))

        return [
            Text.assemble(
                " " * indent,
                self.text(usage.ljust(longest), "usage-name"),
                "  ",
                self.text(item.descr, "usage-descr"),
            )
            for usage, item in zip(usages, items)
        ]

    def examples(self):
        return [
            Text.assemble(
                "  ", self.text("- " + example.descr, "example-descr"), "\n\n",
                "    ", self.text("$ " + example.usage, "example-usage"), "\n",
            )
            for example in self._tree.examples
        ]

    def help(self, name, /, descr=Unset):
        """
        render the whole help page of a program.

        sections (each only when not empty)
        - usage line: "usage: <name> [options] [command]"
        - description
        - commands, options, examples
        """
        page = Text()
        page.append_text(self.text("usage", "usage-label")).append(": ")
        page.append_text(self.text(name, "program-name"))
        page.append(" [options]")
        if self._tree.commands:
            page.append(" [command]")
        page.append("\n")

        if descr:
            page.append("\n").append(descr).append("\n")

        for section in ("commands", "options"):
            if lines := self.details(section):
                page.append("\n").append_text(self.text(section, "section-label")).append(":\n")
                for line in lines:
                    page.append_text(line).append("\n")

        if examples := self.examples():
            page.append("\n").append_text(self.text("examples", "section-label")).append(":\n")
            for example in examples:
                page.append_text(example)

        page.rstrip()
        return page


__all__ = (
    "handle_type",
    "blank",
    "Renderer",
)
