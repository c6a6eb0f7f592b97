"""
Quiver program facade: declare a CLI surface, then resolve invocations against it.

What this module provides
- Program: a fluent builder for options, commands and examples, plus the runtime
  configuration (help/version output, shell mode, colors) used when parsing.
  • option()/options(), command()/commands(), example()/examples() accumulate
    declarations; `definitions` snapshots them into an immutable DefinitionTree.
  • parse(raw) resolves a raw invocation, surfaces unknown options as faults,
    prints help/version when asked to, and dispatches the matched command.
  • help()/show_help()/show_version() render through rich.

Built-ins
- "-h, --help" is always declared; "-v, --version" when a version is given.
- a "help" command is added as soon as one command is declared; it is silenced
  (not removed) when help output is disabled.

Quick start
    from quiver import Program

    program = (
        Program("tool", "1.0.0", shell=True)
        .option("output", "where to write", "out.txt")
        .option(["n", "count"], "how many times", 1)
        .command("build", "build the project", lambda name, sub, options: ...)
        .example("tool build --output dist", "build into ./dist")
    )

    # raw invocations come from a tokenizer: positionals under "_", one key per used alias
    options = program.parse({"_": ["build"], "output": "dist"})
"""
import os.path
import sys
from collections.abc import Iterable, Mapping, Sequence

from rich.console import Console

from .assembler import MESSAGE_KEY, POSITIONALS_KEY, assemble
from .declarations import OptionDeclaration, CommandDeclaration, ExampleDeclaration, DefinitionTree
from .declarations import aliases as normalize
from .dispatch import HELP, dispatch
from .faults import *
from .index import DefinitionIndex
from .render import Renderer, handle_type
from .utils import *


class Program:
    """
    A command-line program definition plus its runtime configuration.

    Parameters
    - name: str — program name shown in usage/help (defaults to the script name).
    - version: str — when given, "-v, --version" is declared and prints it.
    - descr: str — description paragraph for the help page.
    - help: bool — allow help output (the --help flag and the "help" command).
    - shell: bool — faults are printed and exit the process instead of raising;
      help/version output exits with status 0.
    - strict: bool — surface unknown options as UnknownOptionError; when False the
      message is only left under "unknownOptionMessage".
    - colorful: bool — style rendered output.
    """
    name = mirror("name")
    version = mirror("version")
    descr = mirror("descr")
    shell = mirror("shell")
    strict = mirror("strict")
    colorful = mirror("colorful")

    def __init__(self, name=Unset, version=Unset, descr=Unset, /, *, help=True, shell=False, strict=True, colorful=True):
        name = coalesce(name, os.path.basename(sys.argv[0]) or "program")
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Program() name must be a non-empty string")
        if version is not Unset and not isinstance(version, str):
            raise TypeError("Program() version must be a string")
        if descr is not Unset and not isinstance(descr, str):
            raise TypeError("Program() descr must be a string")

        self._name = name.strip()
        self._version = version
        self._descr = descr
        self._help = bool(help)
        self._shell = bool(shell)
        self._strict = bool(strict)
        self._colorful = bool(colorful)

        self._options = []
        self._commands = []
        self._examples = []

        self.option(["h", "help"], "output usage information")
        if version is not Unset:
            self.option(["v", "version"], "output the version number")

    @property
    def help_enabled(self):
        return self._help

    # ==== declarations ====

    def option(self, name, descr=Unset, default=Unset, init=Unset, /):
        """
        declare an option.

        parameters
        - name: str | Sequence[str]
          • "file" → aliases ["f", "file"]; when "f" is taken, "F" is used instead.
          • ["f", "file"] → used as given (leading dashes stripped).
          • "-f, --file" → split like a compact usage, then used as given.
        - descr: str — help description.
        - default: any — drives coercion (see quiver.resolver).
        - init: callable — initializer; when omitted it is derived from the default
          (numbers get quiver.declarations.number), except for False/None defaults.

        returns
        - self (fluent).
        """
        if isinstance(name, str) and ", " in name:
            usage = list(normalize(name))
        elif isinstance(name, str):
            usage = self._shortcut(name.lstrip("-"))
        elif isinstance(name, Sequence) and all(isinstance(item, str) for item in name):
            usage = list(normalize(name))
        else:
            raise TypeError("option() name must be a string or a sequence of strings")

        if usage and len(usage[0]) > 1:
            raise ValueError("option() short alias %r is longer than one character" % usage[0])

        if init is Unset and default is not False and default is not None and default is not Unset:
            init = handle_type(default)[1]

        self._options.append(OptionDeclaration(usage, descr, default=default, init=init))
        return self

    def _shortcut(self, name, /):
        if not name:
            raise ValueError("option() name must be a non-empty string")
        short = name[0]
        if any(option.aliases[0] == short for option in self._options):
            short = short.upper()
        return [short, name]

    def options(self, items, /):
        """
        declare several options from mappings with "name", "descr", "default" and "init" keys.
        """
        for item in self._mappings("options", items):
            self.option(
                item["name"],
                item.get("descr", Unset),
                item.get("default", Unset),
                item.get("init", Unset),
            )
        return self

    def command(self, name, descr=Unset, init=Unset, /, aliases=()):
        """
        declare a command.

        parameters
        - name: str — primary name.
        - descr: str — help description.
        - init: callable — handler called as init(name, remaining, options).
        - aliases: Iterable[str] — extra names.
        """
        if not isinstance(name, str):
            raise TypeError("command() name must be a string")
        self._commands.append(CommandDeclaration([name, *aliases] if aliases else name, descr, init))
        return self

    def commands(self, items, /):
        for item in self._mappings("commands", items):
            self.command(
                item["name"],
                item.get("descr", Unset),
                item.get("init", Unset),
                aliases=item.get("aliases", ()),
            )
        return self

    def example(self, usage, descr=Unset, /):
        self._examples.append(ExampleDeclaration(usage, descr))
        return self

    def examples(self, items, /):
        for item in self._mappings("examples", items):
            self.example(item["usage"], item.get("descr", Unset))
        return self

    @staticmethod
    def _mappings(caller, items, /):
        if not isinstance(items, Iterable) or isinstance(items, (str, Mapping)):
            raise TypeError("%s() argument must be an iterable of mappings" % caller)
        for item in items:
            if not isinstance(item, Mapping):
                raise TypeError("%s() argument must be an iterable of mappings" % caller)
            yield item

    @property
    def definitions(self):
        """
        immutable snapshot of everything declared so far.

        the built-in "help" command is appended when commands exist and none of
        them is already called "help".
        """
        commands = list(self._commands)
        if commands and not any(HELP in command.aliases for command in commands):
            commands.append(CommandDeclaration(HELP, "display help", self._helper))
        return DefinitionTree(self._options, commands, self._examples)

    # ==== rendering ====

    def _helper(self, name, remaining, options):
        self.show_help()

    def help(self):
        """return the help page as rich Text."""
        return Renderer(self.definitions, colorful=self._colorful).help(self._name, self._descr)

    def show_help(self):
        Console(highlight=False).print(self.help())

    def show_version(self):
        Console(highlight=False).print(coalesce(self._version, ""))

    # ==== runtime ====

    def trigger(self, fault, /, **options):
        """
        surface a fault with this program's runtime settings (program, shell, colorful).
        """
        trigger(fault, **options, program=self, shell=self._shell, colorful=self._colorful)

    def dispatch(self, name, options, remaining=(), /):
        """
        run the command declared as `name` with resolved options.

        an undeclared name is surfaced as UnknownCommandError.
        """
        command = DefinitionIndex(self.definitions).resolve(name, "commands")
        if command is None:
            return self.trigger(UnknownCommandError(
                "unknown command %r" % name,
                title="unknown command",
                code=FaultCode.UNKNOWN_COMMAND,
                hint="try '%s --help' to see all available commands" % self._name,
                input=name,
                docs=getdoc(FaultCode.UNKNOWN_COMMAND),
            ))
        return dispatch(command, options, remaining, help=self._help)

    def parse(self, raw, /):
        """
        resolve a raw invocation and act on it.

        steps
        - the first positional names a command when one is declared under that name;
          unknown options are then left to that command.
        - unknown options (outside a command) are surfaced as UnknownOptionError when
          strict, otherwise only reported under "unknownOptionMessage".
        - --help / --version print their output (and exit in shell mode) when enabled.
        - the matched command is dispatched with the positionals that follow it.

        returns
        - dict: the resolved options (see quiver.assembler.assemble).
        """
        if not isinstance(raw, Mapping) or POSITIONALS_KEY not in raw:
            raise TypeError("parse() argument must be a mapping with a %r key" % POSITIONALS_KEY)

        tree = self.definitions
        positionals = raw[POSITIONALS_KEY]
        command = DefinitionIndex(tree).resolve(positionals[0], "commands") if positionals else None

        options = assemble(raw, tree, command is not None, colorful=self._colorful)

        if self._strict and (message := options.get(MESSAGE_KEY)) is not None:
            self.trigger(UnknownOptionError(
                message,
                title="unknown option",
                code=FaultCode.UNKNOWN_OPTION,
                hint="try '%s --help' to see all available options" % self._name,
                docs=getdoc(FaultCode.UNKNOWN_OPTION),
            ))

        if options.get(HELP) and self._help:
            self.show_help()
            if self._shell:
                sys.exit(0)
        elif options.get("version") and self._version is not Unset:
            self.show_version()
            if self._shell:
                sys.exit(0)

        if command is not None:
            dispatch(command, options, options[POSITIONALS_KEY][1:], help=self._help)

        return options

    def __repr__(self):
        return "Program(name=%r, version=%r)" % (self._name, self._version)

    def __rich_repr__(self):
        yield "name", self._name
        yield "version", self._version
        yield "definitions", self.definitions


__all__ = (
    "Program",
)
