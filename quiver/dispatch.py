"""
Quiver command dispatch: hand resolved options to a command's handler.

The reserved "help" command is silenced when help output is disabled. That decision is
made per call from the `help` argument; the declaration is never written to, so one
DefinitionTree can be dispatched from any number of times with different settings.
"""
from .declarations import CommandDeclaration
from .utils import Unset

HELP = "help"


def handler(command, /, *, help=True):
    """
    return the handler to run for `command`, or Unset when there is none.
    """
    if command.name == HELP and not help:
        return Unset
    return command.init


def dispatch(command, options, remaining=(), /, *, help=True):
    """
    run a command's handler.

    parameters
    - command: CommandDeclaration
    - options: dict — resolved options handed to the handler.
    - remaining: Iterable[str] — tokens following the command name.
    - help: bool — when False, the "help" command has no handler for this call.

    returns
    - whatever the handler returns; None when the command has no handler.
    """
    if not isinstance(command, CommandDeclaration):
        raise TypeError("dispatch() first argument must be a CommandDeclaration")
    if (init := handler(command, help=help)) is Unset:
        return None
    return init(command.name, list(remaining), options)


__all__ = (
    "HELP",
    "handler",
    "dispatch",
)
