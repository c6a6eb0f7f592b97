"""
Quiver option resolver: compute the final value of one declared option.

Precedence
- the declared default is the starting value;
- a value captured by the tokenizer under any alias overrides it (when several aliases
  were used, the alias declared last wins).

Shape correction (per alias, driven by the DefaultKind of the default)
- LIST default, non-list value   → the value is wrapped as [value].
- any other declared default whose kind differs from the value's kind
                                 → the value is dropped and the default is used.
- UNSET default                  → the value passes through untouched.

Dropped and wrapped scalars are recorded as positionals: on the first alias only, the
pre-correction value is appended to raw["_"]. That step is record_dropped(), kept
separate so it can be exercised on its own.

Initializer
- declared init is applied to the corrected value, except for the numeric initializer
  (quiver.declarations.number), which only runs on values that are numbers already.

Output keys
- one key per alias, all carrying the same value; multi-character aliases are
  camel-cased ("dry-run" → "dryRun"), single characters are kept as-is.

Nothing here raises on bad input: mismatches degrade to defaults.
"""
from .declarations import DefaultKind, kindof, number
from .utils import *


def record_dropped(positionals, value, index, /):
    """
    append a corrected-away value to the positional list, on the first alias only.

    parameters
    - positionals: list — the raw invocation's "_" list (mutated in place).
    - value: the value as captured before wrapping or falling back.
    - index: position of the alias being processed in the declaration's aliases.

    returns
    - True when the value was recorded, False otherwise.
    """
    if index != 0:
        return False
    positionals.append(value)
    return True


def capture(declaration, raw, /):
    """
    return the working value of a declaration: its default, overridden by any
    value captured under one of its aliases (last alias wins).
    """
    value = declaration.default
    for alias in declaration.aliases:
        if alias in raw:
            value = raw[alias]
    return value


def correct(declaration, value, /):
    """
    return (value, dropped) after shape correction against the declared default.

    `dropped` is True when the captured value did not survive as-is (it was wrapped
    in a list or replaced by the default) and must be recorded as a positional.
    """
    kind = kindof(value)
    match declaration.kind:
        case DefaultKind.UNSET:
            return value, False
        case DefaultKind.LIST if kind is not DefaultKind.LIST:
            return [value], True
        case DefaultKind.LIST:
            return value, False
        case expected if expected is not kind:
            return declaration.default, True
        case _:
            return value, False


def initialize(declaration, value, /):
    """
    run the declared initializer on a corrected value.

    the numeric initializer is only applied when the value is a number already.
    """
    if (init := declaration.init) is Unset:
        return value
    if init is number and kindof(value) is not DefaultKind.NUMBER:
        return value
    return init(value)


def canonical(alias, /):
    """
    output key for an alias: camel-cased unless it is a single character.
    """
    return camelize(alias) if len(alias) > 1 else alias


def resolve(declaration, raw, /):
    """
    resolve one option declaration against a raw invocation.

    parameters
    - declaration: OptionDeclaration
    - raw: Mapping — the raw invocation: "_" (list of positionals) plus one entry per
      used alias. raw["_"] receives the values recorded by record_dropped().

    returns
    - dict: {canonical(alias): value} with one entry per alias of the declaration.
    """
    captured = capture(declaration, raw)
    contents = {}

    for index, alias in enumerate(declaration.aliases):
        value, dropped = correct(declaration, captured)
        if dropped:
            record_dropped(raw["_"], captured, index)
        contents[canonical(alias)] = initialize(declaration, value)

    return contents


__all__ = (
    "record_dropped",
    "capture",
    "correct",
    "initialize",
    "canonical",
    "resolve",
)
