# flagdispatch/parsing/parser.py
from __future__ import annotations

import argparse
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from flagdispatch.constants import BOOL_LITERALS
from flagdispatch.core.models import FlagDefinition

_HELP_NAMES = ('h', 'help')
_TERMINATOR = '--'


def build_parser(
    definitions: Mapping[str, FlagDefinition],
    *,
    prog: Optional[str] = None,
) -> argparse.ArgumentParser:
    """
    Build the argparse parser backing a FlagRegistry.

    Notes:
        - Every shorthand is declared as ``-name`` and ``--name``. The parser
          renders usage, help and error messages; `scan_argv` walks argv
          itself since argparse would cluster short flags and refuse
          dash-prefixed values.
        - ``-h/--help`` is only provided when no flag claims those names.
    """
    p = argparse.ArgumentParser(
        prog=prog,
        add_help=False,
        allow_abbrev=False,
        argument_default=argparse.SUPPRESS,
    )

    for shorthand, definition in definitions.items():
        if definition.requires_value:
            p.add_argument(
                *definition.option_strings,
                dest=shorthand,
                metavar=_metavar(definition.allowed_values),
                help=definition.description or None,
            )
        else:
            p.add_argument(
                *definition.option_strings,
                dest=shorthand,
                action='store_true',
                help=definition.description or None,
            )

    for name in help_names(definitions):
        p.add_argument(f'-{name}', f'--{name}', action='help', help='show this help message and exit')

    return p


def help_names(definitions: Mapping[str, FlagDefinition]) -> List[str]:
    return [name for name in _HELP_NAMES if name not in definitions]


def scan_argv(
    parser: argparse.ArgumentParser,
    definitions: Mapping[str, FlagDefinition],
    argv: Sequence[str],
) -> Dict[str, Optional[str]]:
    """Walk raw argv and collect the matched flags.

    Accepted forms are ``-name``/``--name`` (presence-only flags, optionally
    with an attached boolean literal such as ``-v=false``), ``-name value``
    and ``-name=value``. A value flag takes the next token unconditionally,
    even when it starts with a dash or is ``--``. A bare ``--`` ends flag
    parsing. A repeated flag keeps its last value.

    Everything else is a usage error reported through ``parser.error``
    (usage on stderr, exit status 2): unknown names (including joined short
    flags like ``-vq`` and attached values like ``-ohello``), bad syntax
    such as ``---x`` or ``-=x``, invalid boolean literals, a value flag at
    the end of argv, and positional arguments. ``-h``/``-help`` print the
    parser help and exit 0 unless a flag claims those names.

    Returns:
        Mapping of shorthand -> value; presence-only flags map to None.
    """
    seen: Dict[str, Optional[str]] = {}
    helps = help_names(definitions)
    i = 0
    while i < len(argv):
        tok = argv[i]
        i += 1
        if tok == _TERMINATOR:
            if i < len(argv):
                parser.error(f"unrecognized arguments: {' '.join(argv[i:])}")
            break
        if len(tok) < 2 or not tok.startswith('-'):
            parser.error(f"unrecognized arguments: {' '.join(argv[i - 1:])}")

        body = tok[2:] if tok.startswith('--') else tok[1:]
        if not body or body[0] in '-=':
            parser.error(f'bad flag syntax: {tok}')
        name, sep, value = body.partition('=')

        if name in helps:
            parser.print_help()
            parser.exit()
        definition = definitions.get(name)
        if definition is None:
            parser.error(f'unrecognized arguments: {tok}')

        if not definition.requires_value:
            if sep and value not in BOOL_LITERALS:
                parser.error(f'invalid boolean value {value!r} for -{name}')
            seen[name] = None
            continue

        if not sep:
            if i >= len(argv):
                parser.error(f'flag needs an argument: -{name}')
            value = argv[i]
            i += 1
        seen[name] = value
    return seen


def _metavar(allowed_values: Optional[Iterable[str]]) -> str:
    if allowed_values:
        return '{' + ','.join(allowed_values) + '}'
    return 'VALUE'
