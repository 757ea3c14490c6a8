"""Command-line checker for DRL rule files."""

import argparse
import json
import logging
import os
import sys

from . import (
    parse_with_diagnostics, read_rule_text, standard_layers,
    DRC_RULE_FILE_VERSION,
)
from .errors import DRLError, LexicalError
from .keywords import kind_name
from .visitor import referenced_layers

logger = logging.getLogger(__name__)


def _default_version():
    value = os.environ.get("DRL_REQUIRED_VERSION")
    if not value:
        return DRC_RULE_FILE_VERSION
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring non-integer DRL_REQUIRED_VERSION=%r", value)
        return DRC_RULE_FILE_VERSION


def _summary(model, layers):
    return {
        'version': model.file_version,
        'too_recent': model.too_recent,
        'conditions': [c.name for c in model.conditions],
        'layers_used': [layers.name_of(lid) for lid in referenced_layers(model)],
        'rules': [
            {
                'name': r.name,
                'conditions': [model.conditions[i].name for i in r.condition_indices],
                'layer': layers.name_of(r.layer) if r.layer is not None else None,
                'priority': r.priority,
                'enabled': r.enabled,
                'constraints': [
                    {'kind': kind_name(c.kind), 'values': list(c.values)}
                    for c in r.constraints
                ],
            }
            for r in model.rules
        ],
    }


def build_arg_parser():
    parser = argparse.ArgumentParser(
        prog='drl-check',
        description='Parse and validate a design rule (DRL) file',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  drl-check board.drl
  drl-check board.drl --copper-layers 4 --json
''')
    parser.add_argument('file', help='Rule file to check')
    parser.add_argument('--copper-layers', type=int, default=2, metavar='N',
                        help='Copper layer count of the board (default: 2)')
    parser.add_argument('--required-version', type=int,
                        default=_default_version(), metavar='V',
                        help='Newest rule file version understood '
                             '(default: $DRL_REQUIRED_VERSION or '
                             f'{DRC_RULE_FILE_VERSION})')
    parser.add_argument('--json', action='store_true',
                        help='Print the result as JSON')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    return parser


def main(argv=None):
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s')

    try:
        layers = standard_layers(args.copper_layers)
    except ValueError as exc:
        print(f"drl-check: {exc}", file=sys.stderr)
        return 2

    try:
        text = read_rule_text(args.file)
    except OSError as exc:
        print(f"drl-check: cannot read {args.file}: {exc}", file=sys.stderr)
        return 2
    except LexicalError as exc:
        print(f"drl-check: cannot decode {exc}", file=sys.stderr)
        return 2

    try:
        model, warnings = parse_with_diagnostics(
            text, layers, filename=args.file,
            required_version=args.required_version)
    except DRLError as exc:
        if args.json:
            print(json.dumps({'valid': False, 'error': exc.to_dict()}, indent=2))
        else:
            print(f"{exc.filename}:{exc.line}:{exc.col}: {exc.kind}: {exc.message}")
        return 1

    if args.json:
        result = {'valid': True, 'warnings': warnings}
        result.update(_summary(model, layers))
        print(json.dumps(result, indent=2))
        return 0

    for w in warnings:
        print(f"warning: {w}")
    print(f"{args.file}: version {model.file_version}, "
          f"{len(model.conditions)} condition(s), {len(model.rules)} rule(s)")
    for rule in model.rules:
        kinds = ', '.join(kind_name(c.kind) for c in rule.constraints)
        state = '' if rule.enabled else ' [disabled]'
        print(f"  {rule.name}: {kinds}{state}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
