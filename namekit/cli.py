#!/usr/bin/env python3
"""
NameKit CLI
===========
Command-line interface for saved name generator configurations.

Usage:
    namekit generate elves.yaml -n 10 --seed 42
    namekit generate places.yaml --id towns --json
    namekit check elves.yaml "Tolesi"
    namekit show elves.yaml
"""

import argparse
import json
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from namekit import __version__
from namekit.collection import NameGeneratorCollection
from namekit.errors import NameKitError
from namekit.generators.names import Name
from namekit.settings import get_setting, resolve_path

logger = logging.getLogger("namekit")

# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self.console = Console()
        self.err_console = Console(stderr=True)

    def print(self, *args, **kwargs):
        if not self.quiet:
            self.console.print(*args, **kwargs)

    def raw(self, text: str):
        """Print text untouched by rich markup (JSON, YAML)."""
        print(text)

    def error(self, msg: str):
        self.err_console.print(f"Error: {msg}", markup=False, highlight=False, soft_wrap=True)

    def table(self, headers: list, rows: list, title: Optional[str] = None):
        if self.quiet:
            return
        table = Table(title=title)
        for header in headers:
            table.add_column(str(header))
        for row in rows:
            table.add_row(*(str(c) for c in row))
        self.console.print(table)


def configure_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else get_setting("logging.level", "WARNING")
    logging.basicConfig(
        level=level,
        format=get_setting("logging.format", "%(message)s"),
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def pick_generator(loaded, gid: Optional[str] = None):
    """Resolve the generator to use from a loaded generator or collection."""
    if isinstance(loaded, NameGeneratorCollection):
        if gid is None:
            ids = ', '.join(k for k, _ in loaded.items())
            raise ValueError(f"This file holds a collection; choose one with --id ({ids})")
        return loaded.get(gid)
    if gid is not None:
        raise ValueError("--id only applies to collection files")
    return loaded


# =============================================================================
# Commands
# =============================================================================

def cmd_generate(args, out: Output):
    """Generate names from a saved configuration."""
    from namekit import serialization

    generator = pick_generator(serialization.load_any(resolve_path(args.config)), args.id)
    if args.seed is not None:
        generator.seed(args.seed)

    count = args.count if args.count is not None else get_setting("cli.count", 10)
    names = generator.generate(count, args.size)

    if args.json:
        out.raw(json.dumps(names, ensure_ascii=False))
        return 0

    out.table(['#', 'Name'], [[i, n] for i, n in enumerate(names, 1)])
    return 0


def cmd_check(args, out: Output):
    """Run a configuration's filter against a single name."""
    from namekit import serialization

    generator = pick_generator(serialization.load_any(resolve_path(args.config)), args.id)
    if generator.filter is None:
        out.print(f"OK: {args.name} (no filter configured)")
        return 0

    reason = generator.filter.rejection_reason(Name(args.name))
    if reason is None:
        out.print(f"OK: {args.name}")
        return 0

    out.print(f"REJECTED: {args.name} ({reason.condition.value} '{reason.value}')", markup=False)
    return 1


def cmd_show(args, out: Output):
    """Print a saved configuration in normalized form."""
    from namekit import serialization

    loaded = serialization.load_any(resolve_path(args.config))
    if isinstance(loaded, NameGeneratorCollection):
        data = serialization.collection_to_dict(loaded)
    else:
        data = serialization.to_dict(loaded)
    out.raw(serialization.dump_text(data, 'json' if args.json else 'yaml').rstrip())
    return 0


# =============================================================================
# Main
# =============================================================================

def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='namekit',
        description='NameKit - Syllable-Based Name Generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate elves.yaml -n 20
  %(prog)s generate elves.yaml --size 2 --seed 7 --json
  %(prog)s check elves.yaml "Tolesi"
  %(prog)s show elves.json
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], help='Generate names')
    p.add_argument('config', help='Saved generator (.yaml, .yml or .json)')
    p.add_argument('-n', '--count', type=int, help='Number of names')
    p.add_argument('--size', type=int, help='Exact syllable count')
    p.add_argument('--seed', type=int, help='Seed for reproducible output')
    p.add_argument('--id', help='Generator id within a collection file')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- check ---
    p = subparsers.add_parser('check', aliases=['c'], help='Check a name against the filter')
    p.add_argument('config', help='Saved generator (.yaml, .yml or .json)')
    p.add_argument('name', help='Name to check')
    p.add_argument('--id', help='Generator id within a collection file')

    # --- show ---
    p = subparsers.add_parser('show', help='Print the normalized configuration')
    p.add_argument('config', help='Saved generator (.yaml, .yml or .json)')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    configure_logging(args.verbose)

    cmd_map = {'gen': 'generate', 'g': 'generate', 'c': 'check'}
    command = cmd_map.get(args.command, args.command)

    out = Output(quiet=args.quiet)

    commands = {
        'generate': cmd_generate,
        'check': cmd_check,
        'show': cmd_show,
    }

    handler = commands[command]
    try:
        return handler(args, out)
    except KeyboardInterrupt:
        out.print("\nCancelled.")
        return 130
    except (NameKitError, ValueError, KeyError, OSError) as e:
        # KeyError str() wraps the message in quotes
        out.error(e.args[0] if isinstance(e, KeyError) and e.args else str(e))
        logger.debug("Command failed", exc_info=True)
        return 1


if __name__ == '__main__':
    sys.exit(main())
