"""
Command line interface for jishokei.

Usage:
    python -m jishokei.cli "食べさせられた"        # candidates, one per line
    python -m jishokei.cli -1 "食べさせられた"     # best candidate only
    python -m jishokei.cli -j "食べさせられた"     # JSON
    python -m jishokei.cli -d rules.db "読んで"    # rules from a rule database
    python -m jishokei.cli import-db -o rules.db   # JSON rule files -> rule database
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from jishokei import __version__, settings
from jishokei.db import load_rule_store_from_db, save_rule_store
from jishokei.models import ScanResult
from jishokei.rules import RuleLoadError, load_default_rule_store
from jishokei.scan import Scanner


def configure_logging(debug: bool = False):
    level = logging.DEBUG if debug or settings.DEBUG else logging.WARNING
    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(name)s - %(message)s')


def import_db_command(args) -> int:
    """Copy the JSON rule files into a rule database."""
    rules_dir = Path(args.rules_dir) if args.rules_dir else None
    db_path = Path(args.output) if args.output else settings.DB_PATH

    try:
        store = load_default_rule_store(rules_dir, strict=True)
    except RuleLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for warning in store.warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    print(f"Importing rules...")
    print(f"  Rules: {rules_dir or settings.RULES_DIR}")
    print(f"  Output: {db_path}")

    count = save_rule_store(store, db_path)

    print(f"✅ Rule database written: {count:,} rows")
    print()
    print("Set JISHOKEI_DB_PATH environment variable to use this database:")
    print(f'  export JISHOKEI_DB_PATH="{db_path.absolute()}"')
    return 0


def main_import_db(args: list) -> int:
    """CLI entry point for import-db subcommand."""
    parser = argparse.ArgumentParser(
        description='Write the JSON rule tables into a SQLite rule database',
        prog='jishokei import-db',
    )

    parser.add_argument(
        '--rules-dir', '-r',
        type=str,
        metavar='DIR',
        help='Directory with index.json, conjugate_rule.json and special_rule.json',
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        metavar='PATH',
        help='Output database path (default: JISHOKEI_DB_PATH or rules.db in the rules dir)',
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Log debug information to stderr',
    )

    parsed = parser.parse_args(args)
    configure_logging(parsed.debug)
    return import_db_command(parsed)


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point."""
    args_list = args if args is not None else sys.argv[1:]

    if args_list and args_list[0] == 'import-db':
        return main_import_db(args_list[1:])

    parser = argparse.ArgumentParser(
        description='Find dictionary forms (jishokei) of inflected Japanese text',
        prog='jishokei',
        epilog='Subcommands:\n  jishokei import-db    Write the JSON rule tables into a rule database',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        'text',
        nargs='*',
        help='Japanese text, usually the text right after the cursor',
    )

    parser.add_argument(
        '-1', '--first',
        action='store_true',
        help='Print only the most relevant candidate',
    )

    parser.add_argument(
        '-j', '--json',
        action='store_true',
        help='Print the result as JSON',
    )

    parser.add_argument(
        '-r', '--rules-dir',
        type=str,
        default=None,
        metavar='DIR',
        help='Directory with the JSON rule tables',
    )

    parser.add_argument(
        '-d', '--database',
        type=str,
        default=None,
        metavar='PATH',
        help='Load rule tables from a SQLite rule database instead',
    )

    parser.add_argument(
        '--strict',
        action='store_true',
        help='Fail instead of continuing with empty tables when rules cannot be loaded',
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Log debug information to stderr',
    )

    parser.add_argument(
        '-v', '--version',
        action='store_true',
        help='Show version information',
    )

    parsed = parser.parse_args(args_list)

    if parsed.version:
        print(f'jishokei {__version__}')
        return 0

    text = ' '.join(parsed.text) if parsed.text else ''

    if not text:
        parser.print_help()
        return 1

    configure_logging(parsed.debug)

    try:
        if parsed.database:
            store = load_rule_store_from_db(parsed.database, strict=parsed.strict)
        else:
            store = load_default_rule_store(parsed.rules_dir, strict=parsed.strict)
    except RuleLoadError as e:
        print(f'Error loading rules: {e}', file=sys.stderr)
        return 1

    if parsed.strict and store.degraded:
        for warning in store.warnings:
            print(f'Error loading rules: {warning}', file=sys.stderr)
        return 1

    candidates = Scanner(store).scan(text)

    if parsed.json:
        result = ScanResult.from_scan(text, candidates)
        if parsed.first:
            result.candidates = result.candidates[:1]
        print(result.model_dump_json())
    elif parsed.first:
        print(candidates[0])
    else:
        for candidate in candidates:
            print(candidate)

    return 0


if __name__ == '__main__':
    sys.exit(main())
