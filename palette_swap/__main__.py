"""palette-swap: exact-match palette swapping for sprites and textures.

Usage: palette-swap <command> [options]

Commands are auto-discovered from palette_swap/commands/.
Each command module's docstring is its documentation.
Run `palette-swap help <command>` for full module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, palette-swap looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import sys

from palette_swap import registry
from palette_swap.core.env import OUTDIR_VAR, PALETTES_VAR, load_env


def _load_command_module(name: str) -> object:
    """Load the raw module for a command (for docstring access)."""
    return importlib.import_module(f'palette_swap.commands.{name}')


def _short_doc(name: str, fallback: str) -> str:
    doc = (_load_command_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        '  palette-swap apply hero.png -p hero.json -o ./variants\n'
        '  palette-swap apply hero.png -p hero.json -v blue --json\n'
        '  palette-swap colours hero.png -n 8\n'
        '  palette-swap colours hero.png --template > hero.json\n'
        '  palette-swap help apply\n'
        '\n'
        'Env vars (set in .env or environment):\n'
        f'  {PALETTES_VAR}  default palette file for apply\n'
        f'  {OUTDIR_VAR}    default output directory for apply\n'
    )
    parser = argparse.ArgumentParser(
        prog='palette-swap',
        description='Swap exact colours in images for the colours of a palette.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='command', help='Command to run')

    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_doc(name, cmd.help))
        cmd.add_arguments(p)

    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> int:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<10} {_short_doc(name, cmd.help)}')
        print('\nRun: palette-swap help <command> for full docs.')
        return 0

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        return 1

    doc = (_load_command_module(topic).__doc__ or '').strip()
    print(doc or f'(No module docs for {topic!r})')
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # OS env vars always win over .env
    env_path = load_env(env_file=args.env_file)
    if env_path:
        print(f'palette-swap: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == 'help':
        return _print_help(args.topic)

    return registry.get(args.command).execute(args)


if __name__ == '__main__':
    sys.exit(main())
