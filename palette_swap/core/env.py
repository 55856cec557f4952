"""Environment variable loading for palette-swap.

Load order (first wins):
  1. Existing OS environment variables, never overwritten.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Variables read by the CLI:
  PALETTE_SWAP_PALETTES  default palette file for `apply`
  PALETTE_SWAP_OUTDIR    default output directory for `apply`

The library functions never read the environment.
"""

import os
from pathlib import Path

PALETTES_VAR = 'PALETTE_SWAP_PALETTES'
OUTDIR_VAR = 'PALETTE_SWAP_OUTDIR'


def _find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return first .env found, stop at .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git is a dir in a normal clone, a file in a worktree
        if (current / '.git').exists():
            return None
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse a .env file into a dict. Handles KEY=value, KEY="value" and `export KEY=value`."""
    result: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, _, raw_value = line.partition('=')
        key = key.strip()
        if key.startswith('export '):
            key = key[len('export ') :].strip()
        value = raw_value.strip().strip('"').strip("'")
        if key:
            result[key] = value
    return result


def load_env(env_file: str | None = None) -> Path | None:
    """Load .env into os.environ for keys not already set.

    Returns the path that was loaded, or None if no .env was found/used.
    """
    if env_file:
        path = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = _find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in _parse_dotenv(path).items():
        if key not in os.environ:
            os.environ[key] = value

    return path


def env_path(name: str) -> Path | None:
    """Path from an environment variable, or None when unset or empty."""
    value = os.environ.get(name, '').strip()
    return Path(value).expanduser() if value else None
