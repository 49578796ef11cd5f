"""
Design (loader.py)
- Purpose: Turn the DB{n}_URL / DB{n}_ANON_KEY / DB{n}_NAME environment layout into Targets.
- Inputs: Optional .env path and an optional environment mapping (defaults to os.environ).
- Outputs: Ordered list[Target]; incomplete entries are reported through on_skip.
- Side effects: Reads the .env file if present.
- Errors: ConfigError only when the .env file exists but cannot be read.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from dotenv import dotenv_values

from .config import ANON_KEY_KEY, ENV_FILENAME, NAME_KEY, URL_KEY
from .errors import ConfigError, TargetSkipped
from .models import Target

logger = logging.getLogger(__name__)

SkipHandler = Callable[[TargetSkipped], None]


def default_env_path() -> Path:
    """The .env next to the current working directory, like the cron/CI checkout expects."""
    return Path.cwd() / ENV_FILENAME


def read_environment(env_file: Optional[Path] = None,
                     environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Purpose: Merge the .env file under the process environment (process env wins).
    Inputs: env_file (missing file is fine), environ (defaults to os.environ).
    Outputs: Plain dict of string values.
    Raises: ConfigError if env_file exists but is unreadable.
    """
    path = Path(env_file) if env_file is not None else default_env_path()
    merged: Dict[str, str] = {}
    if path.exists():
        try:
            # open it ourselves: dotenv_values(path) silently ignores paths it cannot open
            with path.open("r", encoding="utf-8") as handle:
                values = dotenv_values(stream=handle)
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigError(f"Cannot read {path}: {exc}") from exc
        # keys without "=" come back as None
        merged.update({k: v for k, v in values.items() if v is not None})
        logger.debug("loaded %d key(s) from %s", len(merged), path)
    else:
        logger.debug("%s not found; using process environment only", path)
    merged.update(os.environ if environ is None else environ)
    return merged


def parse_targets(env: Mapping[str, str],
                  on_skip: Optional[SkipHandler] = None) -> Tuple[List[Target], List[TargetSkipped]]:
    """
    Purpose: Contiguous 1-based scan of DB{n}_* keys.
    Rules:
        - index n is visited while the DB{n}_URL key is present (blank values included);
          the scan stops at the first absent DB{n}_URL, later indexes are never read.
        - blank URL or anon key -> TargetSkipped, not returned as a Target.
    Outputs: (targets in index order, skipped entries in index order)
    """
    targets: List[Target] = []
    skipped: List[TargetSkipped] = []
    index = 1
    while URL_KEY.format(index=index) in env:
        try:
            targets.append(Target.create(
                index,
                env.get(URL_KEY.format(index=index)),
                env.get(ANON_KEY_KEY.format(index=index)),
                env.get(NAME_KEY.format(index=index)),
            ))
        except TargetSkipped as skip:
            logger.warning("%s", skip)
            skipped.append(skip)
            if on_skip is not None:
                on_skip(skip)
        index += 1
    return targets, skipped


def load_targets(env_file: Optional[Path] = None,
                 environ: Optional[Mapping[str, str]] = None,
                 on_skip: Optional[SkipHandler] = None) -> List[Target]:
    targets, _ = parse_targets(read_environment(env_file, environ), on_skip)
    return targets
