#!/usr/bin/env python3

import os
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml

from .domain.config import Config
from .domain.validators import validate, UnsupportedKindError
from .exit_codes import ConfigError

logger = logging.getLogger("seidr")

DEFAULT_CONFIG_FILE = Path(".config") / "seidr" / "config.yaml"
LOG_FORMAT = "%(levelname)s: %(message)s"


@dataclass(frozen=True)
class RunSettings:
    """
    Per-run settings threaded into the runner, resolver and reporter.

    Attributes:
        quiet: Suppress per-step progress output
        emoji: Use emoji status markers
        force: Replace conflicting link targets
        unlink: Remove declared links instead of creating them
        backup: Move replaced link targets aside instead of deleting them
        parallel: Repositories processed concurrently (1 = sequential)
        timeout: Per-step timeout in seconds (None = no limit)
        strict: Exit non-zero when any step or link failed
    """
    quiet: bool = False
    emoji: bool = True
    force: bool = False
    unlink: bool = False
    backup: bool = False
    parallel: int = 1
    timeout: Optional[float] = None
    strict: bool = False


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    """
    Install a single stderr handler on the seidr logger.

    Level falls back to SEIDR_LOG, then WARNING.
    """
    if level is None:
        level = os.environ.get("SEIDR_LOG", "WARNING")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)


def get_config_path(explicit: Optional[Union[str, Path]] = None) -> Path:
    """Get the path to the configuration file.

    Checks in order:
    1. explicit path (``--config``)
    2. SEIDR_CONFIG environment variable
    3. ~/.config/seidr/config.yaml
    """
    if explicit:
        return Path(explicit).expanduser()
    if os.environ.get('SEIDR_CONFIG'):
        return Path(os.environ['SEIDR_CONFIG']).expanduser()
    return Path.home() / DEFAULT_CONFIG_FILE


def load_config(path: Optional[Union[str, Path]] = None) -> Config:
    """
    Load and validate the config file.

    Raises:
        ConfigError: if the file is unreadable, malformed, does not match
            the schema, or declares a repository kind seidr cannot handle
    """
    config_path = get_config_path(path)
    logger.debug(f"Loading config from {config_path}")

    try:
        with open(config_path, 'r') as f:
            document = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed YAML in {config_path}: {e}") from e

    try:
        config = Config.from_dict(document)
    except KeyError as e:
        raise ConfigError(f"Missing field {e} in {config_path}") from e
    except (ValueError, TypeError) as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e

    problems = []
    for cat_name, repo in config.iter_repos():
        try:
            for problem in validate(repo):
                problems.append(f"{cat_name}/{repo.name}: {problem}")
        except UnsupportedKindError as e:
            raise ConfigError(f"{cat_name}/{repo.name}: {e}") from e
    if problems:
        raise ConfigError(f"Invalid config {config_path}: " + "; ".join(problems))

    logger.debug(f"Loaded {len(config.categories)} categories")
    return config


def dump_config(config: Config) -> str:
    """Serialize the aggregate back to the declarative format."""
    return yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False)


def save_config(config: Config, path: Optional[Union[str, Path]] = None) -> Path:
    """Save the aggregate to ``path`` (default config location)."""
    config_path = get_config_path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, 'w') as f:
        f.write(dump_config(config))
    logger.info(f"Configuration saved to {config_path}")
    return config_path
