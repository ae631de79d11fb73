from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .errors import ConfigError


DEFAULT_MAINTAINERS_REL_PATH = Path("maintainers.yaml")
DEFAULT_INDEX_REL_PATH = Path("charts/index.yaml")

ENV_MAINTAINERS_FILE = "CHARTCHECK_MAINTAINERS_FILE"
ENV_INDEX_FILE = "CHARTCHECK_INDEX_FILE"
ENV_ASSETS_DIR = "CHARTCHECK_ASSETS_DIR"


@dataclass(frozen=True)
class CheckConfig:
    maintainers_path: Path
    index_path: Path
    # None disables the assets rule.
    assets_dir: Optional[Path] = None


def _clean(value: Optional[str]) -> str:
    return str(value or "").strip()


def _resolve(raw: str, base_dir: Path) -> Path:
    p = Path(raw).expanduser()
    if not p.is_absolute():
        p = base_dir / p
    return p


def resolve_path(
    cli_value: Optional[str],
    env_name: str,
    base_dir: Path,
    environ: Mapping[str, str],
) -> Optional[Path]:
    """Resolve one input location from the CLI flag, then `env_name`.

    Returns None when neither is set.
    """
    if cli_value is not None:
        v = _clean(cli_value)
        if not v:
            raise ConfigError(f"empty path given on the command line (overrides {env_name})")
        return _resolve(v, base_dir)

    env_v = _clean(environ.get(env_name))
    if env_v:
        return _resolve(env_v, base_dir)
    return None


def resolve_config(
    maintainers: Optional[str] = None,
    index: Optional[str] = None,
    assets_dir: Optional[str] = None,
    base_dir: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> CheckConfig:
    """Build the run configuration from CLI values, environment and defaults.

    Precedence for each location:
      1) CLI flag
      2) environment variable
      3) default relative to base_dir (the assets dir has none)

    Environment overrides:
      - CHARTCHECK_MAINTAINERS_FILE
      - CHARTCHECK_INDEX_FILE
      - CHARTCHECK_ASSETS_DIR (enables the assets rule)

    Raises:
        ConfigError: if a CLI value is given but empty.
    """
    root = Path(base_dir) if base_dir is not None else Path.cwd()
    env = os.environ if environ is None else environ

    maintainers_path = resolve_path(maintainers, ENV_MAINTAINERS_FILE, root, env) or root / DEFAULT_MAINTAINERS_REL_PATH
    index_path = resolve_path(index, ENV_INDEX_FILE, root, env) or root / DEFAULT_INDEX_REL_PATH
    assets_path = resolve_path(assets_dir, ENV_ASSETS_DIR, root, env)

    return CheckConfig(maintainers_path=maintainers_path, index_path=index_path, assets_dir=assets_path)
