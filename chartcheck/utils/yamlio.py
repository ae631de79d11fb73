from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def read_yaml(path: Path) -> Any:
    """Parse a YAML file with `yaml.safe_load`.

    An empty document yields None; callers decide what an empty value means.
    """
    return yaml.safe_load(Path(path).read_text(encoding="utf-8"))
