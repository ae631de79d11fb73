from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema
import yaml

from ..errors import DecodeError
from ..models import ChartDeclaration, ChartIndex, ContactInfo, MaintainerRecord
from ..utils.yamlio import read_yaml


# Only the fields the validator consumes are constrained. Unknown keys are
# accepted everywhere so newer registry documents still decode.
def _nullable(schema: Dict[str, Any]) -> Dict[str, Any]:
    return {"anyOf": [schema, {"type": "null"}]}


def _scalar_schema() -> Dict[str, Any]:
    # YAML reads `name: 2048` as a number; such scalars are still names and
    # are kept as their string form, like index keys.
    return {"type": ["string", "number", "boolean"]}


def _contact_schema() -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "email": _nullable({"type": "string"}),
            "slackChannel": _nullable({"type": "string"}),
            "url": _nullable({"type": "string"}),
        },
    }


def _chart_schema() -> Dict[str, Any]:
    return {
        "type": "object",
        "required": ["name"],
        "properties": {
            "name": _scalar_schema(),
            "generateIssue": _nullable({"type": "boolean"}),
            "githubLabels": _nullable({"type": "array", "items": _scalar_schema()}),
        },
    }


def maintainers_schema() -> Dict[str, Any]:
    return {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "array",
        "items": {
            "type": "object",
            "required": ["name"],
            "properties": {
                "name": _scalar_schema(),
                "contact": _nullable(_contact_schema()),
                "charts": _nullable({"type": "array", "items": _chart_schema()}),
            },
        },
    }


def index_schema() -> Dict[str, Any]:
    return {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "object",
        "properties": {
            "entries": _nullable({"type": "object"}),
        },
    }


def _read_document(path: Path) -> Any:
    try:
        return read_yaml(path)
    except OSError as e:
        raise DecodeError(str(path), f"unreadable file: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise DecodeError(str(path), f"not UTF-8 text: {e}") from e
    except yaml.YAMLError as e:
        raise DecodeError(str(path), f"invalid YAML: {e}") from e


def _check_shape(data: Any, schema: Dict[str, Any], path: str) -> None:
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        where = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise DecodeError(path, f"unexpected shape at {where}: {e.message}") from e


def _decode_contact(raw: Optional[Dict[str, Any]]) -> ContactInfo:
    raw = raw or {}
    return ContactInfo(
        email=raw.get("email") or "",
        slack_channel=raw.get("slackChannel") or "",
        url=raw.get("url") or "",
    )


def _as_name(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _decode_chart(raw: Dict[str, Any]) -> ChartDeclaration:
    return ChartDeclaration(
        name=_as_name(raw["name"]),
        generate_issue=bool(raw.get("generateIssue") or False),
        github_labels=tuple(_as_name(label) for label in (raw.get("githubLabels") or ())),
    )


def decode_maintainers(data: Any, path: str = "<maintainers>") -> List[MaintainerRecord]:
    """Build maintainer records from an already-parsed registry document.

    An empty document (None) decodes to an empty registry.
    """
    if data is None:
        return []
    _check_shape(data, maintainers_schema(), path)

    out: List[MaintainerRecord] = []
    for m in data:
        out.append(
            MaintainerRecord(
                name=_as_name(m["name"]),
                contact=_decode_contact(m.get("contact")),
                charts=tuple(_decode_chart(c) for c in (m.get("charts") or ())),
            )
        )
    return out


def decode_index(data: Any, path: str = "<index>") -> ChartIndex:
    """Keep only the chart names of an already-parsed index document."""
    if data is None:
        return ChartIndex(path=path)
    _check_shape(data, index_schema(), path)
    entries = data.get("entries") or {}
    return ChartIndex(path=path, entries=frozenset(_as_name(k) for k in entries.keys()))


def load_maintainers(path: Path) -> List[MaintainerRecord]:
    """Load the maintainers registry.

    Raises:
        DecodeError: if the file cannot be read, is not YAML, or does not have
        the registry shape.
    """
    p = Path(path)
    return decode_maintainers(_read_document(p), str(p))


def load_index(path: Path) -> ChartIndex:
    """Load the chart repository index.

    Raises:
        DecodeError: if the file cannot be read, is not YAML, or does not have
        the index shape.
    """
    p = Path(path)
    return decode_index(_read_document(p), str(p))


def list_asset_names(assets_dir: Path) -> List[str]:
    """Return the chart asset directory names under assets_dir, sorted.

    The shared `logos` directory is skipped regardless of case.
    """
    d = Path(assets_dir)
    if not d.is_dir():
        raise DecodeError(str(d), "assets directory not found")
    try:
        children = list(d.iterdir())
    except OSError as e:
        raise DecodeError(str(d), f"unreadable directory: {e.strerror or e}") from e
    names = [c.name for c in children if c.is_dir() and c.name.lower() != "logos"]
    return sorted(names)
