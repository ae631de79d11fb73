from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Iterator, Literal, Tuple

# Canonical finding classification used by the validator, the report renderer and the CLI.
# This is the single source of truth for allowed `kind` values.
FindingKind = Literal[
    "invalid_crd_issue_flag",
    "duplicate_label",
    "duplicate_chart_ownership",
    "empty_index",
    "missing_from_maintainers",
    "missing_from_index",
    "asset_missing_from_maintainers",
]

INVALID_CRD_ISSUE_FLAG = "invalid_crd_issue_flag"
DUPLICATE_LABEL = "duplicate_label"
DUPLICATE_CHART_OWNERSHIP = "duplicate_chart_ownership"
EMPTY_INDEX = "empty_index"
MISSING_FROM_MAINTAINERS = "missing_from_maintainers"
MISSING_FROM_INDEX = "missing_from_index"
ASSET_MISSING_FROM_MAINTAINERS = "asset_missing_from_maintainers"

FINDING_KIND_VALUES: Tuple[str, ...] = (
    INVALID_CRD_ISSUE_FLAG,
    DUPLICATE_LABEL,
    DUPLICATE_CHART_OWNERSHIP,
    EMPTY_INDEX,
    MISSING_FROM_MAINTAINERS,
    MISSING_FROM_INDEX,
    ASSET_MISSING_FROM_MAINTAINERS,
)

CRD_CHART_SUFFIX = "-crd"


def is_valid_finding_kind(value: Any) -> bool:
    return isinstance(value, str) and value in FINDING_KIND_VALUES


def is_crd_chart(name: str) -> bool:
    return name.endswith(CRD_CHART_SUFFIX)


@dataclass(frozen=True)
class ContactInfo:
    """How to reach a maintaining team. Informational only."""

    email: str = ""
    slack_channel: str = ""
    url: str = ""


@dataclass(frozen=True)
class ChartDeclaration:
    """A chart claimed by a maintainer record."""

    name: str
    generate_issue: bool = False
    github_labels: Tuple[str, ...] = ()


@dataclass(frozen=True)
class MaintainerRecord:
    """One team or individual and the charts they own, in registry order."""

    name: str
    contact: ContactInfo = field(default_factory=ContactInfo)
    charts: Tuple[ChartDeclaration, ...] = ()


@dataclass(frozen=True)
class ChartIndex:
    """Chart names published in a repository index.

    Index entry values (chart versions, digests, ...) are never inspected, so
    only the keys are kept.
    """

    path: str
    entries: FrozenSet[str] = frozenset()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.entries))

    def __contains__(self, chart_name: object) -> bool:
        return chart_name in self.entries


@dataclass(frozen=True)
class Finding:
    """A single reported inconsistency.

    `chart`, `label` and `path` are filled in only where the kind needs them.
    """

    kind: FindingKind
    chart: str = ""
    label: str = ""
    path: str = ""

    def __post_init__(self) -> None:
        if not is_valid_finding_kind(self.kind):
            raise ValueError(f"Unknown finding kind: {self.kind!r} (allowed: {list(FINDING_KIND_VALUES)})")

    @property
    def message(self) -> str:
        if self.kind == INVALID_CRD_ISSUE_FLAG:
            return (
                f"crd chart [{self.chart}] has field [generateIssue: true] which is incorrect "
                "as crd charts are not tracked in issues separately"
            )
        if self.kind == DUPLICATE_LABEL:
            return f"chart [{self.chart}] has duplicate label [{self.label}]"
        if self.kind == DUPLICATE_CHART_OWNERSHIP:
            return f"chart [{self.chart}] is a duplicate or wrongly set as maintained by more than one team"
        if self.kind == EMPTY_INDEX:
            return f"index file [{self.path}] has no chart entries"
        if self.kind == MISSING_FROM_MAINTAINERS:
            return f"chart [{self.chart}] is missing from maintainers file [{self.path}]"
        if self.kind == MISSING_FROM_INDEX:
            return f"chart [{self.chart}] does not exist in index file [{self.path}]"
        return f"chart asset [{self.chart}] in [{self.path}] is missing from maintainers file"

    def sort_key(self) -> Tuple[str, str, str, str]:
        return (self.kind, self.chart, self.label, self.path)
