from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set, Tuple

from ..models import (
    ASSET_MISSING_FROM_MAINTAINERS,
    DUPLICATE_CHART_OWNERSHIP,
    DUPLICATE_LABEL,
    EMPTY_INDEX,
    INVALID_CRD_ISSUE_FLAG,
    MISSING_FROM_INDEX,
    MISSING_FROM_MAINTAINERS,
    ChartDeclaration,
    Finding,
    MaintainerRecord,
    is_crd_chart,
)


def _check_labels(chart: ChartDeclaration) -> List[Finding]:
    findings: List[Finding] = []
    seen: Set[str] = set()
    for label in chart.github_labels:
        if label in seen:
            findings.append(Finding(kind=DUPLICATE_LABEL, chart=chart.name, label=label))
        seen.add(label)
    return findings


def check_maintainers(maintainers: Sequence[MaintainerRecord]) -> Tuple[List[Finding], Set[str]]:
    """Run the per-chart rules over the registry in input order.

    Returns the findings and the set of every chart name declared by any
    maintainer.

    - CRD charts (`-crd` suffix) must not set generateIssue; they are not
      tracked in issues separately.
    - A label may appear only once per chart; every repeat is reported.
    - A chart may be owned by only one maintainer record; each duplicated name
      is reported once, however many times it recurs.
    """
    findings: List[Finding] = []
    maintained: Set[str] = set()
    duplicates: Set[str] = set()

    for m in maintainers:
        for chart in m.charts:
            if is_crd_chart(chart.name) and chart.generate_issue:
                findings.append(Finding(kind=INVALID_CRD_ISSUE_FLAG, chart=chart.name))

            findings.extend(_check_labels(chart))

            if chart.name in maintained and chart.name not in duplicates:
                findings.append(Finding(kind=DUPLICATE_CHART_OWNERSHIP, chart=chart.name))
                duplicates.add(chart.name)
            maintained.add(chart.name)

    return findings, maintained


def check_index(index_entries: Iterable[str], index_path: str = "") -> List[Finding]:
    if not set(index_entries):
        return [Finding(kind=EMPTY_INDEX, path=index_path)]
    return []


def check_membership(
    maintained: Iterable[str],
    index_entries: Iterable[str],
    maintainers_path: str = "",
    index_path: str = "",
) -> List[Finding]:
    """Compare the declared chart set with the published one, both ways.

    Charts published but unowned come first, then owned charts that are not
    published; each group is sorted by chart name.
    """
    owned = set(maintained)
    published = set(index_entries)

    findings: List[Finding] = []
    for name in sorted(published - owned):
        findings.append(Finding(kind=MISSING_FROM_MAINTAINERS, chart=name, path=maintainers_path))
    for name in sorted(owned - published):
        findings.append(Finding(kind=MISSING_FROM_INDEX, chart=name, path=index_path))
    return findings


def check_assets(maintained: Iterable[str], asset_names: Iterable[str], assets_path: str = "") -> List[Finding]:
    owned = set(maintained)
    return [
        Finding(kind=ASSET_MISSING_FROM_MAINTAINERS, chart=name, path=assets_path)
        for name in sorted(set(asset_names) - owned)
    ]


def validate(
    maintainers: Sequence[MaintainerRecord],
    index_entries: Iterable[str],
    *,
    maintainers_path: str = "",
    index_path: Optional[str] = None,
    asset_names: Optional[Iterable[str]] = None,
    assets_path: str = "",
) -> List[Finding]:
    """Cross-validate a maintainers registry against a chart index.

    `index_entries` may be a ChartIndex, a set of names, or the raw `entries`
    mapping (only its keys are used). Neither input is modified, and content
    problems are returned as findings rather than raised.

    When `index_path` is omitted, a ChartIndex supplies its own path.
    The assets rule runs only when `asset_names` is given.
    """
    if index_path is None:
        index_path = getattr(index_entries, "path", "")
    entries = set(index_entries)

    findings, maintained = check_maintainers(maintainers)
    findings.extend(check_index(entries, index_path))
    findings.extend(check_membership(maintained, entries, maintainers_path, index_path))
    if asset_names is not None:
        findings.extend(check_assets(maintained, asset_names, assets_path))
    return findings
