from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

from ..models import Finding

TAG = "CHART_CHECK"

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_DECODE_ERROR = 2


def render_finding(finding: Finding) -> str:
    return f"[{TAG}][FAIL] {finding.kind}: {finding.message}"


def render_summary(findings: Sequence[Finding]) -> str:
    if not findings:
        return f"[{TAG}][OK] no issues found"
    return f"[{TAG}][FAIL] {len(findings)} issue(s) found"


def render_lines(findings: Sequence[Finding]) -> List[str]:
    """One line per finding in discovery order, then the summary line."""
    lines = [render_finding(f) for f in findings]
    lines.append(render_summary(findings))
    return lines


def finding_to_dict(finding: Finding) -> Dict[str, Any]:
    return {
        "kind": finding.kind,
        "chart": finding.chart,
        "label": finding.label,
        "path": finding.path,
        "message": finding.message,
    }


def findings_to_json(findings: Sequence[Finding], errors: Sequence[str] = ()) -> str:
    doc = {
        "ok": not findings and not errors,
        "count": len(findings),
        "findings": [finding_to_dict(f) for f in findings],
        "errors": list(errors),
    }
    return json.dumps(doc, indent=2, sort_keys=True)


def exit_code(findings: Sequence[Finding], errors: Sequence[str] = ()) -> int:
    """0 when clean, 1 when findings were reported, 2 when an input failed to decode."""
    if errors:
        return EXIT_DECODE_ERROR
    if findings:
        return EXIT_FINDINGS
    return EXIT_OK
