from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Sequence, TextIO

from .config import CheckConfig, resolve_config
from .consistency.loader import list_asset_names, load_index, load_maintainers
from .consistency.report import TAG, exit_code, findings_to_json, render_lines
from .consistency.validator import check_assets, check_index, check_maintainers, validate
from .errors import ConfigError, DecodeError
from .models import ChartIndex, Finding, MaintainerRecord


def _info(msg: str, out: TextIO) -> None:
    print(f"[{TAG}][INFO] {msg}", file=out)


def _error(msg: str, err: TextIO) -> None:
    print(f"[{TAG}][ERROR] {msg}", file=err)


def _collect_findings(
    cfg: CheckConfig,
    maintainers: Optional[List[MaintainerRecord]],
    index: Optional[ChartIndex],
    asset_names: Optional[List[str]],
) -> List[Finding]:
    if maintainers is not None and index is not None:
        return validate(
            maintainers,
            index,
            maintainers_path=str(cfg.maintainers_path),
            index_path=str(cfg.index_path),
            asset_names=asset_names,
            assets_path=str(cfg.assets_dir or ""),
        )

    # One of the documents failed to decode: run only the rules whose inputs decoded.
    findings: List[Finding] = []
    if maintainers is not None:
        found, maintained = check_maintainers(maintainers)
        findings.extend(found)
        if asset_names is not None:
            findings.extend(check_assets(maintained, asset_names, str(cfg.assets_dir)))
    if index is not None:
        findings.extend(check_index(index, str(cfg.index_path)))
    return findings


def run_check(
    cfg: CheckConfig,
    as_json: bool = False,
    verbose: bool = False,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Load both documents, validate, print the report and return the exit status.

    A document that fails to decode is reported and the remaining inputs are
    still loaded and checked as far as possible.
    """
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    errors: List[str] = []

    maintainers: Optional[List[MaintainerRecord]] = None
    try:
        maintainers = load_maintainers(cfg.maintainers_path)
    except DecodeError as e:
        errors.append(str(e))

    index: Optional[ChartIndex] = None
    try:
        index = load_index(cfg.index_path)
    except DecodeError as e:
        errors.append(str(e))

    asset_names: Optional[List[str]] = None
    if cfg.assets_dir is not None:
        try:
            asset_names = list_asset_names(cfg.assets_dir)
        except DecodeError as e:
            errors.append(str(e))

    if verbose and not as_json:
        if maintainers is not None:
            n_charts = sum(len(m.charts) for m in maintainers)
            _info(f"loaded {len(maintainers)} maintainers declaring {n_charts} charts from {cfg.maintainers_path}", out)
        if index is not None:
            _info(f"loaded {len(index)} chart entries from {cfg.index_path}", out)
        if asset_names is not None:
            _info(f"found {len(asset_names)} chart asset directories in {cfg.assets_dir}", out)

    findings = _collect_findings(cfg, maintainers, index, asset_names)

    if as_json:
        print(findings_to_json(findings, errors), file=out)
    else:
        for e in errors:
            _error(e, err)
        for line in render_lines(findings):
            print(line, file=out)

    return exit_code(findings, errors)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="chartcheck",
        description="Cross-validate maintainers.yaml against a chart repository index.",
    )
    p.add_argument("--maintainers", default=None, help="Maintainers registry (default: ./maintainers.yaml)")
    p.add_argument("--index", default=None, help="Chart index (default: ./charts/index.yaml)")
    p.add_argument(
        "--assets-dir",
        default=None,
        help="Also require every chart asset directory (except logos) to be maintained, e.g. ./charts/assets",
    )
    p.add_argument("--json", action="store_true", help="Print findings as a JSON document")
    p.add_argument("--verbose", action="store_true", help="Print what was loaded")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        cfg = resolve_config(maintainers=args.maintainers, index=args.index, assets_dir=args.assets_dir)
    except ConfigError as e:
        _error(str(e), sys.stderr)
        return 2
    return run_check(cfg, as_json=bool(args.json), verbose=bool(args.verbose))


if __name__ == "__main__":
    raise SystemExit(main())
