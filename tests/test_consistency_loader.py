from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from _testutil import ensure_repo_on_path, write_index, write_yaml


MAINTAINERS_YAML = """
- name: observability
  contact:
    email: observability@example.com
    slackChannel: "#team-observability"
  charts:
    - name: rancher-monitoring
      generateIssue: true
      githubLabels:
        - team/observability
        - area/monitoring
    - name: rancher-monitoring-crd
      generateIssue: false
- name: fleet
  contact:
    email: fleet@example.com
    url: https://github.com/rancher/fleet
    pager: fleet-oncall
  charts:
    - name: fleet
      githubLabels: [team/fleet]
      owners: [someone]
"""


class TestMaintainersLoader(unittest.TestCase):
    def test_load_registry(self) -> None:
        ensure_repo_on_path()

        from chartcheck.consistency.loader import load_maintainers
        from chartcheck.models import ChartDeclaration, ContactInfo

        with tempfile.TemporaryDirectory() as td:
            p = write_yaml(Path(td) / "maintainers.yaml", MAINTAINERS_YAML)
            maintainers = load_maintainers(p)

        self.assertEqual([m.name for m in maintainers], ["observability", "fleet"])
        self.assertEqual(
            maintainers[0].contact,
            ContactInfo(email="observability@example.com", slack_channel="#team-observability"),
        )
        self.assertEqual(
            maintainers[0].charts[0],
            ChartDeclaration(
                name="rancher-monitoring",
                generate_issue=True,
                github_labels=("team/observability", "area/monitoring"),
            ),
        )
        # Missing optional fields take zero values; unknown keys are ignored.
        self.assertEqual(maintainers[0].charts[1].github_labels, ())
        self.assertFalse(maintainers[1].charts[0].generate_issue)
        self.assertEqual(maintainers[1].contact.url, "https://github.com/rancher/fleet")

    def test_empty_document_is_empty_registry(self) -> None:
        ensure_repo_on_path()

        from chartcheck.consistency.loader import load_maintainers

        with tempfile.TemporaryDirectory() as td:
            p = write_yaml(Path(td) / "maintainers.yaml", "# nothing yet\n")
            self.assertEqual(load_maintainers(p), [])

    def test_null_charts_and_contact(self) -> None:
        ensure_repo_on_path()

        from chartcheck.consistency.loader import decode_maintainers

        maintainers = decode_maintainers([{"name": "solo", "contact": None, "charts": None}])
        self.assertEqual(maintainers[0].charts, ())
        self.assertEqual(maintainers[0].contact.email, "")

    def test_numeric_names_match_index_keys(self) -> None:
        ensure_repo_on_path()

        from chartcheck.consistency.loader import load_index, load_maintainers
        from chartcheck.consistency.validator import validate

        with tempfile.TemporaryDirectory() as td:
            m = write_yaml(
                Path(td) / "maintainers.yaml",
                """
                - name: 1984
                  charts:
                    - name: 2048
                      githubLabels: [2048, true, area/games]
                """,
            )
            i = write_index(Path(td) / "charts" / "index.yaml", ["2048"])
            maintainers = load_maintainers(m)
            index = load_index(i)

        self.assertEqual(maintainers[0].name, "1984")
        self.assertEqual(maintainers[0].charts[0].name, "2048")
        self.assertEqual(maintainers[0].charts[0].github_labels, ("2048", "true", "area/games"))
        self.assertEqual(index.entries, frozenset({"2048"}))
        self.assertEqual(validate(maintainers, index), [])

    def test_missing_file_raises_decode_error(self) -> None:
        ensure_repo_on_path()

        from chartcheck.consistency.loader import load_maintainers
        from chartcheck.errors import DecodeError

        with tempfile.TemporaryDirectory() as td:
            missing = Path(td) / "maintainers.yaml"
            with self.assertRaises(DecodeError) as ctx:
                load_maintainers(missing)
        self.assertEqual(ctx.exception.path, str(missing))

    def test_invalid_yaml_raises_decode_error(self) -> None:
        ensure_repo_on_path()

        from chartcheck.consistency.loader import load_maintainers
        from chartcheck.errors import DecodeError

        with tempfile.TemporaryDirectory() as td:
            p = write_yaml(Path(td) / "maintainers.yaml", "- name: [unclosed\n")
            with self.assertRaises(DecodeError) as ctx:
                load_maintainers(p)
        self.assertIn("invalid YAML", str(ctx.exception))

    def test_wrong_shape_raises_decode_error(self) -> None:
        ensure_repo_on_path()

        from chartcheck.consistency.loader import decode_maintainers
        from chartcheck.errors import DecodeError

        bad_documents = [
            {"name": "not-a-list"},
            [{"charts": []}],
            [{"name": "t", "charts": [{"name": "x", "generateIssue": "yes please"}]}],
            [{"name": "t", "charts": [{"name": "x", "githubLabels": "team/x"}]}],
            [{"name": "t", "charts": [{"name": ["x", "y"]}]}],
            [{"name": "t", "charts": [{"name": "x", "githubLabels": [{"team": "x"}]}]}],
        ]
        for doc in bad_documents:
            with self.subTest(doc=doc):
                with self.assertRaises(DecodeError):
                    decode_maintainers(doc, "maintainers.yaml")


class TestIndexLoader(unittest.TestCase):
    def test_load_index_keeps_names_only(self) -> None:
        ensure_repo_on_path()

        from chartcheck.consistency.loader import load_index

        with tempfile.TemporaryDirectory() as td:
            p = write_index(Path(td) / "charts" / "index.yaml", ["fleet", "rancher-monitoring"])
            index = load_index(p)

        self.assertEqual(index.entries, frozenset({"fleet", "rancher-monitoring"}))
        self.assertEqual(index.path, str(p))
        self.assertEqual(list(index), ["fleet", "rancher-monitoring"])
        self.assertIn("fleet", index)

    def test_empty_or_missing_entries(self) -> None:
        ensure_repo_on_path()

        from chartcheck.consistency.loader import decode_index

        for doc in (None, {}, {"apiVersion": "v1"}, {"entries": None}, {"entries": {}}):
            with self.subTest(doc=doc):
                self.assertEqual(len(decode_index(doc, "index.yaml")), 0)

    def test_non_string_keys_are_coerced(self) -> None:
        ensure_repo_on_path()

        from chartcheck.consistency.loader import decode_index

        index = decode_index({"entries": {2048: [], "app": []}}, "index.yaml")
        self.assertEqual(index.entries, frozenset({"2048", "app"}))

    def test_wrong_shape_raises_decode_error(self) -> None:
        ensure_repo_on_path()

        from chartcheck.consistency.loader import decode_index
        from chartcheck.errors import DecodeError

        for doc in (["fleet"], {"entries": ["fleet"]}, "entries"):
            with self.subTest(doc=doc):
                with self.assertRaises(DecodeError):
                    decode_index(doc, "index.yaml")


class TestAssetNames(unittest.TestCase):
    def test_lists_directories_without_logos(self) -> None:
        ensure_repo_on_path()

        from chartcheck.consistency.loader import list_asset_names

        with tempfile.TemporaryDirectory() as td:
            assets = Path(td) / "assets"
            for name in ("fleet", "Logos", "longhorn"):
                (assets / name).mkdir(parents=True)
            (assets / "README.md").write_text("assets\n", encoding="utf-8")

            self.assertEqual(list_asset_names(assets), ["fleet", "longhorn"])

    def test_missing_directory_raises_decode_error(self) -> None:
        ensure_repo_on_path()

        from chartcheck.consistency.loader import list_asset_names
        from chartcheck.errors import DecodeError

        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(DecodeError):
                list_asset_names(Path(td) / "assets")


if __name__ == "__main__":
    unittest.main()
