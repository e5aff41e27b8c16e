from __future__ import annotations

import os
import textwrap
from pathlib import Path

import pytest
import yaml

from docspec.extract.config import ConfigurationManager
from docspec.extract.core import ExtractionService, build_introspector
from docspec.extract.extract_cli import CliInterface
from docspec.shared.source_scan import SourceScanner

BOX_SOURCE = """
    package p;

    public class Box {
        /**
         * Stores a value.
         *
         * @param value the value
         * @throws IllegalArgumentException if value is rejected
         */
        public void set(@Nullable Object value) {}
    }
"""

BROKEN_SOURCE = """
    package p;

    public class Broken {
        /** @throws NoSuchThing always */
        public void run() {}
    }
"""

CATALOG = """
    classes:
      p.Box:
        - name: set
          parameters: [java.lang.Object]
      p.Broken:
        - name: run
    types:
      - java.lang.IllegalArgumentException
"""


@pytest.fixture
def project(tmp_path: Path, write_java) -> tuple[Path, Path]:
    write_java("p.Box", BOX_SOURCE)
    root = write_java("p.Broken", BROKEN_SOURCE)
    (root / "p" / "package-info.java").write_text("package p;\n")
    catalog = tmp_path / "catalog.yaml"
    catalog.write_text(textwrap.dedent(CATALOG))
    return root, catalog


def test_config_layers(tmp_path: Path) -> None:
    user = tmp_path / "docspec.jsonc"
    user.write_text(
        textwrap.dedent(
            """
            {
              // local annotations
              "nullable_annotations": ["MaybeNull"],
              "concurrency": 3
            }
            """
        )
    )
    config = ConfigurationManager().load_config(
        str(user), {"concurrency": None, "introspector": "javap"}
    )
    assert config["nullable_annotations"] == ["MaybeNull"]
    assert config["not_null_annotations"] == ["NotNull", "NonNull", "Nonnull"]
    assert config["concurrency"] == 3
    assert config["introspector"] == "javap"


def test_config_missing_user_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        ConfigurationManager().load_config(str(tmp_path / "missing.jsonc"), {})


@pytest.mark.parametrize(
    "overrides",
    [
        {"introspector": "reflection"},
        {"not_null_annotations": "NonNull"},
        {"exclude": ["build/", 3]},
    ],
)
def test_config_rejects_bad_values(overrides) -> None:
    with pytest.raises(ValueError):
        ConfigurationManager().load_config(None, overrides)


def test_config_normalizes_extension_and_classpath() -> None:
    config = ConfigurationManager().load_config(
        None,
        {"source_extension": "java", "classpath": os.pathsep.join(["classes", "lib/a.jar"])},
    )
    assert config["source_extension"] == ".java"
    assert config["classpath"] == ["classes", "lib/a.jar"]


def test_build_introspector_requires_catalog() -> None:
    with pytest.raises(ValueError):
        build_introspector({"introspector": "catalog"})
    with pytest.raises(ValueError):
        build_introspector({"introspector": "asm"})


def test_scanner_discovers_classes(project) -> None:
    root, _ = project
    assert SourceScanner().scan(root) == ["p.Box", "p.Broken"]
    assert SourceScanner(exclude=["**/Broken.java"]).scan(root) == ["p.Box"]


def test_service_reports_per_class_status(project, tmp_path: Path) -> None:
    root, catalog = project
    config = ConfigurationManager().load_config(
        None, {"catalog": str(catalog), "concurrency": 2}
    )
    service = ExtractionService(app_config=config, source_root=root)

    report = service.run(["p.Broken", "p.Box"])

    assert [c["qname"] for c in report["classes"]] == ["p.Box", "p.Broken"]
    box, broken = report["classes"]
    assert box["status"] == "ok"
    assert box["source_path"] == "p/Box.java"
    (member,) = box["members"]
    assert member["signature"] == "set(java.lang.Object)"
    assert member["parameters"] == [
        {"name": "value", "type": "java.lang.Object", "nullability": "nullable"}
    ]
    assert member["tags"] == [
        {"kind": "param", "comment": "the value", "parameter": "value"},
        {
            "kind": "throws",
            "comment": "if value is rejected",
            "exception": "java.lang.IllegalArgumentException",
        },
    ]
    assert broken["status"] == "error"
    assert "NoSuchThing" in broken["error"]
    assert report["stats"]["classes_ok"] == 1
    assert report["stats"]["classes_failed"] == 1
    assert report["stats"]["tags"] == 2

    out = tmp_path / "out" / "report.yaml"
    service.write_yaml(report, str(out))
    loaded = yaml.safe_load(out.read_text())
    assert loaded["classes"][0]["members"][0]["name"] == "set"


def test_cli_exit_codes(project, tmp_path: Path) -> None:
    root, catalog = project
    out = tmp_path / "members.yaml"
    argv = ["--source-root", str(root), "--catalog", str(catalog), "-o", str(out), "-j", "1"]

    with pytest.raises(SystemExit) as exc:
        CliInterface().run(argv + ["--class", "p.Box", "--no-color"])
    assert exc.value.code == 0
    assert yaml.safe_load(out.read_text())["stats"]["members"] == 1

    with pytest.raises(SystemExit) as exc:
        CliInterface().run(argv + ["--discover", "-q"])
    assert exc.value.code == 2

    with pytest.raises(SystemExit) as exc:
        CliInterface().run(["--source-root", str(root), "--catalog", str(catalog)])
    assert exc.value.code == 1
