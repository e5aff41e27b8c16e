from __future__ import annotations

import concurrent.futures
import datetime
import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml

from . import models
from .adapters.introspection import CatalogIntrospector, Introspector, JavapIntrospector
from .exceptions import ExtractionError
from .extractor import JavadocExtractor
from .parameters import NullabilityPolicy

logger = logging.getLogger(__name__)


def build_introspector(config: dict[str, Any]) -> Introspector:
    kind = config.get("introspector", "catalog")
    if kind == "catalog":
        catalog = config.get("catalog")
        if not catalog:
            raise ValueError("The catalog introspector requires a 'catalog' path.")
        return CatalogIntrospector.from_file(catalog)
    if kind == "javap":
        classpath = config.get("classpath") or []
        if isinstance(classpath, str):
            classpath = classpath.split(os.pathsep)
        return JavapIntrospector(
            classpath, executable=config.get("javap_executable") or "javap"
        )
    raise ValueError(f"Unknown introspector: {kind}")


def build_extractor(config: dict[str, Any]) -> JavadocExtractor:
    return JavadocExtractor(
        build_introspector(config),
        policy=NullabilityPolicy.from_config(config),
        standard_namespace=config.get("standard_exception_namespace", "java.lang"),
        source_extension=config.get("source_extension", ".java"),
    )


class ExtractionService:
    """
    Extracts many classes from one source root, one worker per class.
    """

    def __init__(
        self,
        *,
        app_config: dict[str, Any],
        source_root: Path,
    ) -> None:
        self._app_config = app_config
        self._root = source_root
        self._concurrency = max(1, self._app_config.get("concurrency", 1))

    def run(self, class_names: list[str]) -> models.ExtractionReport:
        logger.info(f"Extracting {len(class_names)} class(es) from '{self._root}'")
        start_time = datetime.datetime.now(datetime.timezone.utc)

        # Fail fast on configuration problems before spawning workers
        build_introspector(self._app_config)

        results: dict[str, models.ClassRecord] = {}
        with concurrent.futures.ProcessPoolExecutor(
            max_workers=self._concurrency
        ) as executor:
            futures = {
                executor.submit(
                    ClassWorker.extract_class, name, self._app_config, self._root
                ): name
                for name in class_names
            }

            for future in concurrent.futures.as_completed(futures):
                name = futures[future]
                try:
                    results[name] = future.result()
                except Exception as e:
                    results[name] = models.ClassRecord(
                        qname=name, status="error", error=f"Process Error: {e}"
                    )

        classes = [results[name] for name in sorted(results)]
        stats = self._build_stats(classes)
        for rec in classes:
            if rec["status"] == "error":
                logger.warning(f"Failed {rec['qname']}: {rec['error']}")

        return self._build_report(start_time, stats, classes)

    def write_yaml(self, report: models.ExtractionReport, path: str | None) -> None:
        """
        Writes the report to a YAML file, or to stdout when ``path`` is None.
        """
        data = dict(report)
        if path is None:
            self._yaml_dump_no_alias(data, sys.stdout)
            return

        out_p = Path(path)
        out_p.parent.mkdir(parents=True, exist_ok=True)
        with open(out_p, "w", encoding="utf-8") as f:
            self._yaml_dump_no_alias(data, f)

        logger.info(f"Report written to: {out_p.resolve()}")

    # --- Private Helpers ---

    def _build_stats(self, classes: list[models.ClassRecord]) -> models.ExtractionStats:
        stats = models.ExtractionStats(
            classes_requested=len(classes),
            classes_ok=0,
            classes_failed=0,
            members=0,
            parameters=0,
            tags=0,
        )
        for rec in classes:
            if rec["status"] != "ok":
                stats["classes_failed"] += 1
                continue
            stats["classes_ok"] += 1
            stats["members"] += len(rec["members"])
            for m in rec["members"]:
                stats["parameters"] += len(m["parameters"])
                stats["tags"] += len(m["tags"])
        return stats

    def _build_report(
        self,
        start: datetime.datetime,
        stats: models.ExtractionStats,
        classes: list[models.ClassRecord],
    ) -> models.ExtractionReport:
        meta = models.Metadata(
            schema_version="1.0",
            generated_at=start.isoformat().replace("+00:00", "Z"),
            source_root=str(self._root),
            config_effective=dict(self._app_config),
        )
        return models.ExtractionReport(meta=meta, stats=stats, classes=classes)

    def _yaml_dump_no_alias(self, data: Any, stream: Any) -> None:
        class MultilineDumper(yaml.SafeDumper):
            def represent_scalar(self, tag, value, style=None):
                if isinstance(value, str) and "\n" in value:
                    style = "|"
                return super().represent_scalar(tag, value, style)

        class NoAliasDumper(MultilineDumper):
            def ignore_aliases(self, data):
                return True

        yaml.dump(
            data, stream, Dumper=NoAliasDumper, sort_keys=False, allow_unicode=True
        )


class ClassWorker:
    """
    Worker for extracting a single class in a child process.
    """

    @staticmethod
    def extract_class(
        class_name: str, config: dict[str, Any], root: Path
    ) -> models.ClassRecord:
        extractor = build_extractor(config)
        path = extractor.source_file(class_name, root)
        try:
            rel = path.relative_to(root).as_posix()
        except ValueError:
            rel = str(path)

        try:
            members = extractor.extract(class_name, root)
        except ExtractionError as e:
            return models.ClassRecord(
                qname=class_name, source_path=rel, status="error", error=str(e)
            )

        return models.ClassRecord(
            qname=class_name,
            source_path=rel,
            status="ok",
            members=[m.to_record() for m in members],
        )
