"""
extract_cli.py

Extracts the documented constructors and methods of Java classes into a YAML
report. Each class is reconciled from two views: an introspection provider
(exact parameter types and modifiers) and its source file (parameter names,
nullability annotations and Javadoc tags).

This tool is read-only and does not compile or execute any of the target code.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from docspec.shared.console import ConsoleManager
from docspec.shared.source_scan import SourceScanner

from .config import ConfigurationManager
from .core import ExtractionService


class CliInterface:
    """
    Handles command-line arguments and application bootstrapping.
    """

    def __init__(self) -> None:
        self._parser = self._build_parser()

    def run(self, argv: list[str] | None = None) -> None:
        args = self._parser.parse_args(argv)

        level = args.log_level or logging.INFO
        ConsoleManager.configure(level)
        console = ConsoleManager(level=level, no_color=args.no_color)

        try:
            config = self._build_config(args)
            root = Path(args.source_root).resolve(strict=True)

            class_names = list(args.class_names or [])
            if args.discover:
                scanner = SourceScanner(
                    extension=config.get("source_extension", ".java"),
                    exclude=config.get("exclude"),
                )
                class_names += scanner.scan(root)
            if not class_names:
                raise ValueError("No classes to extract: pass --class or --discover.")

            service = ExtractionService(app_config=config, source_root=root)
            report = service.run(sorted(set(class_names)))

            output_path = (
                None if args.stdout else (args.output_path or "executable_members.yaml")
            )
            service.write_yaml(report, output_path)

            if args.print_summary:
                console.print_summary(dict(report["stats"]))

            for rec in report["classes"]:
                if rec["status"] == "ok":
                    console.debug(f"OK:     {rec['qname']} ({len(rec['members'])} member(s))")
                else:
                    console.warning(f"FAILED: {rec['qname']} ({rec['error']})")

            failed = report["stats"]["classes_failed"]
            if failed:
                console.error(f"Extraction finished with {failed} failed class(es).")
            else:
                console.info(
                    f"Extraction complete. {report['stats']['members']} member(s) "
                    f"from {report['stats']['classes_ok']} class(es)."
                )
            sys.exit(2 if failed > 0 else 0)

        except (FileNotFoundError, ValueError) as e:
            console.critical(f"Configuration or Usage Error: {e}")
            sys.exit(1)

    def _build_config(self, args: argparse.Namespace) -> dict[str, Any]:
        overrides = {
            "introspector": args.introspector,
            "catalog": args.catalog,
            "classpath": args.classpath,
            "javap_executable": args.javap,
            "source_extension": args.source_extension,
            "concurrency": args.concurrency,
            "exclude": args.excludes,
        }

        mgr = ConfigurationManager()
        return mgr.load_config(args.config, overrides)

    def _build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            description="Javadoc executable-member extractor.",
            formatter_class=argparse.RawTextHelpFormatter,
        )

        # Core
        parser.add_argument(
            "--source-root", required=True, help="Root folder of the Java sources."
        )
        parser.add_argument(
            "-c", "--class", action="append", dest="class_names",
            help="Qualified class name to extract. Repeatable.",
        )
        parser.add_argument(
            "--discover", action="store_true",
            help="Extract every top-level class found under --source-root.",
        )
        parser.add_argument("--config", help="Path to JSON/JSONC config.")
        parser.add_argument("-e", "--exclude", action="append", dest="excludes")
        parser.add_argument("--source-extension")

        # Introspection
        parser.add_argument("--introspector", choices=["catalog", "javap"])
        parser.add_argument("--catalog", help="YAML reflection catalog.")
        parser.add_argument(
            "--classpath", help="Classpath for javap, entries separated by os.pathsep."
        )
        parser.add_argument("--javap", help="javap executable.")

        # Output
        out_g = parser.add_mutually_exclusive_group()
        out_g.add_argument("-o", "--output", dest="output_path")
        out_g.add_argument("--stdout", action="store_true")

        parser.add_argument("-j", "--concurrency", type=int)

        # Log
        log_g = parser.add_mutually_exclusive_group()
        log_g.add_argument(
            "-v",
            "--verbose",
            action="store_const",
            dest="log_level",
            const=logging.DEBUG,
        )
        log_g.add_argument(
            "-q", "--quiet", action="store_const", dest="log_level", const=logging.ERROR
        )
        parser.add_argument("--no-color", action="store_true")
        parser.add_argument("--print-summary", action="store_true")

        return parser


def main() -> None:
    CliInterface().run()


if __name__ == "__main__":
    main()
