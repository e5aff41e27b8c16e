import json
import os
from pathlib import Path
from typing import Any

import commentjson  # type: ignore

INTROSPECTORS = frozenset({"catalog", "javap"})


def normalize_extension(ext: str) -> str:
    """``java`` and ``.java`` both become ``.java``."""
    return ext if ext.startswith(".") else f".{ext}"


class ConfigurationManager:
    """
    Manages loading and merging of extractor configuration.
    """

    def __init__(self, *, base_path: Path | None = None) -> None:
        self._base_path = base_path or Path(__file__).parent

    def load_config(
        self, user_config_path: str | None, cli_overrides: dict[str, Any]
    ) -> dict[str, Any]:
        """
        Loads defaults, merges with user JSONC, and applies CLI overrides.
        """
        config = self._load_defaults()

        if user_config_path:
            self._merge_user_file(config, Path(user_config_path))

        # CLI overrides win, unset flags are None
        config.update({k: v for k, v in cli_overrides.items() if v is not None})

        if not config.get("concurrency"):
            config["concurrency"] = os.cpu_count() or 1

        self._normalize(config)
        return config

    def _normalize(self, config: dict[str, Any]) -> None:
        introspector = config.get("introspector", "catalog")
        if introspector not in INTROSPECTORS:
            raise ValueError(
                f"Unknown introspector '{introspector}', expected one of {sorted(INTROSPECTORS)}"
            )

        for key in ("not_null_annotations", "nullable_annotations", "exclude"):
            value = config.get(key) or []
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ValueError(f"Config key '{key}' must be a list of strings.")
            config[key] = value

        classpath = config.get("classpath") or []
        if isinstance(classpath, str):
            classpath = [p for p in classpath.split(os.pathsep) if p]
        config["classpath"] = classpath

        config["source_extension"] = normalize_extension(
            config.get("source_extension") or ".java"
        )

    def _load_defaults(self) -> dict[str, Any]:
        defaults_path = self._base_path / "defaults.json"
        if not defaults_path.exists():
            return {}

        with open(defaults_path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _merge_user_file(self, config: dict[str, Any], path: Path) -> None:
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                user_conf = commentjson.load(f)
        except Exception as e:
            raise ValueError(f"Failed to parse config file {path}: {e}") from e
        if not isinstance(user_conf, dict):
            raise ValueError(f"Config file {path} must contain a JSON object.")
        config.update(user_conf)
