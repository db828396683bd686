"""Comparison configuration and YAML config loading.

Handles:
- Loading a comparison config from a YAML file.
- Merging CLI options over config file values.
- Validating the final configuration before any data is loaded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

log = logging.getLogger("perfcompare")

OUTPUT_FORMATS = ("table", "stats", "csv")

DEFAULT_MIN_ALLOWED_REQUEST_COUNT = 10


# ---------------------------------------------------------------------------
# CompareConfig
# ---------------------------------------------------------------------------


@dataclass
class CompareConfig:
    """Resolved configuration for one comparison."""

    left_job: Path | None = None  # run file or directory of run files
    right_job: Path | None = None
    # Data items with a lower "Count" label are discarded.
    min_allowed_request_count: int = DEFAULT_MIN_ALLOWED_REQUEST_COUNT
    output_format: str = "table"  # one of OUTPUT_FORMATS
    output: Path | None = None  # None = stdout / log


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@dataclass
class ValidationError:
    """A single configuration validation error."""

    field: str
    message: str
    severity: str = "error"  # "error" or "warning"


def validate_config(config: CompareConfig) -> list[ValidationError]:
    """Validate a comparison configuration.

    Returns a list of validation errors.  Empty list means valid.
    """
    errors: list[ValidationError] = []

    if config.left_job is None:
        errors.append(ValidationError(field="left_job", message="No left job given."))
    if config.right_job is None:
        errors.append(ValidationError(field="right_job", message="No right job given."))

    if config.min_allowed_request_count < 0:
        errors.append(
            ValidationError(
                field="min_allowed_request_count",
                message=(
                    "min_allowed_request_count must be >= 0, "
                    f"got {config.min_allowed_request_count}."
                ),
            )
        )

    if config.output_format not in OUTPUT_FORMATS:
        errors.append(
            ValidationError(
                field="output_format",
                message=(
                    f"Unknown output format '{config.output_format}'. "
                    f"Choose one of: {', '.join(OUTPUT_FORMATS)}."
                ),
            )
        )

    if config.output is not None and config.output_format == "table":
        errors.append(
            ValidationError(
                field="output",
                message="The table format is written to the log; output file ignored.",
                severity="warning",
            )
        )

    return errors


# ---------------------------------------------------------------------------
# YAML loading
# ---------------------------------------------------------------------------


def load_config(config_path: Path) -> dict[str, Any]:
    """Load a comparison config from a YAML file.

    Config format::

        left_job: results/baseline
        right_job: results/candidate
        min_allowed_request_count: 10
        output_format: stats

    Returns:
        The parsed YAML as a dict.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the YAML is invalid or not a mapping.
    """
    import yaml

    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text())
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a YAML mapping, got {type(data).__name__}")

    return data


_PATH_KEYS = ("left_job", "right_job", "output")
_KNOWN_KEYS = frozenset(_PATH_KEYS + ("min_allowed_request_count", "output_format"))


def config_from_mapping(
    data: dict[str, Any],
    *,
    cli_overrides: dict[str, Any] | None = None,
) -> CompareConfig:
    """Build a CompareConfig from a config mapping and CLI overrides.

    CLI values that are not None take precedence over the mapping.
    Unknown keys are ignored with a warning.

    Raises:
        ValueError: If ``min_allowed_request_count`` is not an integer.
    """
    merged: dict[str, Any] = {}
    for key, value in data.items():
        if key not in _KNOWN_KEYS:
            log.warning("Ignoring unknown config key: %s", key)
            continue
        merged[key] = value

    for key, value in (cli_overrides or {}).items():
        if value is not None:
            merged[key] = value

    config = CompareConfig()
    for key in _PATH_KEYS:
        if merged.get(key) is not None:
            setattr(config, key, Path(merged[key]))

    if "min_allowed_request_count" in merged:
        raw = merged["min_allowed_request_count"]
        if isinstance(raw, bool):
            raise ValueError("min_allowed_request_count must be an integer, got a boolean")
        try:
            config.min_allowed_request_count = int(raw)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"min_allowed_request_count must be an integer, got {raw!r}") from exc

    if "output_format" in merged:
        config.output_format = str(merged["output_format"])

    return config
