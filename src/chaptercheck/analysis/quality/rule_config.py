"""Rule thresholds for the conformance checks.

A RuleSet is built once at startup (defaults, then an optional YAML
rule file, then CLI flags) and shared read-only by every worker.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from chaptercheck.constants import (
    DEFAULT_MIN_COLLAPSIBLE,
    DEFAULT_MIN_DIAGRAMS,
    DEFAULT_MIN_MISTAKES,
    DEFAULT_MIN_RETRIEVAL,
)
from chaptercheck.errors import ConfigurationError

logger = logging.getLogger(__name__)


class RuleSet(BaseModel):
    """Named thresholds. Immutable for the whole run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    min_retrieval_practice: int = Field(
        default=DEFAULT_MIN_RETRIEVAL, ge=0
    )
    min_diagrams: int = Field(default=DEFAULT_MIN_DIAGRAMS, ge=0)
    min_mistake_patterns: int = Field(
        default=DEFAULT_MIN_MISTAKES, ge=0
    )
    min_collapsible_sections: int = Field(
        default=DEFAULT_MIN_COLLAPSIBLE, ge=0
    )
    require_war_story: bool = True
    strict: bool = False

    def with_overrides(self, **values: Any) -> RuleSet:
        """Return a copy with every non-None value applied.

        Raises ``ConfigurationError`` when an override is invalid.
        """
        updates = {k: v for k, v in values.items() if v is not None}
        if not updates:
            return self
        return build_rule_set({**self.model_dump(), **updates})


def build_rule_set(values: dict[str, Any]) -> RuleSet:
    """Validate raw values into a RuleSet."""
    try:
        return RuleSet.model_validate(values)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        msg = f"Invalid rule configuration: {problems}"
        raise ConfigurationError(msg) from exc


def load_rule_file(path: str | Path) -> RuleSet:
    """Load a RuleSet from a YAML mapping of field names to values.

    Missing keys keep their defaults. Raises ``ConfigurationError``
    for unreadable files, malformed YAML, non-mapping documents, and
    unknown or invalid keys.
    """
    rule_path = Path(path)
    try:
        raw: Any = yaml.safe_load(rule_path.read_text(encoding="utf-8"))
    except OSError as exc:
        msg = f"Cannot read rule file {rule_path}: {exc}"
        raise ConfigurationError(msg) from exc
    except UnicodeDecodeError as exc:
        msg = f"Rule file {rule_path} is not valid UTF-8: {exc}"
        raise ConfigurationError(msg) from exc
    except yaml.YAMLError as exc:
        msg = f"Malformed rule file {rule_path}: {exc}"
        raise ConfigurationError(msg) from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        msg = (
            f"Rule file {rule_path} must contain a mapping, "
            f"got {type(raw).__name__}"
        )
        raise ConfigurationError(msg)

    rules = build_rule_set(raw)
    logger.debug(
        "event=rule_file_loaded path=%s keys=%s",
        rule_path,
        ",".join(sorted(raw)),
    )
    return rules
