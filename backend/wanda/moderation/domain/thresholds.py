"""Configuration helpers for consensus and quarantine thresholds."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

logger = logging.getLogger(__name__)

PUBLICATION_THRESHOLD = 5
SUSPICION_THRESHOLD = 3
AUTO_QUARANTINE_THRESHOLD = 5


@dataclass(frozen=True)
class ModerationThresholds:
    """Counts that trigger automatic post status transitions."""

    publication_threshold: int = PUBLICATION_THRESHOLD
    suspicion_threshold: int = SUSPICION_THRESHOLD
    auto_quarantine_threshold: int = AUTO_QUARANTINE_THRESHOLD

    def __post_init__(self) -> None:
        for name in ("publication_threshold", "suspicion_threshold", "auto_quarantine_threshold"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")

    @staticmethod
    def default() -> "ModerationThresholds":
        return ModerationThresholds()

    def should_quarantine(self, report_count: int) -> bool:
        return report_count >= self.auto_quarantine_threshold

    @staticmethod
    def from_mapping(config: Mapping[str, Any]) -> "ModerationThresholds":
        base = ModerationThresholds.default()
        consensus = config.get("consensus", {})
        reports = config.get("reports", {})
        if not isinstance(consensus, Mapping):
            consensus = {}
        if not isinstance(reports, Mapping):
            reports = {}
        return ModerationThresholds(
            publication_threshold=int(consensus.get("publish_after_confirms", base.publication_threshold)),
            suspicion_threshold=int(consensus.get("suspect_after_refutes", base.suspicion_threshold)),
            auto_quarantine_threshold=int(reports.get("auto_quarantine_after", base.auto_quarantine_threshold)),
        )


def load_thresholds(path: str | Path) -> ModerationThresholds:
    """Load thresholds from a YAML file, falling back to defaults when it is missing."""

    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning("moderation thresholds file missing at %s; using defaults", path)
        return ModerationThresholds.default()
    data = yaml.safe_load(text)
    if data is None:
        return ModerationThresholds.default()
    if not isinstance(data, Mapping):
        raise ValueError("moderation config must be a mapping")
    return ModerationThresholds.from_mapping(data)
