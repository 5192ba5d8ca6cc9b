from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, TextIO

from ..config import Settings
from ..core.models import LabelSet
from ..pipeline import MatchPipeline

logger = logging.getLogger(__name__)


def read_labels(source: Path, stdin: TextIO | None = None) -> LabelSet:
    if str(source) == "-":
        payload: Any = json.load(stdin or sys.stdin)
    else:
        with source.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)
    return LabelSet.from_payload(payload)


def run(
    pipeline: MatchPipeline,
    settings: Settings,
    labels: LabelSet,
    *,
    explain: bool = False,
) -> dict[str, Any]:
    if not explain:
        return pipeline.match(labels).to_record()
    trace = pipeline.explain(labels)
    record = trace.to_record()
    record["landmarkSignal"] = pipeline.classifier.has_landmark_signal(
        labels, settings.classifier.image_signal_confidence
    )
    if not record["landmarkSignal"]:
        logger.info("No landmark-related label reached %.0f%% confidence", settings.classifier.image_signal_confidence)
    return record


def render(record: dict[str, Any]) -> str:
    return json.dumps(record, indent=2, ensure_ascii=False)
