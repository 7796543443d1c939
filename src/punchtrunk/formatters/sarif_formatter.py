"""SARIF 2.1.0 formatter for hotspot reports."""

import json
from dataclasses import dataclass
from typing import Any, Sequence

from ..hotspots.models import Hotspot
from ..hotspots.ranking import to_slash
from .base import BaseFormatter

SARIF_VERSION = "2.1.0"
SARIF_SCHEMA = "https://schemastore.azurewebsites.net/schemas/json/sarif-2.1.0-rtm.5.json"
TOOL_NAME = "PunchTrunk"
TOOL_INFORMATION_URI = "https://docs.trunk.io/"
RULE_ID = "hotspot"
LEVEL = "note"


def hotspot_message(hotspot: Hotspot) -> str:
    return (
        f"Hotspot candidate: churn={hotspot.churn}, "
        f"complexity={hotspot.complexity:.2f}, score={hotspot.score:.2f}"
    )


def hotspot_result(hotspot: Hotspot) -> dict[str, Any]:
    return {
        "ruleId": RULE_ID,
        "level": LEVEL,
        "message": {"text": hotspot_message(hotspot)},
        "locations": [
            {"physicalLocation": {"artifactLocation": {"uri": to_slash(hotspot.file)}}}
        ],
    }


@dataclass(frozen=True)
class SarifReport:
    """Immutable report: one result per hotspot, in ranked order."""

    results: tuple[dict[str, Any], ...]

    @classmethod
    def from_hotspots(cls, hotspots: Sequence[Hotspot]) -> "SarifReport":
        return cls(results=tuple(hotspot_result(h) for h in hotspots))

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": SARIF_VERSION,
            "$schema": SARIF_SCHEMA,
            "runs": [
                {
                    "tool": {
                        "driver": {
                            "name": TOOL_NAME,
                            "informationUri": TOOL_INFORMATION_URI,
                        }
                    },
                    "results": list(self.results),
                }
            ],
        }


class SarifFormatter(BaseFormatter):
    """Render hotspots as a SARIF log."""

    def format(self, hotspots: Sequence[Hotspot]) -> str:
        report = SarifReport.from_hotspots(hotspots)
        return json.dumps(report.to_dict(), indent=2, ensure_ascii=False) + "\n"
