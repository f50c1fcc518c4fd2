"""Two-tier category lookup used to colour map markers."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Mapping

from concessions.common.models import DepositRecord


@dataclass(frozen=True)
class Classifier:
    primary: Mapping[str, str] = field(default_factory=dict)
    secondary: Mapping[str, str] = field(default_factory=dict)
    default: str = "default"

    def classify(self, record: DepositRecord) -> str:
        category = self.primary.get(record.resource_type)
        if category:
            return category
        category = self.secondary.get(record.status)
        if category:
            return category
        return self.default


def build_classifier(palette: dict) -> Classifier:
    return Classifier(
        primary=dict(palette["resource_type_colors"]),
        secondary=dict(palette["status_colors"]),
        default=palette["default_color"],
    )


@lru_cache(maxsize=1)
def default_classifier() -> Classifier:
    from concessions.common.config_loader import load_all_configs

    return build_classifier(load_all_configs().palette)


def classify(record: DepositRecord, classifier: Classifier | None = None) -> str:
    return (classifier or default_classifier()).classify(record)
