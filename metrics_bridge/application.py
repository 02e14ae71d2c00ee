"""Application identity attached to every emission."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping

from metrics_bridge.core.config import Settings


@dataclass(frozen=True)
class ApplicationTags:
    """Identify the emitting application and service."""

    application: str
    service: str
    cluster: str | None = None
    shard: str | None = None
    custom_tags: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ApplicationTags":
        return cls(
            application=settings.application,
            service=settings.service,
            cluster=settings.cluster,
            shard=settings.shard,
        )

    def as_tags(self) -> Dict[str, str]:
        tags = dict(self.custom_tags)
        tags["application"] = self.application
        tags["service"] = self.service
        tags["cluster"] = self.cluster or "none"
        tags["shard"] = self.shard or "none"
        return tags
