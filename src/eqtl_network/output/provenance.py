"""Run metadata recorded alongside an exported network."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from eqtl_network import __version__
from eqtl_network.config.schema import NetworkConfig


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class ProvenanceTracker:
    """Config identity, resolved sources and build steps behind one export.

    write_network_output() merges to_dict() into the YAML sidecar under "run".
    """
    version: str
    config_hash: str
    edge_mode: str
    sources: dict[str, str]
    started_at: str = field(default_factory=_utc_now)
    steps: list[dict] = field(default_factory=list)

    @classmethod
    def from_config(cls, config: NetworkConfig, version: str | None = None) -> "ProvenanceTracker":
        locations = {
            "relations": config.sources.relations,
            "statistics": config.sources.statistics,
            "summary": config.sources.summary,
        }
        return cls(
            version=version or __version__,
            config_hash=config.config_hash(),
            edge_mode=config.edge_mode.value,
            sources={
                name: config.resolve_source(location)
                for name, location in locations.items()
                if location
            },
        )

    def record_step(self, name: str, **details) -> None:
        step = {"step": name, "at": _utc_now()}
        if details:
            step["details"] = details
        self.steps.append(step)

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "config_hash": self.config_hash,
            "edge_mode": self.edge_mode,
            "sources": dict(self.sources),
            "started_at": self.started_at,
            "steps": [dict(step) for step in self.steps],
        }
