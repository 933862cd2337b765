"""Pydantic models for network pipeline configuration."""

import hashlib
import json
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

from eqtl_network.relations.models import EdgeMode


class SourceConfig(BaseModel):
    """Locations of the input sources (filesystem path or http(s) URL)."""

    relations: str = Field(
        ...,
        description="Relations CSV (gene1,gene2,connection_type,weight,...)",
    )
    statistics: str = Field(
        ...,
        description="Per-gene eQTL statistics CSV",
    )
    summary: str | None = Field(
        default=None,
        description="Optional precomputed network summary JSON",
    )
    max_source_bytes: int = Field(
        default=50_000_000,
        ge=1,
        description="Maximum accepted size of a single source in bytes",
    )


class APIConfig(BaseModel):
    """Configuration for fetching sources over HTTP."""

    max_retries: int = Field(
        default=3,
        ge=1,
        le=20,
        description="Maximum retry attempts for failed requests",
    )
    cache_ttl_seconds: int = Field(
        default=86400,
        ge=0,
        description="Cache time-to-live in seconds (0 = infinite)",
    )
    timeout_seconds: int = Field(
        default=30,
        ge=1,
        description="Request timeout in seconds",
    )


class DisplayConfig(BaseModel):
    """Visual encoding parameters for graph nodes and edges.

    Node size = max(node_min_size, total_eqtls * node_size_scale + node_size_offset).
    Each edge width = max(floor, weight * factor).
    """

    node_min_size: float = Field(default=30.0, ge=0.0)
    node_size_scale: float = Field(default=0.25, ge=0.0)
    node_size_offset: float = Field(default=20.0, ge=0.0)

    edge_width_factor: float = Field(default=0.8, ge=0.0)
    edge_width_floor: float = Field(default=1.0, ge=0.0)
    hover_width_factor: float = Field(default=1.0, ge=0.0)
    hover_width_floor: float = Field(default=1.5, ge=0.0)
    selection_width_factor: float = Field(default=1.2, ge=0.0)
    selection_width_floor: float = Field(default=2.0, ge=0.0)

    undirected_roundness: float = Field(default=0.2, ge=0.0, le=1.0)
    statistical_roundness: float = Field(default=0.25, ge=0.0, le=1.0)
    coloc_roundness: float = Field(default=0.35, ge=0.0, le=1.0)
    arrow_scale: float = Field(default=0.8, gt=0.0)

    @model_validator(mode="after")
    def check_rank_consistency(self) -> "DisplayConfig":
        """Hover and selection widths must never fall below the base width."""
        for name in ("hover", "selection"):
            factor = getattr(self, f"{name}_width_factor")
            floor = getattr(self, f"{name}_width_floor")
            if factor < self.edge_width_factor or floor < self.edge_width_floor:
                raise ValueError(
                    f"{name} width factor/floor must be >= base edge width factor/floor"
                )
        if min(self.statistical_roundness, self.coloc_roundness) <= self.undirected_roundness:
            raise ValueError("Directed edge roundness must exceed undirected roundness")
        return self


class CatalogEntry(BaseModel):
    """Reference display data for a known gene."""

    color: str = Field(..., description="Node background color (hex)")
    description: str = Field(default="", description="Short gene description")


class NetworkConfig(BaseModel):
    """Main network pipeline configuration."""

    data_dir: Path = Field(
        ...,
        description="Directory holding input data",
    )
    cache_dir: Path = Field(
        ...,
        description="Directory for HTTP response caching",
    )
    output_dir: Path = Field(
        default=Path("output"),
        description="Directory for exported graph model, tables and charts",
    )
    sources: SourceConfig = Field(
        ...,
        description="Input source locations",
    )
    api: APIConfig = Field(
        default_factory=APIConfig,
        description="HTTP fetch configuration",
    )
    display: DisplayConfig = Field(
        default_factory=DisplayConfig,
        description="Visual encoding parameters",
    )
    edge_mode: EdgeMode = Field(
        default=EdgeMode.MERGE_DIRECTED,
        description="merge_directed or per_relation",
    )
    catalog: dict[str, CatalogEntry] = Field(
        default_factory=dict,
        description="Known gene colors and descriptions",
    )
    default_color: str = Field(
        default="#95A5A6",
        description="Node color for genes absent from the catalog",
    )
    default_description: str = Field(
        default="Candidate gene",
        description="Description for genes absent from the catalog",
    )

    @field_validator("data_dir", "cache_dir")
    @classmethod
    def create_directory(cls, v: Path) -> Path:
        """Create directory if it doesn't exist."""
        v.mkdir(parents=True, exist_ok=True)
        return v

    def resolve_source(self, location: str) -> str:
        """Resolve a relative source path against data_dir; URLs pass through."""
        if location.startswith(("http://", "https://")):
            return location
        path = Path(location)
        if not path.is_absolute():
            path = self.data_dir / path
        return str(path)

    def config_hash(self) -> str:
        """
        Compute SHA-256 hash of the configuration.

        Returns a deterministic hash based on all config values,
        useful for tracking config changes in output provenance.
        """
        config_dict = self.model_dump(mode="python")
        config_json = json.dumps(
            config_dict,
            sort_keys=True,
            default=str,
        )
        return hashlib.sha256(config_json.encode()).hexdigest()
