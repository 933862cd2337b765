"""Reference colors and descriptions for known genes."""

from dataclasses import dataclass, field

from eqtl_network.config.schema import CatalogEntry, NetworkConfig

DEFAULT_NODE_COLOR = "#95A5A6"
DEFAULT_DESCRIPTION = "Candidate gene"


@dataclass(frozen=True)
class GeneCatalog:
    """Open-world gene lookup: unknown genes get the fallback color/description.

    Attributes:
        entries: Gene -> CatalogEntry for known genes
        default_color: Color for genes not in entries
        default_description: Description for genes not in entries
    """
    entries: dict[str, CatalogEntry] = field(default_factory=dict)
    default_color: str = DEFAULT_NODE_COLOR
    default_description: str = DEFAULT_DESCRIPTION

    @classmethod
    def from_config(cls, config: NetworkConfig) -> "GeneCatalog":
        return cls(
            entries=dict(config.catalog),
            default_color=config.default_color,
            default_description=config.default_description,
        )

    def color(self, gene: str) -> str:
        entry = self.entries.get(gene)
        return entry.color if entry is not None else self.default_color

    def description(self, gene: str) -> str:
        entry = self.entries.get(gene)
        if entry is None or not entry.description:
            return self.default_description
        return entry.description
