"""eQTL gene network: ingestion and graph derivation pipeline."""

__version__ = "0.1.0"
