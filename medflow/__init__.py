"""Medical-supply delivery analytics: ingestion, aggregation and flow graphs."""

__version__ = "0.3.0"
