"""Patient record ingestion, validation and risk scoring."""

__version__ = "0.1.0"
