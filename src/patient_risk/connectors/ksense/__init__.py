"""Ksense assessment API connector."""

from .connector import KsenseConnector

__all__ = ["KsenseConnector"]
