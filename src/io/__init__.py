"""Artifact writers for cost breakdowns and price sheets."""

from src.io.exporting import write_csv_atomic, write_json_atomic

__all__ = ["write_csv_atomic", "write_json_atomic"]
