"""varmeta: variable metadata extraction for statistical datasets.

Collects variable names, labels, value-label sets and storage types from a
dataset host and serializes them to a JSON document.
"""

from varmeta.collector import VariableMetadataCollector, collect_variable_metadata
from varmeta.models.metadata import VariableMetadata

__version__ = "0.1.0"

__all__ = [
    "VariableMetadata",
    "VariableMetadataCollector",
    "collect_variable_metadata",
]
