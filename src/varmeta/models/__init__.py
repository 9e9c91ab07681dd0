"""Pydantic data models shared across varmeta components.

    from varmeta.models import VariableMetadata, VariableRecord
"""

from varmeta.models.metadata import (
    PLACEHOLDER_VALUE_LABELS,
    VariableMetadata,
    VariableRecord,
    placeholder_value_labels,
)

__all__ = [
    "PLACEHOLDER_VALUE_LABELS",
    "VariableMetadata",
    "VariableRecord",
    "placeholder_value_labels",
]
