"""Variable metadata record models.

``VariableMetadata`` is the aggregate produced by one extraction: a set of
parallel sequences where position ``i`` in every sequence describes the same
variable. ``VariableRecord`` is a per-variable view used for display.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

PLACEHOLDER_VALUE_LABELS: Mapping[int, str] = MappingProxyType({0: ""})
"""Mapping emitted for a variable with no value-label set attached."""


def placeholder_value_labels() -> dict[int, str]:
    """Return a fresh copy of the placeholder value-label mapping."""
    return dict(PLACEHOLDER_VALUE_LABELS)


class VariableRecord(BaseModel):
    """All metadata for a single variable, taken from one position of a record."""

    model_config = ConfigDict(frozen=True)

    position: int = Field(..., ge=0, description="0-based position in the parent record")
    index: int = Field(..., ge=1, description="Absolute 1-based variable index")
    name: str = Field(..., description="Variable name")
    label: str = Field(default="", description="Descriptive variable label")
    value_label_set_name: str = Field(
        default="", description="Attached value-label set name, empty if none"
    )
    value_labels: dict[int, str] = Field(
        default_factory=placeholder_value_labels,
        description="Code to label mapping, placeholder if no set is attached",
    )
    is_string: bool = Field(..., description="Whether the variable storage is textual")

    @property
    def has_value_labels(self) -> bool:
        return self.value_label_set_name != ""


class VariableMetadata(BaseModel):
    """Metadata for a set of variables, stored as parallel sequences.

    Built once per extraction and read-only afterwards: sequences are tuples
    and value-label mappings are read-only views. All six sequences have the
    same length, equal to ``count``.
    """

    model_config = ConfigDict(frozen=True)

    indices: tuple[int, ...] = Field(
        default=(), description="Absolute 1-based variable indices, in output order"
    )
    count: int = Field(default=0, ge=0, description="Number of variables described")
    names: tuple[str, ...] = Field(default=(), description="Variable names")
    labels: tuple[str, ...] = Field(default=(), description="Descriptive variable labels")
    value_label_set_names: tuple[str, ...] = Field(
        default=(), description="Value-label set names, empty string if none"
    )
    value_label_sets: tuple[Mapping[int, str], ...] = Field(
        default=(), description="Code to label mappings, {0: ''} if none"
    )
    is_string: tuple[bool, ...] = Field(
        default=(), description="True where the variable storage is textual"
    )

    @field_validator("value_label_sets", mode="after")
    @classmethod
    def _freeze_value_label_sets(
        cls, value: tuple[Mapping[int, str], ...]
    ) -> tuple[Mapping[int, str], ...]:
        return tuple(MappingProxyType(dict(labels)) for labels in value)

    @field_serializer("value_label_sets")
    def _serialize_value_label_sets(
        self, value: tuple[Mapping[int, str], ...]
    ) -> list[dict[int, str]]:
        return [dict(labels) for labels in value]

    @model_validator(mode="after")
    def _validate_parallel_sequences(self) -> VariableMetadata:
        """Ensure every sequence lines up with ``indices`` and ``count``."""
        if self.count != len(self.indices):
            msg = f"count ({self.count}) does not match number of indices ({len(self.indices)})"
            raise ValueError(msg)
        if len(set(self.indices)) != len(self.indices):
            msg = "variable indices must be unique"
            raise ValueError(msg)
        if any(i < 1 for i in self.indices):
            msg = "variable indices are 1-based and must be positive"
            raise ValueError(msg)
        for field_name in (
            "names",
            "labels",
            "value_label_set_names",
            "value_label_sets",
            "is_string",
        ):
            length = len(getattr(self, field_name))
            if length != self.count:
                msg = f"{field_name} has {length} entries, expected {self.count}"
                raise ValueError(msg)
        return self

    @classmethod
    def empty(cls) -> VariableMetadata:
        return cls()

    def _check_position(self, position: int) -> None:
        if position < 0 or position >= self.count:
            msg = f"position {position} out of range for {self.count} variable(s)"
            raise IndexError(msg)

    def index_at(self, position: int) -> int:
        """Absolute variable index at ``position``."""
        self._check_position(position)
        return self.indices[position]

    def name_at(self, position: int) -> str:
        """Variable name at ``position``."""
        self._check_position(position)
        return self.names[position]

    def label_at(self, position: int) -> str:
        """Variable label at ``position``."""
        self._check_position(position)
        return self.labels[position]

    def value_label_set_name_at(self, position: int) -> str:
        """Value-label set name at ``position`` (empty string if none)."""
        self._check_position(position)
        return self.value_label_set_names[position]

    def value_label_set_at(self, position: int) -> dict[int, str]:
        """Value-label mapping at ``position``.

        Returns a copy so the frozen record cannot be changed through it.
        """
        self._check_position(position)
        return dict(self.value_label_sets[position])

    def is_string_at(self, position: int) -> bool:
        """Whether the variable at ``position`` is stored as a string."""
        self._check_position(position)
        return self.is_string[position]

    def variable(self, position: int) -> VariableRecord:
        """Collect every field at ``position`` into a single record.

        Raises:
            IndexError: If ``position`` is outside ``[0, count - 1]``.
        """
        self._check_position(position)
        return VariableRecord(
            position=position,
            index=self.indices[position],
            name=self.names[position],
            label=self.labels[position],
            value_label_set_name=self.value_label_set_names[position],
            value_labels=dict(self.value_label_sets[position]),
            is_string=self.is_string[position],
        )

    def variables(self) -> Iterator[VariableRecord]:
        for position in range(self.count):
            yield self.variable(position)
