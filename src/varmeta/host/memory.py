"""In-memory dataset host.

Holds variable definitions and value-label sets directly, either built by
hand (tests, synthetic datasets) or taken from a pandas DataFrame.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import pandas as pd
from pandas.api import types as ptypes
from pydantic import BaseModel, Field

from varmeta.host.base import DatasetHost, HostLookupError
from varmeta.host.varlist import parse_varlist


class HostVariable(BaseModel):
    """Definition of one variable held by an ``InMemoryHost``."""

    name: str = Field(..., min_length=1, description="Variable name")
    label: str = Field(default="", description="Descriptive variable label")
    is_string: bool = Field(default=False, description="Whether storage is textual")
    value_label_name: str | None = Field(
        default=None, description="Name of the attached value-label set, None if none"
    )


class InMemoryHost(DatasetHost):
    """Dataset host backed by plain Python objects.

    Usage::

        host = InMemoryHost(
            [
                HostVariable(name="id"),
                HostVariable(name="sex", value_label_name="sex"),
                HostVariable(name="city", is_string=True),
            ],
            value_label_sets={"sex": {1: "male", 2: "female"}},
            selection="sex city",
        )
    """

    def __init__(
        self,
        variables: Sequence[HostVariable],
        value_label_sets: Mapping[str, Mapping[int, str]] | None = None,
        selection: Sequence[int] | str | None = None,
    ) -> None:
        self._variables = list(variables)
        self._value_label_sets = {
            name: dict(labels) for name, labels in (value_label_sets or {}).items()
        }

        if isinstance(selection, str):
            selected = parse_varlist(selection, [v.name for v in self._variables])
        elif selection is None:
            selected = None
        else:
            selected = list(selection)
            for index in selected:
                self._check_index(index)
            if len(set(selected)) != len(selected):
                raise HostLookupError("selection", f"duplicate variable indices in {selected}")
        self._selection = selected

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        column_labels: Mapping[str, str] | None = None,
        variable_value_labels: Mapping[str, Mapping[int, str]] | None = None,
        variable_to_label: Mapping[str, str] | None = None,
        varlist: str | None = None,
    ) -> InMemoryHost:
        """Build a host from a DataFrame and optional label metadata.

        Args:
            df: Dataset whose columns are the variables, in order.
            column_labels: Column name -> descriptive label.
            variable_value_labels: Either column name -> code mapping, or,
                when ``variable_to_label`` is given, set name -> code mapping.
            variable_to_label: Column name -> value-label set name. When
                omitted, each labelled column gets a set named after itself.
            varlist: Optional explicit variable selection.
        """
        column_labels = column_labels or {}
        variable_value_labels = variable_value_labels or {}

        if variable_to_label is None:
            variable_to_label = {name: name for name in variable_value_labels}

        variables = [
            HostVariable(
                name=str(col),
                label=column_labels.get(str(col)) or "",
                is_string=_is_string_column(df[col]),
                value_label_name=variable_to_label.get(str(col)),
            )
            for col in df.columns
        ]
        return cls(variables, value_label_sets=variable_value_labels, selection=varlist)

    def var_count(self) -> int:
        return len(self._variables)

    def parsed_var_count(self) -> int:
        if self._selection is None:
            return self.var_count()
        return len(self._selection)

    def map_parsed_var_index(self, position: int) -> int:
        self._check_position(position)
        if self._selection is None:
            return position
        return self._selection[position - 1]

    def _variable(self, index: int) -> HostVariable:
        self._check_index(index)
        return self._variables[index - 1]

    def var_name(self, index: int) -> str:
        return self._variable(index).name

    def var_label(self, index: int) -> str:
        return self._variable(index).label

    def is_var_type_string(self, index: int) -> bool:
        return self._variable(index).is_string

    def var_value_label(self, index: int) -> str | None:
        return self._variable(index).value_label_name

    def value_labels(self, name: str) -> dict[int, str]:
        if name not in self._value_label_sets:
            raise HostLookupError("value-label set", f"'{name}' is not defined")
        return dict(self._value_label_sets[name])


def _is_string_column(series: pd.Series) -> bool:
    """Whether a column holds textual data.

    Object columns count as textual when every non-missing value is a str.
    """
    if ptypes.is_string_dtype(series.dtype) and not ptypes.is_object_dtype(series.dtype):
        return True
    if ptypes.is_object_dtype(series.dtype):
        non_missing = series.dropna()
        return bool(non_missing.map(lambda v: isinstance(v, str)).all())
    return False
