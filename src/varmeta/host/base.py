"""Host dataset interface consumed by the metadata collector.

A host exposes the active dataset by 1-based variable index, along with the
caller's explicit variable selection (if any) and the value-label sets
defined for the dataset. Hosts are passed explicitly to the collector so
several extractions never share state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class HostLookupError(Exception):
    """Raised when the host cannot answer a lookup.

    Covers invalid variable indices, invalid selected positions, unknown
    value-label set names and unmatched varlist tokens.
    """

    def __init__(self, lookup: str, detail: str) -> None:
        self.lookup = lookup
        self.detail = detail
        super().__init__(f"{lookup}: {detail}")


class DatasetHost(ABC):
    """Read-only view of a dataset held by a host application."""

    @abstractmethod
    def var_count(self) -> int:
        """Total number of variables in the active dataset."""

    @abstractmethod
    def parsed_var_count(self) -> int:
        """Number of variables explicitly selected by the caller.

        Equals ``var_count()`` when no selection was made.
        """

    @abstractmethod
    def map_parsed_var_index(self, position: int) -> int:
        """Absolute 1-based index of the selected variable at 1-based ``position``."""

    @abstractmethod
    def var_name(self, index: int) -> str: ...

    @abstractmethod
    def var_label(self, index: int) -> str: ...

    @abstractmethod
    def is_var_type_string(self, index: int) -> bool: ...

    @abstractmethod
    def var_value_label(self, index: int) -> str | None:
        """Name of the value-label set attached to ``index``, or None if none."""

    @abstractmethod
    def value_labels(self, name: str) -> dict[int, str]:
        """Code to label mapping of the value-label set called ``name``."""

    # --- shared validation helpers ---

    def _check_index(self, index: int) -> None:
        total = self.var_count()
        if not 1 <= index <= total:
            raise HostLookupError(
                "variable index", f"{index} is not in the range 1..{total}"
            )

    def _check_position(self, position: int) -> None:
        parsed = self.parsed_var_count()
        if not 1 <= position <= parsed:
            raise HostLookupError(
                "selected variable position", f"{position} is not in the range 1..{parsed}"
            )
