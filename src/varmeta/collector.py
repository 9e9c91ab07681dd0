"""Variable metadata collection from a dataset host.

Runs a single linear pass over the host: resolve the variable indices, then
derive names, labels, value-label set names, value-label mappings and string
flags for those indices, in that order. Any host failure aborts the whole
extraction; no partial record is returned.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from varmeta.host.base import DatasetHost
from varmeta.models.metadata import VariableMetadata, placeholder_value_labels


class VariableMetadataCollector:
    """Collects variable metadata from a ``DatasetHost``.

    Usage::

        collector = VariableMetadataCollector(host)
        record = collector.collect()
        record.names  # ["age", "income"]
    """

    def __init__(self, host: DatasetHost) -> None:
        self.host = host

    def resolve_indices(self) -> list[int]:
        """Resolve the absolute 1-based indices of the variables to describe.

        When the caller selected a strict subset (the parsed count differs
        from the dataset's variable count), each selected position is mapped
        to its absolute index. Otherwise every variable is described.
        """
        total = self.host.var_count()
        parsed = self.host.parsed_var_count()

        if parsed != total:
            indices = [self.host.map_parsed_var_index(i) for i in range(1, parsed + 1)]
            logger.debug("Resolved {} of {} variables from selection", len(indices), total)
        else:
            indices = list(range(1, total + 1))
            logger.debug("No explicit selection, using all {} variables", total)
        return indices

    def derive_names(self, indices: Sequence[int]) -> list[str]:
        return [self.host.var_name(i) for i in indices]

    def derive_labels(self, indices: Sequence[int]) -> list[str]:
        return [self.host.var_label(i) for i in indices]

    def derive_type_flags(self, indices: Sequence[int]) -> list[bool]:
        return [bool(self.host.is_var_type_string(i)) for i in indices]

    def derive_value_label_set_names(self, indices: Sequence[int]) -> list[str]:
        """Value-label set name per index, with "" where no set is attached."""
        names: list[str] = []
        for i in indices:
            name = self.host.var_value_label(i)
            names.append("" if name is None else name)
        return names

    def derive_value_label_sets(self, set_names: Sequence[str | None]) -> list[dict[int, str]]:
        """Code to label mapping per set name.

        Empty or missing set names give the placeholder ``{0: ""}``. Sets
        shared by several variables are looked up once per variable.
        """
        sets: list[dict[int, str]] = []
        for name in set_names:
            if not name:
                sets.append(placeholder_value_labels())
            else:
                sets.append(dict(self.host.value_labels(name)))
        return sets

    def collect(self) -> VariableMetadata:
        """Run every stage and return the completed record.

        Raises:
            Whatever the host raises for a failed lookup, typically
            ``HostLookupError``.
        """
        logger.info("Collecting variable metadata")
        try:
            indices = self.resolve_indices()
            names = self.derive_names(indices)
            labels = self.derive_labels(indices)
            set_names = self.derive_value_label_set_names(indices)
            value_label_sets = self.derive_value_label_sets(set_names)
            is_string = self.derive_type_flags(indices)
        except Exception:
            logger.exception("Variable metadata extraction failed")
            raise

        record = VariableMetadata(
            indices=indices,
            count=len(indices),
            names=names,
            labels=labels,
            value_label_set_names=set_names,
            value_label_sets=value_label_sets,
            is_string=is_string,
        )
        logger.info(
            "Collected metadata for {} variables ({} with value labels)",
            record.count,
            sum(1 for n in set_names if n),
        )
        return record


def collect_variable_metadata(host: DatasetHost) -> VariableMetadata:
    """Collect variable metadata from ``host`` in one call."""
    return VariableMetadataCollector(host).collect()
