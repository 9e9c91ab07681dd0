"""Dataset host reading statistical data files with pyreadstat.

Supports Stata (.dta), SPSS (.sav, .zsav, .por) and SAS (.sas7bdat, .xpt)
files. Variable names, labels, storage types and value-label sets are taken
from the pyreadstat metadata object.

Value formats are never applied, so coded values stay as codes. Date columns
are read with disable_datetime_conversion=True where the reader supports it.
"""

from __future__ import annotations

import math
from pathlib import Path

import pyreadstat
from loguru import logger

from varmeta.host.base import DatasetHost, HostLookupError
from varmeta.host.varlist import parse_varlist

READERS = {
    ".dta": pyreadstat.read_dta,
    ".sav": pyreadstat.read_sav,
    ".zsav": pyreadstat.read_sav,
    ".por": pyreadstat.read_por,
    ".sas7bdat": pyreadstat.read_sas7bdat,
    ".xpt": pyreadstat.read_xport,
}

_DATETIME_AWARE = frozenset({".dta", ".sav", ".zsav", ".sas7bdat", ".xpt"})


def _coerce_code(code: object) -> int | None:
    """Convert a value-label code to int, or None if it is not integral."""
    if isinstance(code, bool):
        return None
    if isinstance(code, int):
        return code
    if isinstance(code, float) and math.isfinite(code) and code.is_integer():
        return int(code)
    return None


class ReadstatHost(DatasetHost):
    """Dataset host backed by a file read with pyreadstat.

    The file is read eagerly on construction; no handle is kept open.
    """

    def __init__(
        self,
        filepath: str | Path,
        varlist: str | None = None,
        metadataonly: bool = False,
    ) -> None:
        """Read ``filepath`` and resolve the optional ``varlist``.

        Args:
            filepath: Path to a supported statistical data file.
            varlist: Optional explicit variable selection.
            metadataonly: Skip reading data rows.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file extension is not supported.
            HostLookupError: If ``varlist`` names unknown variables.
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"Data file not found: {filepath}")
        suffix = filepath.suffix.lower()
        reader = READERS.get(suffix)
        if reader is None:
            supported = ", ".join(sorted(READERS))
            raise ValueError(f"Unsupported file type '{suffix}', expected one of: {supported}")

        logger.info("Reading data file: {}", filepath.name)
        kwargs: dict[str, bool] = {"metadataonly": metadataonly}
        if suffix in _DATETIME_AWARE:
            kwargs["disable_datetime_conversion"] = True
        _, meta = reader(str(filepath), **kwargs)

        self.filepath = filepath
        self.file_encoding: str | None = getattr(meta, "file_encoding", None)
        self._names: list[str] = list(meta.column_names)
        labels = meta.column_names_to_labels or {}
        self._labels = [labels.get(name) or "" for name in self._names]
        types = meta.readstat_variable_types or {}
        self._is_string = [str(types.get(name, "")).startswith("string") for name in self._names]
        variable_to_label = meta.variable_to_label or {}
        self._value_label_names = [variable_to_label.get(name) for name in self._names]
        self._value_label_sets = {
            name: self._convert_labels(name, labels)
            for name, labels in (meta.value_labels or {}).items()
        }
        self._selection = parse_varlist(varlist, self._names)

        logger.info(
            "Read {}: {} variables, {} value-label sets",
            filepath.name,
            len(self._names),
            len(self._value_label_sets),
        )

    @staticmethod
    def _convert_labels(set_name: str, labels: dict) -> dict[int, str]:
        converted: dict[int, str] = {}
        for code, label in labels.items():
            int_code = _coerce_code(code)
            if int_code is None:
                logger.warning(
                    "Skipping non-integer code {!r} in value-label set '{}'", code, set_name
                )
                continue
            converted[int_code] = str(label)
        return converted

    def var_count(self) -> int:
        return len(self._names)

    def parsed_var_count(self) -> int:
        if self._selection is None:
            return self.var_count()
        return len(self._selection)

    def map_parsed_var_index(self, position: int) -> int:
        self._check_position(position)
        if self._selection is None:
            return position
        return self._selection[position - 1]

    def var_name(self, index: int) -> str:
        self._check_index(index)
        return self._names[index - 1]

    def var_label(self, index: int) -> str:
        self._check_index(index)
        return self._labels[index - 1]

    def is_var_type_string(self, index: int) -> bool:
        self._check_index(index)
        return self._is_string[index - 1]

    def var_value_label(self, index: int) -> str | None:
        self._check_index(index)
        return self._value_label_names[index - 1]

    def value_labels(self, name: str) -> dict[int, str]:
        if name not in self._value_label_sets:
            raise HostLookupError(
                "value-label set", f"'{name}' is not defined in {self.filepath.name}"
            )
        return dict(self._value_label_sets[name])
