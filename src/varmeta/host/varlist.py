"""Variable list parsing.

Turns a whitespace-separated variable list such as ``"age income"``,
``"inc*"`` or ``"age-income"`` into 1-based absolute variable indices.
"""

from __future__ import annotations

import fnmatch
from collections.abc import Sequence

from loguru import logger

from varmeta.host.base import HostLookupError

_WILDCARDS = ("*", "?")


def _match_token(token: str, names: Sequence[str], positions: dict[str, int]) -> list[int]:
    if token in positions:
        return [positions[token]]

    if any(w in token for w in _WILDCARDS):
        matched = [i for i, name in enumerate(names, start=1) if fnmatch.fnmatchcase(name, token)]
        if not matched:
            raise HostLookupError("varlist", f"no variables match '{token}'")
        return matched

    if "-" in token:
        first, _, last = token.partition("-")
        if first not in positions or last not in positions:
            raise HostLookupError("varlist", f"invalid variable range '{token}'")
        start, end = positions[first], positions[last]
        if start > end:
            raise HostLookupError("varlist", f"range '{token}' runs backwards")
        return list(range(start, end + 1))

    raise HostLookupError("varlist", f"variable '{token}' not found")


def parse_varlist(varlist: str | None, names: Sequence[str]) -> list[int] | None:
    """Resolve ``varlist`` against the dataset's variable ``names``.

    Args:
        varlist: Whitespace-separated names, glob patterns or ``first-last``
            ranges. None or a blank string means no explicit selection.
        names: Variable names in dataset order.

    Returns:
        1-based indices in request order with duplicates dropped, or None if
        no selection was given.

    Raises:
        HostLookupError: If a token matches no variable.
    """
    if varlist is None or not varlist.strip():
        return None

    positions = {name: i for i, name in enumerate(names, start=1)}
    selected: list[int] = []
    seen: set[int] = set()
    for token in varlist.split():
        for index in _match_token(token, names, positions):
            if index not in seen:
                seen.add(index)
                selected.append(index)

    logger.debug("Varlist '{}' resolved to {} variable(s)", varlist, len(selected))
    return selected
