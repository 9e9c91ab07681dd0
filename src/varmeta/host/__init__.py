"""Dataset hosts: the interface the collector reads from, and implementations."""

from varmeta.host.base import DatasetHost, HostLookupError
from varmeta.host.memory import HostVariable, InMemoryHost
from varmeta.host.readstat import ReadstatHost
from varmeta.host.varlist import parse_varlist

__all__ = [
    "DatasetHost",
    "HostLookupError",
    "HostVariable",
    "InMemoryHost",
    "ReadstatHost",
    "parse_varlist",
]
