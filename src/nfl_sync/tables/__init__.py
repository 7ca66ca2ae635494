from importlib import import_module
from typing import Dict

from ..normalize import TableSpec

TABLE_MODULES = [
    "nflfastr_pbp",
    "nfl_odds_alternate_lines",
]


def build_registry() -> Dict[str, TableSpec]:
    registry = {}
    for mod_name in TABLE_MODULES:
        mod = import_module(f"nfl_sync.tables.{mod_name}")
        registry[mod.TABLE_SPEC.name] = mod.TABLE_SPEC
    return registry


TABLE_SPECS = build_registry()
