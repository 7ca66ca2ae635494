from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional, Tuple

from .coerce import COERCERS, ColumnKind

TypedRecord = Mapping[str, Any]


@dataclass(frozen=True)
class ColumnSpec:
    name: str
    kind: ColumnKind


@dataclass(frozen=True)
class TableSpec:
    name: str
    columns: Tuple[ColumnSpec, ...]
    conflict_key: Tuple[str, ...]

    def __post_init__(self) -> None:
        names = [c.name for c in self.columns]
        if len(names) != len(set(names)):
            raise ValueError(f"duplicate column names in table {self.name}")
        missing = [k for k in self.conflict_key if k not in names]
        if not self.conflict_key or missing:
            raise ValueError(f"conflict key of {self.name} must name declared columns: {missing}")

    @property
    def identity_columns(self) -> Tuple[str, ...]:
        return self.conflict_key

    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.columns)

    @property
    def on_conflict(self) -> str:
        return ",".join(self.conflict_key)


def columns(*pairs: Tuple[str, ColumnKind]) -> Tuple[ColumnSpec, ...]:
    return tuple(ColumnSpec(name, kind) for name, kind in pairs)


def normalize_record(spec: TableSpec, raw: Mapping[str, Any]) -> TypedRecord:
    """Coerce every declared column of ``raw``; undeclared keys are ignored."""
    return MappingProxyType({c.name: COERCERS[c.kind](raw.get(c.name)) for c in spec.columns})


class RecordAssembler:
    """Turns RawRecords into TypedRecords for one table.

    Records missing any identity column after coercion are rejected and
    counted. Duplicates are passed through untouched; the store resolves them
    on the conflict key.
    """

    def __init__(self, spec: TableSpec) -> None:
        self.spec = spec
        self.assembled = 0
        self.rejected = 0

    def assemble(self, raw: Mapping[str, Any]) -> Optional[TypedRecord]:
        record = normalize_record(self.spec, raw)
        if any(record[k] is None for k in self.spec.identity_columns):
            self.rejected += 1
            return None
        self.assembled += 1
        return record

    def assemble_all(self, raws: Iterable[Mapping[str, Any]]) -> Iterator[TypedRecord]:
        for raw in raws:
            record = self.assemble(raw)
            if record is not None:
                yield record
