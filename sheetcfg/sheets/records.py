"""Row grid to record conversion for the List and Single layouts."""

from __future__ import annotations

from typing import List

from sheetcfg.core.errors import (
    CellConversionError,
    CoercionError,
    MalformedHeaderError,
    RowLengthError,
    RowTooShortError,
    SchemaMismatchError,
)

from .coerce import coerce
from .schema import (
    LIST_DATA_START_ROW,
    LIST_FIELD_NAME_ROW,
    LIST_FIELD_TYPE_ROW,
    SINGLE_DATA_START_ROW,
    SINGLE_MIN_CELLS,
    Document,
    FieldMap,
    FieldSchema,
    Shape,
    SheetGrid,
)


def read_field_schema(grid: SheetGrid) -> FieldSchema:
    """Return the field names (row 4) and type labels (row 5)."""

    if len(grid) < LIST_DATA_START_ROW:
        raise MalformedHeaderError(
            f"表头不完整: 列表配置至少需要 {LIST_DATA_START_ROW} 行, 实际 {len(grid)} 行"
        )
    names = tuple(grid.rows[LIST_FIELD_NAME_ROW])
    types = tuple(grid.rows[LIST_FIELD_TYPE_ROW])
    if len(names) != len(types):
        raise SchemaMismatchError("字段名与字段类型对不齐")
    return FieldSchema(names=names, types=types)


def parse_list(grid: SheetGrid, *, strict: bool = False) -> List[FieldMap]:
    """Build one field map per data row, keys in column order."""

    schema = read_field_schema(grid)
    field_len = len(schema)
    records: List[FieldMap] = []
    for idx, row in enumerate(grid.rows[LIST_DATA_START_ROW:]):
        row_number = idx + LIST_DATA_START_ROW + 1
        if len(row) != field_len:
            # Column is reported as the cell count plus one.
            raise RowLengthError(
                f"在第{row_number}行{len(row) + 1}列配置项与字段对不齐",
                row=row_number,
                column=len(row) + 1,
            )
        record: FieldMap = {}
        for col, (name, type_label) in enumerate(zip(schema.names, schema.types)):
            try:
                record[name] = coerce(row[col], type_label, strict=strict)
            except CoercionError as exc:
                raise CellConversionError(
                    f"在第{row_number}行{col + 1}列错误: {exc}",
                    row=row_number,
                    column=col + 1,
                ) from exc
        records.append(record)
    return records


def parse_single(grid: SheetGrid, *, strict: bool = False) -> FieldMap:
    """Build a single field map from ``key | type | value`` rows.

    Later rows overwrite earlier ones with the same key.
    """

    record: FieldMap = {}
    for idx, row in enumerate(grid.rows[SINGLE_DATA_START_ROW:]):
        row_number = idx + SINGLE_DATA_START_ROW + 1
        if len(row) < SINGLE_MIN_CELLS:
            raise RowTooShortError(f"在第{row_number}行配置项对不齐", row=row_number)
        key, type_label, text = row[0], row[1], row[2]
        try:
            record[key] = coerce(text, type_label, strict=strict)
        except CoercionError as exc:
            raise CellConversionError(f"在第{row_number}行错误: {exc}", row=row_number) from exc
    return record


PARSERS = {
    Shape.LIST: parse_list,
    Shape.SINGLE: parse_single,
}


def parse_records(grid: SheetGrid, shape: Shape, *, strict: bool = False) -> Document:
    return PARSERS[shape](grid, strict=strict)
