"""Display fields of dictionary entries. Closed set of field identifiers with an
exhaustive getter table (used by property grid like front ends).
"""
import enum
from typing import Callable, Dict, List, Optional

from odsync.od.entries import SubEntry, _Entry


class Field(enum.Enum):

    """Field identifiers of a dictionary entry."""

    INDEX = 'index'
    NAME = 'name'
    OBJECT_TYPE = 'objectType'
    DATA_TYPE = 'dataType'
    LOW_LIMIT = 'lowLimit'
    HIGH_LIMIT = 'highLimit'
    ACCESS_TYPE = 'accessType'
    DEFAULT_VALUE = 'defaultValue'
    ACTUAL_VALUE = 'actualValue'
    DENOTATION = 'denotation'
    PDO_MAPPING = 'PDOmapping'
    OBJ_FLAGS = 'objFlags'
    UNIQUE_ID_REF = 'uniqueIDRef'


def _index(entry: _Entry) -> str:
    if isinstance(entry, SubEntry):
        return entry.subIndexStr

    return entry.indexStr


def _enum_value(member) -> Optional[str]:
    if member is None:
        return None

    return str(member.value)


def _object_type(entry: _Entry) -> Optional[str]:
    if entry.objectType is None:
        return None

    return str(int(entry.objectType))


FIELD_GETTERS: Dict[Field, Callable[[_Entry], Optional[str]]] = {
    Field.INDEX: _index,
    Field.NAME: lambda e: e.name,
    Field.OBJECT_TYPE: _object_type,
    Field.DATA_TYPE: lambda e: e.dataType if e.dataTypeCode is not None else None,
    Field.LOW_LIMIT: lambda e: e.lowLimit,
    Field.HIGH_LIMIT: lambda e: e.highLimit,
    Field.ACCESS_TYPE: lambda e: _enum_value(e.accessType),
    Field.DEFAULT_VALUE: lambda e: e.defaultValue,
    Field.ACTUAL_VALUE: lambda e: e.actualValue or '',
    Field.DENOTATION: lambda e: e.denotation,
    Field.PDO_MAPPING: lambda e: _enum_value(e.pdoMapping),
    Field.OBJ_FLAGS: lambda e: e.objFlags,
    Field.UNIQUE_ID_REF: lambda e: e.uniqueIdRef,
}
"""Field -> value getter. Absent optional fields map to None."""

if set(FIELD_GETTERS) != set(Field):
    raise RuntimeError('FIELD_GETTERS does not cover all fields!')


def field_value(entry: _Entry, field: Field) -> Optional[str]:
    """Display value of a field.

    Args:
        entry: Dictionary entry or sub-entry.
        field: Field to get.

    Returns:
        Field value. None for absent optional fields. The actual value is an
        empty string when absent.
    """
    return FIELD_GETTERS[field](entry)


def present_fields(entry: _Entry) -> List[Field]:
    """Fields carried by an entry, in display order. The actual value is always
    present for editable entries.
    """
    fields = []
    for field in Field:
        if field is Field.ACTUAL_VALUE:
            if entry.is_actual_value_editable() or entry.actualValue is not None:
                fields.append(field)

        elif field in (Field.INDEX, Field.NAME, Field.OBJECT_TYPE):
            fields.append(field)

        elif field_value(entry, field) is not None:
            fields.append(field)

    return fields


def is_field_editable(entry: _Entry, field: Field) -> bool:
    """Only the actual value of editable entries can be edited."""
    return field is Field.ACTUAL_VALUE and entry.is_actual_value_editable()

