"""Object dictionary definitions. Object types, access types, PDO mapping
directives and data type lookups.
"""
import enum
from typing import Dict, Optional, Tuple

from canopen.objectdictionary import datatypes


class ObjectType(enum.IntEnum):

    """Object code of a dictionary object (numeric ``objectType`` attribute)."""

    NULL = 0
    DOMAIN = 2
    DEFTYPE = 5
    DEFSTRUCT = 6
    VAR = 7
    ARRAY = 8
    RECORD = 9


class AccessType(enum.Enum):

    """Access type of a dictionary object. Values as serialized in the
    ``accessType`` attribute.
    """

    CONST = 'const'
    RO = 'ro'
    WO = 'wo'
    RW = 'rw'
    READ_WRITE_INPUT = 'readWriteInput'
    READ_WRITE_OUTPUT = 'readWriteOutput'
    NO_ACCESS = 'noAccess'


class PdoMapping(enum.Enum):

    """PDO mapping directive. Values as serialized in the ``PDOmapping``
    attribute.
    """

    NO = 'no'
    DEFAULT = 'default'
    OPTIONAL = 'optional'
    TPDO = 'TPDO'
    RPDO = 'RPDO'


# POWERLINK specific extended data types
MAC_ADDRESS = 0x401
IP_ADDRESS = 0x402
NETTIME = 0x403


DATA_TYPE_NAMES: Dict[int, str] = {
    datatypes.BOOLEAN: 'BOOLEAN',
    datatypes.INTEGER8: 'INTEGER8',
    datatypes.INTEGER16: 'INTEGER16',
    datatypes.INTEGER32: 'INTEGER32',
    datatypes.UNSIGNED8: 'UNSIGNED8',
    datatypes.UNSIGNED16: 'UNSIGNED16',
    datatypes.UNSIGNED32: 'UNSIGNED32',
    datatypes.REAL32: 'REAL32',
    datatypes.VISIBLE_STRING: 'VISIBLE_STRING',
    datatypes.OCTET_STRING: 'OCTET_STRING',
    datatypes.UNICODE_STRING: 'UNICODE_STRING',
    datatypes.TIME_OF_DAY: 'TIME_OF_DAY',
    datatypes.TIME_DIFFERENCE: 'TIME_DIFF',
    datatypes.DOMAIN: 'DOMAIN',
    datatypes.INTEGER24: 'INTEGER24',
    datatypes.REAL64: 'REAL64',
    datatypes.INTEGER40: 'INTEGER40',
    datatypes.INTEGER48: 'INTEGER48',
    datatypes.INTEGER56: 'INTEGER56',
    datatypes.INTEGER64: 'INTEGER64',
    datatypes.UNSIGNED24: 'UNSIGNED24',
    datatypes.UNSIGNED40: 'UNSIGNED40',
    datatypes.UNSIGNED48: 'UNSIGNED48',
    datatypes.UNSIGNED56: 'UNSIGNED56',
    datatypes.UNSIGNED64: 'UNSIGNED64',
    MAC_ADDRESS: 'MAC_ADDRESS',
    IP_ADDRESS: 'IP_ADDRESS',
    NETTIME: 'NETTIME',
}
"""Raw data type code -> human readable data type name."""


def _unsigned(nBits: int) -> Tuple[int, int]:
    return 0, (1 << nBits) - 1


def _signed(nBits: int) -> Tuple[int, int]:
    return -(1 << (nBits - 1)), (1 << (nBits - 1)) - 1


INTEGER_RANGES: Dict[int, Tuple[int, int]] = {
    datatypes.BOOLEAN: (0, 1),
    datatypes.INTEGER8: _signed(8),
    datatypes.INTEGER16: _signed(16),
    datatypes.INTEGER24: _signed(24),
    datatypes.INTEGER32: _signed(32),
    datatypes.INTEGER40: _signed(40),
    datatypes.INTEGER48: _signed(48),
    datatypes.INTEGER56: _signed(56),
    datatypes.INTEGER64: _signed(64),
    datatypes.UNSIGNED8: _unsigned(8),
    datatypes.UNSIGNED16: _unsigned(16),
    datatypes.UNSIGNED24: _unsigned(24),
    datatypes.UNSIGNED32: _unsigned(32),
    datatypes.UNSIGNED40: _unsigned(40),
    datatypes.UNSIGNED48: _unsigned(48),
    datatypes.UNSIGNED56: _unsigned(56),
    datatypes.UNSIGNED64: _unsigned(64),
}
"""Integer data type code -> (min, max) value range."""


def data_type_name(code: Optional[int]) -> str:
    """Human readable data type name. Empty string for unknown or absent codes.

    Example:
        >>> data_type_name(0x7)
        'UNSIGNED32'
    """
    if code is None:
        return ''

    return DATA_TYPE_NAMES.get(code, '')


def _lookup(enumType: type, value: str):
    """Case insensitive enum lookup by value."""
    for member in enumType:
        if member.value.lower() == value.strip().lower():
            return member

    raise ValueError(f'{value!r} is not a valid {enumType.__name__}')


def parse_access_type(value: str) -> AccessType:
    """Parse access type. Case insensitive."""
    return _lookup(AccessType, value)


def parse_pdo_mapping(value: str) -> PdoMapping:
    """Parse PDO mapping directive. Case insensitive."""
    return _lookup(PdoMapping, value)


def parse_object_type(value: str):
    """Parse numeric object type. Unknown object codes stay integers."""
    code = int(value, 10)
    try:
        return ObjectType(code)
    except ValueError:
        return code
