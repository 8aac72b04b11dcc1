"""XPath addressing of objects and sub-objects inside device description
documents.

Indices are serialized as uppercase hex without ``0x`` prefix and zero padded to
their byte width (two bytes for the index, one byte for the sub-index). These
locators get persisted by other components. Changing the format breaks already
written project files.

Example:
    >>> object_xpath(0x1006)
    "//Object[@index='1006']"

    >>> subobject_xpath(0x1A00, 1, prefix='plk')
    "//plk:Object[@index='1A00']/plk:SubObject[@subIndex='01']"
"""
from typing import Optional, Union

from odsync.constants import HEX_PREFIX, INDEX_BYTES, SUBINDEX_BYTES


OBJECT_TAG: str = 'Object'
"""Element name of dictionary objects."""

SUBOBJECT_TAG: str = 'SubObject'
"""Element name of dictionary sub-objects."""

IndexLike = Union[int, bytes, str]


def hex_raw(value: int, nBytes: int) -> str:
    """Raw uppercase hex string, zero padded to byte width.

    Args:
        value: Non-negative integer.
        nBytes: Width in bytes.

    Returns:
        Hex string without prefix.

    Raises:
        ValueError: Value does not fit into nBytes.

    Example:
        >>> hex_raw(0xA, 2)
        '000A'
    """
    if not 0 <= value < (1 << (8 * nBytes)):
        raise ValueError(f'{value!r} does not fit into {nBytes} byte(s)!')

    return format(value, f'0{2 * nBytes}X')


def index_raw(index: int) -> str:
    """Raw document form of an object index."""
    return hex_raw(index, INDEX_BYTES)


def subindex_raw(subIndex: int) -> str:
    """Raw document form of a sub-index."""
    return hex_raw(subIndex, SUBINDEX_BYTES)


def qualify(name: str, prefix: Optional[str] = None) -> str:
    """Prefix element name with namespace prefix (if any)."""
    if prefix:
        return f'{prefix}:{name}'

    return name


def object_xpath(index: int, prefix: Optional[str] = None) -> str:
    """XPath locator of an object.

    Args:
        index: Object index.
        prefix (optional): Namespace prefix for element names.

    Returns:
        XPath expression.
    """
    return f"//{qualify(OBJECT_TAG, prefix)}[@index='{index_raw(index)}']"


def subobject_xpath(index: int, subIndex: int, prefix: Optional[str] = None) -> str:
    """XPath locator of a sub-object.

    Args:
        index: Object index of the parent.
        subIndex: Sub-index.
        prefix (optional): Namespace prefix for element names.

    Returns:
        XPath expression.
    """
    parent = object_xpath(index, prefix)
    tag = qualify(SUBOBJECT_TAG, prefix)
    return f"{parent}/{tag}[@subIndex='{subindex_raw(subIndex)}']"


def parse_index(value: IndexLike) -> int:
    """Parse index or sub-index from its various forms.

      - int: Numeric value.
      - bytes: Big endian bytes (hexBinary).
      - str with ``0x`` prefix: Hex display form.
      - str without prefix: Raw hex form as found in documents.

    Args:
        value: Index to parse.

    Returns:
        Numeric index value.

    Raises:
        ValueError: Unparsable index.

    Example:
        >>> parse_index('0x1006'), parse_index('1006'), parse_index(b'\\x10\\x06')
        (4102, 4102, 4102)
    """
    if isinstance(value, bool):
        raise ValueError(f'Invalid index {value!r}')

    if isinstance(value, int):
        return value

    if isinstance(value, bytes):
        if not value:
            raise ValueError('Empty index bytes')

        return int.from_bytes(value, 'big')

    if isinstance(value, str):
        text = value.strip()
        if text[:2].lower() == HEX_PREFIX:
            text = text[2:]

        if not text:
            raise ValueError(f'Invalid index {value!r}')

        return int(text, 16)

    raise ValueError(f'Invalid index {value!r}')
