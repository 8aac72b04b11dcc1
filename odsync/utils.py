"""Miscellaneous helpers."""
import collections


def update_dict_recursively(dct: dict, other: dict, default_factory: type = None) -> dict:
    """Update dictionary recursively in-place.

    Args:
        dct: Dictionary to update.
        other: Other dict to go through.
        default_factory: Default factory for intermediate dicts.

    Returns:
        Mutated input dictionary (for recursive calls).

    Example:
        >>> defaults = {'Document': {'PRETTY_PRINT': False, 'AUTOSAVE': False}}
        ... update_dict_recursively(defaults, {'Document': {'AUTOSAVE': True}})
        ... print(defaults['Document'])
        {'PRETTY_PRINT': False, 'AUTOSAVE': True}
    """
    if default_factory is None:
        default_factory = type(dct)

    for k, v in other.items():
        if isinstance(v, collections.abc.Mapping):
            dct[k] = update_dict_recursively(dct.get(k, default_factory()), v)
        else:
            dct[k] = v

    return dct


def parse_integer(literal: str) -> int:
    """Parse integer literal as found in device descriptions. Either decimal or
    hexadecimal with ``0x`` prefix. Leading zeros are fine.

    Args:
        literal: Value string.

    Returns:
        Integer value.

    Raises:
        ValueError: Not an integer literal.

    Example:
        >>> parse_integer('0x0A'), parse_integer('010'), parse_integer('-3')
        (10, 10, -3)
    """
    text = literal.strip()
    sign = 1
    if text.startswith('-'):
        sign = -1
        text = text[1:]

    if text[:2].lower() == '0x':
        return sign * int(text[2:], 16)

    return sign * int(text, 10)
