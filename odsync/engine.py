"""Configuration engine interface. The engine validates proposed actual values
on protocol level (and applies them to its own network model).

An engine is a plain function (strategy) with the signature::

    validate(networkId, nodeId, index, value, subIndex=None) -> Result

:func:`accept_all` accepts everything, :func:`limits_validator` is an offline
engine checking integer values against data type range and object limits.
Native engine bindings can be wrapped into the same signature.
"""
import enum
from typing import Callable, Dict, NamedTuple, Optional

from odsync.logging import get_logger
from odsync.od.definitions import INTEGER_RANGES, data_type_name
from odsync.utils import parse_integer


LOGGER = get_logger(__name__, parent=None)


class ErrorCode(enum.IntEnum):

    """Configuration engine error codes."""

    SUCCESS = 0
    NETWORK_DOES_NOT_EXIST = 1
    NODE_DOES_NOT_EXIST = 2
    OBJECT_DOES_NOT_EXIST = 3
    SUBOBJECT_DOES_NOT_EXIST = 4
    DATATYPE_MISMATCH = 5
    VALUE_NOT_WITHIN_RANGE = 6
    VALUE_EXCEEDS_DATATYPE_RANGE = 7
    ACCESS_VIOLATION = 8
    UNSUPPORTED_DATATYPE = 9
    UNHANDLED_EXCEPTION = 255


ERROR_MESSAGES: Dict[ErrorCode, str] = {
    ErrorCode.SUCCESS: 'Success',
    ErrorCode.NETWORK_DOES_NOT_EXIST: 'Network does not exist',
    ErrorCode.NODE_DOES_NOT_EXIST: 'Node does not exist',
    ErrorCode.OBJECT_DOES_NOT_EXIST: 'Object does not exist',
    ErrorCode.SUBOBJECT_DOES_NOT_EXIST: 'Sub-object does not exist',
    ErrorCode.DATATYPE_MISMATCH: 'Value does not match data type',
    ErrorCode.VALUE_NOT_WITHIN_RANGE: 'Value not within low / high limit',
    ErrorCode.VALUE_EXCEEDS_DATATYPE_RANGE: 'Value exceeds data type range',
    ErrorCode.ACCESS_VIOLATION: 'Object can not be written',
    ErrorCode.UNSUPPORTED_DATATYPE: 'Unsupported data type',
    ErrorCode.UNHANDLED_EXCEPTION: 'Unhandled exception in configuration engine',
}
"""Error code -> display message."""


class Result(NamedTuple):

    """Configuration engine result."""

    successful: bool
    """If the value was accepted."""

    errorCode: int = ErrorCode.SUCCESS
    """Engine error code."""

    errorString: str = ''
    """Engine specific error description (optional)."""

    @classmethod
    def success(cls) -> 'Result':
        return cls(True)

    @classmethod
    def failure(cls, errorCode: int, errorString: str = '') -> 'Result':
        return cls(False, errorCode, errorString)


Validator = Callable[..., Result]
"""validate(networkId, nodeId, index, value, subIndex=None) -> Result"""


def error_message(result: Result) -> str:
    """Display message of a result. Engine error description verbatim if
    present. Looked up from the error code otherwise.
    """
    if result.errorString:
        return result.errorString

    try:
        return ERROR_MESSAGES[ErrorCode(result.errorCode)]
    except ValueError:
        return f'Unknown configuration engine error {result.errorCode}'


def accept_all(networkId: str, nodeId: int, index: int, value: str, subIndex: Optional[int] = None) -> Result:
    """Engine which accepts every value."""
    return Result.success()


def _check_integer(entry, value: str) -> Result:
    """Check integer value of entry against data type range and limits."""
    bounds = INTEGER_RANGES.get(entry.dataTypeCode)
    if bounds is None:
        return Result.success()

    name = data_type_name(entry.dataTypeCode)
    try:
        number = parse_integer(value)
    except ValueError:
        return Result.failure(
            ErrorCode.DATATYPE_MISMATCH,
            f'{value!r} is not a valid {name} value',
        )

    lower, upper = bounds
    if not lower <= number <= upper:
        return Result.failure(
            ErrorCode.VALUE_EXCEEDS_DATATYPE_RANGE,
            f'{value!r} exceeds {name} range [{lower}, {upper}]',
        )

    for limit, isLow in [(entry.lowLimit, True), (entry.highLimit, False)]:
        if limit is None:
            continue

        try:
            limitValue = parse_integer(limit)
        except ValueError:
            LOGGER.warning('Ignoring malformed limit %r of %s', limit, entry)
            continue

        if (isLow and number < limitValue) or (not isLow and number > limitValue):
            return Result.failure(
                ErrorCode.VALUE_NOT_WITHIN_RANGE,
                f'{value!r} not within [{entry.lowLimit}, {entry.highLimit}]',
            )

    return Result.success()


def limits_validator(node) -> Validator:
    """Offline engine for a device node. Checks that the addressed object exists
    and is writable, then integer values against their data type range and the
    object's low / high limits. Non integer data types are accepted as is.

    Args:
        node: Device node to validate against.

    Returns:
        Validator function.
    """
    def validate(networkId: str, nodeId: int, index: int, value: str, subIndex: Optional[int] = None) -> Result:
        if networkId != node.networkId:
            return Result.failure(ErrorCode.NETWORK_DOES_NOT_EXIST)

        if nodeId != node.nodeId:
            return Result.failure(ErrorCode.NODE_DOES_NOT_EXIST)

        entry = node.objectDictionary.find(index, subIndex)
        if entry is None:
            if subIndex is None or index not in node.objectDictionary:
                return Result.failure(ErrorCode.OBJECT_DOES_NOT_EXIST)

            return Result.failure(ErrorCode.SUBOBJECT_DOES_NOT_EXIST)

        if not entry.is_actual_value_editable():
            return Result.failure(ErrorCode.ACCESS_VIOLATION)

        return _check_integer(entry, value)

    return validate
