"""Actual value edit pipeline. Carries an edit from proposal to persisted
state:

  1. Reject entries which are not editable.
  2. Let the configuration engine validate the value. Rejected values change
     nothing.
  3. Update the in-memory actual value.
  4. Write the actual value into the device description.

Concurrent edits of the same entry are mutually exclusive end-to-end (entry
lock). The engine call happens outside of the document lock, steps 3 and 4
inside of it. A failed document write after the model got updated is a
:class:`odsync.error.DivergenceError`.
"""
from typing import Optional

from lxml import etree

from odsync.configuration import CONFIG
from odsync.engine import Validator, error_message
from odsync.error import AddressingError, DivergenceError, NotEditable, ValidationError
from odsync.logging import get_logger
from odsync.xdd.mutation import Attribute, update_attribute


LOGGER = get_logger(__name__, parent=None)

ACTUAL_VALUE: str = 'actualValue'
"""Actual value attribute name."""

AUTOSAVE = CONFIG['Document']['AUTOSAVE']


def _write_actual_value(entry, value: str):
    """Write actual value into the device description. Called with the
    document lock held.
    """
    doc = entry.node.xdc
    try:
        written = update_attribute(doc, entry.xpath, Attribute(ACTUAL_VALUE, value))
    except (etree.LxmlError, ValueError) as err:
        raise DivergenceError(f'Could not write actual value of {entry}: {err}') from err

    if not written:
        raise DivergenceError(f'{entry.xpath!r} does not resolve. Actual value of {entry} not written!')

    if AUTOSAVE and doc.filepath:
        try:
            doc.save()
        except (OSError, etree.LxmlError) as err:
            raise DivergenceError(f'Could not save {doc}: {err}') from err


def propose_actual_value(entry, value: str, validate: Validator, writeToXdc: bool = True):
    """Edit actual value of an entry or sub-entry.

    Args:
        entry: Dictionary entry or sub-entry.
        value: Proposed actual value.
        validate: Configuration engine validator.
        writeToXdc (optional): Also write the value into the device
            description.

    Raises:
        NotEditable: Entry can not be edited.
        ValidationError: Engine rejected the value. Nothing changed.
        DivergenceError: Device description could not be written. In-memory
            value is already updated.
    """
    if not entry.is_actual_value_editable():
        raise NotEditable(f'Actual value of {entry} is not editable!')

    node = entry.node
    with entry.lock:
        result = validate(node.networkId, node.nodeId, entry.index, value, subIndex=entry.subIndex)
        if not result.successful:
            msg = error_message(result)
            LOGGER.info('Rejected %r for %s: %s', value, entry, msg)
            raise ValidationError(msg)

        with node.xdc.lock:
            entry.assign_actual_value(value)
            if writeToXdc:
                _write_actual_value(entry, value)

    LOGGER.debug('Actual value of %s is now %r', entry, value)


def try_actual_value(entry, value: str, validate: Validator) -> Optional[str]:
    """Cell editor flavor of :func:`propose_actual_value`.

    Returns:
        None if the value was accepted. Validation message otherwise.
    """
    try:
        propose_actual_value(entry, value, validate)
    except ValidationError as err:
        return str(err)

    return None


def force_actual_value(entry, force: bool = True, writeToProjectFile: bool = True) -> bool:
    """Force or unforce the actual value of an entry in the project file.

    Args:
        entry: Dictionary entry or sub-entry.
        force (optional): Force or unforce.
        writeToProjectFile (optional): Save project file to disk afterwards
            (if it has a file path).

    Returns:
        If the project file changed.

    Raises:
        AddressingError: Node has no project file or is not part of it.
    """
    node = entry.node
    if node.project is None:
        raise AddressingError(f'{node} has no project file!')

    project = node.project
    with entry.lock:
        changed = project.force(node.nodeId, entry.index, entry.subIndex, force)
        if changed and writeToProjectFile and project.document.filepath:
            project.document.save()

    return changed
