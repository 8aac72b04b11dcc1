"""Targeted XML document mutations addressed by XPath.

All operations work on the live element tree of an
:class:`odsync.xdd.document.XmlDocument` (no re-serialization in between), so
that an earlier mutation is visible to the XPath resolution of a later one.
Unrelated content (siblings, ordering, namespace declarations, surrounding
whitespace) stays untouched.

Two flavors of attribute writes:
  - :func:`set_attribute`: Set on *all* matches. Bulk application, zero
    matches is fine.
  - :func:`update_attribute`: Set on the *first* match only. Precise single
    field edit, zero matches gets reported.
"""
import copy
from typing import NamedTuple, Optional

from lxml import etree

from odsync.logging import get_logger
from odsync.xdd.document import Namespace, XmlDocument


LOGGER = get_logger(__name__, parent=None)


class Attribute(NamedTuple):

    """Attribute to write."""

    name: str
    value: str


def _renamespace(element: etree._Element, uri: Optional[str]):
    """Move element and its descendants sharing its namespace to another
    namespace.
    """
    old = etree.QName(element).namespace
    for ele in element.iter(etree.Element):
        qname = etree.QName(ele)
        if qname.namespace != old:
            continue

        if uri:
            ele.tag = etree.QName(uri, qname.localname).text
        else:
            ele.tag = qname.localname


def _join_text(before: Optional[str], after: Optional[str]) -> Optional[str]:
    """Join text around a removed element. Whitespace only text gets replaced
    by what follows (indentation of the next sibling).
    """
    if not (before or '').strip():
        return after

    if not (after or '').strip():
        return before

    return before + after


def _detach(element: etree._Element):
    """Remove element from its parent but keep its tail text."""
    parent = element.getparent()
    previous = element.getprevious()
    if previous is not None:
        previous.tail = _join_text(previous.tail, element.tail)
    else:
        parent.text = _join_text(parent.text, element.tail)

    parent.remove(element)


def add_element(
        doc: XmlDocument,
        xpath: str,
        newElement: etree._Element,
        position: Optional[int] = None,
        namespace: Optional[Namespace] = None,
    ) -> int:
    """Add new element as child to every element matching xpath. The new
    element takes over the namespace of its parent. The first match receives
    the given element, further matches a deep copy of it.

    Args:
        doc: Document to mutate.
        xpath: Locator of the parent element(s).
        newElement: Element to add.
        position (optional): Child position to insert at. Appended by default.
        namespace (optional): Namespace binding for xpath. Document namespace
            by default.

    Returns:
        Number of insertions.

    Raises:
        ValueError: Position would leave a gap in any of the parents. Nothing
            gets inserted in that case.
    """
    with doc.lock:
        parents = doc.find_all(xpath, namespace)
        if not parents:
            LOGGER.debug('add_element(): %r matches nothing', xpath)
            return 0

        if position is not None:
            for parent in parents:
                if not 0 <= position <= len(parent):
                    raise ValueError(
                        f'Invalid position {position} for {xpath!r} with'
                        f' {len(parent)} children'
                    )

        for nr, parent in enumerate(parents):
            child = newElement if nr == 0 else copy.deepcopy(newElement)
            if position is None:
                parent.append(child)
            else:
                parent.insert(position, child)

            # After insertion so that the parent's namespace declaration gets
            # reused
            _renamespace(child, etree.QName(parent).namespace)

        return len(parents)


def remove_element(doc: XmlDocument, xpath: str, namespace: Optional[Namespace] = None) -> int:
    """Remove all elements matching xpath. Matching nothing is a no-op.

    Args:
        doc: Document to mutate.
        xpath: Locator of the element(s) to remove.
        namespace (optional): Namespace binding for xpath.

    Returns:
        Number of removed elements.
    """
    with doc.lock:
        elements = doc.find_all(xpath, namespace)
        if not elements:
            LOGGER.debug('remove_element(): %r matches nothing', xpath)
            return 0

        removed = 0
        for element in elements:
            if element.getparent() is None:
                LOGGER.warning('remove_element(): Can not remove root element %r', xpath)
                continue

            _detach(element)
            removed += 1

        return removed


def set_attribute(doc: XmlDocument, xpath: str, attribute: Attribute, namespace: Optional[Namespace] = None) -> int:
    """Add or overwrite attribute on every element matching xpath.

    Returns:
        Number of updated elements.
    """
    with doc.lock:
        elements = doc.find_all(xpath, namespace)
        if not elements:
            LOGGER.debug('set_attribute(): %r matches nothing', xpath)

        for element in elements:
            element.set(attribute.name, attribute.value)

        return len(elements)


def update_attribute(doc: XmlDocument, xpath: str, attribute: Attribute, namespace: Optional[Namespace] = None) -> bool:
    """Add or overwrite attribute on the first element matching xpath.

    Returns:
        If an element got updated.
    """
    with doc.lock:
        element = doc.find_first(xpath, namespace)
        if element is None:
            LOGGER.error('update_attribute(): No element for %r', xpath)
            return False

        element.set(attribute.name, attribute.value)
        return True


def remove_attribute(doc: XmlDocument, xpath: str, attributeName: str, namespace: Optional[Namespace] = None) -> bool:
    """Remove attribute from the first element matching xpath (if present).

    Returns:
        If an element was found.
    """
    with doc.lock:
        element = doc.find_first(xpath, namespace)
        if element is None:
            LOGGER.error('remove_attribute(): No element for %r', xpath)
            return False

        element.attrib.pop(attributeName, None)
        return True
