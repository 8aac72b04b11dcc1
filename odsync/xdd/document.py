"""XML document handle. Every mutation gets an explicit document passed in. No
global document state.

The document lock serializes XPath resolution and tree mutation. It is
reentrant so that callers can batch multiple mutations into one logical
transaction::

    with doc.lock:
        remove_attribute(doc, xpath, 'actualValue')
        update_attribute(doc, xpath, Attribute('denotation', 'Foo'))
"""
import re
import threading
from typing import List, NamedTuple, Optional, Union

from lxml import etree

from odsync.configuration import CONFIG
from odsync.logging import get_logger


ENCODING = CONFIG['Document']['ENCODING']
PRETTY_PRINT = CONFIG['Document']['PRETTY_PRINT']
DEFAULT_PREFIX = CONFIG['Document']['NAMESPACE_PREFIX']

XML_DECLARATION = re.compile(r'^\s*<\?xml[^>]*\?>')
"""XML declaration at the start of a document string."""


class Namespace(NamedTuple):

    """XML namespace and the prefix used for it in XPath expressions."""

    prefix: str
    uri: str


def _parser() -> etree.XMLParser:
    # Keep whitespace and comments so that untouched content round-trips
    return etree.XMLParser(remove_blank_text=False, remove_comments=False)


class XmlDocument:

    """Loaded XML document.

    Attributes:
        tree: Underlying lxml element tree.
        filepath: Where the document was loaded from / gets saved to.
        namespace: Namespace of the root element. None for un-namespaced
            documents.
        lock: Document wide mutation lock.
    """

    def __init__(self, tree: etree._ElementTree, filepath: Optional[str] = None, prefix: str = DEFAULT_PREFIX):
        """Args:
            tree: Parsed element tree.
            filepath (optional): File path of document.
            prefix (optional): XPath prefix for the root namespace.
        """
        self.tree = tree
        self.filepath = filepath
        self.lock = threading.RLock()
        self.logger = get_logger(__name__, parent=None)
        uri = etree.QName(tree.getroot()).namespace
        self.namespace: Optional[Namespace] = Namespace(prefix, uri) if uri else None

    @classmethod
    def load(cls, filepath: str, prefix: str = DEFAULT_PREFIX) -> 'XmlDocument':
        """Load document from file."""
        tree = etree.parse(filepath, _parser())
        return cls(tree, filepath, prefix)

    @classmethod
    def from_string(cls, string: Union[str, bytes], prefix: str = DEFAULT_PREFIX) -> 'XmlDocument':
        """Parse document from string. The XML declaration of text strings gets
        dropped, the text is already decoded. Bytes get decoded according to
        their declaration.
        """
        if isinstance(string, str):
            string = XML_DECLARATION.sub('', string, count=1).strip()

        root = etree.fromstring(string, _parser())
        return cls(root.getroottree(), prefix=prefix)

    @property
    def root(self) -> etree._Element:
        return self.tree.getroot()

    @property
    def prefix(self) -> Optional[str]:
        """XPath prefix for element names. None for un-namespaced documents."""
        if self.namespace is None:
            return None

        return self.namespace.prefix

    def compile(self, xpath: str, namespace: Optional[Namespace] = None) -> etree.XPath:
        """Compile XPath expression with namespace binding.

        Args:
            xpath: XPath expression.
            namespace (optional): Namespace binding. Document namespace by
                default.

        Returns:
            Compiled expression.
        """
        if namespace is None:
            namespace = self.namespace

        if namespace is None:
            return etree.XPath(xpath)

        return etree.XPath(xpath, namespaces={namespace.prefix: namespace.uri})

    def find_all(self, xpath: str, namespace: Optional[Namespace] = None) -> List[etree._Element]:
        """All elements matching xpath in document order."""
        with self.lock:
            result = self.compile(xpath, namespace)(self.tree)

        if not isinstance(result, list):
            raise ValueError(f'{xpath!r} does not select nodes!')

        # Comments and processing instructions are elements for lxml as well
        return [
            node for node in result
            if isinstance(node, etree._Element) and isinstance(node.tag, str)
        ]

    def find_first(self, xpath: str, namespace: Optional[Namespace] = None) -> Optional[etree._Element]:
        """First element matching xpath. None if nothing matches."""
        for element in self.find_all(xpath, namespace):
            return element

        return None

    def tostring(self) -> str:
        """Serialize document to string."""
        with self.lock:
            return etree.tostring(self.tree, encoding='unicode')

    def save(self, filepath: Optional[str] = None):
        """Save document to disk.

        Args:
            filepath (optional): Destination. Defaults to the path the
                document was loaded from.
        """
        if filepath is None:
            filepath = self.filepath

        if filepath is None:
            raise ValueError(f'{self} has no file path to save to!')

        with self.lock:
            self.tree.write(
                filepath,
                encoding=ENCODING,
                xml_declaration=True,
                pretty_print=PRETTY_PRINT,
            )

        self.filepath = filepath
        self.logger.debug('Saved %r', filepath)

    def __str__(self):
        return f'{type(self).__name__}({self.filepath!r})'
