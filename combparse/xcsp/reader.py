# coding: utf-8
"""
Event-driven reading of XCSP3 documents.

The XML itself is tokenized by ``xml.etree.ElementTree.XMLPullParser``; the
document is fed chunk by chunk and every variable or constraint is handed to
an ``XcspCallback`` as soon as its closing tag has been read.  Handled
elements are cleared and detached from their parent so that memory does not
grow with the instance.

Supported elements: ``<var>``, ``<array>`` (one domain for all cells),
``<intension>``, ``<block>`` and ``<group>`` of intension constraints.
Every other kind of constraint is rejected, as are objectives.
"""
import itertools
import logging
import re
import xml.etree.ElementTree as ET
from typing import Dict, List, Sequence

from combparse.utils.exceptions import StructuralMismatchError, UnsupportedConstructError
from combparse.xcsp.callback import XcspCallback
from combparse.xcsp.functional import read_expression

logger = logging.getLogger(__name__)

_CONSTRAINT_CONTAINERS = frozenset({"constraints", "block"})
_ARRAY_SIZE = re.compile(r"\[(\d+)\]")
_PARAMETER = re.compile(r"%(\d+)")


def parse_domain(text: str) -> Sequence[int]:
    """
    Read an integer domain such as ``0..10`` or ``1 3 5..7``.

    :return: a ``range`` for a single interval, the sorted values otherwise
    :raises StructuralMismatchError: if the domain is empty
    :raises UnsupportedConstructError: if it contains non-integer values
    """
    tokens = text.split() if text else []
    if not tokens:
        raise StructuralMismatchError("Empty domain")

    parts = []
    for token in tokens:
        if ".." in token:
            lower, upper = token.split("..", 1)
            parts.append(range(_to_int(lower), _to_int(upper) + 1))
        else:
            parts.append([_to_int(token)])

    if len(parts) == 1 and isinstance(parts[0], range):
        return parts[0]
    return sorted(set(itertools.chain.from_iterable(parts)))


def _to_int(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise UnsupportedConstructError(f"Non integer value in domain: {token!r}") from None


def _intension_text(elem: ET.Element) -> str:
    """The expression of an ``<intension>``, written inline or in ``<function>``."""
    function = elem.find("function")
    text = function.text if function is not None else elem.text
    if not text or not text.strip():
        raise StructuralMismatchError("Empty intension constraint")
    return text.strip()


class XcspReader:
    """Pushes the content of an XCSP3 document to an ``XcspCallback``."""

    def __init__(self, callback: XcspCallback):
        self.callback = callback
        self._parser = ET.XMLPullParser(events=("start", "end"))
        self._open_elements: List[ET.Element] = []
        self._domains: Dict[str, Sequence[int]] = {}
        self._seen_instance = False

    def feed(self, data: str) -> None:
        """Parse a chunk of the document and handle what it completes."""
        try:
            self._parser.feed(data)
        except ET.ParseError as e:
            raise StructuralMismatchError(f"Malformed XCSP3 document: {e}") from e
        self._handle_events()

    def close(self) -> None:
        """Signal the end of the document."""
        try:
            self._parser.close()
        except ET.ParseError as e:
            raise StructuralMismatchError(f"Malformed XCSP3 document: {e}") from e
        self._handle_events()
        if not self._seen_instance:
            raise StructuralMismatchError("Element <instance> expected")

    def _handle_events(self) -> None:
        for event, elem in self._parser.read_events():
            if event == "start":
                self._start(elem)
                self._open_elements.append(elem)
            else:
                self._open_elements.pop()
                self._end(elem)

    def _start(self, elem: ET.Element) -> None:
        if elem.tag == "instance":
            self._seen_instance = True
            self.callback.begin_instance(elem.get("type", "CSP"))

    def _end(self, elem: ET.Element) -> None:
        if elem.tag == "instance":
            self.callback.end_instance()
            return

        if not self._open_elements:
            return
        parent_elem = self._open_elements[-1]
        parent = parent_elem.tag
        if parent == "variables":
            self._variable(elem)
        elif parent in _CONSTRAINT_CONTAINERS:
            self._constraint(elem)
        elif parent == "objectives":
            self.callback.build_objective(elem.tag)
        else:
            return
        elem.clear()
        parent_elem.remove(elem)

    def _variable(self, elem: ET.Element) -> None:
        if elem.get("type", "integer") != "integer":
            raise UnsupportedConstructError(f"Variables of type {elem.get('type')} are not supported")

        identifier = elem.get("id")
        if not identifier:
            raise StructuralMismatchError(f"Attribute `id' expected on <{elem.tag}>")

        if elem.tag == "var":
            domain = self._domain_of(elem)
            self._domains[identifier] = domain
            self.callback.build_variable_integer(identifier, domain)

        elif elem.tag == "array":
            if elem.find("domain") is not None:
                raise UnsupportedConstructError("Arrays with several domains are not supported")
            sizes = [int(size) for size in _ARRAY_SIZE.findall(elem.get("size", ""))]
            if not sizes:
                raise StructuralMismatchError(f"Attribute `size' expected on array {identifier}")
            domain = self._domain_of(elem)
            self._domains[identifier] = domain
            for indexes in itertools.product(*(range(size) for size in sizes)):
                name = identifier + "".join(f"[{i}]" for i in indexes)
                self.callback.build_variable_integer(name, domain)

        else:
            raise UnsupportedConstructError(f"Element <{elem.tag}> is not supported in <variables>")

    def _domain_of(self, elem: ET.Element) -> Sequence[int]:
        reference = elem.get("as")
        if reference is None:
            return parse_domain(elem.text)
        if reference not in self._domains:
            raise StructuralMismatchError(f"Unknown variable in attribute `as': {reference}")
        return self._domains[reference]

    def _constraint(self, elem: ET.Element) -> None:
        identifier = elem.get("id", "")
        if elem.tag == "intension":
            self.callback.build_constraint_intension(identifier, read_expression(_intension_text(elem)))
        elif elem.tag == "group":
            self._group(identifier, elem)
        elif elem.tag != "block":
            self.callback.build_constraint(identifier, elem.tag)

    def _group(self, identifier: str, elem: ET.Element) -> None:
        """Instantiate the template of a group once per ``<args>``."""
        children = list(elem)
        if not children:
            raise StructuralMismatchError("Empty group")
        template = children[0]
        if template.tag != "intension":
            self.callback.build_constraint(identifier, template.tag)
            return
        text = _intension_text(template)

        nb_instances = 0
        for args in children[1:]:
            if args.tag != "args":
                continue
            nb_instances += 1
            values = (args.text or "").split()
            try:
                instance = _PARAMETER.sub(lambda m: values[int(m.group(1))], text)
            except IndexError:
                raise StructuralMismatchError(
                    f"Not enough arguments in group {identifier}: {values}") from None
            self.callback.build_constraint_intension(identifier, read_expression(instance))
        logger.debug("Group %s instantiated %d times", identifier, nb_instances)
