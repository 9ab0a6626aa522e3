#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmldown/nodes.py
"""Element tree consumed by the Markdown visitor.

The visitor never sees parser-specific objects. Parsed HTML is copied into
this small tree of :class:`ElementNode` and :class:`TextNode` instances, so a
tree built by hand in tests renders exactly like one produced by
BeautifulSoup.

Ownership is strictly top-down: a node belongs to its parent's ``children``
list. The ``parent`` attribute is a weak reference used only for contextual
lookups such as "am I inside a ``<pre>``".

"""

from __future__ import annotations

import weakref
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Optional, Union

from htmldown.constants import DOCUMENT_TAG


class _ChildMixin:
    """Weak parent link shared by element and text nodes."""

    _parent_ref: Optional[weakref.ReferenceType[ElementNode]] = None

    @property
    def parent(self) -> Optional[ElementNode]:
        """Enclosing element, or None for the root or a detached node."""
        return self._parent_ref() if self._parent_ref is not None else None

    def ancestors(self) -> Iterator[ElementNode]:
        """Iterate over enclosing elements, innermost first."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def has_ancestor(self, *tags: str) -> bool:
        """Return True if any enclosing element has one of ``tags``."""
        wanted = {tag.lower() for tag in tags}
        return any(node.tag in wanted for node in self.ancestors())


@dataclass(eq=False)
class TextNode(_ChildMixin):
    """Character data inside an element.

    Parameters
    ----------
    text : str
        Raw text with HTML entities already decoded

    """

    text: str
    tag: None = field(default=None, init=False)

    def text_content(self) -> str:
        return self.text


@dataclass(eq=False)
class ElementNode(_ChildMixin):
    """An HTML element.

    Parameters
    ----------
    tag : str
        Element name; stored lower-cased
    attributes : dict[str, str], optional
        Attribute values keyed by name
    children : list[Node], optional
        Child nodes in document order; their parent link is set on construction

    """

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.tag = self.tag.lower()
        self.attributes = {name.lower(): value for name, value in self.attributes.items()}
        for child in self.children:
            child._parent_ref = weakref.ref(self)

    def append(self, child: Node) -> Node:
        """Append ``child`` and make this element its parent."""
        child._parent_ref = weakref.ref(self)
        self.children.append(child)
        return child

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return an attribute value (case-insensitive name)."""
        return self.attributes.get(name.lower(), default)

    def get_int(self, name: str, default: int) -> int:
        """Return an integer attribute such as ``start`` or ``colspan``, or ``default`` if absent or malformed."""
        try:
            return int((self.get(name) or "").strip())
        except ValueError:
            return default

    def text_content(self) -> str:
        """Concatenated text of all descendant text nodes."""
        return "".join(child.text_content() for child in self.children)

    def find(self, tag: str) -> Optional[ElementNode]:
        """Return the first descendant element with ``tag`` in document order."""
        tag = tag.lower()
        for child in self.children:
            if isinstance(child, ElementNode):
                if child.tag == tag:
                    return child
                found = child.find(tag)
                if found is not None:
                    return found
        return None

    @property
    def is_document(self) -> bool:
        return self.tag == DOCUMENT_TAG

    def __repr__(self) -> str:
        return f"ElementNode(tag={self.tag!r}, attributes={self.attributes!r}, children={len(self.children)})"


Node = Union[ElementNode, TextNode]


def document(*children: Node) -> ElementNode:
    """Create a document root holding ``children``."""
    return ElementNode(DOCUMENT_TAG, children=list(children))
