#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Footnote resolution for one export pass.

The index is built once per pass from the (already filtered) document. It
answers the three questions footnote rules ask: what is the definition of
this reference, which number does this reference carry, and which labelled
notes are first referenced inside a given subtree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from orghugo.ast import Document, FootnoteDefinition, FootnoteReference, Node, iter_nodes
from orghugo.exceptions import RenderingError, UnresolvedFootnoteError


@dataclass
class FootnoteIndex:
    """Definitions and occurrence numbers of the footnotes of one document.

    References are keyed by identity: two ``[fn:a]`` references are two
    entries with two numbers, both resolving to the same definition.
    Numbers are 1-based and follow document order, including references
    nested inside footnote definitions.
    """

    _definitions: Dict[str, List[Node]] = field(default_factory=dict, repr=False)
    _block_labels: set[str] = field(default_factory=set, repr=False)
    _numbers: Dict[int, int] = field(default_factory=dict, repr=False)
    _first_reference: Dict[str, int] = field(default_factory=dict, repr=False)
    _references: List[FootnoteReference] = field(default_factory=list, repr=False)

    @classmethod
    def build(cls, document: Document) -> FootnoteIndex:
        """Index every footnote reference and definition of ``document``.

        Parameters
        ----------
        document : Document
            Document about to be exported

        Returns
        -------
        FootnoteIndex
            New index; when a label is defined twice the first definition wins

        """
        index = cls()
        for node in iter_nodes(document):
            if isinstance(node, FootnoteDefinition):
                if node.identifier not in index._definitions:
                    index._definitions[node.identifier] = node.content
                    index._block_labels.add(node.identifier)
            elif isinstance(node, FootnoteReference):
                index._references.append(node)
                index._numbers[id(node)] = len(index._references)
                if node.identifier:
                    index._first_reference.setdefault(node.identifier, id(node))
                    if node.definition is not None:
                        index._definitions.setdefault(node.identifier, node.definition)
        return index

    def __len__(self) -> int:
        """Return the number of footnote references."""
        return len(self._references)

    def definition(self, reference: FootnoteReference) -> List[Node]:
        """Return the definition content of ``reference``.

        Inline definitions belong to their own reference. Labelled references
        resolve through the label.

        Raises
        ------
        UnresolvedFootnoteError
            If no definition exists for the reference's label

        """
        if reference.definition is not None:
            return reference.definition
        try:
            return self._definitions[reference.identifier]
        except KeyError:
            raise UnresolvedFootnoteError(reference.identifier) from None

    def number(self, reference: FootnoteReference) -> int:
        """Return the 1-based occurrence number of ``reference``.

        Raises
        ------
        RenderingError
            If the reference is not part of the indexed document

        """
        try:
            return self._numbers[id(reference)]
        except KeyError:
            raise RenderingError(
                f"Footnote reference [fn:{reference.identifier}] is not part of the exported document",
                rendering_stage="footnote-reference",
            ) from None

    def is_first_reference(self, reference: FootnoteReference) -> bool:
        """Whether ``reference`` is the first reference to its label."""
        return self._first_reference.get(reference.identifier) == id(reference)

    def first_references_in(self, node: Node) -> List[FootnoteReference]:
        """Return the labelled references first met inside ``node``.

        Only labels defined by a ``[fn:label] ...`` definition block are
        returned; notes defined inline already show their text in place.

        Raises
        ------
        UnresolvedFootnoteError
            If one of the references has no definition anywhere

        """
        found: List[FootnoteReference] = []
        for child in iter_nodes(node):
            if not isinstance(child, FootnoteReference) or child.definition is not None:
                continue
            if not self.is_first_reference(child):
                continue
            if child.identifier not in self._definitions:
                raise UnresolvedFootnoteError(child.identifier)
            if child.identifier in self._block_labels:
                found.append(child)
        return found
