"""
:mod:`cssbuilder` is a builder for CSS selectors.

:mod:`cssbuilder`

- is a single module;
- has no dependency outside `PSL <https://docs.python.org/3/library/>`_;
- only goes one way: selectors are built and serialized, never parsed;
- treats attribute, pseudo-class and pseudo-element payloads as opaque
  text,

so the file could be directly embedded in any Python 3 application.

A selector is built by calling one of the module-level functions
:func:`element`, :func:`id`, :func:`class_`, :func:`attribute`,
:func:`pseudo_class` or :func:`pseudo_element`, then chaining more
calls of the same names. Simple selectors must be appended in the order
mandated by CSS (element, id, classes, attributes, pseudo-classes,
pseudo-element), and element, id and pseudo-element may only appear
once; violations raise :class:`SelectorConstraintViolation` at the
offending call.

Simple example:

.. doctest::

   >>> import cssbuilder as css
   >>> css.id('main').class_('container').class_('editable').serialize()
   '#main.container.editable'
   >>> css.element('a').attr('href$=".png"').pseudo_class('focus').serialize()
   'a[href$=".png"]:focus'
   >>> css.combine(
   ...     css.element('div').id('main').class_('container').class_('draggable'),
   ...     '+',
   ...     css.combine(
   ...         css.element('table').id('data'),
   ...         '~',
   ...         css.combine(
   ...             css.element('tr').pseudo_class('nth-of-type(even)'),
   ...             ' ',
   ...             css.element('td').pseudo_class('nth-of-type(even)'),
   ...         ),
   ...     ),
   ... ).serialize()
   'div#main.container.draggable + table#data ~ tr:nth-of-type(even)   td:nth-of-type(even)'
   >>> css.class_('lead').id('intro')
   Traceback (most recent call last):
   ...
   cssbuilder.OutOfOrder: cannot append id to selector '.lead': ...
"""

import logging
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Tuple, Union

logger = logging.getLogger(__name__)

CombinatorLike = Union[str, "Combinator"]


class SelectorConstraintViolation(Exception):
    """
    Exception raised when an append would break the rules of a compound
    selector.

    The selector is left exactly as it was before the offending call.

    Attributes:
        selector (:class:`str`):
            Serialized selector before the rejected append.
        kind (:class:`SimpleSelectorType`):
            Type of the rejected simple selector.
        why (:class:`str`):
            Reason of the failure.
    """

    def __init__(self, selector: str, kind: "SimpleSelectorType", why: str) -> None:
        super().__init__(selector, kind, why)
        self.selector = selector
        self.kind = kind
        self.why = why

    def __str__(self) -> str:
        return "cannot append %s to selector %s: %s" % (
            self.kind.label,
            repr(self.selector),
            self.why,
        )


class DuplicateSingleton(SelectorConstraintViolation):
    """Element, id or pseudo-element appended a second time."""


class OutOfOrder(SelectorConstraintViolation):
    """Simple selector appended after one of higher precedence."""


# Enum: basis for poor man's algebraic data type. Values double as
# precedence ranks.
class SimpleSelectorType(Enum):
    """
    Simple selector types, in the order they must appear in a compound
    selector.

    Members correspond to the following forms of simple selector:

    - :attr:`ELEMENT`: ``div``;
    - :attr:`ID`: ``#id``;
    - :attr:`CLASS`: ``.class``;
    - :attr:`ATTRIBUTE`: ``[attr]``;
    - :attr:`PSEUDO_CLASS`: ``:pseudo-class``;
    - :attr:`PSEUDO_ELEMENT`: ``::pseudo-element``.
    """

    ELEMENT = 1
    ID = 2
    CLASS = 3
    ATTRIBUTE = 4
    PSEUDO_CLASS = 5
    PSEUDO_ELEMENT = 6

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")

    @property
    def is_singleton(self) -> bool:
        return self in _SINGLETONS

    def render(self, value: str) -> str:
        return _FORMATS[self].format(value)


_SINGLETONS = frozenset(
    (
        SimpleSelectorType.ELEMENT,
        SimpleSelectorType.ID,
        SimpleSelectorType.PSEUDO_ELEMENT,
    )
)

_FORMATS = {
    SimpleSelectorType.ELEMENT: "{}",
    SimpleSelectorType.ID: "#{}",
    SimpleSelectorType.CLASS: ".{}",
    SimpleSelectorType.ATTRIBUTE: "[{}]",
    SimpleSelectorType.PSEUDO_CLASS: ":{}",
    SimpleSelectorType.PSEUDO_ELEMENT: "::{}",
}


class Combinator(Enum):
    """
    Standard combinators.

    Members correspond to the following combinators:

    - :attr:`DESCENDANT`: ``A   B``;
    - :attr:`CHILD`: ``A > B``;
    - :attr:`NEXT_SIBLING`: ``A + B``;
    - :attr:`SUBSEQUENT_SIBLING`: ``A ~ B``.

    :func:`combine` pads every token with one space on each side, so the
    descendant combinator comes out as three spaces.
    """

    DESCENDANT = " "
    CHILD = ">"
    NEXT_SIBLING = "+"
    SUBSEQUENT_SIBLING = "~"


class _Serializable(object):
    # Subclasses implement serialize(); everything else is derived from it.
    def serialize(self) -> str:  # pragma: no cover
        raise NotImplementedError

    def stringify(self) -> str:
        """Alias of :meth:`serialize`."""
        return self.serialize()

    def __str__(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        return "<%s %s>" % (type(self).__name__, repr(self.serialize()))


class SelectorBase(_Serializable):
    """
    Common interface of every selector value, i.e. anything that can be
    an operand of :func:`combine`.
    """


class CompoundSelector(SelectorBase):
    """
    Represents a sequence of simple selectors without combinators, e.g.
    ``div#id.cls[attr]:hover::before``.

    Instances are created through the module-level facade functions and
    grown by chaining the append methods, each of which returns the
    selector itself.

    Attributes:
        pieces (:class:`Tuple`\\[:class:`Tuple`\\[:class:`SimpleSelectorType`, :class:`str`]]):
            Type and rendered text of each simple selector, in call
            order.
    """

    def __init__(self) -> None:
        self._pieces = []  # type: List[Tuple[SimpleSelectorType, str]]
        self._counts = {}  # type: Dict[SimpleSelectorType, int]
        self._max_rank = 0

    @property
    def pieces(self) -> Tuple[Tuple[SimpleSelectorType, str], ...]:
        return tuple(self._pieces)

    def serialize(self) -> str:
        return "".join(text for _, text in self._pieces)

    def element(self, value: str) -> "CompoundSelector":
        """Appends a type selector: ``value``."""
        return self._append(SimpleSelectorType.ELEMENT, value)

    def id(self, value: str) -> "CompoundSelector":
        """Appends an ID selector: ``#value``."""
        return self._append(SimpleSelectorType.ID, value)

    def class_(self, value: str) -> "CompoundSelector":
        """Appends a class selector: ``.value``."""
        return self._append(SimpleSelectorType.CLASS, value)

    def attribute(self, value: str) -> "CompoundSelector":
        """Appends an attribute selector: ``[value]``."""
        return self._append(SimpleSelectorType.ATTRIBUTE, value)

    def attr(self, value: str) -> "CompoundSelector":
        """Alias of :meth:`attribute`."""
        return self.attribute(value)

    def pseudo_class(self, value: str) -> "CompoundSelector":
        """Appends a pseudo-class: ``:value``."""
        return self._append(SimpleSelectorType.PSEUDO_CLASS, value)

    def pseudo_element(self, value: str) -> "CompoundSelector":
        """Appends a pseudo-element: ``::value``."""
        return self._append(SimpleSelectorType.PSEUDO_ELEMENT, value)

    # Nothing is committed until both checks pass.
    def _append(self, kind: SimpleSelectorType, value: str) -> "CompoundSelector":
        if not isinstance(value, str):
            raise TypeError(
                "%s payload must be a str, got %s" % (kind.label, type(value).__name__)
            )
        if kind.is_singleton and self._counts.get(kind):
            self._reject(
                DuplicateSingleton,
                kind,
                "element, id and pseudo-element may occur only once in a selector",
            )
        if kind.value < self._max_rank:
            self._reject(
                OutOfOrder,
                kind,
                "simple selectors must be arranged in the following order: "
                "element, id, class, attribute, pseudo-class, pseudo-element",
            )
        self._pieces.append((kind, kind.render(value)))
        self._counts[kind] = self._counts.get(kind, 0) + 1
        self._max_rank = max(self._max_rank, kind.value)
        return self

    def _reject(self, exc_class: type, kind: SimpleSelectorType, why: str) -> None:
        selector = self.serialize()
        logger.debug("rejected %s after %s: %s", kind.label, repr(selector), why)
        raise exc_class(selector, kind, why)


class ComplexSelector(SelectorBase):
    """
    Represents two selectors joined by a combinator.

    Operands may be compound or complex selectors. They are held by
    reference and never modified, so the same selector can take part in
    any number of combinations. Serialization is computed on demand:
    left operand, the combinator token padded by one space on each side,
    right operand. Nested complex selectors are inlined verbatim,
    without parentheses.

    Attributes:
        left       (:class:`SelectorBase`)
        combinator (:class:`str`)
        right      (:class:`SelectorBase`)
    """

    def __init__(
        self, left: SelectorBase, combinator: CombinatorLike, right: SelectorBase
    ) -> None:
        _check_selector(left)
        _check_selector(right)
        if isinstance(combinator, Combinator):
            combinator = combinator.value
        elif not isinstance(combinator, str):
            raise TypeError(
                "combinator must be a str or Combinator, got %s"
                % type(combinator).__name__
            )
        self.left = left
        self.combinator = combinator
        self.right = right

    def serialize(self) -> str:
        return "%s %s %s" % (
            self.left.serialize(),
            self.combinator,
            self.right.serialize(),
        )


class SelectorGroup(_Serializable):
    """
    Represents a group of CSS selectors.

    A group of CSS selectors is simply a comma-separated list of
    selectors. [#]_ A group is not itself a selector and cannot be an
    operand of :func:`combine`.

    .. [#] https://www.w3.org/TR/selectors-3/#grouping
    """

    def __init__(self, selectors: Iterable[SelectorBase]) -> None:
        self._selectors = list(selectors)
        if not self._selectors:
            raise ValueError("selector group is empty")
        for selector in self._selectors:
            _check_selector(selector)

    def serialize(self) -> str:
        return ", ".join(selector.serialize() for selector in self._selectors)

    def __len__(self) -> int:
        return len(self._selectors)

    def __getitem__(self, index: int) -> SelectorBase:
        return self._selectors[index]

    def __iter__(self) -> Iterator[SelectorBase]:
        return iter(self._selectors)


def _check_selector(selector: object) -> None:
    if not isinstance(selector, SelectorBase):
        raise TypeError("expected a selector, got %s" % type(selector).__name__)


# Facade.


def element(value: str) -> CompoundSelector:
    """Starts a selector with a type selector, e.g. ``div``."""
    return CompoundSelector().element(value)


def id(value: str) -> CompoundSelector:
    """Starts a selector with an ID selector, e.g. ``#main``."""
    return CompoundSelector().id(value)


def class_(value: str) -> CompoundSelector:
    """Starts a selector with a class selector, e.g. ``.container``."""
    return CompoundSelector().class_(value)


def attribute(value: str) -> CompoundSelector:
    """Starts a selector with an attribute selector, e.g. ``[href]``."""
    return CompoundSelector().attribute(value)


def attr(value: str) -> CompoundSelector:
    """Alias of :func:`attribute`."""
    return attribute(value)


def pseudo_class(value: str) -> CompoundSelector:
    """Starts a selector with a pseudo-class, e.g. ``:hover``."""
    return CompoundSelector().pseudo_class(value)


def pseudo_element(value: str) -> CompoundSelector:
    """Starts a selector with a pseudo-element, e.g. ``::before``."""
    return CompoundSelector().pseudo_element(value)


def combine(
    left: SelectorBase, combinator: CombinatorLike, right: SelectorBase
) -> ComplexSelector:
    """
    Joins two selectors with a combinator.

    Args:
        left:       compound or complex selector
        combinator: :class:`Combinator` member or any token string
        right:      compound or complex selector

    Returns:
        A :class:`ComplexSelector` serializing to ``left combinator
        right``. Operands are not modified.
    """
    return ComplexSelector(left, combinator, right)


def group(*selectors: SelectorBase) -> SelectorGroup:
    """
    Groups selectors into a comma-separated list.

    :class:`ValueError` is raised if no selector is given.
    """
    return SelectorGroup(selectors)
