import logging

import pytest

from cssbuilder import *


KINDS = {
    "element": SimpleSelectorType.ELEMENT,
    "id": SimpleSelectorType.ID,
    "class_": SimpleSelectorType.CLASS,
    "attribute": SimpleSelectorType.ATTRIBUTE,
    "attr": SimpleSelectorType.ATTRIBUTE,
    "pseudo_class": SimpleSelectorType.PSEUDO_CLASS,
    "pseudo_element": SimpleSelectorType.PSEUDO_ELEMENT,
}


# Applies a list of (method, value) calls to a fresh selector through the
# facade, chaining the rest.
def build(calls):
    (first, value), rest = calls[0], calls[1:]
    selector = globals()[first](value)
    for method, value in rest:
        selector = getattr(selector, method)(value)
    return selector


@pytest.mark.parametrize(
    "calls,expected",
    [
        ([("element", "div")], "div"),
        ([("id", "main")], "#main"),
        ([("class_", "container")], ".container"),
        ([("attribute", "href")], "[href]"),
        ([("attr", 'href$=".png"')], '[href$=".png"]'),
        ([("pseudo_class", "hover")], ":hover"),
        ([("pseudo_element", "before")], "::before"),
        (
            [("id", "main"), ("class_", "container"), ("class_", "editable")],
            "#main.container.editable",
        ),
        (
            [("element", "a"), ("attr", 'href$=".png"'), ("pseudo_class", "focus")],
            'a[href$=".png"]:focus',
        ),
        (
            [
                ("element", "div"),
                ("id", "id"),
                ("class_", "cls"),
                ("attribute", "attr"),
                ("pseudo_class", "hover"),
                ("pseudo_element", "before"),
            ],
            "div#id.cls[attr]:hover::before",
        ),
        ([("class_", "a"), ("class_", "b"), ("class_", "c")], ".a.b.c"),
        ([("attribute", "a"), ("attribute", "b=c")], "[a][b=c]"),
        (
            [("pseudo_class", "first-child"), ("pseudo_class", "not(.ad)")],
            ":first-child:not(.ad)",
        ),
        ([("element", "p"), ("pseudo_element", "after")], "p::after"),
    ],
)
def test_compound_selector(calls, expected):
    selector = build(calls)
    assert selector.serialize() == expected
    assert selector.stringify() == expected
    assert str(selector) == expected
    assert [kind for kind, _ in selector.pieces] == [KINDS[method] for method, _ in calls]


def test_pieces():
    selector = element("a").class_("x").attr("href")
    assert selector.pieces == (
        (SimpleSelectorType.ELEMENT, "a"),
        (SimpleSelectorType.CLASS, ".x"),
        (SimpleSelectorType.ATTRIBUTE, "[href]"),
    )


def test_chaining_returns_same_selector():
    selector = element("div")
    assert selector.id("main") is selector
    assert selector.class_("a") is selector
    assert selector.serialize() == "div#main.a"


def test_facade_returns_fresh_selectors():
    a = class_("a")
    b = class_("b")
    assert a is not b
    a.class_("c")
    assert a.serialize() == ".a.c"
    assert b.serialize() == ".b"
    # Selectors don't share validation state.
    element("div")
    element("span")
    assert element("table").id("data").serialize() == "table#data"


@pytest.mark.parametrize(
    "calls",
    [
        [("element", "div"), ("element", "span")],
        [("id", "a"), ("id", "b")],
        [("pseudo_element", "before"), ("pseudo_element", "after")],
        [("element", "div"), ("id", "a"), ("class_", "c"), ("id", "b")],
    ],
)
def test_duplicate_singleton(calls):
    with pytest.raises(DuplicateSingleton):
        build(calls)


@pytest.mark.parametrize(
    "calls",
    [
        [("class_", "a"), ("id", "b")],
        [("id", "a"), ("element", "div")],
        [("attribute", "href"), ("class_", "a")],
        [("pseudo_class", "hover"), ("attribute", "href")],
        [("pseudo_element", "before"), ("pseudo_class", "hover")],
        [("pseudo_element", "before"), ("element", "div")],
        [("element", "a"), ("pseudo_class", "hover"), ("class_", "x")],
    ],
)
def test_out_of_order(calls):
    with pytest.raises(OutOfOrder):
        build(calls)


def test_violations_share_base_class():
    with pytest.raises(SelectorConstraintViolation):
        element("a").element("b")
    with pytest.raises(SelectorConstraintViolation):
        class_("a").id("b")


def test_failed_append_leaves_selector_unchanged():
    selector = element("div").id("main").class_("container")
    pieces = selector.pieces
    with pytest.raises(DuplicateSingleton):
        selector.id("other")
    with pytest.raises(DuplicateSingleton):
        selector.element("span")
    assert selector.serialize() == "div#main.container"
    assert selector.pieces == pieces
    # Still usable afterwards.
    assert selector.pseudo_class("hover").serialize() == "div#main.container:hover"


def test_out_of_order_append_leaves_selector_unchanged():
    selector = element("a").pseudo_element("before")
    pieces = selector.pieces
    with pytest.raises(OutOfOrder):
        selector.class_("late")
    with pytest.raises(OutOfOrder):
        selector.pseudo_class("hover")
    assert selector.serialize() == "a::before"
    assert selector.pieces == pieces

    selector = element("a").class_("x")
    with pytest.raises(OutOfOrder):
        selector.id("y")
    assert selector.serialize() == "a.x"
    assert selector.attr("href").serialize() == "a.x[href]"


def test_exception_attributes():
    selector = element("a").class_("x")
    with pytest.raises(OutOfOrder) as excinfo:
        selector.id("y")
    exc = excinfo.value
    assert exc.selector == "a.x"
    assert exc.kind == SimpleSelectorType.ID
    assert "element, id, class, attribute, pseudo-class, pseudo-element" in exc.why
    assert str(exc).startswith("cannot append id to selector 'a.x': ")

    with pytest.raises(DuplicateSingleton) as excinfo:
        pseudo_element("before").pseudo_element("after")
    assert excinfo.value.kind == SimpleSelectorType.PSEUDO_ELEMENT
    assert "cannot append pseudo-element" in str(excinfo.value)


def test_rejection_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="cssbuilder"):
        with pytest.raises(DuplicateSingleton):
            id("a").id("b")
    assert "rejected id after '#a'" in caplog.text


@pytest.mark.parametrize("value", [None, 1, b"div", ["div"]])
def test_non_str_payload(value):
    with pytest.raises(TypeError):
        element(value)
    selector = element("div")
    with pytest.raises(TypeError):
        selector.class_(value)
    assert selector.serialize() == "div"


def test_combine():
    selector = combine(
        element("div").id("main"),
        "+",
        combine(element("table").id("data"), "~", element("tr")),
    )
    assert selector.serialize() == "div#main + table#data ~ tr"
    assert selector.stringify() == "div#main + table#data ~ tr"
    assert str(selector) == "div#main + table#data ~ tr"
    assert repr(selector) == "<ComplexSelector 'div#main + table#data ~ tr'>"


def test_combine_nested():
    selector = combine(
        element("div").id("main").class_("container").class_("draggable"),
        "+",
        combine(
            element("table").id("data"),
            "~",
            combine(
                element("tr").pseudo_class("nth-of-type(even)"),
                " ",
                element("td").pseudo_class("nth-of-type(even)"),
            ),
        ),
    )
    assert selector.serialize() == (
        "div#main.container.draggable + table#data ~ "
        "tr:nth-of-type(even)   td:nth-of-type(even)"
    )


def test_combine_left_nested():
    selector = combine(combine(element("a"), ">", element("b")), "+", element("c"))
    assert selector.serialize() == "a > b + c"


@pytest.mark.parametrize(
    "combinator,expected",
    [
        (Combinator.DESCENDANT, "ul   li"),
        (Combinator.CHILD, "ul > li"),
        (Combinator.NEXT_SIBLING, "ul + li"),
        (Combinator.SUBSEQUENT_SIBLING, "ul ~ li"),
        (" ", "ul   li"),
        (">", "ul > li"),
        ("", "ul  li"),
        (">>", "ul >> li"),
        ("||", "ul || li"),
        (" > ", "ul  >  li"),
    ],
)
def test_combinator_tokens(combinator, expected):
    selector = combine(element("ul"), combinator, element("li"))
    assert selector.serialize() == expected
    assert selector.combinator == getattr(combinator, "value", combinator)


def test_combine_does_not_mutate_operands():
    left = element("div").class_("a")
    right = element("span")
    first = combine(left, ">", right)
    second = combine(right, "~", left)
    assert first.left is left and first.right is right
    assert first.serialize() == "div.a > span"
    assert second.serialize() == "span ~ div.a"
    assert left.serialize() == "div.a"
    assert right.serialize() == "span"
    assert combine(first, "+", first).serialize() == "div.a > span + div.a > span"


def test_combine_reflects_later_appends():
    left = element("div")
    selector = combine(left, ">", element("p"))
    left.class_("late")
    assert selector.serialize() == "div.late > p"


@pytest.mark.parametrize(
    "left,combinator,right",
    [
        ("div", ">", element("p")),
        (element("div"), ">", None),
        (element("div"), 1, element("p")),
        (element("div"), None, element("p")),
    ],
)
def test_combine_bad_operands(left, combinator, right):
    with pytest.raises(TypeError):
        combine(left, combinator, right)


def test_group():
    sel = group(
        element("th").class_("bold"),
        combine(element("tr").class_("highlight"), Combinator.CHILD, element("td")),
    )
    assert len(sel) == 2
    assert sel.serialize() == "th.bold, tr.highlight > td"
    assert sel.stringify() == str(sel)
    assert repr(sel) == "<SelectorGroup 'th.bold, tr.highlight > td'>"
    assert not isinstance(sel, SelectorBase)
    assert sel[0].serialize() == "th.bold"
    assert [s.serialize() for s in sel] == ["th.bold", "tr.highlight > td"]


def test_group_misuse():
    with pytest.raises(ValueError):
        group()
    with pytest.raises(TypeError):
        group(element("a"), "b")
    with pytest.raises(TypeError):
        combine(group(element("a")), ">", element("b"))


def test_repr():
    assert repr(element("a").attr("href")) == "<CompoundSelector 'a[href]'>"


def test_simple_selector_type():
    assert [kind.label for kind in SimpleSelectorType] == [
        "element",
        "id",
        "class",
        "attribute",
        "pseudo-class",
        "pseudo-element",
    ]
    assert [kind for kind in SimpleSelectorType if kind.is_singleton] == [
        SimpleSelectorType.ELEMENT,
        SimpleSelectorType.ID,
        SimpleSelectorType.PSEUDO_ELEMENT,
    ]
    assert SimpleSelectorType.ATTRIBUTE.render("a=b") == "[a=b]"
    assert SimpleSelectorType.PSEUDO_ELEMENT.render("marker") == "::marker"
