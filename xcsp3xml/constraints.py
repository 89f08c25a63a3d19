"""Constraint declarations of an XCSP3 instance."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Union
from xml.etree.ElementTree import Element

from xcsp3xml.errors import XcspParseError


def _text(element: Element) -> str:
    return (element.text or "").strip()


def _own_text(element: Element) -> str:
    parts = [element.text or ""]
    parts.extend(child.tail or "" for child in element)
    return "".join(parts).strip()


def _single(element: Element, tag: str) -> Element | None:
    found = element.findall(tag)
    if len(found) > 1:
        raise XcspParseError(f"<{element.tag}> has more than one <{tag}>")
    return found[0] if found else None


@dataclass
class ListWithOffset:
    """The <list> of a slide: variables, with collect and offset attributes."""

    vars: str = ""
    collect: str = ""
    offset: str = ""

    @classmethod
    def from_element(cls, element: Element) -> ListWithOffset:
        return cls(
            vars=_own_text(element),
            collect=element.get("collect", ""),
            offset=element.get("offset", ""),
        )


@dataclass
class ListWithClosed:
    """A list of values that may be declared closed."""

    vars: str = ""
    closed: str = ""

    @classmethod
    def from_element(cls, element: Element) -> ListWithClosed:
        return cls(vars=_own_text(element), closed=element.get("closed", ""))


@dataclass
class ListWithStartIndex:
    """A list whose indexing starts at a given value."""

    value: str = ""
    start_index: str = ""

    @classmethod
    def from_element(cls, element: Element) -> ListWithStartIndex:
        return cls(value=_own_text(element), start_index=element.get("startIndex", ""))


@dataclass
class ListWithCovered:
    """A list of values that may be declared covered."""

    value: str = ""
    covered: str = ""

    @classmethod
    def from_element(cls, element: Element) -> ListWithCovered:
        return cls(value=_own_text(element), covered=element.get("covered", ""))


@dataclass
class Matrix:
    """A matrix of variables, with optional row and column indices."""

    value: str = ""
    row_index: str = ""
    col_index: str = ""

    @classmethod
    def from_element(cls, element: Element) -> Matrix:
        return cls(
            value=_own_text(element),
            row_index=element.get("rowIndex", ""),
            col_index=element.get("colIndex", ""),
        )


class ConstraintKind(Enum):
    """Every constraint element the reader knows, keyed by its XML tag."""

    GROUP = "group"
    BLOCK = "block"
    SLIDE = "slide"
    ALL_DIFFERENT = "allDifferent"
    ALL_EQUAL = "allEqual"
    CIRCUIT = "circuit"
    ORDERED = "ordered"
    INTENSION = "intension"
    EXTENSION = "extension"
    REGULAR = "regular"
    MDD = "mdd"
    SUM = "sum"
    COUNT = "count"
    N_VALUES = "nValues"
    CARDINALITY = "cardinality"
    MINIMUM = "minimum"
    MINIMUM_ARG = "minimumArg"
    MAXIMUM = "maximum"
    MAXIMUM_ARG = "maximumArg"
    ELEMENT = "element"
    STRETCH = "stretch"
    NO_OVERLAP = "noOverlap"
    CUMULATIVE = "cumulative"
    INSTANTIATION = "instantiation"
    CHANNEL = "channel"
    PRECEDENCE = "precedence"
    KNAPSACK = "knapsack"
    BIN_PACKING = "binPacking"
    CLAUSE = "clause"
    LEX = "lex"
    FLOW = "flow"

    @classmethod
    def from_tag(cls, tag: str) -> ConstraintKind:
        try:
            return cls(tag)
        except ValueError:
            raise XcspParseError(f"unknown constraint <{tag}>") from None


_Reader = Callable[[Element], Any]


def _own() -> _Reader:
    return _own_text


def _attr(name: str) -> _Reader:
    return lambda element: element.get(name, "")


def _child(tag: str) -> _Reader:
    def read(element: Element) -> str:
        found = _single(element, tag)
        return _text(found) if found is not None else ""

    return read


def _children(tag: str) -> _Reader:
    return lambda element: [_text(child) for child in element.findall(tag)]


def _struct(tag: str, cls: Any) -> _Reader:
    def read(element: Element) -> Any:
        found = _single(element, tag)
        return cls.from_element(found) if found is not None else cls()

    return read


def _structs(tag: str, cls: Any) -> _Reader:
    return lambda element: [cls.from_element(child) for child in element.findall(tag)]


_K = ConstraintKind

_FIELDS: dict[ConstraintKind, dict[str, _Reader]] = {
    _K.ALL_DIFFERENT: {
        "vars": _own(),
        "list": _children("list"),
        "except_": _child("except"),
        "matrix": _child("matrix"),
    },
    _K.ALL_EQUAL: {"vars": _own(), "list": _children("list")},
    _K.CIRCUIT: {"vars": _own(), "list": _children("list"), "size": _child("size")},
    _K.ORDERED: {
        "vars": _own(),
        "case": _attr("case"),
        "list": _child("list"),
        "operator": _child("operator"),
        "lengths": _child("lengths"),
    },
    _K.INTENSION: {"value": _own(), "function": _child("function")},
    _K.EXTENSION: {
        "vars": _child("list"),
        "supports": _child("supports"),
        "conflicts": _child("conflicts"),
    },
    _K.REGULAR: {
        "vars": _child("list"),
        "transitions": _child("transitions"),
        "start": _child("start"),
        "final": _child("final"),
    },
    _K.MDD: {"vars": _child("list"), "transitions": _child("transitions")},
    _K.SUM: {
        "vars": _child("list"),
        "condition": _child("condition"),
        "coeffs": _child("coeffs"),
    },
    _K.COUNT: {
        "vars": _child("list"),
        "values": _child("values"),
        "condition": _child("condition"),
    },
    _K.N_VALUES: {
        "vars": _child("list"),
        "except_": _child("except"),
        "condition": _child("condition"),
    },
    _K.CARDINALITY: {
        "list": _child("list"),
        "values": _struct("values", ListWithClosed),
        "occurs": _child("occurs"),
    },
    _K.MINIMUM: {"list": _child("list"), "condition": _child("condition")},
    _K.MAXIMUM: {"list": _child("list"), "condition": _child("condition")},
    _K.MINIMUM_ARG: {
        "list": _struct("list", ListWithStartIndex),
        "rank": _attr("rank"),
        "condition": _child("condition"),
    },
    _K.MAXIMUM_ARG: {
        "list": _struct("list", ListWithStartIndex),
        "rank": _attr("rank"),
        "condition": _child("condition"),
    },
    _K.ELEMENT: {
        "vars": _struct("list", ListWithStartIndex),
        "value": _child("value"),
        "index": _child("index"),
        "condition": _child("condition"),
        "matrix": _struct("matrix", Matrix),
    },
    _K.STRETCH: {
        "vars": _child("list"),
        "values": _child("values"),
        "widths": _child("widths"),
        "patterns": _child("patterns"),
    },
    _K.NO_OVERLAP: {
        "origins": _child("origins"),
        "lengths": _child("lengths"),
        "zero_ignored": _attr("zeroIgnored"),
    },
    _K.CUMULATIVE: {
        "origins": _child("origins"),
        "lengths": _child("lengths"),
        "heights": _child("heights"),
        "condition": _struct("condition", ListWithStartIndex),
        "ends": _child("ends"),
        "machines": _child("machines"),
    },
    _K.INSTANTIATION: {"vars": _child("list"), "values": _child("values")},
    _K.CHANNEL: {
        "lists": _structs("list", ListWithStartIndex),
        "with_value": _child("value"),
        "simplified_list": _own(),
    },
    _K.PRECEDENCE: {
        "vars": _own(),
        "list": _children("list"),
        "values": _struct("values", ListWithCovered),
    },
    _K.KNAPSACK: {
        "list": _child("list"),
        "weights": _child("weights"),
        "condition": _children("condition"),
        "profits": _child("profits"),
    },
    _K.BIN_PACKING: {
        "list": _child("list"),
        "sizes": _child("sizes"),
        "condition": _child("condition"),
        "limits": _child("limits"),
        "loads": _child("loads"),
    },
    _K.CLAUSE: {"vars": _own()},
    _K.LEX: {
        "lists": _children("list"),
        "matrix": _child("matrix"),
        "operator": _child("operator"),
    },
    _K.FLOW: {
        "vars": _child("list"),
        "balance": _child("balance"),
        "weights": _child("weights"),
        "arcs": _child("arcs"),
        "condition": _child("condition"),
    },
}


@dataclass
class Constraint:
    """A plain constraint; its parts are reachable as attributes or by key."""

    kind: ConstraintKind
    fields: dict[str, Any] = field(default_factory=dict)

    def __getattr__(self, name: str) -> Any:
        fields = self.__dict__.get("fields")
        if fields is not None and name in fields:
            return fields[name]
        raise AttributeError(f"{type(self).__name__} has no field {name!r}")

    def __getitem__(self, name: str) -> Any:
        return self.fields[name]

    @classmethod
    def from_element(cls, element: Element) -> Constraint:
        kind = ConstraintKind.from_tag(element.tag)
        readers = _FIELDS.get(kind)
        if readers is None:
            raise XcspParseError(f"<{element.tag}> is not a plain constraint")
        return cls(kind, {name: read(element) for name, read in readers.items()})


AnyConstraint = Union["Constraint", "ConstraintGroup", "ConstraintBlock", "ConstraintSlide"]


def _template(element: Element, skip: str) -> AnyConstraint | None:
    candidates = [child for child in element if child.tag != skip]
    if len(candidates) > 1:
        raise XcspParseError(f"<{element.tag}> holds more than one constraint template")
    return parse_constraint(candidates[0]) if candidates else None


@dataclass
class ConstraintGroup:
    """A constraint template applied to each of its argument lists."""

    class_: str = ""
    id: str = ""
    constraint: AnyConstraint | None = None
    args: list[str] = field(default_factory=list)

    @property
    def kind(self) -> ConstraintKind:
        return ConstraintKind.GROUP

    @classmethod
    def from_element(cls, element: Element) -> ConstraintGroup:
        return cls(
            class_=element.get("class", ""),
            id=element.get("id", ""),
            constraint=_template(element, "args"),
            args=[_text(child) for child in element.findall("args")],
        )


@dataclass
class ConstraintBlock:
    """A named collection of constraints."""

    id: str = ""
    note: str = ""
    class_: str = ""
    constraints: list[AnyConstraint] = field(default_factory=list)

    @property
    def kind(self) -> ConstraintKind:
        return ConstraintKind.BLOCK

    @classmethod
    def from_element(cls, element: Element) -> ConstraintBlock:
        return cls(
            id=element.get("id", ""),
            note=element.get("note", ""),
            class_=element.get("class", ""),
            constraints=[parse_constraint(child) for child in element],
        )


@dataclass
class ConstraintSlide:
    """A constraint template slid along a list of variables."""

    circular: str = ""
    arg: ListWithOffset = field(default_factory=ListWithOffset)
    constraint: AnyConstraint | None = None

    @property
    def kind(self) -> ConstraintKind:
        return ConstraintKind.SLIDE

    @classmethod
    def from_element(cls, element: Element) -> ConstraintSlide:
        found = _single(element, "list")
        return cls(
            circular=element.get("circular", ""),
            arg=ListWithOffset.from_element(found) if found is not None else ListWithOffset(),
            constraint=_template(element, "list"),
        )


def parse_constraint(element: Element) -> AnyConstraint:
    """Read one constraint element, including groups, blocks and slides."""
    kind = ConstraintKind.from_tag(element.tag)
    if kind is ConstraintKind.GROUP:
        return ConstraintGroup.from_element(element)
    if kind is ConstraintKind.BLOCK:
        return ConstraintBlock.from_element(element)
    if kind is ConstraintKind.SLIDE:
        return ConstraintSlide.from_element(element)
    return Constraint.from_element(element)


def parse_constraints(element: Element) -> list[AnyConstraint]:
    """Read every constraint inside a <constraints> element, in order."""
    return [parse_constraint(child) for child in element]