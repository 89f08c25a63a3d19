"""Variable declarations of an XCSP3 instance."""

from __future__ import annotations

from dataclasses import dataclass, field
from xml.etree.ElementTree import Element

from xcsp3xml.errors import XcspParseError


def _text(element: Element) -> str:
    return (element.text or "").strip()


def _required(element: Element, name: str) -> str:
    try:
        return element.attrib[name]
    except KeyError:
        raise XcspParseError(
            f"<{element.tag}> is missing the required attribute '{name}'"
        ) from None


@dataclass
class VariableDomain:
    """A domain that applies to some cells of an array."""

    for_: str
    value: str

    @classmethod
    def from_element(cls, element: Element) -> VariableDomain:
        if element.text is None:
            raise XcspParseError("<domain> has no value")
        return cls(for_=_required(element, "for"), value=_text(element))


@dataclass
class VariableVar:
    """A single variable, declared with a domain or as an alias of another."""

    id: str
    type: str = ""
    value: str = ""
    as_: str = ""

    @classmethod
    def from_element(cls, element: Element) -> VariableVar:
        return cls(
            id=_required(element, "id"),
            type=element.get("type", ""),
            value=_text(element),
            as_=element.get("as", ""),
        )


@dataclass
class VariableArray:
    """An array of variables, with one domain or several per-cell domains."""

    id: str
    as_: str = ""
    type: str = ""
    start_index: str = ""
    note: str = ""
    size: str = ""
    value: str = ""
    domains: list[VariableDomain] = field(default_factory=list)

    @classmethod
    def from_element(cls, element: Element) -> VariableArray:
        return cls(
            id=_required(element, "id"),
            as_=element.get("as", ""),
            type=element.get("type", ""),
            start_index=element.get("startIndex", ""),
            note=element.get("note", ""),
            size=element.get("size", ""),
            value=_text(element),
            domains=[
                VariableDomain.from_element(child)
                for child in element
                if child.tag == "domain"
            ],
        )


def parse_variable(element: Element) -> VariableVar | VariableArray:
    """Read one <var> or <array> element."""
    if element.tag == "var":
        return VariableVar.from_element(element)
    if element.tag == "array":
        return VariableArray.from_element(element)
    raise XcspParseError(f"unknown variable declaration <{element.tag}>")


def parse_variables(element: Element) -> list[VariableVar | VariableArray]:
    """Read every declaration inside a <variables> element, in order."""
    return [parse_variable(child) for child in element]