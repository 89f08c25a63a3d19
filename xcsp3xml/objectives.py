"""Objectives of an XCSP3 optimisation instance."""

from __future__ import annotations

from dataclasses import dataclass, field
from xml.etree.ElementTree import Element

from xcsp3xml.errors import XcspParseError


def _own_text(element: Element) -> str:
    parts = [element.text or ""]
    parts.extend(child.tail or "" for child in element)
    return "".join(parts).strip()


def _child_text(element: Element, tag: str) -> str:
    found = element.findall(tag)
    if len(found) > 1:
        raise XcspParseError(f"<{element.tag}> has more than one <{tag}>")
    return (found[0].text or "").strip() if found else ""


@dataclass
class Objective:
    """One <minimize> or <maximize> goal."""

    type: str = ""
    list: str = ""
    coeffs: str = ""
    expression: str = ""


@dataclass
class Objectives:
    """All goals of an instance, split by direction."""

    minimize: list[Objective] = field(default_factory=list)
    maximize: list[Objective] = field(default_factory=list)


def parse_objective(element: Element) -> Objective:
    """Read a <minimize> or <maximize> element."""
    if element.tag not in ("minimize", "maximize"):
        raise XcspParseError(f"unknown objective <{element.tag}>")
    return Objective(
        type=element.get("type", ""),
        list=_child_text(element, "list"),
        coeffs=_child_text(element, "coeffs"),
        expression=_own_text(element),
    )


def parse_objectives(element: Element) -> Objectives:
    """Read an <objectives> element; unrelated children are ignored."""
    result = Objectives()
    for child in element:
        if child.tag == "minimize":
            result.minimize.append(parse_objective(child))
        elif child.tag == "maximize":
            result.maximize.append(parse_objective(child))
    return result