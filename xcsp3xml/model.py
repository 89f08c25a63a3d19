"""Whole XCSP3 instances: reading a document and walking its constraints."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator
from xml.etree import ElementTree
from xml.etree.ElementTree import Element

from xcsp3xml.constraints import (
    Constraint,
    ConstraintBlock,
    ConstraintGroup,
    ConstraintKind,
    ConstraintSlide,
    parse_constraints,
)
from xcsp3xml.errors import XcspParseError
from xcsp3xml.objectives import Objectives, parse_objectives
from xcsp3xml.variables import VariableArray, VariableVar, parse_variables

_ORDERED_CASES = {
    "increasing": "ge",
    "strictly_increasing": "gt",
    "decreasing": "le",
    "strictly_decreasing": "lt",
}


class InstanceType(Enum):
    """Whether an instance is a satisfaction or an optimisation problem."""

    CSP = "CSP"
    COP = "COP"

    @classmethod
    def from_text(cls, text: str) -> InstanceType:
        try:
            return cls(text)
        except ValueError:
            raise XcspParseError(f"unknown instance type {text!r}") from None


def _single_child(root: Element, tag: str) -> Element | None:
    found = root.findall(tag)
    if len(found) > 1:
        raise XcspParseError(f"<{root.tag}> has more than one <{tag}>")
    return found[0] if found else None


def _required(root: Element, name: str) -> str:
    try:
        return root.attrib[name]
    except KeyError:
        raise XcspParseError(
            f"<{root.tag}> is missing the required attribute '{name}'"
        ) from None


def _check_start_index(value: str, kind: ConstraintKind) -> None:
    if not value:
        return
    try:
        int(value)
    except ValueError:
        raise XcspParseError(
            f"<{kind.value}> has a start index that is not an integer: {value!r}"
        ) from None


def _check_plain(constraint: Constraint) -> None:
    kind = constraint.kind
    if kind is ConstraintKind.ORDERED:
        if not constraint["list"] and constraint["case"] not in _ORDERED_CASES:
            raise XcspParseError(
                f"case undefined in ordered constraint: {constraint['case']}"
            )
    elif kind is ConstraintKind.EXTENSION:
        if constraint["supports"] and constraint["conflicts"]:
            raise XcspParseError(
                "can't build extension, conflicts or supports must be non empty."
            )
    elif kind in (ConstraintKind.MINIMUM_ARG, ConstraintKind.MAXIMUM_ARG):
        _check_start_index(constraint["list"].start_index, kind)
    elif kind is ConstraintKind.CHANNEL:
        if not constraint["simplified_list"] and not constraint["lists"]:
            raise XcspParseError("<channel> has no list")


@dataclass
class XcspXmlModel:
    """An XCSP3 instance as read from its XML document."""

    format: str
    type: InstanceType
    constraints: list = field(default_factory=list)
    variables: list[VariableVar | VariableArray] | None = None
    objectives: Objectives | None = None

    @classmethod
    def from_path(cls, path: str | Path) -> XcspXmlModel:
        """Read an instance from a file whose name ends in .xml."""
        if not str(path).endswith(".xml"):
            raise XcspParseError(f"not an XML file: {path}")
        return cls.from_string(Path(path).read_text(encoding="utf-8"))

    @classmethod
    def from_string(cls, text: str) -> XcspXmlModel:
        """Read an instance from the text of its XML document."""
        try:
            root = ElementTree.fromstring(text)
        except ElementTree.ParseError as exc:
            raise XcspParseError(f"malformed XML: {exc}") from exc
        return cls._from_root(root)

    @classmethod
    def _from_root(cls, root: Element) -> XcspXmlModel:
        format_ = _required(root, "format")
        instance_type = InstanceType.from_text(_required(root, "type"))
        constraints = _single_child(root, "constraints")
        if constraints is None:
            raise XcspParseError(f"<{root.tag}> has no <constraints>")
        variables = _single_child(root, "variables")
        objectives = _single_child(root, "objectives")
        return cls(
            format=format_,
            type=instance_type,
            constraints=parse_constraints(constraints),
            variables=parse_variables(variables) if variables is not None else None,
            objectives=parse_objectives(objectives) if objectives is not None else None,
        )

    def iter_constraints(self) -> Iterator:
        """Yield constraints in document order, with blocks opened up.

        Groups and slides are yielded whole, after their templates have been
        checked. Ill-formed constraints raise XcspParseError when reached.
        """
        for constraint in self.constraints:
            yield from self._walk(constraint)

    @classmethod
    def _walk(cls, constraint) -> Iterator:
        if isinstance(constraint, ConstraintBlock):
            for inner in constraint.constraints:
                yield from cls._walk(inner)
        elif isinstance(constraint, ConstraintGroup):
            if constraint.constraint is None:
                raise XcspParseError("group has no constraint template")
            for _ in cls._walk(constraint.constraint):
                pass
            yield constraint
        elif isinstance(constraint, ConstraintSlide):
            if constraint.constraint is None:
                raise XcspParseError("slide has no constraint template")
            for _ in cls._walk(constraint.constraint):
                pass
            yield constraint
        else:
            _check_plain(constraint)
            yield constraint


def load(path: str | Path) -> XcspXmlModel:
    """Read an instance from an .xml file."""
    return XcspXmlModel.from_path(path)