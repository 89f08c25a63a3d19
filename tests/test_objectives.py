import xml.etree.ElementTree as ET

import pytest

from xcsp3xml.errors import XcspParseError
from xcsp3xml.objectives import Objective, parse_objective, parse_objectives


def test_expression_objective():
    obj = parse_objective(ET.fromstring("<minimize> add(x,y) </minimize>"))
    assert obj == Objective(type="", list="", coeffs="", expression="add(x,y)")


def test_typed_objective_with_list_and_coeffs():
    obj = parse_objective(
        ET.fromstring(
            '<maximize type="sum"><list> x[] </list><coeffs>1 2 3</coeffs></maximize>'
        )
    )
    assert obj.type == "sum"
    assert obj.list == "x[]"
    assert obj.coeffs == "1 2 3"
    assert obj.expression == ""


def test_duplicate_list_fails():
    with pytest.raises(XcspParseError):
        parse_objective(
            ET.fromstring("<minimize><list>x</list><list>y</list></minimize>")
        )


def test_wrong_tag_fails():
    with pytest.raises(XcspParseError):
        parse_objective(ET.fromstring("<optimize>x</optimize>"))


def test_objectives_split_by_direction():
    root = ET.fromstring(
        "<objectives>"
        "<minimize>a</minimize>"
        "<maximize>b</maximize>"
        "<minimize>c</minimize>"
        "</objectives>"
    )
    result = parse_objectives(root)
    assert [o.expression for o in result.minimize] == ["a", "c"]
    assert [o.expression for o in result.maximize] == ["b"]


def test_objectives_ignore_other_children():
    root = ET.fromstring("<objectives><annotation/><maximize>z</maximize></objectives>")
    result = parse_objectives(root)
    assert result.minimize == []
    assert len(result.maximize) == 1


def test_empty_objectives():
    result = parse_objectives(ET.fromstring("<objectives/>"))
    assert result.minimize == [] and result.maximize == []