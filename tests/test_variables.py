import xml.etree.ElementTree as ET

import pytest

from xcsp3xml.errors import XcspParseError
from xcsp3xml.variables import (
    VariableArray,
    VariableDomain,
    VariableVar,
    parse_variable,
    parse_variables,
)


def test_var_with_domain():
    var = parse_variable(ET.fromstring('<var id="x"> 0..10 </var>'))
    assert var == VariableVar(id="x", type="", value="0..10", as_="")


def test_var_alias_and_type():
    var = parse_variable(ET.fromstring('<var id="y" as="x" type="symbolic"/>'))
    assert var.as_ == "x"
    assert var.type == "symbolic"
    assert var.value == ""


def test_var_without_id_fails():
    with pytest.raises(XcspParseError):
        parse_variable(ET.fromstring("<var>1 2 3</var>"))


def test_array_with_single_domain():
    arr = parse_variable(
        ET.fromstring('<array id="q" size="[8]" note="queens"> 1..8 </array>')
    )
    assert isinstance(arr, VariableArray)
    assert arr.id == "q"
    assert arr.size == "[8]"
    assert arr.note == "queens"
    assert arr.value == "1..8"
    assert arr.domains == []


def test_array_with_domains_keeps_order():
    arr = parse_variable(
        ET.fromstring(
            '<array id="x" size="[3][3]" startIndex="1">'
            '<domain for="x[0][]">1..5</domain>'
            '<domain for="others">0 1</domain>'
            "</array>"
        )
    )
    assert arr.start_index == "1"
    assert arr.domains == [
        VariableDomain(for_="x[0][]", value="1..5"),
        VariableDomain(for_="others", value="0 1"),
    ]


def test_domain_without_for_fails():
    with pytest.raises(XcspParseError):
        parse_variable(
            ET.fromstring('<array id="x" size="[2]"><domain>0 1</domain></array>')
        )


def test_domain_without_value_fails():
    with pytest.raises(XcspParseError):
        parse_variable(
            ET.fromstring('<array id="x" size="[2]"><domain for="x[]"/></array>')
        )


def test_unknown_declaration_fails():
    with pytest.raises(XcspParseError):
        parse_variable(ET.fromstring('<set id="s"/>'))


def test_parse_variables_in_document_order():
    root = ET.fromstring(
        "<variables>"
        '<var id="a">0 1</var>'
        '<array id="b" size="[2]">0..3</array>'
        '<var id="c" as="a"/>'
        "</variables>"
    )
    result = parse_variables(root)
    assert [v.id for v in result] == ["a", "b", "c"]
    assert [type(v) for v in result] == [VariableVar, VariableArray, VariableVar]


def test_parse_variables_empty():
    assert parse_variables(ET.fromstring("<variables/>")) == []