# xcsp3xml

`xcsp3xml` reads problem instances written in the XCSP3 XML format, the
format used by constraint-programming solver competitions, and turns them
into plain Python objects that a solver can walk through.

It reads the document's structure: the instance format and type (CSP or
COP), the variables and arrays with their domains, the constraints
(including groups, blocks and slides), and the objectives. The text of
lists, domains, conditions, tuples and expressions is kept as it appears in
the file (stripped of surrounding whitespace), ready for your own
interpretation. It uses only the standard library.

## Reading an instance

```python
from xcsp3xml.model import InstanceType, XcspXmlModel, load

model = load("queens-8.xml")            # same as XcspXmlModel.from_path(...)

print(model.format)                     # e.g. "XCSP3"
if model.type is InstanceType.COP:
    print("optimisation problem")

for constraint in model.iter_constraints():
    print(constraint.kind)
```

An instance can also be read from text already in memory:

```python
model = XcspXmlModel.from_string(xml_text)
```

`XcspXmlModel.from_path` (and `load`) only accept paths whose name ends in
`.xml`, and read the file as UTF-8.

A model has these attributes:

- `format`: the `format` attribute of the root element.
- `type`: an `InstanceType`, `InstanceType.CSP` or `InstanceType.COP`.
- `variables`: a list of `VariableVar` and `VariableArray`, or `None` when
  the document has no `<variables>`.
- `constraints`: the top-level constraints, in document order.
- `objectives`: an `Objectives` record, or `None` when the document has no
  `<objectives>`.

## Walking the constraints

`XcspXmlModel.iter_constraints()` yields the constraints in document order.
Blocks are opened up and their contents yielded in turn; groups and slides
are yielded whole, after their template constraint has been checked. The
checks are made as each constraint is reached, so an ill-formed constraint
raises only when the walk gets to it.

Plain constraints are `Constraint` records. `constraint.kind` is a
`ConstraintKind` member named after the XML tag (for example
`ConstraintKind.ALL_DIFFERENT` for `<allDifferent>`), and the parts of the
constraint are in `constraint.fields`, also reachable as attributes or by
key:

```python
from xcsp3xml.constraints import ConstraintKind

for c in model.iter_constraints():
    if c.kind is ConstraintKind.SUM:
        print(c.vars, c["condition"], c.coeffs)
```

Most parts are strings (empty when absent). Some are lists of strings
(for instance the repeated `<list>` children of `allDifferent`, `allEqual`,
`circuit`, `precedence` and `lex`), and some are small records:
`ListWithStartIndex` (element, minimumArg, maximumArg, cumulative's
condition, channel's lists), `ListWithClosed` (cardinality's values),
`ListWithCovered` (precedence's values) and `Matrix` (element's matrix).
Parts whose XML name is a Python keyword carry a trailing underscore, such
as `except_`.

`ConstraintGroup` has `class_`, `id`, `constraint` (the template) and
`args`; `ConstraintBlock` has `id`, `note`, `class_` and `constraints`;
`ConstraintSlide` has `circular`, `arg` (a `ListWithOffset` with `vars`,
`collect` and `offset`) and `constraint`. Each of them also has a `kind`.

## Variables and objectives

`VariableVar` has `id`, `type`, `value` (the domain text) and `as_`.
`VariableArray` has `id`, `as_`, `type`, `start_index`, `note`, `size`,
`value`, and `domains`, a list of `VariableDomain` records with `for_` and
`value` for arrays whose cells have different domains.

`Objectives` holds two lists, `minimize` and `maximize`, of `Objective`
records with `type`, `list`, `coeffs` and `expression`.

## Errors

Every problem raises `xcsp3xml.errors.XcspParseError`, a subclass of
`ValueError`. This covers text that is not well-formed XML, a missing
`format` or `type` attribute, an unknown instance type, a missing
`<constraints>` element, repeated children where only one is allowed,
unknown constraint or variable tags, and, during `iter_constraints`, an
`extension` with both `supports` and `conflicts`, an `ordered` constraint
without a list and with an unknown `case`, a non-integer `startIndex` on
`minimumArg`/`maximumArg`, a `channel` with no list, and a group or slide
with no template.

```python
from xcsp3xml.errors import XcspParseError
from xcsp3xml.model import load

try:
    model = load("broken.xml")
    constraints = list(model.iter_constraints())
except XcspParseError as exc:
    print(f"cannot read instance: {exc}")
```

## Lower-level pieces

The parts of a document can also be parsed on their own from
`xml.etree.ElementTree` elements:

- `xcsp3xml.variables`: `parse_variables`, `parse_variable`.
- `xcsp3xml.constraints`: `parse_constraints`, `parse_constraint`.
- `xcsp3xml.objectives`: `parse_objectives`, `parse_objective`.

## What it does not do

`xcsp3xml` is a library only; it has no command-line program. It reads the
structure of an instance but does not expand domains or arrays into
individual variables, does not parse expressions, tuples or conditions, and
does not solve anything.