import pytest
from renamatic import code_dom
from renamatic import utils
from renamatic.errors import ParseError

FULL_SOURCE = """// Package foo does things
package foo

import (
	"std"
	u "gno.land/p/demo/ufmt"
)

const (
	A = iota
	B
)

var counter int = 0

type Point struct {
	X, Y int
	Name string `json:"name"`
	*Base
}

type Shape interface {
	Area() float64
	String() string
}

type Handler func(x int) (int, error)

// Area returns the area
func (p *Point) Area() float64 {
	return float64(p.X * p.Y)
}

func run(items []string, opts ...int) (n int, err error) {
	m := map[string]int{"a": 1}
	for i := 0; i < len(items); i++ {
		if items[i] == "" {
			continue
		}
		n += m[items[i]]
	}
	for _, item := range items {
		switch item {
		case "a", "b":
			n++
		default:
			n--
		}
	}
	if p := (Point{X: 1}); p.X > 0 {
		n = p.X
	} else if n < 0 {
		return 0, nil
	} else {
		n = 0
	}
	var x interface{} = n
	switch v := x.(type) {
	case int:
		n = v
	case nil:
	}
	ch := make(chan int, 1)
	ch <- 1
	select {
	case v := <-ch:
		n = v
	default:
	}
	f := func(a, b int) int { return a + b }
	defer f(1, 2)
	s := items[1:2]
	_ = s
	caller := std.PrevRealm().Addr()
	u.Sprintf("%s", caller.String())
	goto done
done:
	return n, err
}
"""


@pytest.fixture
def full_file():
    return utils.parse_source(FULL_SOURCE, "full.gno")


def test_round_trip_is_exact(full_file):
    assert full_file.to_gno_string() == FULL_SOURCE


def test_hierarchy_is_valid(full_file):
    full_file.validate_hierarchy()


def test_top_level_declarations(full_file):
    assert full_file.package_name.name == "foo"
    assert [decl.kind for decl in full_file.decls] == \
        [code_dom.NodeKind.gen_decl] * 6 + [code_dom.NodeKind.func_decl] * 2
    assert [decl.token for decl in full_file.decls[:6]] == ["import", "const", "var", "type", "type", "type"]


def test_imports(full_file):
    imports = full_file.get_imports()
    assert [spec.get_import_path() for spec in imports] == ["std", "gno.land/p/demo/ufmt"]
    assert imports[0].name is None
    assert imports[1].name.name == "u"


def test_doc_comments(full_file):
    assert [comment.comment_text for comment in full_file.pre_comments] == ["// Package foo does things"]
    area = full_file.decls[6]
    assert area.is_method()
    assert area.name.name == "Area"
    assert [comment.comment_text for comment in area.pre_comments] == ["// Area returns the area"]
    assert full_file.decls[7].pre_comments == []


def test_struct_fields(full_file):
    point = full_file.decls[3].specs[0]
    assert point.name.name == "Point"
    fields = point.type.fields.fields
    assert [[name.name for name in field.names] for field in fields] == [["X", "Y"], ["Name"], []]
    assert fields[1].tag.value == '`json:"name"`'
    assert fields[2].type.kind == code_dom.NodeKind.star_expression


def test_function_signature(full_file):
    run = full_file.decls[7]
    params = run.type.params.fields
    assert [name.name for name in params[0].names] == ["items"]
    assert params[0].type.kind == code_dom.NodeKind.array_type
    assert params[1].type.kind == code_dom.NodeKind.ellipsis
    assert [[name.name for name in field.names] for field in run.type.results.fields] == [["n"], ["err"]]


def test_statement_kinds(full_file):
    run = full_file.decls[7]
    assert [statement.kind.name for statement in run.body.statements] == [
        "assign_statement",
        "for_statement",
        "range_statement",
        "if_statement",
        "decl_statement",
        "type_switch_statement",
        "assign_statement",
        "send_statement",
        "select_statement",
        "assign_statement",
        "defer_statement",
        "assign_statement",
        "assign_statement",
        "assign_statement",
        "expression_statement",
        "branch_statement",
        "labeled_statement",
    ]


def test_if_with_composite_literal_in_header(full_file):
    if_statement = full_file.decls[7].body.statements[3]
    assert if_statement.init.rhs[0].kind == code_dom.NodeKind.paren_expression
    assert if_statement.init.rhs[0].x.kind == code_dom.NodeKind.composite_literal
    assert if_statement.condition.kind == code_dom.NodeKind.binary_expression
    assert if_statement.else_branch.kind == code_dom.NodeKind.if_statement
    assert if_statement.else_branch.else_branch.kind == code_dom.NodeKind.block_statement


def test_selectors_found_everywhere(full_file):
    selectors = full_file.list_all_children_of_type(code_dom.DOMSelectorExpression)
    names = [selector.selector.name for selector in selectors]
    assert "PrevRealm" in names
    assert "Addr" in names
    assert "Sprintf" in names
    assert "String" in names


def test_inspect_is_pre_order():
    dom_root = utils.parse_source("package p\nfunc f() { std.A() }\n")
    kinds = []

    def visit(element):
        kinds.append(element.kind.name)
        return True

    dom_root.inspect(visit)
    assert kinds == ["source_file", "identifier", "func_decl", "identifier", "func_type", "field_list",
                     "block_statement", "expression_statement", "call_expression", "selector_expression",
                     "identifier", "identifier"]


def test_inspect_stops_descending_when_told_to():
    dom_root = utils.parse_source("package p\nfunc f() { std.A() }\n")
    kinds = []

    def visit(element):
        kinds.append(element.kind.name)
        return element.kind != code_dom.NodeKind.func_decl

    dom_root.inspect(visit)
    assert kinds == ["source_file", "identifier", "func_decl"]


def test_generic_type_parameters():
    dom_root = utils.parse_source("package p\n\ntype List[T any] struct {\n\titems []T\n}\n\ntype Buf [4]byte\n")
    generic = dom_root.decls[0].specs[0]
    assert [name.name for name in generic.type_params.fields[0].names] == ["T"]
    array = dom_root.decls[1].specs[0]
    assert array.type_params is None
    assert array.type.kind == code_dom.NodeKind.array_type


def test_embedded_instantiated_type():
    dom_root = utils.parse_source("package p\n\ntype T struct {\n\tList[int]\n\tpkg.Base `tag`\n\ta [2]int\n\tx int\n}\n")
    fields = dom_root.decls[0].specs[0].type.fields.fields
    assert [[name.name for name in field.names] for field in fields] == [[], [], ["a"], ["x"]]
    assert fields[0].type.kind == code_dom.NodeKind.index_expression
    assert fields[1].type.kind == code_dom.NodeKind.selector_expression
    assert fields[1].tag.value == "`tag`"
    assert fields[2].type.kind == code_dom.NodeKind.array_type


def test_deep_tree_links_parents():
    dom_root = utils.parse_source("package p\n\nvar s = " + " + ".join(["x"] * 3000) + "\n")
    dom_root.validate_hierarchy()
    identifiers = dom_root.list_all_children_of_type(code_dom.DOMIdentifier)
    assert len(identifiers) == 3002
    assert all(identifier.parent is not None for identifier in identifiers)


def test_composite_literal_in_range_header():
    dom_root = utils.parse_source("package p\n\nfunc f() {\n\tfor _, v := range []int{1, 2} {\n\t\t_ = v\n\t}\n}\n")
    loop = dom_root.decls[0].body.statements[0]
    assert loop.kind == code_dom.NodeKind.range_statement
    assert loop.x.kind == code_dom.NodeKind.composite_literal
    assert len(loop.x.elements) == 2


def test_function_without_body():
    dom_root = utils.parse_source("package p\n\nfunc f()\n")
    assert dom_root.decls[0].body is None


def test_missing_package_clause():
    with pytest.raises(ParseError) as info:
        utils.parse_source("func f() {}\n")
    assert info.value.line == 1
    assert info.value.column == 1
    assert "expected 'package', found 'func'" in str(info.value)


def test_import_after_declaration():
    with pytest.raises(ParseError) as info:
        utils.parse_source('package p\n\nfunc f() {}\n\nimport "std"\n')
    assert info.value.line == 5
    assert "imports must appear before other declarations" in str(info.value)


def test_unclosed_call():
    with pytest.raises(ParseError):
        utils.parse_source('package main\n\nimport "std"\n\nfunc main() {\n\tstd.Addr( // missing closing parenthesis\n')


def test_missing_semicolon_between_statements():
    with pytest.raises(ParseError) as info:
        utils.parse_source("package p\n\nfunc f() {\n\ta() b()\n}\n")
    assert info.value.line == 4
    assert "expected ';' or newline after statement" in str(info.value)


def test_dump(capsys):
    utils.parse_source("package p\n\nvar x = 1\n", "p.gno").dump()
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Source file: p.gno"
    assert lines[1] == "    identifier: p"
    assert lines[2] == "    Declaration: var (1 specs)"
    assert lines[3] == "        Value: x"
