from enum import Enum
from renamatic import code_dom
from renamatic import utils

# Structural comparison of two DOM trees, used to check the results of a rewrite
# Comments and whitespace are not part of the comparison, and only the node kinds that matter for renaming are
# looked at in detail (everything else compares equal as long as the kinds match)


class MismatchKind(Enum):
    type_mismatch = 0  # The two nodes are different kinds of node
    length_mismatch = 1  # Two child lists have different lengths
    value_mismatch = 2  # A name, token or path differs
    nil_mismatch = 3  # One node is missing


# The result of a comparison - either success, or details of the first mismatch found
class ComparisonResult:
    def __init__(self, mismatch_kind=None, message=None, path="", got_kind=None, want_kind=None):
        self.mismatch_kind = mismatch_kind
        self.message = message
        self.path = path  # Where in the tree the mismatch was found, e.g. "decls[1].body.statements[0]"
        self.got_kind = got_kind
        self.want_kind = want_kind

    @property
    def ok(self):
        return self.mismatch_kind is None

    def __bool__(self):
        return self.ok

    # Get a copy of this result with extra context in front of the message
    def with_prefix(self, prefix):
        if self.ok:
            return self
        return ComparisonResult(self.mismatch_kind, prefix + self.message, self.path, self.got_kind, self.want_kind)

    def __str__(self):
        if self.ok:
            return "OK"
        if self.path != "":
            return self.path + ": " + self.message
        return self.message


success = ComparisonResult()


# Get the path to a named child of the element at path
def child_path(path, name):
    if path == "":
        return name
    return path + "." + name


def kind_name(element):
    return element.kind.name if element is not None else "nil"


def mismatch(mismatch_kind, message, path, got, want):
    return ComparisonResult(mismatch_kind, message, path, kind_name(got), kind_name(want))


# Compare two elements (either of which may be None)
def compare(got, want, path=""):
    if got is None or want is None:
        if got is not want:
            return mismatch(MismatchKind.nil_mismatch, "one node is nil, other is not", path, got, want)
        return success

    if got.kind != want.kind:
        return mismatch(MismatchKind.type_mismatch,
                        "type mismatch: got " + got.kind.name + ", want " + want.kind.name, path, got, want)

    compare_func = node_comparers.get(got.kind, compare_default)
    return compare_func(got, want, path)


# Compare two lists of elements pairwise, reporting the index of the first pair that differs
def compare_lists(got, want, path):
    if len(got) != len(want):
        return ComparisonResult(MismatchKind.length_mismatch,
                                "length mismatch: got " + str(len(got)) + ", want " + str(len(want)), path)
    for index in range(len(got)):
        result = compare(got[index], want[index], path + "[" + str(index) + "]")
        if not result:
            return result.with_prefix("comparison failed at index " + str(index) + ": ")
    return success


def compare_value(description, got_value, want_value, path, got, want):
    if got_value != want_value:
        return mismatch(MismatchKind.value_mismatch,
                        description + " mismatch: got " + str(got_value) + ", want " + str(want_value),
                        path, got, want)
    return success


def compare_source_file(got, want, path):
    result = compare_value("package name", got.package_name.name, want.package_name.name, path, got, want)
    if not result:
        return result
    return compare_lists(got.decls, want.decls, child_path(path, "decls"))


# Receivers and signatures are not compared
def compare_function_declaration(got, want, path):
    result = compare_value("function name", got.name.name, want.name.name, path, got, want)
    if not result:
        return result
    return compare(got.body, want.body, child_path(path, "body"))


def compare_gen_decl(got, want, path):
    result = compare_value("token", got.token, want.token, path, got, want)
    if not result:
        return result
    return compare_lists(got.specs, want.specs, child_path(path, "specs"))


def compare_import_spec(got, want, path):
    return compare_value("import path", got.path.value, want.path.value, path, got, want)


def compare_block_statement(got, want, path):
    return compare_lists(got.statements, want.statements, child_path(path, "statements"))


def compare_expression_statement(got, want, path):
    return compare(got.x, want.x, child_path(path, "x"))


def compare_call_expression(got, want, path):
    result = compare(got.function, want.function, child_path(path, "function"))
    if not result:
        return result.with_prefix("function comparison failed: ")
    result = compare_lists(got.arguments, want.arguments, child_path(path, "arguments"))
    if not result:
        return result.with_prefix("arguments comparison failed: ")
    return success


def compare_selector_expression(got, want, path):
    result = compare(got.x, want.x, child_path(path, "x"))
    if not result:
        return result.with_prefix("selector X comparison failed: ")
    result = compare(got.selector, want.selector, child_path(path, "selector"))
    if not result:
        return result.with_prefix("selector Sel comparison failed: ")
    return success


def compare_identifier(got, want, path):
    return compare_value("identifier", got.name, want.name, path, got, want)


# Anything without a specific comparer matches as long as the kinds are the same
def compare_default(got, want, path):
    return success


node_comparers = {
    code_dom.NodeKind.source_file: compare_source_file,
    code_dom.NodeKind.func_decl: compare_function_declaration,
    code_dom.NodeKind.gen_decl: compare_gen_decl,
    code_dom.NodeKind.import_spec: compare_import_spec,
    code_dom.NodeKind.block_statement: compare_block_statement,
    code_dom.NodeKind.expression_statement: compare_expression_statement,
    code_dom.NodeKind.call_expression: compare_call_expression,
    code_dom.NodeKind.selector_expression: compare_selector_expression,
    code_dom.NodeKind.identifier: compare_identifier,
}


# Parse two pieces of Gno source and compare them structurally
# Raises ParseError if either does not parse
def compare_source(got_text, want_text):
    return compare(utils.parse_source(got_text), utils.parse_source(want_text))
