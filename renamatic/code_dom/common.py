# Common stuff for the code DOM
import re
from enum import Enum


class ParseContext:
    def __init__(self):
        # Expression nesting level, as in the Go parser: this is set to -1 while parsing the header of an
        # if/for/switch statement, where "T {" starts the statement body rather than a composite literal
        self.expression_level = 0
        self.comments_by_index = {}  # Comment elements for the source file being parsed, indexed by token index


class WriteContext:
    def __init__(self):
        self.validate_identifiers = True  # Check that renamed identifiers are still legal identifiers before writing


# The kinds of node that can appear in the DOM
# Every DOM element class has one of these as its kind
class NodeKind(Enum):
    unknown = 0
    source_file = 1
    comment = 2

    # Declarations
    gen_decl = 10
    import_spec = 11
    value_spec = 12
    type_spec = 13
    func_decl = 14
    field_list = 15
    field = 16

    # Expressions
    identifier = 20
    basic_literal = 21
    composite_literal = 22
    func_literal = 23
    paren_expression = 24
    selector_expression = 25
    index_expression = 26
    slice_expression = 27
    type_assert_expression = 28
    call_expression = 29
    star_expression = 30
    unary_expression = 31
    binary_expression = 32
    key_value_expression = 33
    ellipsis = 34

    # Types
    array_type = 40
    struct_type = 41
    func_type = 42
    interface_type = 43
    map_type = 44
    chan_type = 45

    # Statements
    decl_statement = 50
    empty_statement = 51
    labeled_statement = 52
    expression_statement = 53
    send_statement = 54
    inc_dec_statement = 55
    assign_statement = 56
    go_statement = 57
    defer_statement = 58
    return_statement = 59
    branch_statement = 60
    block_statement = 61
    if_statement = 62
    case_clause = 63
    switch_statement = 64
    type_switch_statement = 65
    comm_clause = 66
    select_statement = 67
    for_statement = 68
    range_statement = 69


keywords = frozenset(['break', 'case', 'chan', 'const', 'continue', 'default', 'defer', 'else', 'fallthrough',
                      'for', 'func', 'go', 'goto', 'if', 'import', 'interface', 'map', 'package', 'range',
                      'return', 'select', 'struct', 'switch', 'type', 'var'])

identifier_pattern = re.compile(r'[^\W\d]\w*')

# Assignment operators
assign_token_types = ['ASSIGN', 'DEFINE', 'ADD_ASSIGN', 'SUB_ASSIGN', 'MUL_ASSIGN', 'QUO_ASSIGN', 'REM_ASSIGN',
                      'AND_ASSIGN', 'OR_ASSIGN', 'XOR_ASSIGN', 'SHL_ASSIGN', 'SHR_ASSIGN', 'AND_NOT_ASSIGN']


# Is name something that can be written out as an identifier?
def is_valid_identifier(name):
    return (name is not None) and (identifier_pattern.fullmatch(name) is not None) and (name not in keywords)


# Get the text to write for a token
# Identifier tokens are owned by a DOMIdentifier, and we write the (possibly renamed) name from that
def token_text(token):
    element = getattr(token, 'element', None)
    if element is not None:
        return element.name
    return token.value


# Collapse a list of tokens back into a string, assuming the tokens already have suitable whitespace
def collapse_tokens_to_string_with_whitespace(tokens):
    return "".join(token_text(token) for token in tokens)


# Join the Gno strings for a list of elements
def join_gno_strings(elements, separator=", "):
    return separator.join(element.to_gno_string() for element in elements)


# Consume the semicolon (explicit or implicit) that ends a statement or declaration
# The semicolon may be omitted before a closing ) or }, or at the end of the file
def expect_semicolon(stream, what="statement"):
    if stream.get_token_of_type(['SEMICOLON']) is not None:
        return
    if stream.at_end() or stream.peek_token_of_type(['RPAREN', 'RBRACE']) is not None:
        return
    raise stream.error("expected ';' or newline after " + what)
