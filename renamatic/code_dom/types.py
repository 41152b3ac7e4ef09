from .common import *
from renamatic import code_dom


# Parse a type, returning None if the next token cannot start one
def parse_type(context, stream):
    tok = stream.peek_token()
    if tok is None:
        return None
    if tok.type == 'IDENT':
        return parse_type_name(context, stream)
    if tok.type == 'LBRACK':
        return DOMArrayType.parse(context, stream)
    if tok.type == 'STRUCT':
        return DOMStructType.parse(context, stream)
    if tok.type == 'MUL':
        stream.get_token()
        dom_element = code_dom.expressions.DOMStarExpression()
        dom_element.x = parse_type_required(context, stream)
        return dom_element
    if tok.type == 'FUNC':
        return DOMFunctionType.parse(context, stream)
    if tok.type == 'INTERFACE':
        return DOMInterfaceType.parse(context, stream)
    if tok.type == 'MAP':
        return DOMMapType.parse(context, stream)
    if (tok.type == 'CHAN') or (tok.type == 'ARROW'):
        return DOMChanType.parse(context, stream)
    if tok.type == 'LPAREN':
        stream.get_token()
        dom_element = code_dom.expressions.DOMParenExpression()
        dom_element.x = parse_type_required(context, stream)
        stream.expect_token_of_type(['RPAREN'], "')'")
        return dom_element
    return None


# Parse a type, raising ParseError if there isn't one
def parse_type_required(context, stream):
    dom_element = parse_type(context, stream)
    if dom_element is None:
        raise stream.error("expected type")
    return dom_element


# Parse a (possibly package-qualified, possibly instantiated) type name, e.g. "int", "std.Address", "List[T]"
def parse_type_name(context, stream):
    dom_element = code_dom.expressions.DOMIdentifier.parse_required(context, stream, "type name")
    if stream.get_token_of_type(['PERIOD']) is not None:
        selector = code_dom.expressions.DOMIdentifier.parse_required(context, stream, "type name")
        dom_element = code_dom.expressions.DOMSelectorExpression.create(dom_element, selector)
    if stream.get_token_of_type(['LBRACK']) is not None:
        instance = code_dom.expressions.DOMIndexExpression()
        instance.x = dom_element
        instance.indices = [parse_type_required(context, stream)]
        while stream.get_token_of_type(['COMMA']) is not None:
            if stream.peek_token_of_type(['RBRACK']) is not None:
                break
            instance.indices.append(parse_type_required(context, stream))
        stream.expect_token_of_type(['RBRACK'], "']'")
        dom_element = instance
    return dom_element


# Parse a type constraint (in a type parameter list or interface), e.g. "any" or "~int | ~string"
def parse_constraint(context, stream):
    x = parse_constraint_term(context, stream)
    while True:
        tok = stream.get_token_of_type(['OR'])
        if tok is None:
            return x
        x = code_dom.expressions.DOMBinaryExpression.create(x, tok.value, parse_constraint_term(context, stream))


def parse_constraint_term(context, stream):
    tok = stream.get_token_of_type(['TILDE'])
    if tok is not None:
        dom_element = code_dom.expressions.DOMUnaryExpression()
        dom_element.operator = tok.value
        dom_element.x = parse_type_required(context, stream)
        return dom_element
    return parse_type_required(context, stream)


# A single entry in a parameter list, struct or interface
# Parameters and struct fields can declare several names for a single type
class DOMField(code_dom.element.DOMElement):
    kind = NodeKind.field

    def __init__(self):
        super().__init__()
        self.names = []  # DOMIdentifiers (empty for unnamed parameters and embedded fields)
        self.type = None
        self.tag = None  # DOMBasicLiteral for struct field tags

    @staticmethod
    def create(names, field_type):
        dom_element = DOMField()
        dom_element.names = names
        dom_element.type = field_type
        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(self.names)
        lists.append(code_dom.element.optional_child(self.type))
        lists.append(code_dom.element.optional_child(self.tag))
        return lists

    def to_gno_string(self):
        result = join_gno_strings(self.names)
        if self.type is not None:
            if len(result) > 0:
                result += " "
            result += self.type.to_gno_string()
        if self.tag is not None:
            result += " " + self.tag.to_gno_string()
        return result


# A list of fields: function parameters/results/receivers, type parameters, struct fields or interface methods
class DOMFieldList(code_dom.element.DOMElement):
    kind = NodeKind.field_list

    def __init__(self):
        super().__init__()
        self.opening = None  # The opening bracket ("(", "[" or "{"), or None for an unparenthesised result type
        self.fields = []

    # Parse a parenthesised parameter list
    # The entries are either all named ("a, b int, c string") or all unnamed ("int, string")
    @staticmethod
    def parse_parameters(context, stream):
        dom_element = DOMFieldList()
        dom_element.opening = stream.expect_token_of_type(['LPAREN']).value

        entries = []  # (name, type) pairs, where name is None for entries that were just a type
        while stream.peek_token_of_type(['RPAREN']) is None:
            entries.append(DOMFieldList.parse_parameter_entry(context, stream))
            if stream.get_token_of_type(['COMMA']) is None:
                break
        stream.expect_token_of_type(['RPAREN'], "')'")

        if not any(name is not None for name, _ in entries):
            dom_element.fields = [DOMField.create([], entry_type) for _, entry_type in entries]
            return dom_element

        # Named parameters - unnamed entries are actually names sharing the type of the next named entry
        pending_names = []
        for name, entry_type in entries:
            if name is None:
                if not isinstance(entry_type, code_dom.expressions.DOMIdentifier):
                    raise stream.error("mixed named and unnamed parameters")
                pending_names.append(entry_type)
            else:
                pending_names.append(name)
                dom_element.fields.append(DOMField.create(pending_names, entry_type))
                pending_names = []
        if len(pending_names) > 0:
            raise stream.error("mixed named and unnamed parameters")

        return dom_element

    # Parse one "name Type", "Type", "name ...Type" or "...Type" entry
    @staticmethod
    def parse_parameter_entry(context, stream):
        if stream.peek_token_of_type(['IDENT']) is not None:
            checkpoint = stream.get_checkpoint()
            name = code_dom.expressions.DOMIdentifier.parse(context, stream)
            if stream.peek_token_of_type(['COMMA', 'RPAREN']) is not None:
                return None, name
            if stream.peek_token_of_type(['PERIOD']) is not None:
                # Qualified type name
                stream.rewind(checkpoint)
                return None, parse_type_required(context, stream)
            return name, DOMFieldList.parse_parameter_type(context, stream)
        return None, DOMFieldList.parse_parameter_type(context, stream)

    @staticmethod
    def parse_parameter_type(context, stream):
        if stream.get_token_of_type(['ELLIPSIS']) is not None:
            dom_element = code_dom.expressions.DOMEllipsis()
            dom_element.element = parse_type_required(context, stream)
            return dom_element
        return parse_type_required(context, stream)

    # Parse function results, which are either a parameter list or a single unparenthesised type
    # Returns None if there are no results
    @staticmethod
    def parse_results(context, stream):
        if stream.peek_token_of_type(['LPAREN']) is not None:
            return DOMFieldList.parse_parameters(context, stream)
        result_type = parse_type(context, stream)
        if result_type is None:
            return None
        dom_element = DOMFieldList()
        dom_element.fields = [DOMField.create([], result_type)]
        return dom_element

    # Parse a type parameter list, e.g. "[K comparable, V any]"
    @staticmethod
    def parse_type_parameters(context, stream):
        dom_element = DOMFieldList()
        dom_element.opening = stream.expect_token_of_type(['LBRACK']).value
        while stream.peek_token_of_type(['RBRACK']) is None:
            names = code_dom.expressions.DOMIdentifier.parse_list(context, stream)
            dom_element.fields.append(DOMField.create(names, parse_constraint(context, stream)))
            if stream.get_token_of_type(['COMMA']) is None:
                break
        stream.expect_token_of_type(['RBRACK'], "']'")
        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(self.fields)
        return lists

    def to_gno_string(self):
        if self.opening == '{':
            return "{" + join_gno_strings(self.fields, "; ") + "}"
        if self.opening == '[':
            return "[" + join_gno_strings(self.fields) + "]"
        if self.opening == '(':
            return "(" + join_gno_strings(self.fields) + ")"
        return join_gno_strings(self.fields)


# [N]T, [...]T or []T (in which case length is None)
class DOMArrayType(code_dom.element.DOMElement):
    kind = NodeKind.array_type

    def __init__(self):
        super().__init__()
        self.length = None
        self.element = None

    @staticmethod
    def parse(context, stream):
        stream.expect_token_of_type(['LBRACK'])
        dom_element = DOMArrayType()
        if stream.get_token_of_type(['ELLIPSIS']) is not None:
            dom_element.length = code_dom.expressions.DOMEllipsis()
        elif stream.peek_token_of_type(['RBRACK']) is None:
            context.expression_level += 1
            dom_element.length = code_dom.expressions.DOMExpression.parse(context, stream)
            context.expression_level -= 1
        stream.expect_token_of_type(['RBRACK'], "']'")
        dom_element.element = parse_type_required(context, stream)
        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(code_dom.element.optional_child(self.length))
        lists.append([self.element])
        return lists

    def to_gno_string(self):
        length = self.length.to_gno_string() if self.length is not None else ""
        return "[" + length + "]" + self.element.to_gno_string()


class DOMStructType(code_dom.element.DOMElement):
    kind = NodeKind.struct_type

    def __init__(self):
        super().__init__()
        self.fields = None  # DOMFieldList

    @staticmethod
    def parse(context, stream):
        stream.expect_token_of_type(['STRUCT'])
        dom_element = DOMStructType()
        dom_element.fields = DOMFieldList()
        dom_element.fields.opening = stream.expect_token_of_type(['LBRACE'], "'{'").value
        while stream.peek_token_of_type(['RBRACE']) is None:
            dom_element.fields.fields.append(DOMStructType.parse_field(context, stream))
            expect_semicolon(stream, "struct field")
        stream.expect_token_of_type(['RBRACE'], "'}'")
        return dom_element

    @staticmethod
    def parse_field(context, stream):
        dom_element = DOMField()
        if stream.peek_token_of_type(['MUL']) is not None:
            dom_element.type = parse_type_required(context, stream)  # Embedded pointer type
        elif DOMStructType.is_embedded_field(stream):
            dom_element.type = parse_type_name(context, stream)
        else:
            dom_element.names = code_dom.expressions.DOMIdentifier.parse_list(context, stream)
            dom_element.type = parse_type_required(context, stream)
        if stream.peek_token_of_type(['STRING']) is not None:
            dom_element.tag = code_dom.expressions.DOMBasicLiteral.parse(context, stream)
        return dom_element

    # Work out if the next field is an embedded type ("Base", "pkg.Base" or "List[int]") rather than named fields
    # "a [N]int" and "List[int]" both start with an identifier and "[", so we check what follows the matching "]"
    @staticmethod
    def is_embedded_field(stream):
        checkpoint = stream.get_checkpoint()
        stream.expect_token_of_type(['IDENT'], "field name or embedded type")
        if stream.get_token_of_type(['LBRACK']) is not None:
            depth = 1
            while depth > 0:
                tok = stream.get_token()
                if tok is None:
                    break
                if tok.type == 'LBRACK':
                    depth += 1
                elif tok.type == 'RBRACK':
                    depth -= 1
            embedded = depth == 0 and stream.peek_token_of_type(['SEMICOLON', 'RBRACE', 'STRING']) is not None
        else:
            embedded = stream.peek_token_of_type(['SEMICOLON', 'RBRACE', 'STRING', 'PERIOD']) is not None
        stream.rewind(checkpoint)
        return embedded

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.fields])
        return lists

    def to_gno_string(self):
        return "struct" + self.fields.to_gno_string()


class DOMFunctionType(code_dom.element.DOMElement):
    kind = NodeKind.func_type

    def __init__(self):
        super().__init__()
        self.type_params = None  # DOMFieldList, only for generic function declarations
        self.params = None  # DOMFieldList
        self.results = None  # DOMFieldList, or None if the function returns nothing

    # Parse "func(params) results"
    @staticmethod
    def parse(context, stream):
        stream.expect_token_of_type(['FUNC'])
        return DOMFunctionType.parse_signature(context, stream)

    # Parse "(params) results"
    @staticmethod
    def parse_signature(context, stream, type_params=None):
        dom_element = DOMFunctionType()
        dom_element.type_params = type_params
        dom_element.params = DOMFieldList.parse_parameters(context, stream)
        dom_element.results = DOMFieldList.parse_results(context, stream)
        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(code_dom.element.optional_child(self.type_params))
        lists.append([self.params])
        lists.append(code_dom.element.optional_child(self.results))
        return lists

    def to_gno_string(self):
        result = "func" + self.params.to_gno_string()
        if self.results is not None:
            result += " " + self.results.to_gno_string()
        return result


class DOMInterfaceType(code_dom.element.DOMElement):
    kind = NodeKind.interface_type

    def __init__(self):
        super().__init__()
        self.methods = None  # DOMFieldList of methods, embedded interfaces and type constraints

    @staticmethod
    def parse(context, stream):
        stream.expect_token_of_type(['INTERFACE'])
        dom_element = DOMInterfaceType()
        dom_element.methods = DOMFieldList()
        dom_element.methods.opening = stream.expect_token_of_type(['LBRACE'], "'{'").value
        while stream.peek_token_of_type(['RBRACE']) is None:
            dom_element.methods.fields.append(DOMInterfaceType.parse_element(context, stream))
            expect_semicolon(stream, "interface element")
        stream.expect_token_of_type(['RBRACE'], "'}'")
        return dom_element

    @staticmethod
    def parse_element(context, stream):
        checkpoint = stream.get_checkpoint()
        name = code_dom.expressions.DOMIdentifier.parse(context, stream)
        if name is not None and stream.peek_token_of_type(['LPAREN']) is not None:
            return DOMField.create([name], DOMFunctionType.parse_signature(context, stream))
        stream.rewind(checkpoint)
        return DOMField.create([], parse_constraint(context, stream))

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.methods])
        return lists

    def to_gno_string(self):
        return "interface" + self.methods.to_gno_string()


class DOMMapType(code_dom.element.DOMElement):
    kind = NodeKind.map_type

    def __init__(self):
        super().__init__()
        self.key = None
        self.value = None

    @staticmethod
    def parse(context, stream):
        stream.expect_token_of_type(['MAP'])
        dom_element = DOMMapType()
        stream.expect_token_of_type(['LBRACK'], "'['")
        dom_element.key = parse_type_required(context, stream)
        stream.expect_token_of_type(['RBRACK'], "']'")
        dom_element.value = parse_type_required(context, stream)
        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.key])
        lists.append([self.value])
        return lists

    def to_gno_string(self):
        return "map[" + self.key.to_gno_string() + "]" + self.value.to_gno_string()


# chan T, chan<- T or <-chan T
class DOMChanType(code_dom.element.DOMElement):
    kind = NodeKind.chan_type

    def __init__(self):
        super().__init__()
        self.direction = "both"  # One of "both", "send" or "recv"
        self.value = None

    @staticmethod
    def parse(context, stream):
        dom_element = DOMChanType()
        if stream.get_token_of_type(['ARROW']) is not None:
            stream.expect_token_of_type(['CHAN'], "'chan'")
            dom_element.direction = "recv"
        else:
            stream.expect_token_of_type(['CHAN'])
            if stream.get_token_of_type(['ARROW']) is not None:
                dom_element.direction = "send"
        dom_element.value = parse_type_required(context, stream)
        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.value])
        return lists

    def to_gno_string(self):
        if self.direction == "send":
            return "chan<- " + self.value.to_gno_string()
        if self.direction == "recv":
            return "<-chan " + self.value.to_gno_string()
        return "chan " + self.value.to_gno_string()
