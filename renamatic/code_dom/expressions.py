from .common import *
from renamatic import code_dom

# Binary operator precedences, from lowest to highest
binary_precedence = {
    'LOR': 1,
    'LAND': 2,
    'EQL': 3, 'NEQ': 3, 'LSS': 3, 'LEQ': 3, 'GTR': 3, 'GEQ': 3,
    'ADD': 4, 'SUB': 4, 'OR': 4, 'XOR': 4,
    'MUL': 5, 'QUO': 5, 'REM': 5, 'SHL': 5, 'SHR': 5, 'AND': 5, 'AND_NOT': 5,
}

unary_operator_types = ['ADD', 'SUB', 'NOT', 'XOR', 'AND', 'TILDE']

basic_literal_types = ['INT', 'FLOAT', 'IMAG', 'CHAR', 'STRING']


# Base class for expressions, which also holds the expression parser
class DOMExpression(code_dom.element.DOMElement):

    # Parse a full expression (including binary operators)
    @staticmethod
    def parse(context, stream):
        return DOMExpression.parse_binary(context, stream, 1)

    # Parse a comma-separated list of expressions
    @staticmethod
    def parse_list(context, stream):
        expressions = [DOMExpression.parse(context, stream)]
        while stream.get_token_of_type(['COMMA']) is not None:
            expressions.append(DOMExpression.parse(context, stream))
        return expressions

    # Parse binary operators with precedence of at least min_precedence
    @staticmethod
    def parse_binary(context, stream, min_precedence):
        x = DOMExpression.parse_unary(context, stream)
        while True:
            tok = stream.peek_token()
            precedence = binary_precedence.get(tok.type, 0) if tok is not None else 0
            if precedence < min_precedence:
                return x
            stream.get_token()
            y = DOMExpression.parse_binary(context, stream, precedence + 1)
            x = DOMBinaryExpression.create(x, tok.value, y)

    @staticmethod
    def parse_unary(context, stream):
        tok = stream.get_token_of_type(unary_operator_types)
        if tok is not None:
            dom_element = DOMUnaryExpression()
            dom_element.operator = tok.value
            dom_element.x = DOMExpression.parse_unary(context, stream)
            return dom_element

        if stream.peek_token_of_type(['ARROW']) is not None:
            # Either a receive operation or a receive-only channel type (<-chan T)
            checkpoint = stream.get_checkpoint()
            stream.get_token()
            if stream.peek_token_of_type(['CHAN']) is not None:
                stream.rewind(checkpoint)
                return code_dom.types.parse_type(context, stream)
            dom_element = DOMUnaryExpression()
            dom_element.operator = '<-'
            dom_element.x = DOMExpression.parse_unary(context, stream)
            return dom_element

        if stream.get_token_of_type(['MUL']) is not None:
            dom_element = DOMStarExpression()
            dom_element.x = DOMExpression.parse_unary(context, stream)
            return dom_element

        return DOMExpression.parse_primary(context, stream)

    # Parse an operand followed by any number of selectors, indices, slices, type assertions, calls and
    # composite literal bodies
    @staticmethod
    def parse_primary(context, stream):
        x = DOMExpression.parse_operand(context, stream)
        while True:
            tok = stream.peek_token()
            if tok is None:
                return x
            if tok.type == 'PERIOD':
                stream.get_token()
                if stream.peek_token_of_type(['LPAREN']) is not None:
                    x = DOMTypeAssertExpression.parse_suffix(context, stream, x)
                else:
                    x = DOMSelectorExpression.create(x, DOMIdentifier.parse_required(context, stream,
                                                                                      "selector"))
            elif tok.type == 'LBRACK':
                x = DOMExpression.parse_index_or_slice(context, stream, x)
            elif tok.type == 'LPAREN':
                x = DOMCallExpression.parse_suffix(context, stream, x)
            elif tok.type == 'LBRACE':
                if not DOMCompositeLiteral.is_literal_type(context, x):
                    return x
                x = DOMCompositeLiteral.parse_suffix(context, stream, x)
            else:
                return x

    @staticmethod
    def parse_operand(context, stream):
        tok = stream.peek_token()
        if tok is None:
            raise stream.error("expected operand")
        if tok.type == 'IDENT':
            return DOMIdentifier.parse(context, stream)
        if tok.type in basic_literal_types:
            return DOMBasicLiteral.parse(context, stream)
        if tok.type == 'LPAREN':
            return DOMParenExpression.parse(context, stream)
        if tok.type == 'FUNC':
            return DOMFunctionLiteral.parse(context, stream)
        if tok.type in ['LBRACK', 'STRUCT', 'MAP', 'CHAN', 'INTERFACE']:
            return code_dom.types.parse_type(context, stream)
        raise stream.error("expected operand")

    # Parse x[i], x[i, j] (generic instantiation), x[lo:hi] or x[lo:hi:max]
    @staticmethod
    def parse_index_or_slice(context, stream, x):
        stream.expect_token_of_type(['LBRACK'])
        context.expression_level += 1

        if stream.peek_token_of_type(['RBRACK']) is not None:
            raise stream.error("expected operand")

        indices = [None, None, None]
        colons = 0
        if stream.peek_token_of_type(['COLON']) is None:
            indices[0] = DOMExpression.parse(context, stream)
        while colons < 2 and stream.get_token_of_type(['COLON']) is not None:
            colons += 1
            if stream.peek_token_of_type(['COLON', 'RBRACK']) is None:
                indices[colons] = DOMExpression.parse(context, stream)

        type_arguments = [indices[0]]
        if colons == 0:
            while stream.get_token_of_type(['COMMA']) is not None:
                if stream.peek_token_of_type(['RBRACK']) is not None:
                    break  # Trailing comma
                type_arguments.append(DOMExpression.parse(context, stream))

        context.expression_level -= 1
        stream.expect_token_of_type(['RBRACK'], "']'")

        if colons > 0:
            dom_element = DOMSliceExpression()
            dom_element.x = x
            dom_element.low, dom_element.high, dom_element.max = indices
            dom_element.is_slice3 = colons == 2
            if dom_element.is_slice3 and (dom_element.high is None or dom_element.max is None):
                raise stream.error("middle and final index required in 3-index slice")
            return dom_element

        dom_element = DOMIndexExpression()
        dom_element.x = x
        dom_element.indices = type_arguments
        return dom_element

    def __str__(self):
        return self.kind.name + ": " + self.to_gno_string()


# A plain identifier
class DOMIdentifier(DOMExpression):
    kind = NodeKind.identifier

    def __init__(self):
        super().__init__()
        self.name = None

    # Parse tokens from the token stream given
    @staticmethod
    def parse(context, stream):
        tok = stream.get_token_of_type(['IDENT'])
        if tok is None:
            return None
        dom_element = DOMIdentifier()
        dom_element.tokens = [tok]
        dom_element.name = tok.value
        tok.element = dom_element
        return dom_element

    # Parse an identifier, raising ParseError if there isn't one
    @staticmethod
    def parse_required(context, stream, what="identifier"):
        dom_element = DOMIdentifier.parse(context, stream)
        if dom_element is None:
            raise stream.error("expected " + what)
        return dom_element

    # Parse a comma-separated list of identifiers
    @staticmethod
    def parse_list(context, stream):
        names = [DOMIdentifier.parse_required(context, stream)]
        while stream.get_token_of_type(['COMMA']) is not None:
            names.append(DOMIdentifier.parse_required(context, stream))
        return names

    # Has this identifier been changed since it was parsed?
    def is_modified(self):
        return len(self.tokens) > 0 and self.tokens[0].value != self.name

    def to_gno_string(self):
        return self.name


# An integer, floating-point, imaginary, rune or string literal
class DOMBasicLiteral(DOMExpression):
    kind = NodeKind.basic_literal

    def __init__(self):
        super().__init__()
        self.literal_type = None  # Token type (INT/FLOAT/IMAG/CHAR/STRING)
        self.value = None  # Literal text as it appears in the source

    @staticmethod
    def parse(context, stream):
        tok = stream.get_token_of_type(basic_literal_types)
        if tok is None:
            return None
        dom_element = DOMBasicLiteral()
        dom_element.tokens = [tok]
        dom_element.literal_type = tok.type
        dom_element.value = tok.value
        return dom_element

    def to_gno_string(self):
        return self.value


# A composite literal such as Point{1, 2} or []int{1, 2, 3}
# Nested literal values with an elided type ({1, 2} inside [][]int{...}) have type set to None
class DOMCompositeLiteral(DOMExpression):
    kind = NodeKind.composite_literal

    def __init__(self):
        super().__init__()
        self.type = None
        self.elements = []

    # Can "x {" begin a composite literal here?
    @staticmethod
    def is_literal_type(context, x):
        if isinstance(x, (DOMIdentifier, DOMIndexExpression)):
            return context.expression_level >= 0
        if isinstance(x, DOMSelectorExpression):
            return isinstance(x.x, DOMIdentifier) and context.expression_level >= 0
        return isinstance(x, (code_dom.types.DOMArrayType, code_dom.types.DOMStructType,
                              code_dom.types.DOMMapType))

    @staticmethod
    def parse_suffix(context, stream, literal_type):
        dom_element = DOMCompositeLiteral.parse_literal_value(context, stream)
        dom_element.type = literal_type
        return dom_element

    # Parse the { ... } part of a composite literal
    @staticmethod
    def parse_literal_value(context, stream):
        dom_element = DOMCompositeLiteral()
        stream.expect_token_of_type(['LBRACE'])
        context.expression_level += 1
        while stream.peek_token_of_type(['RBRACE']) is None:
            dom_element.elements.append(DOMCompositeLiteral.parse_element(context, stream))
            if stream.get_token_of_type(['COMMA']) is None:
                break
        context.expression_level -= 1
        stream.expect_token_of_type(['RBRACE'], "'}' or ','")
        return dom_element

    @staticmethod
    def parse_element(context, stream):
        x = DOMCompositeLiteral.parse_element_value(context, stream)
        if stream.get_token_of_type(['COLON']) is not None:
            dom_element = DOMKeyValueExpression()
            dom_element.key = x
            dom_element.value = DOMCompositeLiteral.parse_element_value(context, stream)
            return dom_element
        return x

    @staticmethod
    def parse_element_value(context, stream):
        if stream.peek_token_of_type(['LBRACE']) is not None:
            return DOMCompositeLiteral.parse_literal_value(context, stream)
        return DOMExpression.parse(context, stream)

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(code_dom.element.optional_child(self.type))
        lists.append(self.elements)
        return lists

    def to_gno_string(self):
        prefix = self.type.to_gno_string() if self.type is not None else ""
        return prefix + "{" + join_gno_strings(self.elements) + "}"


# A function literal (closure)
class DOMFunctionLiteral(DOMExpression):
    kind = NodeKind.func_literal

    def __init__(self):
        super().__init__()
        self.type = None  # DOMFunctionType
        self.body = None  # DOMBlockStatement

    # Parses either a function literal, or a plain function type if no body follows
    @staticmethod
    def parse(context, stream):
        function_type = code_dom.types.DOMFunctionType.parse(context, stream)
        if stream.peek_token_of_type(['LBRACE']) is None:
            return function_type

        dom_element = DOMFunctionLiteral()
        dom_element.type = function_type
        context.expression_level += 1
        dom_element.body = code_dom.statements.DOMBlockStatement.parse(context, stream)
        context.expression_level -= 1
        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.type])
        lists.append([self.body])
        return lists

    def to_gno_string(self):
        return self.type.to_gno_string() + " {...}"


# An expression in parentheses
class DOMParenExpression(DOMExpression):
    kind = NodeKind.paren_expression

    def __init__(self):
        super().__init__()
        self.x = None

    @staticmethod
    def parse(context, stream):
        stream.expect_token_of_type(['LPAREN'])
        dom_element = DOMParenExpression()
        context.expression_level += 1
        dom_element.x = DOMExpression.parse(context, stream)
        context.expression_level -= 1
        stream.expect_token_of_type(['RPAREN'], "')'")
        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.x])
        return lists

    def to_gno_string(self):
        return "(" + self.x.to_gno_string() + ")"


# A member access: x.selector
class DOMSelectorExpression(DOMExpression):
    kind = NodeKind.selector_expression

    def __init__(self):
        super().__init__()
        self.x = None  # The receiver expression
        self.selector = None  # DOMIdentifier for the member name

    @staticmethod
    def create(x, selector):
        dom_element = DOMSelectorExpression()
        dom_element.x = x
        dom_element.selector = selector
        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.x])
        lists.append([self.selector])
        return lists

    def to_gno_string(self):
        return self.x.to_gno_string() + "." + self.selector.to_gno_string()


# x[i], or x[T1, T2] for a generic instantiation
class DOMIndexExpression(DOMExpression):
    kind = NodeKind.index_expression

    def __init__(self):
        super().__init__()
        self.x = None
        self.indices = []

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.x])
        lists.append(self.indices)
        return lists

    def to_gno_string(self):
        return self.x.to_gno_string() + "[" + join_gno_strings(self.indices) + "]"


# x[low:high] or x[low:high:max]
class DOMSliceExpression(DOMExpression):
    kind = NodeKind.slice_expression

    def __init__(self):
        super().__init__()
        self.x = None
        self.low = None
        self.high = None
        self.max = None
        self.is_slice3 = False

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.x])
        lists.append(code_dom.element.optional_child(self.low))
        lists.append(code_dom.element.optional_child(self.high))
        lists.append(code_dom.element.optional_child(self.max))
        return lists

    def to_gno_string(self):
        parts = [self.low, self.high]
        if self.is_slice3:
            parts.append(self.max)
        return self.x.to_gno_string() + "[" + ":".join(
            part.to_gno_string() if part is not None else "" for part in parts) + "]"


# x.(T), or x.(type) in a type switch (in which case type is None)
class DOMTypeAssertExpression(DOMExpression):
    kind = NodeKind.type_assert_expression

    def __init__(self):
        super().__init__()
        self.x = None
        self.type = None

    @staticmethod
    def parse_suffix(context, stream, x):
        stream.expect_token_of_type(['LPAREN'])
        dom_element = DOMTypeAssertExpression()
        dom_element.x = x
        if stream.get_token_of_type(['TYPE']) is None:
            dom_element.type = code_dom.types.parse_type_required(context, stream)
        stream.expect_token_of_type(['RPAREN'], "')'")
        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.x])
        lists.append(code_dom.element.optional_child(self.type))
        return lists

    def to_gno_string(self):
        type_string = self.type.to_gno_string() if self.type is not None else "type"
        return self.x.to_gno_string() + ".(" + type_string + ")"


# A function call (or conversion)
class DOMCallExpression(DOMExpression):
    kind = NodeKind.call_expression

    def __init__(self):
        super().__init__()
        self.function = None  # The expression being called
        self.arguments = []
        self.has_ellipsis = False  # Is the final argument followed by "..."?

    @staticmethod
    def parse_suffix(context, stream, function):
        stream.expect_token_of_type(['LPAREN'])
        dom_element = DOMCallExpression()
        dom_element.function = function
        context.expression_level += 1
        while stream.peek_token_of_type(['RPAREN']) is None:
            dom_element.arguments.append(DOMExpression.parse(context, stream))
            if stream.get_token_of_type(['ELLIPSIS']) is not None:
                dom_element.has_ellipsis = True
            if stream.get_token_of_type(['COMMA']) is None:
                break
        context.expression_level -= 1
        stream.expect_token_of_type(['RPAREN'], "')'")
        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.function])
        lists.append(self.arguments)
        return lists

    def to_gno_string(self):
        return self.function.to_gno_string() + "(" + join_gno_strings(self.arguments) + \
            ("..." if self.has_ellipsis else "") + ")"


# *x, either a pointer dereference or a pointer type
class DOMStarExpression(DOMExpression):
    kind = NodeKind.star_expression

    def __init__(self):
        super().__init__()
        self.x = None

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.x])
        return lists

    def to_gno_string(self):
        return "*" + self.x.to_gno_string()


# A unary operation (including <-ch receives and ~T constraint terms)
class DOMUnaryExpression(DOMExpression):
    kind = NodeKind.unary_expression

    def __init__(self):
        super().__init__()
        self.operator = None
        self.x = None

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.x])
        return lists

    def to_gno_string(self):
        return self.operator + self.x.to_gno_string()


class DOMBinaryExpression(DOMExpression):
    kind = NodeKind.binary_expression

    def __init__(self):
        super().__init__()
        self.x = None
        self.operator = None
        self.y = None

    @staticmethod
    def create(x, operator, y):
        dom_element = DOMBinaryExpression()
        dom_element.x = x
        dom_element.operator = operator
        dom_element.y = y
        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.x])
        lists.append([self.y])
        return lists

    def to_gno_string(self):
        return self.x.to_gno_string() + " " + self.operator + " " + self.y.to_gno_string()


# key: value inside a composite literal
class DOMKeyValueExpression(DOMExpression):
    kind = NodeKind.key_value_expression

    def __init__(self):
        super().__init__()
        self.key = None
        self.value = None

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.key])
        lists.append([self.value])
        return lists

    def to_gno_string(self):
        return self.key.to_gno_string() + ": " + self.value.to_gno_string()


# ...T in a variadic parameter list, or [...] in an array type (where element is None)
class DOMEllipsis(DOMExpression):
    kind = NodeKind.ellipsis

    def __init__(self):
        super().__init__()
        self.element = None

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(code_dom.element.optional_child(self.element))
        return lists

    def to_gno_string(self):
        if self.element is None:
            return "..."
        return "..." + self.element.to_gno_string()
