from .common import *
from renamatic import code_dom


# An import, const, type or var declaration, either single or a parenthesised group
class DOMGenDecl(code_dom.element.DOMElement):
    kind = NodeKind.gen_decl

    def __init__(self):
        super().__init__()
        self.token = None  # "import", "const", "type" or "var"
        self.is_grouped = False  # Was this declared as a ( ... ) group?
        self.specs = []

    # Parse tokens from the token stream given
    @staticmethod
    def parse(context, stream):
        tok = stream.expect_token_of_type(['IMPORT', 'CONST', 'TYPE', 'VAR'])

        dom_element = DOMGenDecl()
        dom_element.tokens = [tok]
        dom_element.token = tok.value

        if tok.type == 'IMPORT':
            spec_class = DOMImportSpec
        elif tok.type == 'TYPE':
            spec_class = DOMTypeSpec
        else:
            spec_class = DOMValueSpec

        if stream.get_token_of_type(['LPAREN']) is not None:
            dom_element.is_grouped = True
            while stream.peek_token_of_type(['RPAREN']) is None:
                spec_comments = code_dom.comment.DOMComment.get_preceding_comments(context, stream)
                spec = spec_class.parse(context, stream)
                spec.pre_comments = spec_comments
                dom_element.specs.append(spec)
                expect_semicolon(stream, tok.value + " declaration")
            stream.expect_token_of_type(['RPAREN'], "')'")
        else:
            dom_element.specs.append(spec_class.parse(context, stream))

        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(self.specs)
        return lists

    def __str__(self):
        return "Declaration: " + self.token + " (" + str(len(self.specs)) + " specs)"


# A single import, e.g. "std" or stdlib "strings"
class DOMImportSpec(code_dom.element.DOMElement):
    kind = NodeKind.import_spec

    def __init__(self):
        super().__init__()
        self.name = None  # Local package name (a DOMIdentifier, which may be "." or "_"), or None
        self.path = None  # DOMBasicLiteral

    @staticmethod
    def parse(context, stream):
        dom_element = DOMImportSpec()
        dot = stream.get_token_of_type(['PERIOD'])
        if dot is not None:
            dom_element.name = code_dom.expressions.DOMIdentifier()
            dom_element.name.name = dot.value
        else:
            dom_element.name = code_dom.expressions.DOMIdentifier.parse(context, stream)
        dom_element.path = code_dom.expressions.DOMBasicLiteral.parse(context, stream)
        if dom_element.path is None or dom_element.path.literal_type != 'STRING':
            raise stream.error("expected import path")
        return dom_element

    # Get the import path without quotes
    def get_import_path(self):
        return self.path.value[1:-1]

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(code_dom.element.optional_child(self.name))
        lists.append([self.path])
        return lists

    def __str__(self):
        if self.name is not None:
            return "Import: " + self.name.name + " " + self.path.value
        return "Import: " + self.path.value


# A const or var spec, e.g. "a, b int = 1, 2"
class DOMValueSpec(code_dom.element.DOMElement):
    kind = NodeKind.value_spec

    def __init__(self):
        super().__init__()
        self.names = []
        self.type = None
        self.values = []

    @staticmethod
    def parse(context, stream):
        dom_element = DOMValueSpec()
        dom_element.names = code_dom.expressions.DOMIdentifier.parse_list(context, stream)
        if stream.peek_token_of_type(['ASSIGN', 'SEMICOLON', 'RPAREN']) is None and not stream.at_end():
            dom_element.type = code_dom.types.parse_type_required(context, stream)
        if stream.get_token_of_type(['ASSIGN']) is not None:
            dom_element.values = code_dom.expressions.DOMExpression.parse_list(context, stream)
        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(self.names)
        lists.append(code_dom.element.optional_child(self.type))
        lists.append(self.values)
        return lists

    def __str__(self):
        return "Value: " + join_gno_strings(self.names)


# A type spec, e.g. "Foo struct { ... }" or "Alias = Foo"
class DOMTypeSpec(code_dom.element.DOMElement):
    kind = NodeKind.type_spec

    def __init__(self):
        super().__init__()
        self.name = None
        self.type_params = None  # DOMFieldList for generic types
        self.is_alias = False
        self.type = None

    @staticmethod
    def parse(context, stream):
        dom_element = DOMTypeSpec()
        dom_element.name = code_dom.expressions.DOMIdentifier.parse_required(context, stream, "type name")
        if DOMTypeSpec.has_type_parameters(stream):
            dom_element.type_params = code_dom.types.DOMFieldList.parse_type_parameters(context, stream)
        if stream.get_token_of_type(['ASSIGN']) is not None:
            dom_element.is_alias = True
        dom_element.type = code_dom.types.parse_type_required(context, stream)
        return dom_element

    # Work out if "type Name [" starts a type parameter list ("[T any]") rather than an array type ("[N]int")
    @staticmethod
    def has_type_parameters(stream):
        checkpoint = stream.get_checkpoint()
        result = stream.get_token_of_type(['LBRACK']) is not None and \
            stream.get_token_of_type(['IDENT']) is not None and \
            stream.peek_token_of_type(['IDENT', 'COMMA', 'INTERFACE', 'TILDE', 'FUNC', 'MAP', 'CHAN', 'STRUCT',
                                       'LBRACK']) is not None
        stream.rewind(checkpoint)
        return result

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.name])
        lists.append(code_dom.element.optional_child(self.type_params))
        lists.append([self.type])
        return lists

    def __str__(self):
        return "Type: " + self.name.name + " " + self.type.to_gno_string()


# A function or method declaration
class DOMFunctionDeclaration(code_dom.element.DOMElement):
    kind = NodeKind.func_decl

    def __init__(self):
        super().__init__()
        self.receiver = None  # DOMFieldList for methods, None for plain functions
        self.name = None
        self.type = None  # DOMFunctionType
        self.body = None  # DOMBlockStatement, or None for a declaration without a body

    # Parse tokens from the token stream given
    @staticmethod
    def parse(context, stream):
        tok = stream.expect_token_of_type(['FUNC'])

        dom_element = DOMFunctionDeclaration()
        dom_element.tokens = [tok]

        if stream.peek_token_of_type(['LPAREN']) is not None:
            dom_element.receiver = code_dom.types.DOMFieldList.parse_parameters(context, stream)

        dom_element.name = code_dom.expressions.DOMIdentifier.parse_required(context, stream, "function name")

        type_params = None
        if stream.peek_token_of_type(['LBRACK']) is not None:
            type_params = code_dom.types.DOMFieldList.parse_type_parameters(context, stream)

        dom_element.type = code_dom.types.DOMFunctionType.parse_signature(context, stream, type_params)

        if stream.peek_token_of_type(['LBRACE']) is not None:
            dom_element.body = code_dom.statements.DOMBlockStatement.parse(context, stream)

        return dom_element

    # Is this a method (as opposed to a plain function)?
    def is_method(self):
        return self.receiver is not None

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(code_dom.element.optional_child(self.receiver))
        lists.append([self.name])
        lists.append([self.type])
        lists.append(code_dom.element.optional_child(self.body))
        return lists

    def __str__(self):
        if self.receiver is not None:
            return "Method: " + self.receiver.to_gno_string() + " " + self.name.name
        return "Function: " + self.name.name
