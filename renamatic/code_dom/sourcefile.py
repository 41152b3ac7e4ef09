import io
from .common import *
from renamatic import code_dom
from renamatic.errors import SerializeError


# A single Gno source file
class DOMSourceFile(code_dom.element.DOMElement):
    kind = NodeKind.source_file

    def __init__(self):
        super().__init__()
        self.source_filename = None  # The filename this source came from
        self.package_name = None  # DOMIdentifier
        self.decls = []  # Top-level declarations in file order (imports first)
        self.comments = []  # Every comment in the file, in order
        self.all_tokens = []  # Every token in the file, including whitespace and comments

    # Parse tokens from the token stream given
    @staticmethod
    def parse(context, stream, source_filename=None):
        dom_element = DOMSourceFile()
        dom_element.source_filename = source_filename
        dom_element.all_tokens = stream.tokens
        dom_element.comments = code_dom.comment.DOMComment.parse_all(context, stream)

        dom_element.pre_comments = code_dom.comment.DOMComment.get_preceding_comments(context, stream)
        stream.expect_token_of_type(['PACKAGE'], "'package'")
        dom_element.package_name = code_dom.expressions.DOMIdentifier.parse_required(context, stream,
                                                                                     "package name")
        expect_semicolon(stream, "package clause")

        # Imports must come before anything else
        while stream.peek_token_of_type(['IMPORT']) is not None:
            dom_element.add_decl(context, stream, code_dom.declarations.DOMGenDecl)

        while not stream.at_end():
            tok = stream.peek_token()
            if tok.type == 'FUNC':
                dom_element.add_decl(context, stream, code_dom.declarations.DOMFunctionDeclaration)
            elif tok.type in ['CONST', 'TYPE', 'VAR']:
                dom_element.add_decl(context, stream, code_dom.declarations.DOMGenDecl)
            elif tok.type == 'IMPORT':
                raise stream.error("imports must appear before other declarations")
            else:
                raise stream.error("expected declaration")

        for comment in dom_element.comments:
            comment.parent = dom_element
        dom_element.link_children()

        return dom_element

    # Parse a top-level declaration with the class given, along with its doc comments
    def add_decl(self, context, stream, decl_class):
        comments = code_dom.comment.DOMComment.get_preceding_comments(context, stream)
        decl = decl_class.parse(context, stream)
        decl.pre_comments = comments
        self.decls.append(decl)
        expect_semicolon(stream, "declaration")

    # Get the import specs in this file
    def get_imports(self):
        imports = []
        for decl in self.decls:
            if decl.kind == NodeKind.gen_decl and decl.token == 'import':
                imports.extend(decl.specs)
        return imports

    # Check that every renamed identifier can still be written out
    def validate_identifiers(self):
        for identifier in self.list_all_children_of_type(code_dom.expressions.DOMIdentifier):
            if identifier.is_modified() and not is_valid_identifier(identifier.name):
                token = identifier.tokens[0]
                raise SerializeError("Cannot write identifier " + repr(identifier.name) + " (renamed from " +
                                     repr(token.value) + ") at " + str(token.lineno) + ":" + str(token.column) +
                                     " as it is not a valid identifier")

    # Write this element out as Gno code
    # Everything is written from the original tokens, so formatting and comments are preserved exactly
    def write_to_gno(self, file, context=WriteContext()):
        if context.validate_identifiers:
            self.validate_identifiers()
        file.write(collapse_tokens_to_string_with_whitespace(self.all_tokens))

    def to_gno_string(self):
        buffer = io.StringIO()
        self.write_to_gno(buffer)
        return buffer.getvalue()

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.package_name])
        lists.append(self.decls)
        return lists

    def __str__(self):
        if self.source_filename is not None:
            return "Source file: " + self.source_filename
        else:
            return "Source file"
