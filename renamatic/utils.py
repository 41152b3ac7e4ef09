from renamatic import code_dom
from renamatic import gno_lexer
from renamatic.errors import ParseError


# Parse Gno source text into a source file DOM element
def parse_source(text, source_filename=None):
    stream = gno_lexer.tokenize(text)
    context = code_dom.ParseContext()
    try:
        return code_dom.DOMSourceFile.parse(context, stream, source_filename)
    except RecursionError:
        # Deeply nested parentheses, literals or blocks go past the parser's recursion limit
        token = stream.peek_token()
        if token is None:
            raise ParseError("source is nested too deeply to parse", path=source_filename)
        raise ParseError("source is nested too deeply to parse", token.lineno, token.column, source_filename)


# Create an expression DOM element from a string (e.g. "std.PrevRealm().Addr()")
def create_expression(text):
    stream = gno_lexer.tokenize(text)
    context = code_dom.ParseContext()
    element = code_dom.DOMExpression.parse(context, stream)
    element.link_children()
    return element


# Check if an expression is rooted in the qualifier identifier, looking through any number of member accesses and
# calls (so std, std.Foo, std.Foo() and std.Foo().Bar all count, but foo(std) does not)
def is_qualified(expr, qualifier="std"):
    while expr is not None:
        if expr.kind == code_dom.NodeKind.identifier:
            return expr.name == qualifier
        if expr.kind == code_dom.NodeKind.selector_expression:
            expr = expr.x
        elif expr.kind == code_dom.NodeKind.call_expression:
            expr = expr.function
        else:
            return False
    return False
