import ply.lex as lex
from renamatic import token_stream
from renamatic.errors import ParseError

# Lexer for Gno (and Go) source code
# Unlike a compiler lexer this keeps whitespace, newlines and comments as tokens, so that joining the values of all
# the tokens reproduces the original text exactly

reserved = {
    'break': 'BREAK',
    'case': 'CASE',
    'chan': 'CHAN',
    'const': 'CONST',
    'continue': 'CONTINUE',
    'default': 'DEFAULT',
    'defer': 'DEFER',
    'else': 'ELSE',
    'fallthrough': 'FALLTHROUGH',
    'for': 'FOR',
    'func': 'FUNC',
    'go': 'GO',
    'goto': 'GOTO',
    'if': 'IF',
    'import': 'IMPORT',
    'interface': 'INTERFACE',
    'map': 'MAP',
    'package': 'PACKAGE',
    'range': 'RANGE',
    'return': 'RETURN',
    'select': 'SELECT',
    'struct': 'STRUCT',
    'switch': 'SWITCH',
    'type': 'TYPE',
    'var': 'VAR',
}

tokens = [
    'IDENT',
    'INT',
    'FLOAT',
    'IMAG',
    'CHAR',
    'STRING',

    'LINE_COMMENT',
    'BLOCK_COMMENT',
    'WHITESPACE',
    'NEWLINE',

    'ADD',
    'SUB',
    'MUL',
    'QUO',
    'REM',
    'AND',
    'OR',
    'XOR',
    'SHL',
    'SHR',
    'AND_NOT',

    'ADD_ASSIGN',
    'SUB_ASSIGN',
    'MUL_ASSIGN',
    'QUO_ASSIGN',
    'REM_ASSIGN',
    'AND_ASSIGN',
    'OR_ASSIGN',
    'XOR_ASSIGN',
    'SHL_ASSIGN',
    'SHR_ASSIGN',
    'AND_NOT_ASSIGN',

    'LAND',
    'LOR',
    'ARROW',
    'INC',
    'DEC',
    'EQL',
    'LSS',
    'GTR',
    'ASSIGN',
    'NOT',
    'NEQ',
    'LEQ',
    'GEQ',
    'DEFINE',
    'ELLIPSIS',
    'TILDE',

    'LPAREN',
    'LBRACK',
    'LBRACE',
    'COMMA',
    'PERIOD',
    'RPAREN',
    'RBRACK',
    'RBRACE',
    'SEMICOLON',
    'COLON',
] + list(reserved.values())

# Tokens that carry no syntactic meaning
trivia_types = frozenset(['WHITESPACE', 'NEWLINE', 'LINE_COMMENT', 'BLOCK_COMMENT'])

# A semicolon is automatically inserted after a line ending with one of these
semicolon_trigger_types = frozenset(['IDENT', 'INT', 'FLOAT', 'IMAG', 'CHAR', 'STRING',
                                     'BREAK', 'CONTINUE', 'FALLTHROUGH', 'RETURN',
                                     'INC', 'DEC', 'RPAREN', 'RBRACK', 'RBRACE'])

# Note that ply sorts these by regular expression length, so the longer operators are tried first
t_ADD = r'\+'
t_SUB = r'-'
t_MUL = r'\*'
t_QUO = r'/'
t_REM = r'%'
t_AND = r'&'
t_OR = r'\|'
t_XOR = r'\^'
t_SHL = r'<<'
t_SHR = r'>>'
t_AND_NOT = r'&\^'

t_ADD_ASSIGN = r'\+='
t_SUB_ASSIGN = r'-='
t_MUL_ASSIGN = r'\*='
t_QUO_ASSIGN = r'/='
t_REM_ASSIGN = r'%='
t_AND_ASSIGN = r'&='
t_OR_ASSIGN = r'\|='
t_XOR_ASSIGN = r'\^='
t_SHL_ASSIGN = r'<<='
t_SHR_ASSIGN = r'>>='
t_AND_NOT_ASSIGN = r'&\^='

t_LAND = r'&&'
t_LOR = r'\|\|'
t_ARROW = r'<-'
t_INC = r'\+\+'
t_DEC = r'--'
t_EQL = r'=='
t_LSS = r'<'
t_GTR = r'>'
t_ASSIGN = r'='
t_NOT = r'!'
t_NEQ = r'!='
t_LEQ = r'<='
t_GEQ = r'>='
t_DEFINE = r':='
t_ELLIPSIS = r'\.\.\.'
t_TILDE = r'~'

t_LPAREN = r'\('
t_LBRACK = r'\['
t_LBRACE = r'\{'
t_COMMA = r','
t_PERIOD = r'\.'
t_RPAREN = r'\)'
t_RBRACK = r'\]'
t_RBRACE = r'\}'
t_SEMICOLON = r';'
t_COLON = r':'

decimal_digits = r'[0-9](?:_?[0-9])*'
hex_digits = r'_?[0-9a-fA-F](?:_?[0-9a-fA-F])*'

number_literal = (r'(?:0[xX](?:' + hex_digits + r')?(?:\.(?:' + hex_digits[2:] + r')?)?(?:[pP][+-]?' +
                  decimal_digits + r')?'
                  r'|0[bB]_?[01](?:_?[01])*'
                  r'|0[oO]_?[0-7](?:_?[0-7])*'
                  r'|(?:' + decimal_digits + r'(?:\.(?:' + decimal_digits + r')?)?|\.' + decimal_digits + r')'
                  r'(?:[eE][+-]?' + decimal_digits + r')?)i?')


# Comments are matched before the / and /= operators because function rules take priority
@lex.TOKEN(r'/\*(?:.|\n)*?\*/')
def t_BLOCK_COMMENT(t):
    t.lexer.lineno += t.value.count('\n')
    return t


# A /* with no closing */ (only matched when t_BLOCK_COMMENT fails)
@lex.TOKEN(r'/\*')
def t_UNTERMINATED_COMMENT(t):
    raise ParseError("comment not terminated", t.lexer.lineno, find_column(t))


@lex.TOKEN(r'//[^\n]*')
def t_LINE_COMMENT(t):
    return t


@lex.TOKEN(r'\n')
def t_NEWLINE(t):
    t.lexer.lineno += 1
    return t


@lex.TOKEN(r'[ \t\r\f]+')
def t_WHITESPACE(t):
    return t


@lex.TOKEN(r'`[^`]*`')
def t_RAW_STRING(t):
    t.type = 'STRING'
    t.lexer.lineno += t.value.count('\n')
    return t


@lex.TOKEN(r'"(?:[^"\\\n]|\\.)*"')
def t_STRING(t):
    return t


@lex.TOKEN(r"'(?:[^'\\\n]|\\.)+'")
def t_CHAR(t):
    return t


@lex.TOKEN(number_literal)
def t_NUMBER(t):
    t.type = classify_number(t.value)
    return t


@lex.TOKEN(r'[^\W\d]\w*')
def t_IDENT(t):
    t.type = reserved.get(t.value, 'IDENT')
    return t


# A byte order mark is only allowed as the very first character, where it is kept as whitespace so it gets
# written back out
@lex.TOKEN(r'\ufeff')
def t_BYTE_ORDER_MARK(t):
    if t.lexpos != 0:
        raise ParseError("invalid BOM in the middle of the file", t.lexer.lineno, find_column(t))
    t.type = 'WHITESPACE'
    return t


def t_error(t):
    if t.value[0] in '"`':
        message = "string literal not terminated"
    elif t.value[0] == "'":
        message = "rune literal not terminated"
    else:
        message = "invalid character " + repr(t.value[0])
    raise ParseError(message, t.lexer.lineno, find_column(t))


# Get the 1-based column of a token in the text being lexed
def find_column(t):
    return t.lexpos - t.lexer.lexdata.rfind('\n', 0, t.lexpos)


# Work out which kind of number literal a NUMBER match is
def classify_number(text):
    if text.endswith('i'):
        return 'IMAG'
    lowered = text.lower()
    if lowered.startswith('0x'):
        return 'FLOAT' if ('.' in lowered or 'p' in lowered) else 'INT'
    if lowered.startswith('0b') or lowered.startswith('0o'):
        return 'INT'
    if '.' in lowered or 'e' in lowered:
        return 'FLOAT'
    return 'INT'


# Create a zero-width semicolon token following the token given
def create_implicit_semicolon(after_token):
    token = lex.LexToken()
    token.type = 'SEMICOLON'
    token.value = ''
    token.lineno = after_token.lineno + after_token.value.count('\n')
    token.lexpos = after_token.lexpos + len(after_token.value)
    return token


# Apply the Go automatic semicolon rule: a line whose final token is an identifier, literal, one of the keywords
# break/continue/fallthrough/return, or one of ++ -- ) ] } gets a semicolon after that token
# The semicolons we add have no text, so they do not change the output when the tokens are written back
def insert_semicolons(raw_tokens):
    result = []
    insert_at = None  # Index at which a pending semicolon should go
    for token in raw_tokens:
        if token.type in trivia_types:
            ends_line = (token.type == 'NEWLINE') or (token.type == 'BLOCK_COMMENT' and '\n' in token.value)
            if ends_line and insert_at is not None:
                result.insert(insert_at, create_implicit_semicolon(result[insert_at - 1]))
                insert_at = None
            result.append(token)
        else:
            result.append(token)
            insert_at = len(result) if token.type in semicolon_trigger_types else None

    if insert_at is not None:
        result.insert(insert_at, create_implicit_semicolon(result[insert_at - 1]))

    return result


lexer = lex.lex(errorlog=lex.NullLogger())


# Tokenize the text given, returning a token stream
def tokenize(text):
    file_lexer = lexer.clone()
    file_lexer.lineno = 1
    file_lexer.input(text)

    raw_tokens = []
    while True:
        token = file_lexer.token()
        if not token:
            break
        raw_tokens.append(token)

    all_tokens = insert_semicolons(raw_tokens)

    # Record where each token is, both in the list and in the source text
    for index, token in enumerate(all_tokens):
        token.index = index
        token.column = token.lexpos - text.rfind('\n', 0, token.lexpos)
        token.element = None  # DOM element that owns this token, set for identifiers by the parser

    return token_stream.TokenStream(all_tokens)
