from renamatic.errors import ParseError

# Token types that are skipped over when skip_whitespace is set
whitespace_types = frozenset(['WHITESPACE', 'NEWLINE', 'LINE_COMMENT', 'BLOCK_COMMENT'])


# A cursor over the full list of tokens from a source file
# The list includes whitespace and comments, but by default these are skipped over so the parser only sees
# meaningful tokens
class TokenStream:
    def __init__(self, tokens):
        self.tokens = tokens
        self.pos = 0

    # Get the index of the next token, optionally skipping whitespace/comments
    def _next_index(self, skip_whitespace):
        index = self.pos
        if skip_whitespace:
            while index < len(self.tokens) and self.tokens[index].type in whitespace_types:
                index += 1
        return index

    # Get the next token and advance past it, or return None at the end of the stream
    def get_token(self, skip_whitespace=True):
        index = self._next_index(skip_whitespace)
        if index >= len(self.tokens):
            self.pos = index
            return None
        self.pos = index + 1
        return self.tokens[index]

    # Get the next token without advancing
    def peek_token(self, skip_whitespace=True):
        index = self._next_index(skip_whitespace)
        if index >= len(self.tokens):
            return None
        return self.tokens[index]

    # Get the next token if it is one of the types given, otherwise return None and leave the stream unchanged
    def get_token_of_type(self, token_types, skip_whitespace=True):
        token = self.peek_token_of_type(token_types, skip_whitespace)
        if token is not None:
            self.pos = token.index + 1
        return token

    # Peek at the next token if it is one of the types given, otherwise return None
    def peek_token_of_type(self, token_types, skip_whitespace=True):
        token = self.peek_token(skip_whitespace)
        if token is None or token.type not in token_types:
            return None
        return token

    # Get the next token, which must be one of the types given
    # Raises ParseError (describing the token as "what") otherwise
    def expect_token_of_type(self, token_types, what=None):
        token = self.get_token_of_type(token_types)
        if token is None:
            if what is None:
                what = "'" + "' or '".join(token_types) + "'"
            raise self.error("expected " + what)
        return token

    # Create a ParseError located at the next meaningful token
    def error(self, message):
        token = self.peek_token()
        if token is None:
            if len(self.tokens) == 0:
                return ParseError(message + ", found EOF", 1, 1)
            last = self.tokens[-1]
            return ParseError(message + ", found EOF", last.lineno + last.value.count('\n'), last.column)
        if token.value == '' and token.type == 'SEMICOLON':
            found = "newline"
        else:
            found = "'" + token.value + "'"
        return ParseError(message + ", found " + found, token.lineno, token.column)

    # Are we at the end of the stream (ignoring trailing whitespace/comments)?
    def at_end(self):
        return self.peek_token() is None

    def get_checkpoint(self):
        return self.pos

    def rewind(self, checkpoint):
        self.pos = checkpoint

