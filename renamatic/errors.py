# Errors raised while loading mappings and rewriting source files


# Base class for everything renamatic raises deliberately
class RenamaticError(Exception):
    pass


# The mapping file could not be read, or does not describe a string -> string dictionary
class MappingLoadError(RenamaticError):
    def __init__(self, path, message):
        super().__init__("Failed to load mapping file " + str(path) + ": " + message)
        self.path = path


# The source text is not valid Gno
# line and column are 1-based, and may be None if the position is not known (e.g. decoding failures)
class ParseError(RenamaticError):
    def __init__(self, message, line=None, column=None, path=None):
        self.message = message
        self.line = line
        self.column = column
        self.path = path
        super().__init__(self.describe())

    # Get a copy of this error with the file path filled in
    def with_path(self, path):
        return ParseError(self.message, self.line, self.column, path)

    def describe(self):
        position = ""
        if self.path is not None:
            position += str(self.path) + ":"
        if self.line is not None:
            position += str(self.line) + ":" + str(self.column) + ":"
        if len(position) > 0:
            return position + " " + self.message
        return self.message


# A DOM could not be turned back into source text
class SerializeError(RenamaticError):
    pass


# Writing the rewritten source back to disk failed
class WriteError(RenamaticError):
    def __init__(self, path, message):
        super().__init__("Failed to write " + str(path) + ": " + message)
        self.path = path


# Processing stopped at a particular path during a directory walk
# The underlying error is kept in cause (and chained as __cause__ by the raiser)
class TraversalError(RenamaticError):
    def __init__(self, path, cause):
        super().__init__("Failed to process file " + str(path) + ": " + str(cause))
        self.path = path
        self.cause = cause
