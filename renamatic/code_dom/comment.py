from .common import *
from renamatic import code_dom


# A // or /* */ comment
class DOMComment(code_dom.element.DOMElement):
    kind = NodeKind.comment

    def __init__(self):
        super().__init__()
        self.comment_text = None
        self.is_preceding_comment = False

    # Create comment elements for every comment token in the stream, indexed by token index
    @staticmethod
    def parse_all(context, stream):
        comments = []
        for token in stream.tokens:
            if (token.type == 'LINE_COMMENT') or (token.type == 'BLOCK_COMMENT'):
                dom_element = DOMComment()
                dom_element.tokens = [token]
                dom_element.comment_text = token.value
                context.comments_by_index[token.index] = dom_element
                comments.append(dom_element)
        return comments

    # Get the group of comments that directly precedes the next meaningful token
    # A blank line separates comment groups, and a comment on the same line as the previous token is a trailing
    # comment for that rather than a preceding one
    @staticmethod
    def get_preceding_comments(context, stream):
        group = []
        newlines = 0
        at_line_start = stream.pos == 0
        index = stream.pos
        while index < len(stream.tokens):
            token = stream.tokens[index]
            if token.type == 'NEWLINE':
                newlines += 1
                at_line_start = True
            elif (token.type == 'LINE_COMMENT') or (token.type == 'BLOCK_COMMENT'):
                if at_line_start:
                    if newlines > 1:
                        group = []
                    group.append(context.comments_by_index[index])
                    newlines = 0
            elif token.type != 'WHITESPACE':
                break
            index += 1

        if newlines > 1:
            return []  # Blank line between the comments and whatever follows them

        for comment in group:
            comment.is_preceding_comment = True
        return group

    def to_gno_string(self):
        return self.comment_text

    def __str__(self):
        if self.is_preceding_comment:
            return "Preceding comment: " + self.comment_text
        else:
            return "Comment: " + self.comment_text
