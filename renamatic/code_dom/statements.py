from .common import *
from renamatic import code_dom

# Tokens that can begin a simple statement (expression, assignment, send, inc/dec or labeled statement)
simple_statement_start_types = ['IDENT', 'INT', 'FLOAT', 'IMAG', 'CHAR', 'STRING', 'FUNC', 'LPAREN', 'LBRACK',
                                'STRUCT', 'MAP', 'CHAN', 'INTERFACE', 'ADD', 'SUB', 'MUL', 'AND', 'XOR', 'NOT',
                                'ARROW', 'TILDE']


# Base class for statements, which also holds the statement parser
class DOMStatement(code_dom.element.DOMElement):

    # Parse a single statement (not including its terminating semicolon)
    @staticmethod
    def parse(context, stream):
        tok = stream.peek_token()
        if tok is None:
            raise stream.error("expected statement")

        if tok.type in ['CONST', 'TYPE', 'VAR']:
            dom_element = DOMDeclStatement()
            dom_element.decl = code_dom.declarations.DOMGenDecl.parse(context, stream)
            return dom_element
        elif tok.type in simple_statement_start_types:
            return DOMStatement.parse_simple(context, stream, allow_label=True)
        elif (tok.type == 'GO') or (tok.type == 'DEFER'):
            return DOMGoDeferStatement.parse(context, stream)
        elif tok.type == 'RETURN':
            return DOMReturnStatement.parse(context, stream)
        elif tok.type in ['BREAK', 'CONTINUE', 'GOTO', 'FALLTHROUGH']:
            return DOMBranchStatement.parse(context, stream)
        elif tok.type == 'LBRACE':
            return DOMBlockStatement.parse(context, stream)
        elif tok.type == 'IF':
            return DOMIfStatement.parse(context, stream)
        elif tok.type == 'SWITCH':
            return DOMStatement.parse_switch(context, stream)
        elif tok.type == 'SELECT':
            return DOMSelectStatement.parse(context, stream)
        elif tok.type == 'FOR':
            return DOMStatement.parse_for(context, stream)
        elif (tok.type == 'SEMICOLON') or (tok.type == 'RBRACE'):
            # The semicolon itself is consumed by the enclosing statement list
            return DOMEmptyStatement()
        else:
            raise stream.error("expected statement")

    # Parse statements up to the end of a block or case clause
    @staticmethod
    def parse_list(context, stream):
        statements = []
        while not stream.at_end() and stream.peek_token_of_type(['CASE', 'DEFAULT', 'RBRACE']) is None:
            statements.append(DOMStatement.parse(context, stream))
            expect_semicolon(stream)
        return statements

    # Parse a simple statement
    # If allow_range is set, "k, v := range x" is accepted and returned as a DOMRangeStatement without a body
    @staticmethod
    def parse_simple(context, stream, allow_label=False, allow_range=False):
        lhs = code_dom.expressions.DOMExpression.parse_list(context, stream)

        tok = stream.get_token_of_type(assign_token_types)
        if tok is not None:
            if allow_range and (tok.type in ['ASSIGN', 'DEFINE']) and \
                    (stream.get_token_of_type(['RANGE']) is not None):
                if len(lhs) > 2:
                    raise stream.error("range clause permits at most two iteration variables")
                dom_element = DOMRangeStatement()
                dom_element.key = lhs[0]
                dom_element.value = lhs[1] if len(lhs) > 1 else None
                dom_element.operator = tok.value
                dom_element.x = code_dom.expressions.DOMExpression.parse(context, stream)
                return dom_element

            dom_element = DOMAssignStatement()
            dom_element.lhs = lhs
            dom_element.operator = tok.value
            dom_element.rhs = code_dom.expressions.DOMExpression.parse_list(context, stream)
            return dom_element

        if len(lhs) > 1:
            raise stream.error("expected 1 expression")
        x = lhs[0]

        if allow_label and isinstance(x, code_dom.expressions.DOMIdentifier) and \
                stream.get_token_of_type(['COLON']) is not None:
            dom_element = DOMLabeledStatement()
            dom_element.label = x
            dom_element.statement = DOMStatement.parse(context, stream)
            return dom_element

        if stream.get_token_of_type(['ARROW']) is not None:
            dom_element = DOMSendStatement()
            dom_element.channel = x
            dom_element.value = code_dom.expressions.DOMExpression.parse(context, stream)
            return dom_element

        tok = stream.get_token_of_type(['INC', 'DEC'])
        if tok is not None:
            dom_element = DOMIncDecStatement()
            dom_element.x = x
            dom_element.operator = tok.value
            return dom_element

        dom_element = DOMExpressionStatement()
        dom_element.x = x
        return dom_element

    # Get the expression from a statement used as a condition
    @staticmethod
    def get_condition(stream, statement, what):
        if statement is None:
            return None
        if not isinstance(statement, DOMExpressionStatement):
            raise stream.error("cannot use " + str(statement) + " as value in " + what)
        return statement.x

    # Parse a switch statement, which may be either an expression switch or a type switch
    @staticmethod
    def parse_switch(context, stream):
        stream.expect_token_of_type(['SWITCH'])

        init = None
        tag = None
        old_expression_level = context.expression_level
        context.expression_level = -1
        if stream.peek_token_of_type(['LBRACE']) is None:
            if stream.peek_token_of_type(['SEMICOLON']) is None:
                tag = DOMStatement.parse_simple(context, stream)
            if stream.get_token_of_type(['SEMICOLON']) is not None:
                init = tag
                tag = None
                if stream.peek_token_of_type(['LBRACE']) is None:
                    tag = DOMStatement.parse_simple(context, stream)
        context.expression_level = old_expression_level

        if DOMTypeSwitchStatement.is_type_switch_guard(tag):
            dom_element = DOMTypeSwitchStatement()
            dom_element.assign = tag
        else:
            dom_element = DOMSwitchStatement()
            dom_element.tag = DOMStatement.get_condition(stream, tag, "switch expression")
        dom_element.init = init
        dom_element.body = DOMBlockStatement.parse_clauses(context, stream, DOMCaseClause)
        return dom_element

    # Parse a for statement, which may be either a three-clause/condition loop or a range loop
    @staticmethod
    def parse_for(context, stream):
        stream.expect_token_of_type(['FOR'])

        init = None
        condition = None
        post = None
        range_statement = None
        old_expression_level = context.expression_level
        context.expression_level = -1
        if stream.peek_token_of_type(['LBRACE']) is None:
            header = None
            if stream.peek_token_of_type(['RANGE']) is not None:
                # "for range x"
                stream.get_token()
                range_statement = DOMRangeStatement()
                range_statement.x = code_dom.expressions.DOMExpression.parse(context, stream)
            elif stream.peek_token_of_type(['SEMICOLON']) is None:
                header = DOMStatement.parse_simple(context, stream, allow_range=True)

            if isinstance(header, DOMRangeStatement):
                range_statement = header
            elif range_statement is None:
                if stream.get_token_of_type(['SEMICOLON']) is not None:
                    init = header
                    if stream.peek_token_of_type(['SEMICOLON']) is None:
                        condition = DOMStatement.get_condition(stream, DOMStatement.parse_simple(context, stream),
                                                               "for loop")
                    stream.expect_token_of_type(['SEMICOLON'], "';'")
                    if stream.peek_token_of_type(['LBRACE']) is None:
                        post = DOMStatement.parse_simple(context, stream)
                else:
                    condition = DOMStatement.get_condition(stream, header, "for loop")
        context.expression_level = old_expression_level

        body = DOMBlockStatement.parse(context, stream)

        if range_statement is not None:
            range_statement.body = body
            return range_statement

        dom_element = DOMForStatement()
        dom_element.init = init
        dom_element.condition = condition
        dom_element.post = post
        dom_element.body = body
        return dom_element


# A const/type/var declaration inside a function
class DOMDeclStatement(DOMStatement):
    kind = NodeKind.decl_statement

    def __init__(self):
        super().__init__()
        self.decl = None

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.decl])
        return lists


class DOMEmptyStatement(DOMStatement):
    kind = NodeKind.empty_statement


class DOMLabeledStatement(DOMStatement):
    kind = NodeKind.labeled_statement

    def __init__(self):
        super().__init__()
        self.label = None
        self.statement = None

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.label])
        lists.append([self.statement])
        return lists

    def __str__(self):
        return "Labeled statement: " + self.label.name


# An expression used as a statement (usually a call)
class DOMExpressionStatement(DOMStatement):
    kind = NodeKind.expression_statement

    def __init__(self):
        super().__init__()
        self.x = None

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.x])
        return lists

    def __str__(self):
        return "Expression statement: " + self.x.to_gno_string()


# ch <- value
class DOMSendStatement(DOMStatement):
    kind = NodeKind.send_statement

    def __init__(self):
        super().__init__()
        self.channel = None
        self.value = None

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.channel])
        lists.append([self.value])
        return lists


# x++ or x--
class DOMIncDecStatement(DOMStatement):
    kind = NodeKind.inc_dec_statement

    def __init__(self):
        super().__init__()
        self.x = None
        self.operator = None

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.x])
        return lists


# Assignment, short variable declaration or assignment operation
class DOMAssignStatement(DOMStatement):
    kind = NodeKind.assign_statement

    def __init__(self):
        super().__init__()
        self.lhs = []
        self.operator = None  # "=", ":=", "+=" etc
        self.rhs = []

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(self.lhs)
        lists.append(self.rhs)
        return lists

    def __str__(self):
        return "Assignment: " + join_gno_strings(self.lhs) + " " + self.operator + " " + join_gno_strings(self.rhs)


# go f() or defer f()
class DOMGoDeferStatement(DOMStatement):

    def __init__(self):
        super().__init__()
        self.call = None

    @staticmethod
    def parse(context, stream):
        tok = stream.expect_token_of_type(['GO', 'DEFER'])
        if tok.type == 'GO':
            dom_element = DOMGoStatement()
        else:
            dom_element = DOMDeferStatement()
        dom_element.call = code_dom.expressions.DOMExpression.parse(context, stream)
        if not isinstance(dom_element.call, code_dom.expressions.DOMCallExpression):
            raise stream.error("expression in " + tok.value + " must be function call")
        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.call])
        return lists


class DOMGoStatement(DOMGoDeferStatement):
    kind = NodeKind.go_statement


class DOMDeferStatement(DOMGoDeferStatement):
    kind = NodeKind.defer_statement


class DOMReturnStatement(DOMStatement):
    kind = NodeKind.return_statement

    def __init__(self):
        super().__init__()
        self.results = []

    @staticmethod
    def parse(context, stream):
        stream.expect_token_of_type(['RETURN'])
        dom_element = DOMReturnStatement()
        if stream.peek_token_of_type(['SEMICOLON', 'RBRACE']) is None:
            dom_element.results = code_dom.expressions.DOMExpression.parse_list(context, stream)
        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(self.results)
        return lists


# break, continue, goto or fallthrough
class DOMBranchStatement(DOMStatement):
    kind = NodeKind.branch_statement

    def __init__(self):
        super().__init__()
        self.keyword = None
        self.label = None

    @staticmethod
    def parse(context, stream):
        tok = stream.expect_token_of_type(['BREAK', 'CONTINUE', 'GOTO', 'FALLTHROUGH'])
        dom_element = DOMBranchStatement()
        dom_element.keyword = tok.value
        if tok.type != 'FALLTHROUGH':
            dom_element.label = code_dom.expressions.DOMIdentifier.parse(context, stream)
        if (tok.type == 'GOTO') and (dom_element.label is None):
            raise stream.error("expected label")
        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(code_dom.element.optional_child(self.label))
        return lists

    def __str__(self):
        if self.label is not None:
            return "Branch statement: " + self.keyword + " " + self.label.name
        return "Branch statement: " + self.keyword


# { statements }
# Switch and select statement bodies are blocks whose statements are all case/comm clauses
class DOMBlockStatement(DOMStatement):
    kind = NodeKind.block_statement

    def __init__(self):
        super().__init__()
        self.statements = []

    @staticmethod
    def parse(context, stream):
        stream.expect_token_of_type(['LBRACE'], "'{'")
        dom_element = DOMBlockStatement()
        dom_element.statements = DOMStatement.parse_list(context, stream)
        stream.expect_token_of_type(['RBRACE'], "'}'")
        return dom_element

    # Parse a block made up of case/default clauses of the class given
    @staticmethod
    def parse_clauses(context, stream, clause_class):
        stream.expect_token_of_type(['LBRACE'], "'{'")
        dom_element = DOMBlockStatement()
        while stream.peek_token_of_type(['CASE', 'DEFAULT']) is not None:
            dom_element.statements.append(clause_class.parse(context, stream))
        stream.expect_token_of_type(['RBRACE'], "'}'")
        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(self.statements)
        return lists

    def __str__(self):
        return "Block: " + str(len(self.statements)) + " statements"


class DOMIfStatement(DOMStatement):
    kind = NodeKind.if_statement

    def __init__(self):
        super().__init__()
        self.init = None
        self.condition = None
        self.body = None
        self.else_branch = None  # Either a DOMIfStatement or a DOMBlockStatement

    @staticmethod
    def parse(context, stream):
        stream.expect_token_of_type(['IF'])
        dom_element = DOMIfStatement()

        old_expression_level = context.expression_level
        context.expression_level = -1
        if stream.peek_token_of_type(['LBRACE']) is not None:
            raise stream.error("missing condition in if statement")
        header = None
        if stream.peek_token_of_type(['SEMICOLON']) is None:
            header = DOMStatement.parse_simple(context, stream)
        if stream.get_token_of_type(['SEMICOLON']) is not None:
            dom_element.init = header
            if stream.peek_token_of_type(['LBRACE']) is not None:
                raise stream.error("missing condition in if statement")
            header = DOMStatement.parse_simple(context, stream)
        dom_element.condition = DOMStatement.get_condition(stream, header, "if statement")
        context.expression_level = old_expression_level

        dom_element.body = DOMBlockStatement.parse(context, stream)

        if stream.get_token_of_type(['ELSE']) is not None:
            if stream.peek_token_of_type(['IF']) is not None:
                dom_element.else_branch = DOMIfStatement.parse(context, stream)
            elif stream.peek_token_of_type(['LBRACE']) is not None:
                dom_element.else_branch = DOMBlockStatement.parse(context, stream)
            else:
                raise stream.error("expected if statement or block")

        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(code_dom.element.optional_child(self.init))
        lists.append([self.condition])
        lists.append([self.body])
        lists.append(code_dom.element.optional_child(self.else_branch))
        return lists

    def __str__(self):
        return "If: " + self.condition.to_gno_string()


# A case or default clause in an expression or type switch
class DOMCaseClause(DOMStatement):
    kind = NodeKind.case_clause

    def __init__(self):
        super().__init__()
        self.expressions = []  # Empty for the default clause
        self.is_default = False
        self.body = []

    @staticmethod
    def parse(context, stream):
        tok = stream.expect_token_of_type(['CASE', 'DEFAULT'])
        dom_element = DOMCaseClause()
        if tok.type == 'CASE':
            dom_element.expressions = code_dom.expressions.DOMExpression.parse_list(context, stream)
        else:
            dom_element.is_default = True
        stream.expect_token_of_type(['COLON'], "':'")
        dom_element.body = DOMStatement.parse_list(context, stream)
        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(self.expressions)
        lists.append(self.body)
        return lists

    def __str__(self):
        if self.is_default:
            return "Default clause"
        return "Case clause: " + join_gno_strings(self.expressions)


class DOMSwitchStatement(DOMStatement):
    kind = NodeKind.switch_statement

    def __init__(self):
        super().__init__()
        self.init = None
        self.tag = None  # None for "switch {"
        self.body = None  # DOMBlockStatement of DOMCaseClauses

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(code_dom.element.optional_child(self.init))
        lists.append(code_dom.element.optional_child(self.tag))
        lists.append([self.body])
        return lists


class DOMTypeSwitchStatement(DOMStatement):
    kind = NodeKind.type_switch_statement

    def __init__(self):
        super().__init__()
        self.init = None
        self.assign = None  # "x := y.(type)" or "y.(type)" statement
        self.body = None  # DOMBlockStatement of DOMCaseClauses

    # Is the statement given a type switch guard ("x.(type)" or "v := x.(type)")?
    @staticmethod
    def is_type_switch_guard(statement):
        def is_type_guard(x):
            return isinstance(x, code_dom.expressions.DOMTypeAssertExpression) and x.type is None

        if isinstance(statement, DOMExpressionStatement):
            return is_type_guard(statement.x)
        if isinstance(statement, DOMAssignStatement):
            return statement.operator == ':=' and len(statement.lhs) == 1 and len(statement.rhs) == 1 and \
                is_type_guard(statement.rhs[0])
        return False

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(code_dom.element.optional_child(self.init))
        lists.append([self.assign])
        lists.append([self.body])
        return lists


# A case or default clause in a select statement
class DOMCommClause(DOMStatement):
    kind = NodeKind.comm_clause

    def __init__(self):
        super().__init__()
        self.comm = None  # Send or receive statement, None for the default clause
        self.body = []

    @staticmethod
    def parse(context, stream):
        tok = stream.expect_token_of_type(['CASE', 'DEFAULT'])
        dom_element = DOMCommClause()
        if tok.type == 'CASE':
            dom_element.comm = DOMStatement.parse_simple(context, stream)
        stream.expect_token_of_type(['COLON'], "':'")
        dom_element.body = DOMStatement.parse_list(context, stream)
        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(code_dom.element.optional_child(self.comm))
        lists.append(self.body)
        return lists


class DOMSelectStatement(DOMStatement):
    kind = NodeKind.select_statement

    def __init__(self):
        super().__init__()
        self.body = None  # DOMBlockStatement of DOMCommClauses

    @staticmethod
    def parse(context, stream):
        stream.expect_token_of_type(['SELECT'])
        dom_element = DOMSelectStatement()
        dom_element.body = DOMBlockStatement.parse_clauses(context, stream, DOMCommClause)
        return dom_element

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append([self.body])
        return lists


class DOMForStatement(DOMStatement):
    kind = NodeKind.for_statement

    def __init__(self):
        super().__init__()
        self.init = None
        self.condition = None
        self.post = None
        self.body = None

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(code_dom.element.optional_child(self.init))
        lists.append(code_dom.element.optional_child(self.condition))
        lists.append(code_dom.element.optional_child(self.post))
        lists.append([self.body])
        return lists


# for key, value := range x { ... }
class DOMRangeStatement(DOMStatement):
    kind = NodeKind.range_statement

    def __init__(self):
        super().__init__()
        self.key = None
        self.value = None
        self.operator = None  # ":=" or "=", or None if there are no iteration variables
        self.x = None
        self.body = None

    def get_child_lists(self):
        lists = code_dom.element.DOMElement.get_child_lists(self)
        lists.append(code_dom.element.optional_child(self.key))
        lists.append(code_dom.element.optional_child(self.value))
        lists.append([self.x])
        lists.append(code_dom.element.optional_child(self.body))
        return lists
