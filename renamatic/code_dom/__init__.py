from . import common
from . import element
from . import comment
from . import expressions
from . import types
from . import statements
from . import declarations
from . import sourcefile


__all__ = ["common", "element", "comment", "expressions", "types", "statements", "declarations", "sourcefile"]

# Aliases

ParseContext = common.ParseContext
WriteContext = common.WriteContext
NodeKind = common.NodeKind

DOMElement = element.DOMElement
DOMComment = comment.DOMComment
DOMSourceFile = sourcefile.DOMSourceFile

DOMGenDecl = declarations.DOMGenDecl
DOMImportSpec = declarations.DOMImportSpec
DOMValueSpec = declarations.DOMValueSpec
DOMTypeSpec = declarations.DOMTypeSpec
DOMFunctionDeclaration = declarations.DOMFunctionDeclaration

DOMExpression = expressions.DOMExpression
DOMIdentifier = expressions.DOMIdentifier
DOMBasicLiteral = expressions.DOMBasicLiteral
DOMCompositeLiteral = expressions.DOMCompositeLiteral
DOMFunctionLiteral = expressions.DOMFunctionLiteral
DOMParenExpression = expressions.DOMParenExpression
DOMSelectorExpression = expressions.DOMSelectorExpression
DOMIndexExpression = expressions.DOMIndexExpression
DOMSliceExpression = expressions.DOMSliceExpression
DOMTypeAssertExpression = expressions.DOMTypeAssertExpression
DOMCallExpression = expressions.DOMCallExpression
DOMStarExpression = expressions.DOMStarExpression
DOMUnaryExpression = expressions.DOMUnaryExpression
DOMBinaryExpression = expressions.DOMBinaryExpression
DOMKeyValueExpression = expressions.DOMKeyValueExpression
DOMEllipsis = expressions.DOMEllipsis

DOMField = types.DOMField
DOMFieldList = types.DOMFieldList
DOMArrayType = types.DOMArrayType
DOMStructType = types.DOMStructType
DOMFunctionType = types.DOMFunctionType
DOMInterfaceType = types.DOMInterfaceType
DOMMapType = types.DOMMapType
DOMChanType = types.DOMChanType

DOMStatement = statements.DOMStatement
DOMDeclStatement = statements.DOMDeclStatement
DOMEmptyStatement = statements.DOMEmptyStatement
DOMLabeledStatement = statements.DOMLabeledStatement
DOMExpressionStatement = statements.DOMExpressionStatement
DOMSendStatement = statements.DOMSendStatement
DOMIncDecStatement = statements.DOMIncDecStatement
DOMAssignStatement = statements.DOMAssignStatement
DOMGoStatement = statements.DOMGoStatement
DOMDeferStatement = statements.DOMDeferStatement
DOMReturnStatement = statements.DOMReturnStatement
DOMBranchStatement = statements.DOMBranchStatement
DOMBlockStatement = statements.DOMBlockStatement
DOMIfStatement = statements.DOMIfStatement
DOMCaseClause = statements.DOMCaseClause
DOMSwitchStatement = statements.DOMSwitchStatement
DOMTypeSwitchStatement = statements.DOMTypeSwitchStatement
DOMCommClause = statements.DOMCommClause
DOMSelectStatement = statements.DOMSelectStatement
DOMForStatement = statements.DOMForStatement
DOMRangeStatement = statements.DOMRangeStatement
