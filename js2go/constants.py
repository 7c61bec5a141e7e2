"""Named constants — eliminates magic strings across the codebase."""

from __future__ import annotations

# ── ESTree node kinds ────────────────────────────────────────────

PROGRAM = "Program"
IDENTIFIER = "Identifier"
LITERAL = "Literal"
PROPERTY = "Property"
THIS_EXPRESSION = "ThisExpression"
MEMBER_EXPRESSION = "MemberExpression"
COMPUTED_MEMBER_EXPRESSION = "ComputedMemberExpression"
CALL_EXPRESSION = "CallExpression"
AWAIT_EXPRESSION = "AwaitExpression"
ARRAY_EXPRESSION = "ArrayExpression"
OBJECT_EXPRESSION = "ObjectExpression"
ASSIGNMENT_EXPRESSION = "AssignmentExpression"
FUNCTION_DECLARATION = "FunctionDeclaration"
FUNCTION_EXPRESSION = "FunctionExpression"
ARROW_FUNCTION_EXPRESSION = "ArrowFunctionExpression"
METHOD_DEFINITION = "MethodDefinition"
VARIABLE_DECLARATION = "VariableDeclaration"
VARIABLE_DECLARATOR = "VariableDeclarator"
EXPRESSION_STATEMENT = "ExpressionStatement"
BLOCK_STATEMENT = "BlockStatement"
CLASS_BODY = "ClassBody"
CLASS_DECLARATION = "ClassDeclaration"
EMPTY_STATEMENT = "EmptyStatement"
IF_STATEMENT = "IfStatement"
WHILE_STATEMENT = "WhileStatement"
DO_WHILE_STATEMENT = "DoWhileStatement"
FOR_STATEMENT = "ForStatement"
FOR_IN_STATEMENT = "ForInStatement"
FOR_OF_STATEMENT = "ForOfStatement"
TRY_STATEMENT = "TryStatement"
CATCH_CLAUSE = "CatchClause"
SWITCH_STATEMENT = "SwitchStatement"
SWITCH_CASE = "SwitchCase"
RETURN_STATEMENT = "ReturnStatement"
THROW_STATEMENT = "ThrowStatement"
BREAK_STATEMENT = "BreakStatement"
CONTINUE_STATEMENT = "ContinueStatement"
UPDATE_EXPRESSION = "UpdateExpression"
SEQUENCE_EXPRESSION = "SequenceExpression"
CONDITIONAL_EXPRESSION = "ConditionalExpression"
NEW_EXPRESSION = "NewExpression"
BINARY_EXPRESSION = "BinaryExpression"
LOGICAL_EXPRESSION = "LogicalExpression"

FUNCTION_KINDS: frozenset[str] = frozenset(
    {FUNCTION_DECLARATION, FUNCTION_EXPRESSION, ARROW_FUNCTION_EXPRESSION}
)

# Dispatched for bookkeeping, never reconstructed.
ELIDED_KINDS: frozenset[str] = frozenset(
    {
        RETURN_STATEMENT,
        THROW_STATEMENT,
        BREAK_STATEMENT,
        CONTINUE_STATEMENT,
        UPDATE_EXPRESSION,
        SEQUENCE_EXPRESSION,
        CONDITIONAL_EXPRESSION,
        NEW_EXPRESSION,
        BINARY_EXPRESSION,
        LOGICAL_EXPRESSION,
        COMPUTED_MEMBER_EXPRESSION,
    }
)

# ── JavaScript keywords ──────────────────────────────────────────

KIND_VAR = "var"
KIND_LET = "let"
KIND_CONST = "const"

WINDOW = "window"

LOGICAL_OPERATORS: frozenset[str] = frozenset({"&&", "||", "??"})

# ── Go output ────────────────────────────────────────────────────

SHORT_ASSIGN = ":="
ASSIGN = "="

# Used by the CLI when no input file is given.
DEMO_SOURCE = """\
async function on_click() {
\tlet device = await navigator.bluetooth.requestDevice({ filters: [{ services: ["battery_service"] }] })
}
"""
