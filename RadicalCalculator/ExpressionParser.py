# ExpressionParser.py
"""""
Expression front-end for the Radical Calculator.

Pipeline
--------
1) Tokenizer: converts a raw input string into a flat list of tokens.
2) Validator: checks the token list for balanced parentheses and operator placement.
3) Parser: shunting-yard (infix -> postfix), then postfix -> Abstract Syntax Tree.

Evaluation lives in MathEngine; the AST nodes below carry data only.
"""""

import logging
from collections import namedtuple
from enum import Enum

from . import error as E

logger = logging.getLogger(__name__)

# Supported operators / functions (kept as simple sets for quick membership checks)
Operations = {"+", "-", "*", "/", "^"}
Functions = {"sqrt", "abs", "sin", "cos", "tan", "log", "ln"}

UNARY_MINUS = "u-"

PRECEDENCE = {
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    "^": 3,
    UNARY_MINUS: 4,  # binds tighter than '^': -2^2 == (-2)^2
}


class TokenType(Enum):
    NUMBER = "NUMBER"
    OPERATOR = "OPERATOR"
    VARIABLE = "VARIABLE"
    FUNCTION = "FUNCTION"
    PAREN_OPEN = "PAREN_OPEN"
    PAREN_CLOSE = "PAREN_CLOSE"
    COMMA = "COMMA"


Token = namedtuple("Token", ["kind", "text", "position"])


# -----------------------------
# AST node types
# -----------------------------

class Number:
    """AST leaf for a numeric literal."""
    def __init__(self, value):
        self.value = float(value)

    def __repr__(self):
        return f"Number({self.value!r})"


class Variable:
    """AST leaf naming a variable resolved at evaluation time."""
    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return f"Variable('{self.name}')"


class Operator:
    """AST node for a binary operation or unary minus (left is None for 'u-')."""
    def __init__(self, operator, left, right):
        self.operator = operator
        self.left = left
        self.right = right

    @property
    def is_unary(self):
        return self.operator == UNARY_MINUS

    def __repr__(self):
        if self.is_unary:
            return f"Operator('u-', right={self.right})"
        return f"Operator({self.operator!r}, left={self.left}, right={self.right})"


class Function:
    """AST node for a single-argument function call."""
    def __init__(self, name, arg):
        self.name = name
        self.arg = arg

    def __repr__(self):
        return f"Function({self.name!r}, arg={self.arg})"


class ValidationError:
    def __init__(self, message, position, type="syntax"):
        self.message = message
        self.position = position
        self.type = type

    def __repr__(self):
        return f"ValidationError({self.message!r}, position={self.position})"


class ValidationResult:
    def __init__(self, errors):
        self.errors = list(errors)

    @property
    def is_valid(self):
        return len(self.errors) == 0


class ParsedExpression:
    """Outcome of parse_expression(); never mutated after construction."""
    def __init__(self, tokens, ast, variables, is_valid, error=None, error_code=None):
        self.tokens = tokens
        self.ast = ast
        self.variables = variables
        self.is_valid = is_valid
        self.error = error
        self.error_code = error_code

    def __repr__(self):
        if self.is_valid:
            return f"ParsedExpression(ast={self.ast}, variables={self.variables})"
        return f"ParsedExpression(error={self.error!r})"


# -----------------------------
# Tokenizer
# -----------------------------

def _is_digit(char):
    return char in "0123456789"


def _is_identifier_start(char):
    return char.isascii() and char.isalpha()


def _is_identifier_char(char):
    return char.isascii() and (char.isalnum() or char == "_")


def tokenize(problem):
    """Convert a raw input string into a list of Tokens.

    A '-' becomes unary minus ('u-') when it is the first token or follows an
    operator or '('. Raises E.LexError on any unrecognised character.
    """
    tokens = []
    b = 0

    while b < len(problem):
        current_char = problem[b]

        # --- Whitespace (ignored) ---
        if current_char.isspace():
            b += 1
            continue

        # --- Numbers: digits with at most one decimal separator ---
        if _is_digit(current_char) or (current_char == "." and b + 1 < len(problem) and _is_digit(problem[b + 1])):
            start = b
            hat_schon_komma = False
            while b < len(problem) and (_is_digit(problem[b]) or (problem[b] == "." and not hat_schon_komma)):
                if problem[b] == ".":
                    hat_schon_komma = True
                b += 1
            tokens.append(Token(TokenType.NUMBER, problem[start:b], start))
            continue

        # --- Identifiers: functions or variables ---
        if _is_identifier_start(current_char):
            start = b
            while b < len(problem) and _is_identifier_char(problem[b]):
                b += 1
            identifier = problem[start:b]
            kind = TokenType.FUNCTION if identifier in Functions else TokenType.VARIABLE
            tokens.append(Token(kind, identifier, start))
            continue

        # --- Operators ---
        if current_char in Operations:
            text = current_char
            if current_char == "-" and (not tokens or tokens[-1].kind in (TokenType.OPERATOR, TokenType.PAREN_OPEN)):
                text = UNARY_MINUS
            tokens.append(Token(TokenType.OPERATOR, text, b))

        # --- Parentheses and argument separator ---
        elif current_char == "(":
            tokens.append(Token(TokenType.PAREN_OPEN, current_char, b))
        elif current_char == ")":
            tokens.append(Token(TokenType.PAREN_CLOSE, current_char, b))
        elif current_char == ",":
            tokens.append(Token(TokenType.COMMA, current_char, b))

        else:
            raise E.LexError(f"Unknown character '{current_char}' at position {b}",
                             character=current_char, position=b, equation=problem)

        b += 1

    logger.debug("Tokens: %s", [token.text for token in tokens])
    return tokens


# -----------------------------
# Validator
# -----------------------------

def _is_binary_operator(token):
    return token is not None and token.kind == TokenType.OPERATOR and token.text != UNARY_MINUS


def validate(tokens):
    """Check structural well-formedness; collects every error instead of stopping at the first."""
    errors = []
    depth = 0

    for i, token in enumerate(tokens):
        prev_token = tokens[i - 1] if i > 0 else None
        next_token = tokens[i + 1] if i + 1 < len(tokens) else None

        if token.kind == TokenType.PAREN_OPEN:
            depth += 1
        elif token.kind == TokenType.PAREN_CLOSE:
            depth -= 1
            if depth < 0:
                errors.append(ValidationError("Unmatched closing parenthesis", token.position))

        if token.kind == TokenType.OPERATOR:
            if token.text != UNARY_MINUS:
                if prev_token is None or prev_token.kind == TokenType.OPERATOR:
                    errors.append(ValidationError(f"Invalid operator placement for '{token.text}'", token.position))
            if next_token is None or _is_binary_operator(next_token):
                shown = "-" if token.text == UNARY_MINUS else token.text
                errors.append(ValidationError(f"Operator '{shown}' requires an operand", token.position))

        if token.kind == TokenType.FUNCTION:
            if next_token is None or next_token.kind != TokenType.PAREN_OPEN:
                errors.append(ValidationError(f"Function '{token.text}' must be followed by parentheses", token.position))

    if depth > 0:
        errors.append(ValidationError("Unclosed parenthesis", tokens[-1].position if tokens else 0))

    return ValidationResult(errors)


def validate_expression(problem):
    """Tokenize and validate a raw string; a LexError becomes a single validation error."""
    try:
        tokens = tokenize(problem)
    except E.LexError as e:
        return ValidationResult([ValidationError(e.message, e.position or 0)])
    return validate(tokens)


# -----------------------------
# Parser (shunting-yard)
# -----------------------------

def to_postfix(tokens):
    """Reorder infix tokens into postfix order; ties in precedence pop (left-associative)."""
    output = []
    stack = []

    for token in tokens:
        if token.kind in (TokenType.NUMBER, TokenType.VARIABLE):
            output.append(token)

        elif token.kind in (TokenType.FUNCTION, TokenType.PAREN_OPEN):
            stack.append(token)

        elif token.kind == TokenType.OPERATOR:
            while stack and stack[-1].kind != TokenType.PAREN_OPEN:
                top = stack[-1]
                if top.kind == TokenType.FUNCTION or PRECEDENCE[top.text] >= PRECEDENCE[token.text]:
                    output.append(stack.pop())
                else:
                    break
            stack.append(token)

        elif token.kind == TokenType.COMMA:
            while stack and stack[-1].kind != TokenType.PAREN_OPEN:
                output.append(stack.pop())

        elif token.kind == TokenType.PAREN_CLOSE:
            while stack and stack[-1].kind != TokenType.PAREN_OPEN:
                output.append(stack.pop())
            if stack:
                stack.pop()
            # A function directly before the '(' owns this group
            if stack and stack[-1].kind == TokenType.FUNCTION:
                output.append(stack.pop())

    while stack:
        output.append(stack.pop())

    logger.debug("Postfix: %s", [token.text for token in output])
    return output


def postfix_to_ast(postfix):
    """Assemble an AST from postfix tokens; exactly one node must remain."""
    stack = []

    for token in postfix:
        if token.kind == TokenType.NUMBER:
            stack.append(Number(token.text))

        elif token.kind == TokenType.VARIABLE:
            stack.append(Variable(token.text))

        elif token.kind == TokenType.OPERATOR and token.text == UNARY_MINUS:
            if not stack:
                raise E.ParseError("Invalid expression: missing operand for unary minus", code="3032")
            stack.append(Operator(UNARY_MINUS, left=None, right=stack.pop()))

        elif token.kind == TokenType.OPERATOR:
            if len(stack) < 2:
                raise E.ParseError(f"Invalid expression: missing operand for '{token.text}'", code="3032")
            right = stack.pop()
            left = stack.pop()
            stack.append(Operator(token.text, left, right))

        elif token.kind == TokenType.FUNCTION:
            if not stack:
                raise E.ParseError(f"Invalid expression: missing argument for '{token.text}'", code="3032")
            stack.append(Function(token.text, stack.pop()))

        else:
            # Leftover '(' from unbalanced input
            raise E.ParseError(f"Invalid expression: unexpected '{token.text}'", code="3033")

    if len(stack) != 1:
        raise E.ParseError("Invalid expression: incomplete expression", code="3033")

    return stack[0]


def parse(tokens):
    """Build an AST from validated tokens. Run validate() first; malformed input raises E.ParseError."""
    finaler_baum = postfix_to_ast(to_postfix(tokens))
    logger.debug("Final AST: %s", finaler_baum)
    return finaler_baum


def collect_variables(node):
    """Return the variable names referenced by an AST in first-appearance order."""
    names = []

    def walk(current):
        if isinstance(current, Variable):
            if current.name not in names:
                names.append(current.name)
        elif isinstance(current, Operator):
            if current.left is not None:
                walk(current.left)
            walk(current.right)
        elif isinstance(current, Function):
            walk(current.arg)

    walk(node)
    return names


def parse_expression(problem):
    """Main API: tokenize -> validate -> parse. Never raises; failures set is_valid=False."""
    try:
        tokens = tokenize(problem)
    except E.LexError as e:
        return ParsedExpression([], None, [], False, error=e.message, error_code=e.code)

    if not tokens:
        return ParsedExpression(tokens, None, [], False, error="Empty expression", error_code="3027")

    validation = validate(tokens)
    if not validation.is_valid:
        return ParsedExpression(tokens, None, [], False,
                                error=validation.errors[0].message, error_code="3031")

    try:
        finaler_baum = parse(tokens)
    except E.ParseError as e:
        return ParsedExpression(tokens, None, [], False, error=e.message, error_code=e.code)

    return ParsedExpression(tokens, finaler_baum, collect_variables(finaler_baum), True)
