# error.py
"""Error types and the error-code catalogue of the Radical Calculator."""


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

class SyntaxError(MathError):
    pass

class LexError(SyntaxError):
    def __init__(self, message, character=None, position=None, code="3030", equation=None):
        super().__init__(message, code=code, equation=equation)
        self.character = character
        self.position = position

class ParseError(SyntaxError):
    pass

class UndefinedVariableError(MathError):
    def __init__(self, names, code="3034", equation=None):
        super().__init__(f"Undefined variable(s): {', '.join(names)}", code=code, equation=equation)
        self.names = list(names)

class CalculationError(MathError):
    pass

class DomainError(CalculationError):
    pass

class DivisionByZeroError(DomainError):
    def __init__(self, message="Division by zero", code="3003", equation=None):
        super().__init__(message, code=code, equation=equation)

class NegativeRadicandError(DomainError):
    def __init__(self, message="Square root of negative number", code="3035", equation=None):
        super().__init__(message, code=code, equation=equation)

class NonPositiveLogarithmError(DomainError):
    def __init__(self, message="Logarithm of non-positive number", code="3036", equation=None):
        super().__init__(message, code=code, equation=equation)

class VariableError(MathError):
    pass

class ConfigError(MathError):
    pass




Error_Dictionary = {

    "2" : "Scientific Calculation Error",
    "3" : "Calculator Error",
    "4" : "UI Error",
    "5" : "Configuration Error",
    "9" : "Unexpected Error",

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "2000" : "Unknown function",

    "3003" : "Division by zero",
    "3004" : "Invalid operator",
    "3026" : "Number too large",
    "3027" : "Empty expression",
    "3030" : "Unknown character",
    "3031" : "Invalid expression",
    "3032" : "Missing operand",
    "3033" : "Incomplete expression",
    "3034" : "Undefined variable",
    "3035" : "Square root of negative number",
    "3036" : "Logarithm of non-positive number",
    "3037" : "Power has no real result",
    "3038" : "Invalid AST node",

    "3040" : "Invalid variable name",
    "3041" : "Cannot redefine constant",
    "3042" : "Cannot delete constant",
    "3043" : "No value in ans",

    "4000" : "Unknown command",
    "4001" : "Clipboard unavailable",
    "4002" : "Nothing to copy",

    "5000" : "Configuration could not be saved",
    "5001" : "Unknown setting",
    "5002" : "Invalid setting value",


    "9999" : "Unexpected Error"
}
