# RadicalEngine.py
"""""
Exact arithmetic on square roots for the Radical Calculator.

A RadicalExpression is  constant + c1*√r1 + c2*√r2 + ...  where every radicand
is a square-free positive integer and no radicand appears twice. Addition,
multiplication and non-negative integer powers stay exact on this form, which
is why MathEngine carries it next to the float result instead of guessing it
from the float afterwards.

Every function here is pure: inputs are never modified, new values are returned.
"""""

import fractions
import math
from collections import Counter, namedtuple

# Float noise below this is treated as zero / as an exact integer
ZERO_TOLERANCE = 1e-12

# Largest integer simplify() is asked to factor by trial division from inside this module
TRIAL_DIVISION_LIMIT = 10 ** 12

# Largest denominator tried when recognising decimal**2 as a fraction
MAX_DENOMINATOR = 10000


# -----------------------------
# Value types
# -----------------------------

class RadicalForm(namedtuple("RadicalForm", ["coefficient", "radicand", "is_imaginary"])):
    """A single coefficient*√radicand, as produced by simplify() and convert_to_radical()."""
    __slots__ = ()

    @property
    def value(self):
        return self.coefficient * math.sqrt(self.radicand)

    def __str__(self):
        return radical_to_string(self)


RadicalTerm = namedtuple("RadicalTerm", ["coefficient", "radicand"])


class RadicalExpression:
    """constant + Σ coefficient*√radicand. Build through create_radical_expression()."""
    def __init__(self, terms, constant=0):
        self.terms = tuple(terms)
        self.constant = constant

    @property
    def has_radicals(self):
        return len(self.terms) > 0

    @property
    def value(self):
        """Float value of the expression."""
        return self.constant + sum(term.coefficient * math.sqrt(term.radicand) for term in self.terms)

    def is_finite(self):
        return _is_finite(self.constant) and all(_is_finite(term.coefficient) for term in self.terms)

    def __eq__(self, other):
        if not isinstance(other, RadicalExpression):
            return NotImplemented
        return self.constant == other.constant and sorted(self.terms, key=_radicand) == sorted(other.terms, key=_radicand)

    def __hash__(self):
        return hash((self.constant, tuple(sorted(self.terms, key=_radicand))))

    def __str__(self):
        return radical_expression_to_string(self)

    def __repr__(self):
        return f"RadicalExpression(terms={list(self.terms)}, constant={self.constant!r})"


def _radicand(term):
    return term.radicand


# -----------------------------
# Number helpers
# -----------------------------

def _is_finite(value):
    try:
        return math.isfinite(value)
    except OverflowError:
        # int beyond the float range
        return False


def _is_zero(value):
    return abs(value) < ZERO_TOLERANCE


def _is_integral(value):
    if isinstance(value, int):
        return True
    return math.isfinite(value) and float(value).is_integer()


def _normalize(value):
    """Turn integral floats (and float noise around an integer) into ints so arithmetic stays exact."""
    if isinstance(value, int):
        return value
    if not math.isfinite(value):
        return value
    nearest = round(value)
    if abs(value - nearest) < ZERO_TOLERANCE * max(1.0, abs(value)) and abs(nearest) < 2 ** 53:
        return int(nearest)
    return value


def format_number(value):
    """Render a number the way a calculator display does: 2 not 2.0, at most 10 significant digits."""
    if isinstance(value, int):
        return str(value)
    if math.isfinite(value) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return f"{value:.10g}"


# -----------------------------
# Simplification
# -----------------------------

def prime_factorization(n):
    """Prime factors of a positive integer by trial division (2, then odd candidates up to √n)."""
    factors = []
    num = n

    while num % 2 == 0:
        factors.append(2)
        num //= 2

    i = 3
    while i * i <= num:
        while num % i == 0:
            factors.append(i)
            num //= i
        i += 2

    if num > 2:
        factors.append(num)

    return factors


def extract_perfect_squares(factors):
    """Split prime factors into (coefficient, radicand): pairs leave the root, singles stay under it."""
    coefficient = 1
    radicand = 1

    for factor, count in Counter(factors).items():
        coefficient *= factor ** (count // 2)
        if count % 2:
            radicand *= factor

    return coefficient, radicand


def simplify(value):
    """Write √|value| as coefficient*√radicand with a square-free radicand; the sign of value goes on the coefficient.

    simplify(8) -> 2√2, simplify(72) -> 6√2, simplify(-8) -> -2√2.
    A non-integral value cannot be factored and comes back as (±√|value|, 1).
    """
    if value == 0:
        return RadicalForm(0, 1, False)

    sign = -1 if value < 0 else 1
    abs_value = abs(value)

    if not _is_integral(abs_value):
        return RadicalForm(sign * math.sqrt(abs_value), 1, False)

    n = int(abs_value)
    root = math.isqrt(n)
    if root * root == n:
        return RadicalForm(sign * root, 1, False)

    coefficient, radicand = extract_perfect_squares(prime_factorization(n))
    return RadicalForm(sign * coefficient, radicand, False)


def decimal_to_fraction(decimal, precision):
    """Best fraction with denominator <= MAX_DENOMINATOR, or None if it misses by precision or more."""
    fraction = fractions.Fraction(decimal).limit_denominator(MAX_DENOMINATOR)
    if abs(float(fraction) - decimal) < precision:
        return fraction
    return None


def convert_to_radical(decimal, precision=0.0001):
    """Recognise decimal as ±p*√r by reading decimal**2 as a fraction a/b.

    √(a/b) is simplified on both sides and the denominator is rationalised:
    c1√r1 / (c2√r2) = c1/(c2*r2) * √(r1*r2). Falls back to (decimal, 1).
    """
    fallback = RadicalForm(_normalize(decimal), 1, False)
    if not math.isfinite(decimal):
        return fallback
    if decimal == 0:
        return RadicalForm(0, 1, False)

    sign = -1 if decimal < 0 else 1
    squared = decimal * decimal
    if squared * MAX_DENOMINATOR > TRIAL_DIVISION_LIMIT:
        return fallback

    fraction = decimal_to_fraction(squared, precision)
    if fraction is None or fraction.numerator == 0:
        return fallback

    numerator = simplify(fraction.numerator)
    denominator = simplify(fraction.denominator)

    coefficient = numerator.coefficient / (denominator.coefficient * denominator.radicand)
    radicand = numerator.radicand * denominator.radicand

    if abs(coefficient * math.sqrt(radicand) - abs(decimal)) >= precision:
        return fallback

    return RadicalForm(sign * _normalize(coefficient), radicand, False)


# -----------------------------
# Radical expression arithmetic
# -----------------------------

def create_radical_expression(terms=(), constant=0):
    """Merge terms sharing a radicand, drop zero terms and fold radicand-1 terms into the constant."""
    merged = {}
    for term in terms:
        if term.radicand == 0:
            continue
        if term.radicand == 1:
            constant += term.coefficient
            continue
        radicand = int(term.radicand)
        merged[radicand] = merged.get(radicand, 0) + term.coefficient

    combined = [RadicalTerm(_normalize(coefficient), radicand)
                for radicand, coefficient in merged.items() if not _is_zero(coefficient)]
    constant = 0 if _is_zero(constant) else _normalize(constant)
    return RadicalExpression(combined, constant)


def add_radical_expressions(expr1, expr2):
    return create_radical_expression(list(expr1.terms) + list(expr2.terms), expr1.constant + expr2.constant)


def negate_radical_expression(expr):
    return scale_radical_expression(expr, -1)


def scale_radical_expression(expr, factor):
    """Multiply every term and the constant by a plain number."""
    scaled = [RadicalTerm(term.coefficient * factor, term.radicand) for term in expr.terms]
    return create_radical_expression(scaled, expr.constant * factor)


def divide_radical_expression(expr, divisor):
    """Divide every term and the constant by a plain nonzero number."""
    divided = [RadicalTerm(term.coefficient / divisor, term.radicand) for term in expr.terms]
    return create_radical_expression(divided, expr.constant / divisor)


def _multiply_radicands(radicand1, radicand2):
    """√a*√b as (coefficient, radicand)."""
    product = radicand1 * radicand2
    if product <= TRIAL_DIVISION_LIMIT:
        simplified = simplify(product)
        return simplified.coefficient, simplified.radicand
    # Square-free a and b: a*b = g²*(a/g)*(b/g) with g = gcd(a, b)
    g = math.gcd(radicand1, radicand2)
    return g, (radicand1 // g) * (radicand2 // g)


def multiply_radical_expressions(expr1, expr2):
    """Full distribution of (k1 + Σ a√r) * (k2 + Σ b√s), re-simplifying every radicand product."""
    new_terms = []
    new_constant = expr1.constant * expr2.constant

    for term1 in expr1.terms:
        for term2 in expr2.terms:
            coefficient, radicand = _multiply_radicands(term1.radicand, term2.radicand)
            new_terms.append(RadicalTerm(term1.coefficient * term2.coefficient * coefficient, radicand))

    if expr2.constant != 0:
        for term1 in expr1.terms:
            new_terms.append(RadicalTerm(term1.coefficient * expr2.constant, term1.radicand))

    if expr1.constant != 0:
        for term2 in expr2.terms:
            new_terms.append(RadicalTerm(term2.coefficient * expr1.constant, term2.radicand))

    return create_radical_expression(new_terms, new_constant)


def power_radical_expression(expr, exponent):
    """expr ** exponent for an integer exponent >= 0, by repeated squaring."""
    if exponent < 0 or not _is_integral(exponent):
        raise ValueError(f"Exponent must be a non-negative integer, got {exponent}")

    exponent = int(exponent)
    result = create_radical_expression([], 1)
    base = expr
    while exponent:
        if exponent & 1:
            result = multiply_radical_expressions(result, base)
        exponent >>= 1
        if exponent:
            base = multiply_radical_expressions(base, base)
    return result


# -----------------------------
# Rendering
# -----------------------------

def radical_to_string(radical):
    """Render a RadicalForm: 5, √5, -√5, 2√3 (and 2i√3, i, -i for imaginary forms)."""
    coefficient = radical.coefficient
    radicand = radical.radicand
    shown = format_number(coefficient)

    if radical.is_imaginary:
        if coefficient == 0:
            return "0"
        if radicand == 1:
            if coefficient == 1:
                return "i"
            if coefficient == -1:
                return "-i"
            return f"{shown}i"
        if coefficient == 1:
            return f"i√{radicand}"
        if coefficient == -1:
            return f"-i√{radicand}"
        return f"{shown}i√{radicand}"

    if radicand == 1:
        return shown
    if coefficient == 1:
        return f"√{radicand}"
    if coefficient == -1:
        return f"-√{radicand}"
    return f"{shown}√{radicand}"


def radical_expression_to_string(expr):
    """Render constant first, then the terms joined with ' + ' / ' - '; an empty expression is '0'."""
    parts = []

    if expr.constant != 0:
        parts.append(format_number(expr.constant))

    for term in expr.terms:
        if term.coefficient == 0:
            continue
        term_str = radical_to_string(RadicalForm(term.coefficient, term.radicand, False))

        if not parts:
            parts.append(term_str)
        elif term_str.startswith("-"):
            parts.append(f" - {term_str[1:]}")
        else:
            parts.append(f" + {term_str}")

    return "".join(parts) if parts else "0"
