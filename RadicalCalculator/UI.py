# UI.py
"""""Console user interface for the Radical Calculator.

Responsibilities
----------------
- Read expressions and commands line by line (REPL) or once from argv
- Continue from the previous result ('+5' -> 'ans+5') when enabled
- Dispatch expressions to MathEngine and render decimal + radical forms
- Keep the variable store, the session history and the last answer
- Clipboard integration (':copy') and persistent settings (':set')

Nothing here computes: every value comes from MathEngine.evaluate().
"""""

import json
import logging
import re
import sys
from collections import deque
from decimal import Decimal, localcontext

import pyperclip

from . import config_manager as config_manager
from . import MathEngine as MathEngine
from . import RadicalEngine as RadicalEngine
from . import error as E
from .VariableStore import VariableStore

logger = logging.getLogger(__name__)

LET_RE = re.compile(r"^let\s+([A-Za-z][A-Za-z0-9_]*)\s*=\s*(.+)$")

APPROX_SIGN = "\u2248"  # "≈"

# Larger radicands from convert_to_radical() are noise, not a readable form
MAX_APPROX_RADICAND = 1000

HELP_TEXT = """\
Enter an expression, e.g.  sqrt(8) + sqrt(2)   or   2 * (x + 3) - sqrt(y)
  let x = <expr>   define a variable
  :vars            list variables
  :del <name>      delete a variable
  :clear           delete all user variables
  :history         show this session's results
  :expand <expr>   show the expression with variables substituted
  :copy            copy the last result to the clipboard
  :set <key> <val> change a setting (saved to config.json)
  :help            show this text
  :quit            leave"""


def error_text(error_code, message):
    """'Error <code>: <catalogue entry>', followed by the details when they say more."""
    code = str(error_code)
    headline = E.ERROR_MESSAGES.get(code) or E.Error_Dictionary.get(code[:1], "Unknown error")
    if not message or message.rstrip(".") == headline:
        return f"Error {code}: {headline}"
    return f"Error {code}: {headline}\nDetails: {message}"


def format_decimal(value, decimal_places):
    """Round for display. Returns (text, rounding) where rounding tells if digits were cut."""
    with localcontext() as ctx:
        # Room for quantize() on long values
        ctx.prec = 400
        ergebnis = Decimal(repr(value))

        if ergebnis % 1 == 0:
            return f"{ergebnis.normalize():f}", False

        rundungs_muster = Decimal('1e-' + str(decimal_places)) if decimal_places > 0 else Decimal('1')
        gerundetes_ergebnis = ergebnis.quantize(rundungs_muster)
        rounding = gerundetes_ergebnis != ergebnis
        return f"{gerundetes_ergebnis.normalize():f}", rounding


class Calculator:
    """One interactive session: variable store, settings, history and the last answer."""

    def __init__(self, store=None, settings=None):
        self.store = store if store is not None else VariableStore()
        self.settings = config_manager.resolve_settings(settings)
        self.history = deque(maxlen=self.settings["history_size"])
        self.last_display = None
        self.running = True

    # -----------------------------
    # Rendering
    # -----------------------------

    def render_result(self, result):
        """Lines shown for a successful EvaluationResult."""
        text, rounding = format_decimal(result.value, self.settings["decimal_places"])
        lines = [(f"{APPROX_SIGN} " if rounding else "= ") + text]

        if result.radical_form is not None and result.radical_form.has_radicals:
            lines.append(f"= {result.radical_form}")
        elif self.settings["approximate_radicals"] and not float(result.value).is_integer():
            approximation = RadicalEngine.convert_to_radical(result.value, self.settings["radical_precision"])
            if 1 < approximation.radicand <= MAX_APPROX_RADICAND:
                lines.append(f"{APPROX_SIGN} {approximation} (approx.)")

        return lines

    def _evaluate(self, expression):
        if self.settings["auto_ans"]:
            expression = self.store.apply_ans(expression)
        return MathEngine.evaluate(expression, self.store, self.settings)

    # -----------------------------
    # Input handling
    # -----------------------------

    def handle(self, line):
        """Process one input line; returns the text to print (possibly empty)."""
        line = line.strip()
        if not line:
            return ""
        try:
            if line.startswith(":"):
                return self.handle_command(line)
            let_match = LET_RE.match(line)
            if let_match:
                return self.handle_let(let_match.group(1), let_match.group(2))
            return self.handle_expression(line)
        except E.MathError as e:
            return error_text(e.code, e.message)

    def handle_expression(self, line):
        result = self._evaluate(line)
        if not result.success:
            return error_text(result.error_code, result.error)

        lines = self.render_result(result)
        self.store.set_answer(result.value)
        if result.radical_form is not None and result.radical_form.has_radicals:
            self.last_display = str(result.radical_form)
        else:
            self.last_display = format_decimal(result.value, self.settings["decimal_places"])[0]
        self.history.append((line, lines))
        return "\n".join(lines)

    def handle_let(self, name, expression):
        result = self._evaluate(expression)
        if not result.success:
            return error_text(result.error_code, result.error)
        self.store.define(name, result.value)
        text, rounding = format_decimal(result.value, self.settings["decimal_places"])
        return f"{name} {APPROX_SIGN if rounding else '='} {text}"

    def handle_command(self, line):
        command, _, argument = line[1:].partition(" ")
        argument = argument.strip()

        if command in ("quit", "exit", "q"):
            self.running = False
            return ""

        elif command == "help":
            return HELP_TEXT

        elif command == "vars":
            return "\n".join(f"{name} = {RadicalEngine.format_number(value)}"
                             for name, value in self.store.items())

        elif command == "del":
            self.store.delete(argument)
            return f"Deleted {argument}"

        elif command == "clear":
            self.store.clear()
            return "Variables cleared"

        elif command == "history":
            if not self.history:
                return "No history"
            return "\n".join(f"{expression}  {'  '.join(lines)}" for expression, lines in self.history)

        elif command == "expand":
            return self.store.substitute(argument)

        elif command == "copy":
            return self.copy_last_result()

        elif command == "set":
            return self.change_setting(argument)

        raise E.MathError(f"Unknown command: {command}", code="4000")

    def copy_last_result(self):
        if self.last_display is None:
            raise E.MathError("Nothing to copy.", code="4002")
        try:
            pyperclip.copy(self.last_display)
        except pyperclip.PyperclipException as e:
            raise E.MathError(f"Clipboard unavailable: {e}", code="4001")
        return f"Copied {self.last_display}"

    def change_setting(self, argument):
        key_value, _, raw_value = argument.partition(" ")
        try:
            new_value = json.loads(raw_value)
        except json.JSONDecodeError:
            new_value = raw_value.strip()
        config_manager.update_setting(key_value, new_value)
        self.settings[key_value] = new_value
        logger.info("Setting %s changed to %r", key_value, new_value)
        return f"{key_value} = {json.dumps(new_value)}"


def main(argv=None):
    """Run one expression from argv, or the interactive loop when none is given."""
    args = sys.argv[1:] if argv is None else argv
    settings = config_manager.load_setting_value("all")
    logging.basicConfig(level=str(settings["log_level"]).upper(),
                        format="%(levelname)s %(name)s: %(message)s")

    calculator = Calculator(settings=settings)

    if args:
        output = calculator.handle(" ".join(args))
        print(output)
        return 1 if output.startswith("Error") else 0

    print("Radical Calculator. Type :help for commands.")
    while calculator.running:
        try:
            line = input("> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break
        output = calculator.handle(line)
        if output:
            print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
