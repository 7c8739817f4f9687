# Main.py
""""" Entry point for the Radical Calculator.

   Responsibilities:
   - Verify required files exist when running from a source checkout
   - Start the console UI (one-shot with arguments, REPL without)

"""""
import sys
from pathlib import Path
from RadicalCalculator import UI as UI


PROJECT_ROOT = Path(__file__).resolve().parent



def check_files_exist():

    """
      Fail fast if engine files are missing / moved / renamed.
      config.json is optional: config_manager falls back to its defaults.
    """

    modules_dir = PROJECT_ROOT / "RadicalCalculator"

    REQUIRED = [
        modules_dir / "UI.py",
        modules_dir / "MathEngine.py",
        modules_dir / "ExpressionParser.py",
        modules_dir / "RadicalEngine.py",
        modules_dir / "ScientificEngine.py",
        modules_dir / "VariableStore.py",
        modules_dir / "config_manager.py",
        modules_dir / "error.py",
    ]

    missing_files = []
    for file_path in REQUIRED:
        if not file_path.exists():
            missing_files.append(file_path.name)

    if missing_files:
        print("Error: The following files are missing or in the wrong location:")
        for file_name in missing_files:
            print(f"- {file_name}")
        sys.exit(1)


def main():

    """
    Keep this thin: no business logic here.
    """
    check_files_exist()
    return UI.main()


if __name__ == "__main__":
    sys.exit(main())
