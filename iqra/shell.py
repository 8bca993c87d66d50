import logging
import os
import sys
from typing import TYPE_CHECKING

from colorama import Fore, Style, deinit, init

from .consts import INFO, SCRIPT_EXTENSION
from .datatypes import Nil
from .interp import Runtime

if os.name != "nt" and not TYPE_CHECKING:
    try:
        import readline

        readline.parse_and_bind(r'"\e[A": history-search-backward')
        readline.parse_and_bind(r'"\e[B": history-search-forward')
    except ImportError:
        pass

PROMPT = "اقرأ> "
EXIT_WORDS = ("exit", "quit", "خروج")
USAGE = """\
Usage: iqra [-v] [run] FILE.iqra
       iqra [-v] -c CODE
       iqra [-v]                 (interactive shell)
       iqra --version"""


def print_message(title, message):
    print(
        f"{Fore.LIGHTMAGENTA_EX}{Style.BRIGHT}{title}{Fore.RESET}{Style.RESET_ALL}: {Fore.MAGENTA}{message}{Fore.RESET}{Style.RESET_ALL}"
    )


def report(error):
    if hasattr(error, "as_string"):
        print(error.as_string())
    else:
        print(error)


def show(value):
    if value is not None and value != Nil.nil:
        print(value)


def run_source(runtime, fn, text):
    """Runs one chunk of source; returns True on success."""
    try:
        value, error = runtime.run(fn, text)
    except RecursionError:
        print_message("Fatal Error", "Maximum recursion depth exceeded")
        return False
    if error:
        report(error)
        return False
    show(value)
    return True


def repl():
    print(f"Iqra {INFO}")
    print("اكتب 'خروج' أو 'exit' للخروج | Type 'exit' or 'quit' to leave.")
    runtime = Runtime()
    try:
        while True:
            text = input(f"{Fore.LIGHTMAGENTA_EX}{PROMPT}{Fore.RESET}")
            if text.strip() == "":
                continue
            if text.strip() in EXIT_WORDS:
                print("مع السلامة | bye")
                break
            run_source(runtime, "<stdin>", text)
    except (KeyboardInterrupt, EOFError):
        print("\nمع السلامة | bye")


def run_file(path):
    file_name = os.path.abspath(path)

    if not file_name.endswith(SCRIPT_EXTENSION):
        print_message("Error", f"The file must have a '{SCRIPT_EXTENSION}' extension")
        return 1

    try:
        with open(file_name, "r", encoding="utf-8") as file:
            text = file.read()
    except OSError as e:
        print_message("Error", e)
        return 1

    return 0 if run_source(Runtime(), file_name, text) else 1


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    init()
    try:
        return dispatch(args)
    finally:
        deinit()


def dispatch(args):
    if "-v" in args or "--verbose" in args:
        args = [arg for arg in args if arg not in ("-v", "--verbose")]
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    if not args:
        repl()
        return 0

    if args[0] == "--version":
        print(f"Iqra {INFO}")
        return 0

    if args[0] in ("-h", "--help"):
        print(USAGE)
        return 0

    if args[0] in ("-c", "--code"):
        if len(args) != 2:
            print(USAGE)
            return 2
        return 0 if run_source(Runtime(), "<code>", args[1]) else 1

    if args[0] == "run":
        args = args[1:]

    if len(args) != 1:
        print(USAGE)
        return 2
    return run_file(args[0])
