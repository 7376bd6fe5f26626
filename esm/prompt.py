"""
Interactive yes/no confirmation on the terminal.
"""
from typing import Callable

ConfirmFunc = Callable[[str, bool], bool]

YES_ANSWERS = ("y", "yes")
NO_ANSWERS = ("n", "no")


def confirm(prompt: str, default: bool = False) -> bool:
    """
    Ask a yes/no question and block until it is answered.

    An empty answer, or end of input, selects `default`.
    """
    suffix = "[Y/n]" if default else "[y/N]"
    while True:
        try:
            answer = input(f"{prompt} {suffix}: ").lower().strip()
        except EOFError:
            print()
            return default
        if not answer:
            return default
        if answer in YES_ANSWERS:
            return True
        if answer in NO_ANSWERS:
            return False
        print("Please answer 'y' or 'n'.")
