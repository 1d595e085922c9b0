"""Interactive terminal selection."""

from __future__ import annotations

from collections.abc import Callable, Sequence

# Presents labelled choices and returns one of them, or None if cancelled.
Selector = Callable[[str, Sequence[str]], "str | None"]


def select(message: str, choices: Sequence[str]) -> str | None:
    """Ask the operator to pick one of several choices.

    Choices are listed with numbers; the answer can be a number or the
    exact label. Invalid answers re-prompt. An empty answer, end of input
    or Ctrl+C cancels.

    Args:
        message: Question shown above the list
        choices: Labels to choose from

    Returns:
        The chosen label, or None if the operator cancelled
    """
    if not choices:
        return None

    print(f"\n{message}:")
    for i, choice in enumerate(choices, start=1):
        print(f"  {i}. {choice}")

    while True:
        try:
            answer = input(f"Select [1-{len(choices)}]: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return None

        if not answer:
            return None
        if answer in choices:
            return answer
        if answer.isdigit() and 1 <= int(answer) <= len(choices):
            return choices[int(answer) - 1]

        print(f"Invalid selection '{answer}'")
