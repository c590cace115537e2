from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from vaultscout.errors import EmptyResultError, SelectionError

logger = logging.getLogger(__name__)


def resolve(
    items: Iterable[tuple[str, str]],
    *,
    prompt: str = "Please select a subscription:",
    read: Callable[[str], str] = input,
    write: Callable[[str], Any] = print,
    max_attempts: int = 3,
) -> str:
    """Pick one identifier out of ``(identifier, display name)`` pairs.

    A single item is chosen without asking. Otherwise the display names are
    listed with 0-based indexes and the operator types one in.

    Args:
        items: Candidates in display order.
        prompt: Heading written above the numbered list.
        read: Reads one line of operator input, given the input prompt.
        write: Writes one line of output.
        max_attempts: How many invalid answers are tolerated.

    Returns:
        The chosen identifier.

    Raises:
        EmptyResultError: If there is nothing to choose from.
        SelectionError: If no valid index was entered.
    """
    choices = list(items)
    if not choices:
        raise EmptyResultError("Nothing to select from.")
    if len(choices) == 1:
        logger.debug("Only one candidate, selecting %s", choices[0][0])
        return choices[0][0]

    write(prompt)
    for index, (_, display_name) in enumerate(choices):
        write(f"\t{index:2d}) {display_name}")

    last = len(choices) - 1
    for _ in range(max_attempts):
        try:
            answer = read("Selection: ")
        except EOFError as exc:
            raise SelectionError("No selection was entered.") from exc

        try:
            index = int(answer.strip())
        except ValueError:
            write(f"{answer.strip()!r} is not a number between 0 and {last}.")
            continue

        if 0 <= index <= last:
            return choices[index][0]
        write(f"{index} is out of range; enter a number between 0 and {last}.")

    raise SelectionError(f"No valid selection after {max_attempts} attempts.")
