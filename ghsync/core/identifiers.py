"""Composite identifiers for resources spanning two remote entities."""

from typing import Tuple

from ghsync.clients.exceptions import MalformedIdentifierError

SEPARATOR = ":"


def build_two_part_id(part_one: str, part_two: str) -> str:
    """Join two identifier parts with the separator.

    Neither part may contain the separator; this is not checked.
    """
    return f"{part_one}{SEPARATOR}{part_two}"


def parse_two_part_id(resource_id: str) -> Tuple[str, str]:
    """Split a composite identifier on the first separator.

    Args:
        resource_id: Identifier of the form ``<part one>:<part two>``

    Returns:
        Tuple of the two parts

    Raises:
        MalformedIdentifierError: If the separator is missing or a part is empty
    """
    part_one, separator, part_two = resource_id.partition(SEPARATOR)

    if not separator or not part_one or not part_two:
        raise MalformedIdentifierError(
            f"Unexpected ID format ({resource_id!r}), expected <part one>{SEPARATOR}<part two>",
            resource_id=resource_id,
        )

    return part_one, part_two
