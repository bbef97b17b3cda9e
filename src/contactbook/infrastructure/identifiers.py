"""Id assignment for the phones and addresses a contact is saved with."""

from collections.abc import Callable


def child_ids(
    requested: list[int], owned: set[int], new_id: Callable[[], int]
) -> list[int]:
    """Resolve the ids to store for a contact's phones or addresses.

    A requested id is kept only when the contact already owns it and no earlier
    child in the same save took it. Every other child gets a fresh id from new_id.
    """
    used: set[int] = set()
    ids = []
    for requested_id in requested:
        if requested_id in owned and requested_id not in used:
            child_id = requested_id
        else:
            child_id = new_id()
        used.add(child_id)
        ids.append(child_id)
    return ids
