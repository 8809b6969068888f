from collections.abc import Iterable


def is_authorized(caller_roles: Iterable[str], allow_list: Iterable[str]) -> bool:
    """True iff the caller holds at least one role on the allow-list."""
    return not set(caller_roles).isdisjoint(allow_list)
