from typing import Any, Callable, Iterable, Optional, Tuple

# A guard is a (predicate, failure) pair. The predicate receives the record
# under check and returns True when the record passes.
Guard = Tuple[Callable[[Any], bool], Any]


def first_failure(guards: Iterable[Guard], record: Any) -> Optional[Any]:
    """Run guards in order and return the failure of the first one that does not pass."""
    for check, failure in guards:
        if not check(record):
            return failure
    return None
