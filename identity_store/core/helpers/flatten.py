from typing import Iterable, List, Optional

ROLE_DELIMITER = ","


def flatten_values(values: Iterable[str]) -> str:
    """Join identifiers into the comma-delimited form stored on user documents."""
    values = list(values)
    for value in values:
        if ROLE_DELIMITER in value:
            raise ValueError(f"Value {value!r} must not contain {ROLE_DELIMITER!r}")
    return ROLE_DELIMITER.join(values)


def split_flattened(value: Optional[str]) -> List[str]:
    """Split a flattened field, discarding empty segments."""
    if not value:
        return []
    return [segment for segment in value.split(ROLE_DELIMITER) if segment]
