"""Internal utilities for fuzzyrank."""

from collections.abc import Mapping
from typing import Any, Optional, Sequence, Union

from fuzzyrank.models import Prepared

_MISSING = object()


def _lookup(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name, _MISSING)
    return getattr(obj, name, _MISSING)


def get_value(obj: Any, prop: Union[str, Sequence[str]]) -> Any:
    """Read a property path from a record.

    ``prop`` is a key or attribute name, a dotted path, or a list of path
    segments. A name that exists verbatim (dots included) wins over the
    dotted interpretation. Mappings are read by key, anything else by
    attribute.

    Returns:
        The value, or None if any step of the path is missing.

    Example:
        >>> get_value({"file": {"name": "main.py"}}, "file.name")
        'main.py'
        >>> get_value({"a.b": 1}, "a.b")
        1
    """
    if isinstance(prop, str):
        value = _lookup(obj, prop)
        if value is not _MISSING:
            return value
        segments: Sequence[str] = prop.split(".")
    else:
        segments = prop

    for segment in segments:
        if obj is None:
            return None
        obj = _lookup(obj, segment)
        if obj is _MISSING:
            return None
    return obj


def as_target(value: Any) -> Optional[Union[str, Prepared]]:
    """Coerce an extracted value into something matchable.

    None and empty strings mean "nothing to match"; prepared candidates pass
    through; other values are matched by their string form.
    """
    if value is None or isinstance(value, Prepared):
        return value
    if not isinstance(value, str):
        value = str(value)
    return value or None


__all__ = ["get_value", "as_target"]
