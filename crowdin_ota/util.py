import copy
from collections.abc import Mapping, Sequence
from typing import Any


def is_json_file(path: str) -> bool:
    return path.lower().endswith(".json")


def shallow_merge(target: dict[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    """Overwrite top-level keys of ``target`` with those of ``source``."""
    for key, value in source.items():
        target[key] = copy.deepcopy(value)
    return target


def deep_merge(target: dict[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``source`` into ``target`` recursively.

    Nested mappings present on both sides are combined key by key and
    nested lists position by position; any other collision is won by
    ``source``.  ``["one", "two"]`` merged with ``["uno"]`` gives
    ``["uno", "two"]``.
    """
    for key, value in source.items():
        target[key] = _merge_value(target.get(key), value)
    return target


def _merge_list(target: list[Any], source: list[Any]) -> list[Any]:
    for index, value in enumerate(source):
        if index < len(target):
            target[index] = _merge_value(target[index], value)
        else:
            target.append(copy.deepcopy(value))
    return target


def _merge_value(existing: Any, value: Any) -> Any:
    if isinstance(value, Mapping) and isinstance(existing, dict):
        return deep_merge(existing, value)
    if isinstance(value, list) and isinstance(existing, list):
        return _merge_list(existing, value)
    return copy.deepcopy(value)


def lookup_path(strings: Mapping[str, Any], path: Sequence[str]) -> Any:
    """Walk ``path`` through nested mappings, returning None on the first miss."""
    result: Any = strings
    for part in path:
        if not isinstance(result, Mapping):
            return None
        result = result.get(part)
        if result is None:
            return None
    return result
