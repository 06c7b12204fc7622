"""Utilities for handling YAML parsing quirks."""

from typing import Any, Dict, TypeVar

V = TypeVar("V")


def normalize_yaml_dict_keys(data: Dict[Any, V]) -> Dict[str, V]:
    """Return a copy of ``data`` with every key converted to a string.

    YAML 1.1 reads keys such as ``yes``/``no``/``on``/``off`` as booleans;
    they come back as ``"True"``/``"False"``.

    Examples:
        >>> normalize_yaml_dict_keys({True: 1, "nodes": []})
        {'True': 1, 'nodes': []}
    """
    return {str(key): value for key, value in data.items()}
