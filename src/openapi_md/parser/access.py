"""Total accessors over a raw, already-parsed document tree.

Every helper returns a typed default instead of raising, so adapters can walk
arbitrarily incomplete documents without nil checks.
"""

from typing import Any

MAX_REF_HOPS = 8


def as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def as_str(value: Any) -> str:
    """Coerce a scalar to text; YAML happily turns ``version: 1.0`` into a float."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def as_text(value: Any) -> str:
    return as_str(value).strip()


def as_str_list(value: Any) -> list[str]:
    """Normalise a ``type``-like field (string or list of strings) to a list."""
    if isinstance(value, str):
        return [value] if value else []
    return [item for item in (as_str(v) for v in as_list(value)) if item]


def ref_name(ref: str) -> str:
    """Return the last segment of a reference, e.g. ``#/definitions/Pet`` -> ``Pet``."""
    if not ref:
        return ""
    head, sep, tail = ref.rpartition("/")
    if sep and tail:
        return tail
    return ref


def resolve_pointer(root: dict, ref: str) -> Any | None:
    """Follow a local JSON pointer (``#/a/b``); anything else resolves to None."""
    if not ref.startswith("#/"):
        return None
    current: Any = root
    for part in ref[2:].split("/"):
        if not isinstance(current, dict):
            return None
        part = part.replace("~1", "/").replace("~0", "~")
        current = current.get(part)
        if current is None:
            return None
    return current


def resolve(root: dict, node: Any) -> dict:
    """Dereference a non-schema node (parameter, response, example ...).

    Chains are followed a bounded number of hops; a dangling or cyclic
    reference resolves to an empty mapping.
    """
    current = as_dict(node)
    seen: set[str] = set()
    for _ in range(MAX_REF_HOPS):
        ref = current.get("$ref")
        if not isinstance(ref, str):
            return current
        if ref in seen:
            return {}
        seen.add(ref)
        current = as_dict(resolve_pointer(root, ref))
    return {} if "$ref" in current else current


def shape_errors(tree: Any, mappings: tuple[str, ...] = (), lists: tuple[str, ...] = ()) -> list[str]:
    """Describe top-level fields whose present value has the wrong container type."""
    if not isinstance(tree, dict):
        return [f"document root must be a mapping, got {type(tree).__name__}"]
    problems = []
    for key in mappings:
        if key in tree and tree[key] is not None and not isinstance(tree[key], dict):
            problems.append(f"{key!r} must be a mapping, got {type(tree[key]).__name__}")
    for key in lists:
        if key in tree and tree[key] is not None and not isinstance(tree[key], list):
            problems.append(f"{key!r} must be a list, got {type(tree[key]).__name__}")
    return problems
