"""JSON Patch application onto a product update projection"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable

from ..schemas.product import PatchOperation, ProductUpdate
from .exceptions import ValidationFailedError

PATCHABLE_FIELDS = tuple(ProductUpdate.model_fields)


def _normalize(name: str) -> str:
    return name.replace("_", "").lower()


# "categoryId", "CategoryId" and "category_id" all address the same field
_FIELD_LOOKUP = {_normalize(field): field for field in PATCHABLE_FIELDS}


def resolve_path(path: str | None) -> str:
    """Map a JSON pointer such as ``/categoryId`` to a projection field name"""
    if not path or not path.startswith("/"):
        raise ValidationFailedError(f"Invalid patch path '{path}'.")

    segment = path[1:].replace("~1", "/").replace("~0", "~")
    field = _FIELD_LOOKUP.get(_normalize(segment))
    if field is None or "/" in segment:
        raise ValidationFailedError(
            f"The target location specified by path '{path}' was not found."
        )
    return field


def _values_equal(field: str, current: Any, expected: Any) -> bool:
    if current is None or expected is None:
        return current is expected
    try:
        if field == "price":
            return Decimal(str(current)) == Decimal(str(expected))
        if field == "category_id":
            return int(current) == int(expected)
    except (InvalidOperation, TypeError, ValueError):
        return False
    return current == expected


def apply_patch(
    projection: Dict[str, Any], operations: Iterable[PatchOperation]
) -> Dict[str, Any]:
    """Apply operations in order and return the patched copy.

    The input mapping is left untouched. Operations run sequentially, so
    the last operation touching a field decides its value.
    """
    patched = dict(projection)

    for index, operation in enumerate(operations):
        target = resolve_path(operation.path)

        if operation.op in ("add", "replace", "test"):
            if "value" not in operation.model_fields_set:
                raise ValidationFailedError(
                    f"Operation {index} ('{operation.op}') requires a value."
                )

        if operation.op in ("add", "replace"):
            patched[target] = operation.value
        elif operation.op == "remove":
            patched[target] = None
        elif operation.op == "test":
            if not _values_equal(target, patched[target], operation.value):
                raise ValidationFailedError(
                    f"The current value at '{operation.path}' does not match the test value."
                )
        elif operation.op in ("copy", "move"):
            source = resolve_path(operation.from_)
            patched[target] = patched[source]
            if operation.op == "move" and source != target:
                patched[source] = None

    return patched
