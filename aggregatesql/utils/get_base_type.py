"""Unwrap Optional and Annotated annotations to the type actually stored."""

import types
from typing import Annotated, Any, Union, get_args, get_origin


_NONE_TYPE = type(None)


def get_base_type(annotation: Any) -> tuple[Any, bool]:
    """Return ``(base_type, is_optional)`` for an annotation.

    ``Optional[X]`` and ``X | None`` give ``(X, True)``, ``Annotated[X, ...]`` is
    unwrapped, and unions of several non-None types are returned as they are.
    """
    origin = get_origin(annotation)
    if origin is Annotated:
        return get_base_type(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        args = get_args(annotation)
        non_none = [arg for arg in args if arg is not _NONE_TYPE]
        is_optional = len(non_none) < len(args)
        if len(non_none) == 1:
            base_type, _ = get_base_type(non_none[0])
            return base_type, is_optional
        return annotation, is_optional
    return annotation, False
