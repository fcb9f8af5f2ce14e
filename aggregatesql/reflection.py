"""Per-type cache of property descriptors.

The first lookup of a type inspects it once (Pydantic fields, dataclass fields or
class annotations, then public ``property`` objects) and captures an accessor pair
for every property. Later lookups, from any thread, return the same read-only
mapping. Aggregate types are assumed static for the lifetime of the process, so
entries are never invalidated.
"""

import dataclasses
import logging
import operator
import threading
import typing
from types import MappingProxyType
from typing import Any, Callable, ClassVar, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from .exceptions import InvariantViolation
from .utils.default_value import get_default_value, is_default_value
from .utils.get_base_type import get_base_type

logger = logging.getLogger("aggregatesql")


class PropertyDescriptor(BaseModel):
    """One property of an aggregate or value object, with its captured accessors."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    owner: type
    annotation: Any
    type: Any
    has_setter: bool
    default_value: Any
    getter: Callable[[Any], Any]
    setter: Optional[Callable[[Any, Any], None]] = None

    def get_value(self, instance: Any) -> Any:
        return self.getter(instance)

    def set_value(self, instance: Any, value: Any) -> None:
        if self.setter is None:
            raise InvariantViolation(
                f"`{self.owner.__name__}.{self.name}` has no setter"
            )
        self.setter(instance, value)

    def has_default_value(self, instance: Any) -> bool:
        """True if the property still holds the default value of its type on instance."""
        return is_default_value(self.get_value(instance), self.default_value)

    def __repr__(self) -> str:
        return f"PropertyDescriptor({self.owner.__name__}.{self.name}: {self.type!r})"


def _get_type_hints(obj: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(obj)
    except (NameError, TypeError) as error:
        raise InvariantViolation(f"Cannot resolve annotations of {obj!r}: {error}") from error


def _make_setter(name: str, frozen: bool) -> Callable[[Any, Any], None]:
    if frozen:
        return lambda instance, value: object.__setattr__(instance, name, value)
    return lambda instance, value: setattr(instance, name, value)


def _is_class_var(annotation: Any) -> bool:
    return annotation is ClassVar or typing.get_origin(annotation) is ClassVar


def _iter_fields(cls: type):
    """Yield (name, annotation, has_setter, frozen) for the data fields of cls."""
    if isinstance(cls, type) and issubclass(cls, BaseModel):
        model_frozen = bool(cls.model_config.get("frozen", False))
        for name, info in cls.model_fields.items():
            yield name, info.annotation, True, model_frozen or bool(info.frozen)
        return
    hints = _get_type_hints(cls)
    if dataclasses.is_dataclass(cls):
        frozen = cls.__dataclass_params__.frozen
        for field in dataclasses.fields(cls):
            yield field.name, hints.get(field.name, field.type), field.init, frozen
        return
    for name, annotation in hints.items():
        if name.startswith("_") or _is_class_var(annotation):
            continue
        yield name, annotation, True, False


def _iter_properties(cls: type):
    """Yield (name, property) for public properties, base classes first."""
    seen: dict[str, property] = {}
    for klass in reversed(cls.__mro__):
        if klass in (object, BaseModel):
            continue
        for name, attribute in vars(klass).items():
            if isinstance(attribute, property) and not name.startswith("_"):
                seen[name] = attribute
    yield from seen.items()


def _describe(owner: type, name: str, annotation: Any, has_setter: bool,
              getter: Callable[[Any], Any],
              setter: Optional[Callable[[Any, Any], None]]) -> PropertyDescriptor:
    base_type, _ = get_base_type(annotation)
    return PropertyDescriptor(
        name=name,
        owner=owner,
        annotation=annotation,
        type=base_type,
        has_setter=has_setter,
        default_value=get_default_value(annotation),
        getter=getter,
        setter=setter,
    )


def _discover_properties(cls: type) -> dict[str, PropertyDescriptor]:
    properties: dict[str, PropertyDescriptor] = {}
    for name, annotation, has_setter, frozen in _iter_fields(cls):
        properties[name] = _describe(
            cls, name, annotation, has_setter,
            getter=operator.attrgetter(name),
            setter=_make_setter(name, frozen) if has_setter else None,
        )
    for name, prop in _iter_properties(cls):
        if name in properties:
            continue
        annotation = _get_type_hints(prop.fget).get("return", Any) if prop.fget else Any
        properties[name] = _describe(
            cls, name, annotation, prop.fset is not None,
            getter=operator.attrgetter(name),
            setter=prop.fset,
        )
    return properties


class TypePropertiesCache:
    """Memoizing, thread-safe map from a type to its property descriptors.

    Concurrent first lookups of the same type build the descriptors exactly once;
    every caller then receives the same read-only mapping.
    """

    def __init__(self) -> None:
        self._properties: dict[type, Mapping[str, PropertyDescriptor]] = {}
        self._type_locks: dict[type, threading.Lock] = {}
        self._lock = threading.Lock()

    def get_properties(self, cls: type) -> Mapping[str, PropertyDescriptor]:
        """Return the properties of cls by name, in declaration order."""
        properties = self._properties.get(cls)
        if properties is not None:
            return properties
        with self._lock:
            type_lock = self._type_locks.setdefault(cls, threading.Lock())
        with type_lock:
            if cls not in self._properties:
                logger.debug("Caching properties of %s", cls.__qualname__)
                self._properties[cls] = MappingProxyType(_discover_properties(cls))
        return self._properties[cls]

    def __contains__(self, cls: type) -> bool:
        return cls in self._properties

    def __len__(self) -> int:
        return len(self._properties)


default_properties_cache = TypePropertiesCache()
"""Process-wide cache handed to configurations that are not given their own."""
