import array
import dataclasses
import inspect
import logging
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional, Sequence, Tuple, Type, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from slik.domain import (
    DependencyDescriptor,
    IMetadataReader,
    Inject,
    Lifetime,
    Marker,
    Named,
    NotConstructibleError,
    TypeDescriptor,
)
from slik.domain.annotations import get_descriptor

logger = logging.getLogger(__name__)

_COLLECTION_TYPES = (list, tuple, set, frozenset, dict, bytearray, array.array)


def split_annotated(hint: Any) -> Tuple[Any, Sequence[Any]]:
    """Split ``Annotated[T, *markers]`` into ``T`` and its markers."""
    if get_origin(hint) is Annotated:
        args = get_args(hint)
        return args[0], args[1:]
    return hint, ()


def find_qualifier(markers: Sequence[Any]) -> Optional[str]:
    """Return the value of the first ``Named`` marker, if any."""
    for marker in markers:
        if isinstance(marker, Named):
            return marker.value
    return None


def is_protocol(cls: Any) -> bool:
    """Whether ``cls`` is itself a ``typing.Protocol`` rather than an implementation of one."""
    return isinstance(cls, type) and bool(vars(cls).get("_is_protocol", False))


class AnnotationMetadataReader(IMetadataReader):
    """Reads injection metadata from class decorators and constructor type hints.

    Classes that cannot be decorated (e.g. from third-party libraries) may be
    registered explicitly; a registered descriptor wins over a decorator.

    Attributes:
        _descriptors: Explicitly registered descriptors by class.
    """

    def __init__(self) -> None:
        """Initialize the reader with no explicit registrations."""
        self._descriptors: Dict[Type, TypeDescriptor] = {}

    def register(self, cls: Type, descriptor: TypeDescriptor) -> "AnnotationMetadataReader":
        """Declare injection markers for a class without decorating it.

        Args:
            cls: The class to describe.
            descriptor: Its markers.

        Returns:
            The reader, for chaining.

        Example:
            >>> reader = AnnotationMetadataReader()
            >>> reader.register(HttpClient, TypeDescriptor(injectable=True, lifetime=Lifetime.SINGLETON))
        """
        logger.debug("Registered descriptor for %s: %s", cls, descriptor)
        self._descriptors[cls] = descriptor
        return self

    def _descriptor(self, cls: Type) -> TypeDescriptor:
        if cls in self._descriptors:
            return self._descriptors[cls]
        if isinstance(cls, type):
            return get_descriptor(cls) or TypeDescriptor()
        return TypeDescriptor()

    def is_constructible_class_shape(self, dependency_type: Any) -> bool:
        if not inspect.isclass(dependency_type) or get_origin(dependency_type) is not None:
            return False
        if dataclasses.is_dataclass(dependency_type):
            return False
        if issubclass(dependency_type, (Enum, BaseModel, Marker)):
            return False
        # NamedTuples are tuples, so the collection check covers them as well
        if issubclass(dependency_type, _COLLECTION_TYPES):
            return False
        return True

    def is_abstract(self, dependency_type: Type) -> bool:
        return inspect.isabstract(dependency_type) or is_protocol(dependency_type)

    def is_injectable(self, dependency_type: Type) -> bool:
        return self._descriptor(dependency_type).injectable

    def is_singleton(self, dependency_type: Type) -> bool:
        return self._descriptor(dependency_type).lifetime == Lifetime.SINGLETON

    def default_implementation(self, dependency_type: Type) -> Optional[Type]:
        return self._descriptor(dependency_type).default_implementation

    def constructor_parameters(self, dependency_type: Type) -> List[DependencyDescriptor]:
        """Ordered constructor parameters of ``dependency_type``.

        ``self``, ``*args``, ``**kwargs`` and parameters with defaults are left
        to Python and not reported.

        Raises:
            NotConstructibleError: If the constructor cannot be inspected, a type
                hint cannot be evaluated, or a required parameter has no hint.
        """
        constructor = dependency_type.__init__
        try:
            signature = inspect.signature(constructor)
        except (TypeError, ValueError) as e:
            raise NotConstructibleError(dependency_type, f"Constructor signature is not available: {e}") from e

        try:
            type_hints = get_type_hints(constructor, include_extras=True)
        except (NameError, TypeError, AttributeError, SyntaxError) as e:
            raise NotConstructibleError(dependency_type, f"Constructor type hints cannot be evaluated: {e}") from e

        parameters = []
        for index, (param_name, param) in enumerate(signature.parameters.items()):
            # Skip the bound instance
            if index == 0 and param_name == "self":
                continue

            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue

            if param.default is not inspect.Parameter.empty:
                continue

            if param_name not in type_hints:
                raise NotConstructibleError(
                    dependency_type,
                    f"Parameter '{param_name}' lacks type hint and has no default value.",
                )

            param_type, markers = split_annotated(type_hints[param_name])
            parameters.append(
                DependencyDescriptor(
                    name=param_name,
                    dependency_type=param_type,
                    qualifier=find_qualifier(markers),
                    positional_only=param.kind == inspect.Parameter.POSITIONAL_ONLY,
                )
            )
        return parameters

    def injectable_fields(self, declaring_type: Type) -> List[DependencyDescriptor]:
        """Attributes annotated ``Annotated[T, Inject()]`` directly on ``declaring_type``.

        Raises:
            NotConstructibleError: If the class annotations cannot be evaluated.
        """
        declared = inspect.get_annotations(declaring_type)
        try:
            type_hints = get_type_hints(declaring_type, include_extras=True)
        except (NameError, TypeError, AttributeError, SyntaxError) as e:
            raise NotConstructibleError(declaring_type, f"Field type hints cannot be evaluated: {e}") from e

        fields = []
        for field_name in declared:
            field_type, markers = split_annotated(type_hints.get(field_name))
            if not any(marker is Inject or isinstance(marker, Inject) for marker in markers):
                continue
            fields.append(
                DependencyDescriptor(
                    name=field_name,
                    dependency_type=field_type,
                    qualifier=find_qualifier(markers),
                )
            )
        return fields
