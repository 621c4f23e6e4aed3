"""
Domain layer - Core models and rules.

This layer contains the fundamental models, markers and errors of slik.
It has no dependencies on other layers.
"""

from .annotations import get_descriptor, implemented_by, injectable, singleton
from .enums import Lifetime
from .exceptions import (
    CircularDependencyError,
    DuplicateBindingError,
    DuplicateProvisionError,
    FieldInjectionError,
    InstantiationError,
    InvalidBindingError,
    InvalidTypeShapeError,
    NotConstructibleError,
    NotInjectableError,
    SingletonTypeMismatchError,
    SlikException,
    UnmetDependencyError,
    UnresolvedAbstractionError,
)
from .interfaces import IContainer, IMetadataReader, IResolver
from .models import (
    CacheKey,
    ContainerSettings,
    DependencyDescriptor,
    Inject,
    Marker,
    Named,
    Resolution,
    TypeDescriptor,
)
from .naming import qualified_name

__all__ = [
    # Enums
    "Lifetime",
    # Exceptions
    "SlikException",
    "CircularDependencyError",
    "DuplicateBindingError",
    "DuplicateProvisionError",
    "FieldInjectionError",
    "InstantiationError",
    "InvalidBindingError",
    "InvalidTypeShapeError",
    "NotConstructibleError",
    "NotInjectableError",
    "SingletonTypeMismatchError",
    "UnmetDependencyError",
    "UnresolvedAbstractionError",
    # Interfaces
    "IContainer",
    "IResolver",
    "IMetadataReader",
    # Models
    "CacheKey",
    "ContainerSettings",
    "DependencyDescriptor",
    "Resolution",
    "TypeDescriptor",
    "Marker",
    "Named",
    "Inject",
    # Markers
    "injectable",
    "singleton",
    "implemented_by",
    "get_descriptor",
    # Helpers
    "qualified_name",
]
