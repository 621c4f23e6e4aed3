"""
slik: Simple lightweight dependency injection.

Public API exports for the slik package.
"""

import logging

# Application exports
from slik.application.container import Container
from slik.application.metadata_reader import AnnotationMetadataReader
from slik.application.scope_registry import ScopeRegistry

# Domain exports
from slik.domain.annotations import implemented_by, injectable, singleton
from slik.domain.enums import Lifetime
from slik.domain.exceptions import (
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
from slik.domain.models import ContainerSettings, Inject, Named, TypeDescriptor

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Container
    "Container",
    "ScopeRegistry",
    "AnnotationMetadataReader",
    "ContainerSettings",
    # Markers
    "injectable",
    "singleton",
    "implemented_by",
    "Named",
    "Inject",
    "TypeDescriptor",
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
]
