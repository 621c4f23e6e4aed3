"""
Application layer - Use cases and orchestration.

This layer contains the components that resolve, cache and inject dependencies.
It depends only on the Domain layer.
"""

from .binding_table import BindingTable
from .circular_detector import CircularDependencyDetector
from .container import Container
from .field_injector import FieldInjector
from .metadata_reader import AnnotationMetadataReader
from .resolver import DependencyResolver
from .scope_registry import ScopeRegistry
from .singleton_cache import SingletonCache

__all__ = [
    "AnnotationMetadataReader",
    "BindingTable",
    "CircularDependencyDetector",
    "Container",
    "DependencyResolver",
    "FieldInjector",
    "ScopeRegistry",
    "SingletonCache",
]
