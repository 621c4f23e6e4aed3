from abc import ABC, abstractmethod
from typing import Any, List, Optional, Type, TypeVar

from slik.domain.models import DependencyDescriptor, Resolution

T = TypeVar("T")


class IContainer(ABC):
    """Abstract interface for a scope's dependency injection container."""

    @abstractmethod
    def provide(self, instance: Any, name: Optional[str] = None) -> "IContainer":
        """Register a pre-built singleton under its type and all of its supertypes.

        Args:
            instance: The object to provide.
            name: Optional qualifier name.
        """

    @abstractmethod
    def bind(self, abstraction: Type[T], implementation: Type[T]) -> "IContainer":
        """Use ``implementation`` whenever ``abstraction`` is requested.

        Args:
            abstraction: Interface or abstract class.
            implementation: Concrete subclass to construct instead.
        """

    @abstractmethod
    def resolve(self, dependency_type: Type[T], name: Optional[str] = None) -> T:
        """Resolve and return an instance of the requested type.

        Args:
            dependency_type: The type to resolve.
            name: Optional qualifier name.
        """

    @abstractmethod
    def inject(self, instance: Any, declaring_type: Optional[Type] = None) -> None:
        """Populate the injectable fields of an existing object.

        Args:
            instance: The object to populate.
            declaring_type: Class level whose declared fields are injected.
        """

    @abstractmethod
    def get_binding(self, abstraction: Type) -> Optional[Type]:
        """Return the implementation bound to ``abstraction``, if any."""


class IResolver(ABC):
    """Abstract interface for dependency resolution operations."""

    @abstractmethod
    def resolve_dependencies(self, dependency_type: Type, container: IContainer) -> Resolution:
        """Find the implementation of a type, resolve its constructor dependencies and build it.

        Args:
            dependency_type: The type to resolve.
            container: The container used for bindings and nested resolutions.

        Returns:
            The built instance along with its concrete class and lifetime.

        Raises:
            SlikException: If the type or one of its dependencies cannot be resolved.
        """


class IMetadataReader(ABC):
    """Abstract interface for reading injection metadata of a type."""

    @abstractmethod
    def is_constructible_class_shape(self, dependency_type: Any) -> bool:
        """Whether the type is a plain class rather than a data, enum, marker or collection type."""

    @abstractmethod
    def is_abstract(self, dependency_type: Type) -> bool:
        """Whether the type is an interface or abstract class."""

    @abstractmethod
    def is_injectable(self, dependency_type: Type) -> bool:
        """Whether the type carries the injectable marker."""

    @abstractmethod
    def is_singleton(self, dependency_type: Type) -> bool:
        """Whether the type carries the singleton marker."""

    @abstractmethod
    def constructor_parameters(self, dependency_type: Type) -> List[DependencyDescriptor]:
        """Ordered constructor parameters that slik must supply.

        Raises:
            NotConstructibleError: If the constructor cannot be used for injection.
        """

    @abstractmethod
    def default_implementation(self, dependency_type: Type) -> Optional[Type]:
        """The implementation an abstraction declares for itself, if any."""

    @abstractmethod
    def injectable_fields(self, declaring_type: Type) -> List[DependencyDescriptor]:
        """Fields declared directly on ``declaring_type`` that are marked for injection."""
