import logging
from typing import Any, Dict, List, Optional, Type

from slik.application.metadata_reader import is_protocol
from slik.domain import (
    IContainer,
    IMetadataReader,
    InstantiationError,
    InvalidBindingError,
    InvalidTypeShapeError,
    IResolver,
    Lifetime,
    NotInjectableError,
    Resolution,
    SlikException,
    UnmetDependencyError,
    UnresolvedAbstractionError,
)

logger = logging.getLogger(__name__)


class DependencyResolver(IResolver):
    """Builds instances of injectable classes from their constructor parameters.

    The resolver knows nothing about the singleton cache: the container checks
    it before calling in and stores singletons afterwards. Nested dependencies
    go back through ``container.resolve`` so they get the same treatment.

    Attributes:
        _metadata_reader: Source of injection markers and constructor parameters.
    """

    def __init__(self, metadata_reader: IMetadataReader) -> None:
        self._metadata_reader = metadata_reader

    def resolve_dependencies(self, dependency_type: Type, container: IContainer) -> Resolution:
        """Resolve all constructor dependencies and create instance.

        Args:
            dependency_type: The type requested from the container.
            container: The container to read bindings from and resolve dependencies with.

        Returns:
            The instance, the concrete class it was built from and that class's lifetime.

        Raises:
            InvalidTypeShapeError: If the type is a data, enum, marker or collection type.
            UnresolvedAbstractionError: If an abstraction has no implementation.
            NotInjectableError: If the concrete class is not marked injectable.
            NotConstructibleError: If the constructor cannot be used.
            UnmetDependencyError: If a constructor dependency cannot be resolved.
            InstantiationError: If the constructor raises.

        Example:
            >>> @injectable
            ... class UserService:
            ...     def __init__(self, db: DatabaseConnection, logger: Logger):
            ...         self.db = db
            ...         self.logger = logger
            >>>
            >>> resolver = DependencyResolver(AnnotationMetadataReader())
            >>> resolution = resolver.resolve_dependencies(UserService, container)
        """
        reader = self._metadata_reader

        if not reader.is_constructible_class_shape(dependency_type):
            raise InvalidTypeShapeError(dependency_type)

        implementation = dependency_type
        if reader.is_abstract(dependency_type):
            implementation = self._find_implementation(dependency_type, container)

        if not reader.is_injectable(implementation):
            raise NotInjectableError(implementation, dependency_type)

        parameters = reader.constructor_parameters(implementation)

        args: List[Any] = []
        kwargs: Dict[str, Any] = {}
        for parameter in parameters:
            try:
                value = container.resolve(parameter.dependency_type, parameter.qualifier)
            except SlikException as e:
                raise UnmetDependencyError(implementation, e) from e

            if parameter.positional_only:
                args.append(value)
            else:
                kwargs[parameter.name] = value

        try:
            instance = implementation(*args, **kwargs)
        except SlikException:
            raise
        except Exception as e:
            raise InstantiationError(implementation, e) from e

        lifetime = Lifetime.SINGLETON if reader.is_singleton(implementation) else Lifetime.TRANSIENT
        return Resolution(instance=instance, implementation=implementation, lifetime=lifetime)

    def _find_implementation(self, abstraction: Type, container: IContainer) -> Type:
        """Implementation to build for an abstraction: its binding, else its declared default.

        Raises:
            UnresolvedAbstractionError: If neither exists.
            InvalidBindingError: If the declared default is not a subclass of the abstraction.
        """
        implementation: Optional[Type] = container.get_binding(abstraction)
        if implementation is not None:
            return implementation

        implementation = self._metadata_reader.default_implementation(abstraction)
        if implementation is None:
            raise UnresolvedAbstractionError(abstraction)

        if not is_protocol(abstraction) and not (
            isinstance(implementation, type) and issubclass(implementation, abstraction)
        ):
            raise InvalidBindingError(abstraction, implementation)

        logger.debug("Using default implementation %s for %s", implementation, abstraction)
        return implementation
