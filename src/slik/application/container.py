import logging
import threading
from abc import ABC
from typing import Any, Generic, List, Optional, Protocol, Type, TypeVar

from slik.application.binding_table import BindingTable
from slik.application.circular_detector import CircularDependencyDetector
from slik.application.field_injector import FieldInjector
from slik.application.metadata_reader import (
    AnnotationMetadataReader,
    find_qualifier,
    is_protocol,
    split_annotated,
)
from slik.application.resolver import DependencyResolver
from slik.application.singleton_cache import SingletonCache
from slik.domain import (
    CacheKey,
    ContainerSettings,
    IContainer,
    IMetadataReader,
    InvalidBindingError,
    Lifetime,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)

# Bases every provided instance would share; keying on them would make any two provisions collide.
_IGNORED_BASES = (object, ABC, Generic, Protocol)


def provided_types(cls: Type) -> List[Type]:
    """The class and every superclass a provided instance is reachable as."""
    return [base for base in cls.__mro__ if base not in _IGNORED_BASES]


class Container(IContainer):
    """Dependency injection container of a single scope.

    Owns the scope's singleton cache and binding table. Entries are only ever
    added: a provided or computed singleton and a binding stay for the
    lifetime of the container.

    All operations hold a re-entrant lock, so containers may be shared
    between threads and a singleton is built at most once. The lock is held
    while constructors run: a constructor that waits on another thread which
    resolves from the same container deadlocks. Resolve what the other thread
    needs before starting it, or give it its own container.

    Attributes:
        _settings: Behavior switches.
        _metadata_reader: Source of injection markers.
        _singletons: Singletons by type and qualifier name.
        _bindings: Implementations by abstraction.
        _resolver: Component that builds instances.
        _field_injector: Component behind the legacy ``inject``.
        _circular_detector: Component detecting circular dependencies.
    """

    def __init__(
        self,
        settings: Optional[ContainerSettings] = None,
        metadata_reader: Optional[IMetadataReader] = None,
    ) -> None:
        """Initialize the container with an empty cache and binding table.

        Args:
            settings: Behavior switches, defaults to ``ContainerSettings()``.
            metadata_reader: Source of injection markers, defaults to reading decorators.
        """
        self._settings = settings or ContainerSettings()
        self._metadata_reader = metadata_reader or AnnotationMetadataReader()
        self._singletons = SingletonCache()
        self._bindings = BindingTable()
        self._resolver = DependencyResolver(self._metadata_reader)
        self._field_injector = FieldInjector(self._metadata_reader)
        self._circular_detector = CircularDependencyDetector()
        self._lock = threading.RLock()

    @property
    def settings(self) -> ContainerSettings:
        return self._settings

    @property
    def metadata_reader(self) -> IMetadataReader:
        return self._metadata_reader

    def provide(self, instance: Any, name: Optional[str] = None) -> "Container":
        """Register a pre-built singleton.

        The instance becomes reachable as its own class and as every superclass,
        each combined with ``name``. A provided instance always wins over
        constructing the type.

        Args:
            instance: The object to provide.
            name: Optional qualifier name.

        Returns:
            The container, for chaining.

        Raises:
            DuplicateProvisionError: If one of the keys is already taken. Keys
                inserted before the conflicting one stay, unless the container
                runs with ``atomic_provide``.

        Example:
            >>> container.provide(Config.from_env()).provide("hello", "greeting")
        """
        keys = [CacheKey.of(cls, name) for cls in provided_types(type(instance))]
        with self._lock:
            self._singletons.insert_all(keys, instance, atomic=self._settings.atomic_provide)
        logger.debug("Provided %s named %r", type(instance), name)
        return self

    def bind(self, abstraction: Type[T], implementation: Type[T]) -> "Container":
        """Bind an interface or abstract class to the implementation slik should build.

        Use this for abstractions that cannot carry ``@implemented_by``. A
        binding wins over a declared default implementation.

        Args:
            abstraction: Interface or abstract class.
            implementation: Concrete subclass.

        Returns:
            The container, for chaining.

        Raises:
            InvalidBindingError: If ``implementation`` is not a subclass of ``abstraction``.
            DuplicateBindingError: If ``abstraction`` is already bound.

        Example:
            >>> container.bind(UserRepository, SqlUserRepository)
        """
        if not is_protocol(abstraction) and not (
            isinstance(implementation, type) and issubclass(implementation, abstraction)
        ):
            raise InvalidBindingError(abstraction, implementation)

        with self._lock:
            self._bindings.bind(abstraction, implementation)
        return self

    def get_binding(self, abstraction: Type) -> Optional[Type]:
        with self._lock:
            return self._bindings.get(abstraction)

    def resolve(self, dependency_type: Type[T], name: Optional[str] = None) -> T:
        """Resolve and return an instance of the specified type.

        A singleton cached for the type and name is returned as is. Otherwise the
        type, or the implementation of an abstraction, is built from its
        constructor with every parameter resolved recursively, and cached when
        marked as singleton.

        ``Annotated[T, Named("x")]`` is accepted in place of ``T`` and ``name``.

        Args:
            dependency_type: The type to resolve.
            name: Optional qualifier name.

        Returns:
            Instance of the requested type with all dependencies injected.

        Raises:
            SlikException: A subclass describing why the type cannot be resolved.

        Example:
            >>> greeter = container.resolve(Greeter)
            >>> message = container.resolve(str, "greeting")
        """
        dependency_type, markers = split_annotated(dependency_type)
        name = name or find_qualifier(markers)

        with self._lock:
            key: Optional[CacheKey] = None
            if isinstance(dependency_type, type):
                key = CacheKey.of(dependency_type, name)
                if key in self._singletons:
                    return self._singletons.get(key, check_type=self._settings.check_singleton_types)

            if self._settings.detect_cycles:
                with self._circular_detector.track(dependency_type):
                    resolution = self._resolver.resolve_dependencies(dependency_type, self)
            else:
                resolution = self._resolver.resolve_dependencies(dependency_type, self)

            if key is not None and resolution.lifetime == Lifetime.SINGLETON:
                if key in self._singletons:
                    return self._singletons.get(key, check_type=False)
                self._singletons.insert(key, resolution.instance)
                logger.debug("Cached singleton %s named %r", resolution.implementation, name)

            return resolution.instance

    def inject(self, instance: Any, declaring_type: Optional[Type] = None) -> None:
        """Resolve the fields marked ``Annotated[T, Inject()]`` on an existing object.

        Only use this when constructor injection is not an option. Fields are read
        from ``declaring_type`` (the instance's class by default) alone; call again
        for each class level that declares injectable fields.

        Args:
            instance: The object to populate.
            declaring_type: The class level to read fields from.

        Raises:
            FieldInjectionError: If a field cannot be resolved.
        """
        self._field_injector.inject(instance, self, declaring_type)
