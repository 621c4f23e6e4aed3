import logging
import threading
from typing import Dict, Hashable, Optional

from slik.application.container import Container
from slik.application.metadata_reader import AnnotationMetadataReader
from slik.domain import ContainerSettings, IMetadataReader

logger = logging.getLogger(__name__)


class ScopeRegistry:
    """Maps scope keys to the container of each scope.

    A container is created the first time its key is requested and lives as
    long as the registry. Applications typically create one registry at
    bootstrap and key scopes by their entry-point class.

    Attributes:
        _settings: Settings handed to every container.
        _metadata_reader: Metadata reader shared by every container.
        _scopes: Containers by scope key.
    """

    def __init__(
        self,
        settings: Optional[ContainerSettings] = None,
        metadata_reader: Optional[IMetadataReader] = None,
    ) -> None:
        self._settings = settings or ContainerSettings()
        self._metadata_reader = metadata_reader or AnnotationMetadataReader()
        self._scopes: Dict[Hashable, Container] = {}
        self._lock = threading.Lock()

    def __contains__(self, scope_key: Hashable) -> bool:
        return scope_key in self._scopes

    def __len__(self) -> int:
        return len(self._scopes)

    @property
    def metadata_reader(self) -> IMetadataReader:
        """The reader shared by every container, e.g. for explicit type registrations."""
        return self._metadata_reader

    def get(self, scope_key: Hashable) -> Container:
        """Return the container of ``scope_key``, creating it on first use.

        Args:
            scope_key: Any hashable identifier, usually a class.

        Returns:
            The same container for every call with an equal key.

        Example:
            >>> registry = ScopeRegistry()
            >>> registry.get(ExampleApplication).provide(LibraryClient())
            >>> assert registry.get(ExampleApplication) is registry.get(ExampleApplication)
        """
        with self._lock:
            container = self._scopes.get(scope_key)
            if container is None:
                container = Container(self._settings, self._metadata_reader)
                self._scopes[scope_key] = container
                logger.debug("Created scope %r", scope_key)
            return container

    def _clear(self) -> None:
        """Discard every scope and its state. Reserved for test isolation."""
        with self._lock:
            self._scopes.clear()
        logger.debug("Cleared all scopes")
