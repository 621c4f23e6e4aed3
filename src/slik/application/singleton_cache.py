from typing import Any, Dict, Iterable, Optional

from slik.application.metadata_reader import is_protocol
from slik.domain import CacheKey, DuplicateProvisionError, SingletonTypeMismatchError


class SingletonCache:
    """Holds the singletons of a scope by type and qualifier name.

    Entries are immutable once set: inserting at a taken key is an error,
    never an overwrite. Locking is left to the owning container.

    Attributes:
        _instances: Instances by cache key.
    """

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._instances: Dict[CacheKey, Any] = {}

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._instances

    def __len__(self) -> int:
        return len(self._instances)

    def get(self, key: CacheKey, check_type: bool = True) -> Optional[Any]:
        """Return the instance cached at ``key``, or None.

        Args:
            key: The slot to read.
            check_type: Whether to verify the instance against the key's type.

        Raises:
            SingletonTypeMismatchError: If the cached instance is not an instance
                of ``key.dependency_type``.
        """
        instance = self._instances.get(key)
        if instance is None or not check_type:
            return instance
        if not is_protocol(key.dependency_type) and not isinstance(instance, key.dependency_type):
            raise SingletonTypeMismatchError(key.dependency_type, key.name or None, instance)
        return instance

    def insert(self, key: CacheKey, instance: Any) -> None:
        """Store ``instance`` at an unused key.

        Raises:
            DuplicateProvisionError: If ``key`` already holds an instance.
        """
        if key in self._instances:
            raise DuplicateProvisionError(key.dependency_type, key.name or None, self._instances[key], instance)
        self._instances[key] = instance

    def insert_all(self, keys: Iterable[CacheKey], instance: Any, atomic: bool = False) -> None:
        """Store ``instance`` under every key.

        Without ``atomic``, keys accepted before a conflicting one stay inserted.

        Raises:
            DuplicateProvisionError: On the first key that already holds an instance.
        """
        keys = list(keys)
        if atomic:
            for key in keys:
                if key in self._instances:
                    raise DuplicateProvisionError(
                        key.dependency_type, key.name or None, self._instances[key], instance
                    )
        for key in keys:
            self.insert(key, instance)

    def remove(self, key: CacheKey) -> None:
        """Drop the entry at ``key``. Only used by testing utilities."""
        self._instances.pop(key, None)

    def clear(self) -> None:
        """Drop every cached instance. Only used by testing utilities."""
        self._instances.clear()
