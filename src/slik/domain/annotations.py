"""Class decorators that declare injection markers."""

from typing import Any, Callable, Optional, Type, TypeVar

from slik.domain.enums import Lifetime
from slik.domain.models import TypeDescriptor

T = TypeVar("T")

DESCRIPTOR_ATTRIBUTE = "__slik_descriptor__"


def get_descriptor(cls: Type) -> Optional[TypeDescriptor]:
    """Return the descriptor declared on ``cls`` itself.

    Descriptors of base classes are ignored: a subclass of an injectable class
    is not injectable unless it is marked too.
    """
    return vars(cls).get(DESCRIPTOR_ATTRIBUTE)


def _update_descriptor(cls: Type[T], **changes: Any) -> Type[T]:
    descriptor = get_descriptor(cls) or TypeDescriptor()
    setattr(cls, DESCRIPTOR_ATTRIBUTE, descriptor.model_copy(update=changes))
    return cls


def injectable(cls: Type[T]) -> Type[T]:
    """Allow slik to construct ``cls`` through its constructor.

    Example:
        >>> @injectable
        ... class UserService:
        ...     def __init__(self, repository: UserRepository):
        ...         self.repository = repository
    """
    return _update_descriptor(cls, injectable=True)


def singleton(cls: Type[T]) -> Type[T]:
    """Build ``cls`` at most once per scope and qualifier name.

    Only takes effect together with ``@injectable``.

    Example:
        >>> @singleton
        ... @injectable
        ... class ConnectionPool:
        ...     pass
    """
    return _update_descriptor(cls, lifetime=Lifetime.SINGLETON)


def implemented_by(implementation: Type) -> Callable[[Type[T]], Type[T]]:
    """Declare the default implementation of an interface or abstract class.

    An explicit ``Container.bind`` for the abstraction takes precedence.

    Example:
        >>> @implemented_by(SqlUserRepository)
        ... class UserRepository(ABC):
        ...     @abstractmethod
        ...     def find(self, user_id: int) -> User: ...
    """

    def decorator(cls: Type[T]) -> Type[T]:
        return _update_descriptor(cls, default_implementation=implementation)

    return decorator
