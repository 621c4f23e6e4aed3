from typing import Any, List, Optional, Type

from slik.domain.naming import qualified_name


class SlikException(Exception):
    """Base exception for every failure raised by slik."""


class DuplicateProvisionError(SlikException):
    """Raised when a type and name pair already holds a singleton.

    Attributes:
        cls: The type key that was already taken.
        name: The qualifier name of the key.
        existing: The instance stored first.
        instance: The instance that was rejected.
    """

    def __init__(self, cls: Type, name: Optional[str], existing: Any, instance: Any) -> None:
        self.cls = cls
        self.name = name
        self.existing = existing
        self.instance = instance
        super().__init__(
            f"{qualified_name(cls)} named {name!r} is already provided with "
            f"{qualified_name(type(existing))} but is being provided again with "
            f"{qualified_name(type(instance))}. Add or change the name in order to fix this."
        )


class DuplicateBindingError(SlikException):
    """Raised when an abstraction is bound a second time."""

    def __init__(self, cls: Type, existing: Type, implementation: Type) -> None:
        self.cls = cls
        self.existing = existing
        self.implementation = implementation
        super().__init__(
            f"{qualified_name(cls)} is already bound to {qualified_name(existing)} "
            f"but is being re-bound to {qualified_name(implementation)}"
        )


class InvalidBindingError(SlikException):
    """Raised when an implementation is not a subclass of its abstraction."""

    def __init__(self, cls: Type, implementation: Any) -> None:
        self.cls = cls
        self.implementation = implementation
        super().__init__(
            f"{qualified_name(implementation)} cannot be bound to {qualified_name(cls)} "
            "because it is not a subclass of it"
        )


class InvalidTypeShapeError(SlikException):
    """Raised when the requested type is a data, enum, marker or collection type."""

    def __init__(self, cls: Any) -> None:
        self.cls = cls
        super().__init__(
            f"{qualified_name(cls)} must be a regular class in order for slik to create an instance of it."
        )


class UnresolvedAbstractionError(SlikException):
    """Raised for an interface or abstract class with no binding and no default implementation."""

    def __init__(self, cls: Type) -> None:
        self.cls = cls
        super().__init__(
            f"{qualified_name(cls)} is an interface or abstract class that must be bound "
            "to an implementation before slik can inject it."
        )


class NotInjectableError(SlikException):
    """Raised when the concrete type lacks the injectable marker.

    Attributes:
        cls: The concrete type that is not injectable.
        requested: The abstraction the concrete type was substituted for, if any.
    """

    def __init__(self, cls: Type, requested: Optional[Type] = None) -> None:
        self.cls = cls
        self.requested = requested
        message = f"{qualified_name(cls)} must be marked @injectable."
        if requested is not None and requested is not cls:
            message += f" It was selected as the implementation of {qualified_name(requested)}."
        super().__init__(message)


class NotConstructibleError(SlikException):
    """Raised when the constructor of a type cannot be used for injection.

    This occurs when:
    - A required constructor parameter lacks a type hint.
    - A type hint cannot be evaluated.
    - The constructor signature cannot be inspected.
    """

    def __init__(self, cls: Type, reason: Optional[str] = None) -> None:
        self.cls = cls
        self.reason = reason
        message = f"{qualified_name(cls)} must have a constructor slik can call."
        if reason:
            message += f" Reason: {reason}"
        super().__init__(message)


class UnmetDependencyError(SlikException):
    """Raised when one of the constructor dependencies of a type could not be resolved.

    The message names the outer type and carries the inner failure's message,
    so the root cause stays visible however deep it happened.

    Attributes:
        cls: The type whose dependencies failed.
        cause: The inner failure.
    """

    def __init__(self, cls: Type, cause: SlikException) -> None:
        self.cls = cls
        self.cause = cause
        super().__init__(f"{qualified_name(cls)}'s dependencies couldn't be fulfilled.\n\t {cause}")


class CircularDependencyError(SlikException):
    """Raised when a type is requested again while it is still being resolved.

    Attributes:
        dependency_chain: List of types involved in the circular dependency.
    """

    def __init__(self, dependency_chain: List[Type]) -> None:
        self.dependency_chain = dependency_chain
        message = f"Circular dependency detected: {' -> '.join(qualified_name(cls) for cls in dependency_chain)}"
        super().__init__(message)


class InstantiationError(SlikException):
    """Raised when the constructor of an injectable type raises."""

    def __init__(self, cls: Type, error: BaseException) -> None:
        self.cls = cls
        self.error = error
        super().__init__(f"{qualified_name(cls)} raised while being constructed: {error!r}")


class SingletonTypeMismatchError(SlikException):
    """Raised when a cached singleton is not an instance of the requested type."""

    def __init__(self, cls: Type, name: Optional[str], instance: Any) -> None:
        self.cls = cls
        self.name = name
        self.instance = instance
        super().__init__(
            f"{qualified_name(cls)} named {name!r} is cached as {qualified_name(type(instance))}, "
            "which is not an instance of the requested type"
        )


class FieldInjectionError(SlikException):
    """Raised when legacy field injection into an instance fails."""

    def __init__(self, cls: Type, reason: str) -> None:
        self.cls = cls
        self.reason = reason
        super().__init__(f"{qualified_name(cls)} failed to inject its dependencies.\n\t {reason}")
