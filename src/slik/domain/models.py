from typing import Any, Optional, Type

from pydantic import BaseModel, ConfigDict, Field

from slik.domain.enums import Lifetime


class CacheKey(BaseModel):
    """Value object identifying a singleton slot: a type plus an optional qualifier name.

    A missing name and an empty name address the same slot.

    Attributes:
        dependency_type: The type the singleton is reachable as.
        name: The qualifier name, empty when unqualified.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    dependency_type: Type = Field(..., description="The type the singleton is reachable as.")
    name: str = Field(default="", description="The qualifier name, empty when unqualified.")

    @classmethod
    def of(cls, dependency_type: Type, name: Optional[str] = None) -> "CacheKey":
        return cls(dependency_type=dependency_type, name=name or "")


class TypeDescriptor(BaseModel):
    """Injection markers declared for a single class.

    Attributes:
        injectable: Whether slik may construct the class.
        lifetime: Whether each scope builds one instance per name or one per request.
        default_implementation: Implementation used for an abstraction when nothing is bound.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    injectable: bool = Field(default=False, description="Whether slik may construct the class.")
    lifetime: Lifetime = Field(default=Lifetime.TRANSIENT, description="Instance lifetime within a scope.")
    default_implementation: Optional[Type] = Field(
        default=None,
        description="Implementation used for an abstraction when no binding exists.",
    )


class DependencyDescriptor(BaseModel):
    """A single constructor parameter or injectable field.

    Attributes:
        name: Parameter or attribute name.
        dependency_type: The type to resolve for it.
        qualifier: Optional qualifier name taken from a ``Named`` marker.
        positional_only: Whether the value must be passed positionally.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    dependency_type: Any
    qualifier: Optional[str] = None
    positional_only: bool = False


class Resolution(BaseModel):
    """Outcome of constructing a requested type.

    Attributes:
        instance: The freshly built instance.
        implementation: The concrete class that was constructed.
        lifetime: Lifetime declared by the concrete class.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    instance: Any
    implementation: Type
    lifetime: Lifetime


class ContainerSettings(BaseModel):
    """Behavior switches shared by every container of a scope registry."""

    model_config = ConfigDict(frozen=True)

    detect_cycles: bool = Field(
        default=True,
        description="Raise CircularDependencyError instead of recursing until the stack runs out.",
    )
    atomic_provide: bool = Field(
        default=False,
        description="Reject a provide() call before inserting anything when any of its keys is taken.",
    )
    check_singleton_types: bool = Field(
        default=True,
        description="Verify a cached singleton is an instance of the requested type.",
    )


class Marker(BaseModel):
    """Base class for the markers placed inside ``typing.Annotated``."""

    model_config = ConfigDict(frozen=True)


class Named(Marker):
    """Qualifies a dependency by name.

    Example:
        >>> class Greeter:
        ...     def __init__(self, message: Annotated[str, Named("greeting")]):
        ...         self.message = message
    """

    value: str

    def __init__(self, value: str, **data: Any) -> None:
        super().__init__(value=value, **data)


class Inject(Marker):
    """Marks a class attribute for legacy field injection.

    Example:
        >>> class Application:
        ...     repository: Annotated[Repository, Inject()]
    """
