from enum import Enum


class Lifetime(str, Enum):
    """Defines how many instances of an injectable type a scope creates.

    Attributes:
        TRANSIENT: New instance created on each resolution.
        SINGLETON: Single instance per scope per qualifier name.
    """

    TRANSIENT = "transient"
    SINGLETON = "singleton"

    def __str__(self) -> str:
        return self.value
