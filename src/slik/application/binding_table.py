import logging
from typing import Dict, Optional, Type

from slik.domain import DuplicateBindingError

logger = logging.getLogger(__name__)


class BindingTable:
    """Maps abstractions to the implementations bound to them in a scope."""

    def __init__(self) -> None:
        self._bindings: Dict[Type, Type] = {}

    def __contains__(self, abstraction: Type) -> bool:
        return abstraction in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def get(self, abstraction: Type) -> Optional[Type]:
        return self._bindings.get(abstraction)

    def bind(self, abstraction: Type, implementation: Type) -> None:
        """Bind ``abstraction`` to ``implementation`` once.

        Raises:
            DuplicateBindingError: If ``abstraction`` is already bound.
        """
        if abstraction in self._bindings:
            raise DuplicateBindingError(abstraction, self._bindings[abstraction], implementation)
        self._bindings[abstraction] = implementation
        logger.debug("Bound %s to %s", abstraction, implementation)

    def clear(self) -> None:
        self._bindings.clear()
