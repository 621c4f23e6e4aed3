import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator, List, Tuple

from slik.domain import CircularDependencyError

logger = logging.getLogger(__name__)


class CircularDependencyDetector:
    """Tracks the types a thread is currently resolving.

    Entering a type that is already being resolved on the same thread means
    construction would recurse forever, so it fails with the cycle instead.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def _in_progress(self) -> List[Any]:
        stack = getattr(self._local, "stack", None)
        if stack is None:
            stack = self._local.stack = []
        return stack

    @property
    def chain(self) -> Tuple[Any, ...]:
        """Types being resolved on the current thread, outermost first."""
        return tuple(self._in_progress())

    @property
    def depth(self) -> int:
        return len(self._in_progress())

    @contextmanager
    def track(self, dependency_type: Any) -> Iterator[None]:
        """Mark ``dependency_type`` as in progress for the duration of the block.

        Raises:
            CircularDependencyError: If the type is already in progress. The
                in-progress chain is left untouched.

        Example:
            >>> with detector.track(ServiceA):
            ...     with detector.track(ServiceB):
            ...         with detector.track(ServiceA):  # Raises CircularDependencyError
            ...             pass
        """
        stack = self._in_progress()
        if dependency_type in stack:
            cycle = stack[stack.index(dependency_type) :] + [dependency_type]
            logger.debug("Circular dependency detected: %s", cycle)
            raise CircularDependencyError(cycle)

        stack.append(dependency_type)
        try:
            yield
        finally:
            if stack and stack[-1] is dependency_type:
                stack.pop()

    def reset(self) -> None:
        """Forget the in-progress types of the current thread."""
        self._in_progress().clear()
