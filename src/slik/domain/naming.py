from typing import Any


def qualified_name(obj: Any) -> str:
    """Return the fully qualified name of a type, e.g. ``myapp.services.Greeter``.

    Objects that are not classes (generic aliases, unions, plain values) fall
    back to their ``repr``.
    """
    if isinstance(obj, type):
        return f"{obj.__module__}.{obj.__qualname__}"
    return repr(obj)
