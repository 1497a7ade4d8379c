"""Router import resolution — resolves ``"module:attribute"`` strings."""

import importlib

from waypost.router import Router


def resolve_router(import_string: str) -> Router:
    """Resolve an import string to a waypost Router instance.

    Accepts ``"module:attribute"``. When the attribute is omitted it
    defaults to ``"router"`` (``"myapp"`` resolves to ``myapp.router``).
    A callable that is not a Router is treated as a factory and called.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a Router.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "router"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, Router):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Router):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a waypost.Router instance"
        raise TypeError(msg)

    return obj
