from typing import Any


def callable_name(cb: Any) -> str:
    """Return a human-readable name for a callable, safe for logging.

    Falls back through ``__qualname__``, ``__name__``, and ``repr()``
    so that ``functools.partial``, callable instances, and other exotic
    callables never raise ``AttributeError``.

    Args:
        cb: Any callable object.

    Returns:
        Display name string.
    """
    return (
        getattr(cb, "__qualname__", None) or getattr(cb, "__name__", None) or repr(cb)
    )


def qualified_name(cls: type) -> str:
    """Return ``module.QualName`` for a class.

    Builtins are returned without the ``builtins.`` prefix.
    """
    module = getattr(cls, "__module__", None)
    name = callable_name(cls)
    if not module or module == "builtins":
        return name
    return f"{module}.{name}"
