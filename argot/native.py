"""
Optional compiled accelerators.

A compiled extension may ship a drop-in replacement for a pure-Python module
(for example a faster TypeMatcher). load_accelerator() looks for it under a short
list of candidate module names and returns None when none can be imported, so
callers always have the pure-Python implementation to fall back to.

Any accelerator must be behaviorally identical to the module it replaces.
"""
import importlib


def _candidates(name):
    return (
        f"argot._{name}_speedups",
        f"argot.native_{name}",
        f"_argot_{name}",
    )


def load_accelerator(name, /):
    """
    import the first available accelerator for `name`.

    returns the module, or None when no candidate exists or one fails to load.
    a candidate that exists but cannot be loaded stops the search, like a
    broken extension would.
    """
    if not isinstance(name, str):
        raise TypeError("load_accelerator() argument must be a string")
    for candidate in _candidates(name):
        try:
            return importlib.import_module(candidate)
        except ModuleNotFoundError as error:
            if error.name != candidate and not candidate.startswith(f"{error.name}."):
                return None
        except ImportError:
            return None
    return None


def get_native_info(module, /):
    """describe a loaded accelerator, or return None for the pure-Python path."""
    if module is None:
        return None
    getinfo = getattr(module, "get_info", None)
    if callable(getinfo):
        return getinfo()
    return {"module": module.__name__, "runtime": "extension"}


__all__ = (
    "load_accelerator",
    "get_native_info",
)
