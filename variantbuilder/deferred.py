"""Lazily evaluated values.

A :class:`Deferred` wraps a zero-argument callable and only runs it when
``get()`` is called. Plain deferred values re-run the callable on every read,
which keeps them in step with mutable owners such as a project's group or
version. ``Deferred.memoized`` runs the callable once and caches the result.
"""
from .errors import MissingValueError

_UNSET = object()


class Deferred:

    def __init__(self, supplier, memoize=False, description=None):
        self._supplier = supplier
        self._memoize = memoize
        self._value = _UNSET
        self.description = description

    @classmethod
    def of(cls, value):
        """A deferred value that always returns ``value``."""
        return cls(lambda: value, description=repr(value))

    @classmethod
    def memoized(cls, supplier, description=None):
        return cls(supplier, memoize=True, description=description)

    @classmethod
    def not_defined(cls, description=None):
        return cls(None, description=description)

    def is_present(self):
        return self._supplier is not None

    def is_evaluated(self):
        return self._value is not _UNSET

    def get(self):
        if self._value is not _UNSET:
            return self._value
        if self._supplier is None:
            label = self.description or "deferred value"
            raise MissingValueError(f"No value has been specified for {label}.")
        # A supplier that raises leaves nothing cached
        value = self._supplier()
        if self._memoize:
            self._value = value
        return value

    def get_or_else(self, default):
        if not self.is_present():
            return default
        return self.get()

    def map(self, transform):
        if self._supplier is None:
            return Deferred.not_defined(self.description)
        return Deferred(lambda: transform(self.get()), description=self.description)

    def __repr__(self):
        if self._value is not _UNSET:
            return f"Deferred({self._value!r})"
        if self._supplier is None:
            return "Deferred(<not defined>)"
        return f"Deferred({self.description or '<pending>'})"
