from __future__ import annotations
from typing import Dict, Any, Callable

from .errors import DuplicateAlgorithmError, UnknownAlgorithmError


class _Registry:
    """Maps algorithm ids to Identity constructors.

    Adapter packages fill the registry at import time through ``register``.
    Ids are exact (already canonical, lowercase); an id can only be bound once.
    """

    def __init__(self) -> None:
        self._items: Dict[str, Callable[[], Any]] = {}

    def add(self, name: str, factory: Callable[[], Any]) -> bool:
        if name in self._items:
            return False
        self._items[name] = factory
        return True

    def register(self, name: str) -> Callable[[Any], Any]:
        def _inner(cls_or_fn: Any) -> Any:
            if not self.add(name, cls_or_fn):
                raise DuplicateAlgorithmError(f"Algorithm already registered: {name}")
            return cls_or_fn
        return _inner

    def get(self, name: str) -> Callable[[], Any]:
        try:
            return self._items[name]
        except KeyError:
            raise UnknownAlgorithmError(name) from None

    def create(self, name: str) -> Any:
        """Return a fresh, empty identity for ``name``."""
        return self.get(name)()

    def list(self) -> Dict[str, Callable[[], Any]]:
        return dict(self._items)

    def __contains__(self, name: object) -> bool:
        return name in self._items


registry = _Registry()
