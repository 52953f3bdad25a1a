"""Typed property bag attached to an invoice.

Gateway modules keep their own configuration on a generic invoice without
the invoice knowing about any gateway. Each module declares private
PropertyKey constants in its own namespace:

    CELL_NUMBER = PropertyKey("saman", "cell_number", str)

    bag.set(CELL_NUMBER, "09120000000")
    bag.get(CELL_NUMBER)      # "09120000000"
    bag.get(OTHER_KEY)        # None (absent)

Reads narrow by the key's value type and fail closed: a value of an
unexpected type reads as None, never raises. Collisions across modules are
avoided by namespace convention only.
"""

from __future__ import annotations

import copy
import threading
from collections.abc import Callable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PropertyKey(Generic[T]):
    """A namespaced, typed key into a PropertyBag."""

    namespace: str
    name: str
    value_type: type[T]

    def __post_init__(self) -> None:
        if not self.namespace or not self.name:
            raise ValueError("namespace and name are required")

    @property
    def storage_key(self) -> str:
        """The string key the value is stored under."""
        return f"{self.namespace}:{self.name}"

    def narrow(self, value: Any) -> T | None:
        """Return value if it has the key's type, otherwise None."""
        # bool is an int subclass; an int key must not accept True/False
        if self.value_type is int and isinstance(value, bool):
            return None
        if isinstance(value, self.value_type):
            return value
        return None

    def __str__(self) -> str:
        return self.storage_key


class PropertyBag(Mapping[str, Any]):
    """Ordered, string-keyed storage with atomic read-modify-write.

    Last write wins. All mutation goes through a re-entrant lock owned by
    the bag, so change() runs its mutator as one atomic unit with respect
    to this bag.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._lock = threading.RLock()
        self._items: dict[str, Any] = dict(initial or {})

    # Mapping interface (read-only view)

    def __getitem__(self, key: str) -> Any:
        with self._lock:
            return self._items[_key(key)]

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._items))

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, PropertyKey):
            key = key.storage_key
        with self._lock:
            return key in self._items

    def __repr__(self) -> str:
        return f"PropertyBag({self._items!r})"

    # Typed access

    def get_typed(self, key: PropertyKey[T]) -> T | None:
        """Get value for key narrowed to its type, None if absent or mismatched."""
        with self._lock:
            value = self._items.get(key.storage_key)
        if value is None:
            return None
        return key.narrow(value)

    def set(self, key: str | PropertyKey[Any], value: Any) -> None:
        """Store value under key, overwriting any previous value."""
        with self._lock:
            self._items[_key(key)] = value

    def remove(self, key: str | PropertyKey[Any]) -> None:
        with self._lock:
            self._items.pop(_key(key), None)

    def change(self, mutator: Callable[[MutableMapping[str, Any]], None]) -> None:
        """Apply mutator to the underlying mapping while holding the lock."""
        if mutator is None:
            raise ValueError("mutator is required")
        with self._lock:
            mutator(self._items)

    def snapshot(self) -> dict[str, Any]:
        """Shallow copy of the current contents."""
        with self._lock:
            return dict(self._items)

    def copy(self) -> PropertyBag:
        """Independent bag; list, dict and set values are copied too."""
        with self._lock:
            return PropertyBag(
                {key: _copy_container(value) for key, value in self._items.items()}
            )


def _key(key: str | PropertyKey[Any]) -> str:
    if isinstance(key, PropertyKey):
        return key.storage_key
    if not key:
        raise ValueError("key is required")
    return key


def _copy_container(value: Any) -> Any:
    if isinstance(value, (list, dict, set)):
        return copy.copy(value)
    return value
