"""Case-insensitive HTTP headers.

``Headers`` is the immutable request side, built from the raw byte pairs of
the ASGI scope. ``MutableHeaders`` is the response side, written by handlers
and middleware through ``ResponseWriter.headers``.
"""

from collections.abc import Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive request headers.

    Built once from the raw ASGI byte pairs. ``__getitem__`` returns the
    first value for a name; ``get_list`` returns all of them.
    """

    __slots__ = ("_data", "_raw")

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        data: dict[str, list[str]] = {}
        for name, value in raw:
            data.setdefault(name.decode("latin-1").lower(), []).append(value.decode("latin-1"))
        object.__setattr__(self, "_raw", raw)
        object.__setattr__(self, "_data", data)

    def __getitem__(self, key: str) -> str:
        return self._data[key.lower()][0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key.lower())
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key.lower(), []))

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """Raw header byte pairs as received from the ASGI scope."""
        return self._raw


class MutableHeaders:
    """Case-insensitive response headers, in insertion order.

    ``set`` replaces every existing value for a name; ``add`` appends
    another one (e.g. a second ``Set-Cookie``).
    """

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[tuple[str, str]] = []

    def set(self, name: str, value: str) -> None:
        """Set *name* to *value*, dropping any previous values."""
        self.delete(name)
        self._items.append((name, value))

    def add(self, name: str, value: str) -> None:
        """Append another value for *name*."""
        self._items.append((name, value))

    def delete(self, name: str) -> None:
        """Remove every value for *name*. Missing names are ignored."""
        lower = name.lower()
        self._items = [(k, v) for k, v in self._items if k.lower() != lower]

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the first value for *name*, or *default* if missing."""
        lower = name.lower()
        for key, value in self._items:
            if key.lower() == lower:
                return value
        return default

    def get_list(self, name: str) -> list[str]:
        """Return all values for *name*."""
        lower = name.lower()
        return [value for key, value in self._items if key.lower() == lower]

    def items(self) -> tuple[tuple[str, str], ...]:
        """Snapshot of every (name, value) pair."""
        return tuple(self._items)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return self.get(name) is not None

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"MutableHeaders({self._items!r})"
