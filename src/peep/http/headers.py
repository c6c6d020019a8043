"""Immutable, case-insensitive request headers.

Stores the raw byte pairs from the ASGI scope and decodes on access.
"""

from collections.abc import Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    ``headers["Content-Type"]`` returns the first matching value,
    ``get_list`` returns all of them.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        self._raw = raw

    def __getitem__(self, key: str) -> str:
        wanted = key.lower().encode("latin-1")
        for name, value in self._raw:
            if name.lower() == wanted:
                return value.decode("latin-1")
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._raw:
            key = name.decode("latin-1").lower()
            if key not in seen:
                seen.add(key)
                yield key

    def __len__(self) -> int:
        return len(set(self))

    def __repr__(self) -> str:
        return f"Headers({dict(self.items())!r})"

    def get_list(self, key: str) -> list[str]:
        """Return every value sent for *key*."""
        wanted = key.lower().encode("latin-1")
        return [value.decode("latin-1") for name, value in self._raw if name.lower() == wanted]
