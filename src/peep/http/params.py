"""Request parameters: query string and form values.

``Params`` implements ``Mapping[str, str]``: indexing returns the first
value for a name, ``get_list`` returns all of them.
"""

import json as json_module
from collections.abc import Iterator, Mapping
from typing import Any
from urllib.parse import parse_qs


class Params(Mapping[str, Any]):
    """Immutable multi-valued parameter mapping."""

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, list[Any]] | None = None) -> None:
        self._data: dict[str, list[Any]] = {k: list(v) for k, v in (data or {}).items()}

    @classmethod
    def from_query_string(cls, raw: bytes | str) -> "Params":
        """Parse ``a=1&b=2`` style input, keeping blank values."""
        if isinstance(raw, bytes):
            raw = raw.decode("latin-1")
        return cls(parse_qs(raw, keep_blank_values=True))

    @classmethod
    def from_json(cls, raw: bytes) -> "Params":
        """Use the top-level keys of a JSON object body as parameters.

        Any other JSON document yields no parameters.
        """
        try:
            document = json_module.loads(raw)
        except ValueError:
            return cls()
        if not isinstance(document, dict):
            return cls()
        return cls({k: [v] for k, v in document.items()})

    def merged(self, other: "Params") -> "Params":
        """Return new params where names in *other* replace names in self."""
        return Params({**self._data, **other._data})

    def __getitem__(self, key: str) -> Any:
        return self._data[key][0]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Params({dict(self.items())!r})"

    def get_list(self, key: str) -> list[Any]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Return the value as int, or *default* if missing or not numeric."""
        value = self.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            return default
