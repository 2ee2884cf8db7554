from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

Headers = Dict[str, Any]

AUTHORIZATION = 'authorization'


@dataclass(frozen=True)
class Header:
    name: str
    value: str


class HeaderStore:
    """
    Case-insensitive, multi-valued header mapping.

    Names are folded to lowercase on insert and a repeated name accumulates
    values instead of replacing them. Iteration always yields names in
    ascending order, which is the order SigV4 wants them canonicalized in.
    """

    def __init__(self, headers: Union[Mapping[str, Any], Iterable[Header], None] = None):
        self._values: Dict[str, List[str]] = {}
        if headers is not None:
            self.update(headers)

    def insert(self, name: str, value: str) -> None:
        self._values.setdefault(name.lower(), []).append(value)

    def replace(self, name: str, value: str) -> None:
        """Drop every value stored under ``name`` and store ``value`` alone."""
        self._values[name.lower()] = [value]

    def update(self, headers: Union[Mapping[str, Any], Iterable[Header]]) -> None:
        if isinstance(headers, Mapping):
            for name, value in headers.items():
                if isinstance(value, (list, tuple)):
                    for item in value:
                        self.insert(name, str(item))
                else:
                    self.insert(name, str(value))
        else:
            for header in headers:
                self.insert(header.name, header.value)

    def get(self, name: str) -> Optional[List[str]]:
        values = self._values.get(name.lower())
        return list(values) if values is not None else None

    def copy(self) -> 'HeaderStore':
        clone = HeaderStore()
        clone._values = {name: list(values) for name, values in self._values.items()}
        return clone

    def items(self) -> Iterator[Tuple[str, List[str]]]:
        for name in self:
            yield name, list(self._values[name])

    def signable(self) -> Iterator[Tuple[str, List[str]]]:
        """Like :meth:`items` but without the ``authorization`` header."""
        return ((name, values) for name, values in self.items() if name != AUTHORIZATION)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._values))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderStore):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"HeaderStore({dict(self.items())!r})"
