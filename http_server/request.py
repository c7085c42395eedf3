import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Request:
    method: str
    path: str
    headers: dict[str, str]
    query_params: dict[str, list]
    body: bytes
    version: str
    path_params: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        self._dict: dict[str, Any] | None = None
        if not self.body:
            return

        try:
            parsed = json.loads(self.body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return

        if isinstance(parsed, dict):
            self._dict = parsed

    @property
    def json(self) -> dict[str, Any] | None:
        return self._dict

    def has(self, field: str) -> bool:
        return self.get(field, _MISSING) is not _MISSING

    def get(self, field: str, default: Any = None) -> Any:
        """
        Look a field up in path params, then the query string, then the JSON body.
        """
        if field is None:
            raise ValueError("Field cannot be None")

        if len(field) == 0:
            raise ValueError("Field cannot be empty")

        if field in self.path_params:
            return self.path_params[field]

        if field in self.query_params and self.query_params[field]:
            return self.query_params[field][0]

        if self._dict and field in self._dict:
            return self._dict[field]

        return default

    def get_int(self, field: str, default: int | None = None) -> int | None:
        """
        Read an integer field.

        Raises:
            ValueError: If the field is present but not an integer.
        """
        value = self.get(field)
        if value is None:
            return default

        if isinstance(value, bool):
            raise ValueError(f"'{field}' must be an integer")

        if isinstance(value, int):
            return value

        try:
            return int(str(value).strip())
        except ValueError:
            raise ValueError(f"'{field}' must be an integer") from None


_MISSING = object()
