from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Protocol

from cashbook.client.balance import Entry
from cashbook.client.editing import EditSession

log = logging.getLogger(__name__)

DARK_MODE_KEY = "darkMode"


class PreferenceStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryPreferences:
    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFilePreferences:
    """Key-value preferences kept in a small JSON object on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            log.warning("ignoring unreadable preferences file %s: %s", self.path, e)
            return {}
        return {str(k): str(v) for k, v in data.items()} if isinstance(data, dict) else {}

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")


@dataclass
class AppState:
    entries: list[Entry] = field(default_factory=list)
    current_balance: Decimal = Decimal("0")
    edit: EditSession = field(default_factory=EditSession)
    history_filter: tuple[date, date] | None = None
    dark_mode: bool = True

    @classmethod
    def load(cls, prefs: PreferenceStore) -> AppState:
        return cls(dark_mode=prefs.get(DARK_MODE_KEY) != "false")

    def find(self, tx_id: int) -> Entry | None:
        for e in self.entries:
            if e.tx.id == tx_id:
                return e
        return None
