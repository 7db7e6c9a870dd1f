from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from pathlib import Path

from cashbook.client.api import TransactionsClient
from cashbook.client.balance import compute_balances
from cashbook.client.editing import clean_description, parse_amount
from cashbook.client.errors import NetworkFailure, NotFound, NothingToExport, ValidationFailure
from cashbook.client.export import export_all, export_range, filter_by_date_range
from cashbook.client.state import DARK_MODE_KEY, AppState, MemoryPreferences, PreferenceStore
from cashbook.client import views
from cashbook.schemas.transaction import TxCreate, TxUpdate

log = logging.getLogger(__name__)

Notify = Callable[[str, str], None]

_LEVELS = {"error": logging.ERROR, "warning": logging.WARNING}


def _log_notify(message: str, level: str) -> None:
    log.log(_LEVELS.get(level, logging.INFO), "notify[%s]: %s", level, message)


def display_date(d: date) -> str:
    # d/m/yyyy, as id-ID renders it
    return f"{d.day}/{d.month}/{d.year}"


class FinanceTracker:
    """Client-side application: cached transactions, balances and CRUD sync.

    Every write is followed by a full ``refresh`` so the cache always mirrors
    the store. Store failures are logged and reported through ``notify``;
    they never propagate to the caller.
    """

    def __init__(
        self,
        client: TransactionsClient,
        *,
        prefs: PreferenceStore | None = None,
        notify: Notify | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.client = client
        self.prefs = prefs if prefs is not None else MemoryPreferences()
        self.state = AppState.load(self.prefs)
        self.notify = notify or _log_notify
        self._today = today

    # ---- reads ----

    async def refresh(self) -> bool:
        try:
            txs = await self.client.list_transactions()
        except NetworkFailure as e:
            log.error("fetch failed: %s", e)
            self.notify("Could not load data from the server.", "error")
            return False
        self.state.entries, self.state.current_balance = compute_balances(txs)
        return True

    def summary(self) -> views.Summary:
        return views.summarize(self.state.entries, self.state.current_balance)

    def history(self) -> list[views.HistoryRow]:
        entries = self.state.entries
        if self.state.history_filter is not None:
            start, end = self.state.history_filter
            entries = filter_by_date_range(entries, start, end)
        return views.history_rows(entries)

    # ---- writes ----

    async def submit(self, kind: str, amount, description: str = "") -> bool:
        edit = self.state.edit
        try:
            form = edit.form(kind)
            if not form.enabled:
                raise ValidationFailure(f"the {kind} form is disabled while editing")
            value = parse_amount(amount)
            desc = clean_description(description)
        except ValidationFailure as e:
            self.notify(str(e), "error")
            return False

        ok = True
        target = edit.target

        if target is not None:
            try:
                await self.client.update_transaction(target.id, TxUpdate(amount=float(value), description=desc))
            except NotFound:
                log.warning("tx %s vanished while being edited", target.id)
                edit.finish()
                self.notify("The transaction no longer exists.", "error")
                ok = False
            except NetworkFailure as e:
                log.error("update of tx %s failed: %s", target.id, e)
                self.notify("Could not update the transaction.", "error")
                ok = False
            else:
                edit.finish()
                self.notify("Transaction updated", "success")
        else:
            today = self._today()
            body = TxCreate(date=display_date(today), date_iso=today, type=kind, amount=float(value), description=desc)
            try:
                await self.client.create_transaction(body)
            except NetworkFailure as e:
                log.error("create failed: %s", e)
                self.notify("Could not save the transaction.", "error")
                ok = False
            else:
                self.notify("Transaction saved", "success")
            form.clear()

        await self.refresh()
        return ok

    async def delete(self, tx_id: int) -> bool:
        try:
            await self.client.delete_transaction(tx_id)
        except NetworkFailure as e:
            log.error("delete of tx %s failed: %s", tx_id, e)
            self.notify("Could not delete the transaction.", "error")
            return False
        edit = self.state.edit
        if edit.target is not None and edit.target.id == tx_id:
            edit.finish()
        self.notify("Transaction deleted", "info")
        await self.refresh()
        return True

    async def clear_history(self) -> bool:
        try:
            await self.client.delete_all_transactions()
        except NetworkFailure as e:
            log.error("delete all failed: %s", e)
            self.notify("Could not clear the history.", "error")
            return False
        self.notify("History cleared", "info")
        await self.refresh()
        return True

    # ---- edit mode ----

    def start_edit(self, tx_id: int) -> bool:
        e = self.state.find(tx_id)
        if e is None:
            return False
        self.state.edit.start(e.tx)
        self.notify(f"Editing transaction {e.tx.description}", "info")
        return True

    def cancel_edit(self) -> None:
        self.state.edit.cancel()
        self.notify("Edit cancelled", "info")

    # ---- filter & export ----

    def apply_date_filter(self, start: date | None, end: date | None) -> list[views.HistoryRow] | None:
        if start is None or end is None:
            self.notify("choose a date range", "error")
            return None
        self.state.history_filter = (start, end)
        return self.history()

    def reset_filter(self) -> list[views.HistoryRow]:
        self.state.history_filter = None
        return self.history()

    def export_all(self, directory: str | Path) -> Path | None:
        return self._export(lambda: export_all(self.state.entries, self._today()), directory, "Full export done")

    def export_range(self, start: date | None, end: date | None, directory: str | Path) -> Path | None:
        return self._export(lambda: export_range(self.state.entries, start, end), directory, "Range export done")

    def _export(self, build: Callable[[], tuple[str, bytes]], directory: str | Path, done: str) -> Path | None:
        try:
            name, data = build()
        except NothingToExport as e:
            self.notify(str(e), "warning")
            return None
        except ValidationFailure as e:
            self.notify(str(e), "error")
            return None
        path = Path(directory) / name
        path.write_bytes(data)
        self.notify(done, "success")
        return path

    # ---- display preference ----

    def toggle_dark_mode(self) -> bool:
        self.state.dark_mode = not self.state.dark_mode
        self.prefs.set(DARK_MODE_KEY, "true" if self.state.dark_mode else "false")
        return self.state.dark_mode
