"""
Finalissima Goal Tracker — Command Dispatch.

Maps an incoming command string to one State Store operation and a reply.
This module is transport-agnostic: the polling bot and the webhook host both
hand message text to `dispatch()` and send back whatever it returns.

Unrecognized text (including commands with malformed arguments, e.g.
"/setbudget lots") yields None and is silently ignored.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Callable
from zoneinfo import ZoneInfo

from src.core.countdown import TimeLeft, time_left
from src.data.models import CHECKLIST_ITEMS, Checklist
from src.data.store import (
    LogNotFoundError,
    StateStore,
    append_note,
    clear_notes,
    set_budget,
    set_field,
)

logger = logging.getLogger(__name__)

DONE = "✅"
NOT_DONE = "❌"
LOG_LINES_SHOWN = 5

# (command, description) — registered with Telegram's command menu
BOT_COMMANDS: list[tuple[str, str]] = [
    ("start", "Activate the bot"),
    ("status", "Show checklist & budget status"),
    ("check", "Mark checklist item as done"),
    ("uncheck", "Mark checklist item as undone"),
    ("progress", "Show progress percent"),
    ("savenote", "Save a note"),
    ("notes", "Show saved notes"),
    ("clearnotes", "Clear all notes"),
    ("log", "Show last 5 logs"),
    ("setbudget", "Set saved budget"),
]


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------


def resolve_timezone(name: str) -> tzinfo:
    """Return the named zone, or the host's local zone when `name` is empty."""
    if name:
        return ZoneInfo(name)
    return datetime.now().astimezone().tzinfo


@dataclass
class TrackerContext:
    """Everything a command handler needs: storage, goal and clock."""

    store: StateStore
    target_date: date
    budget_target: int = 0
    event_name: str = "Finalissima 2026"
    tz: tzinfo | None = None
    clock: Callable[[], datetime] | None = field(default=None, repr=False)

    def now(self) -> datetime:
        if self.clock is not None:
            return self.clock()
        return datetime.now(self.tz)

    def time_left(self) -> TimeLeft:
        return time_left(self.target_date, self.now())


def build_context(settings: object | None = None) -> TrackerContext:
    """Build a TrackerContext from application settings."""
    if settings is None:
        from src.config import settings

    return TrackerContext(
        store=StateStore(settings.DATA_DIR),
        target_date=settings.MATCH_DATE,
        budget_target=settings.ESTIMATE_BUDGET,
        event_name=settings.EVENT_NAME,
        tz=resolve_timezone(settings.TIMEZONE),
    )


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def money(amount: int) -> str:
    """Format an amount as dollars with thousands separators: $1,500."""
    return f"${amount:,}"


def mark(done: bool) -> str:
    return DONE if done else NOT_DONE


def format_status(checklist: Checklist, notes: list[str], left: TimeLeft, budget_target: int) -> str:
    remaining = budget_target - checklist.saved_budget
    notes_text = " | ".join(notes) if notes else "None"
    return (
        f"📅 {left.months} months, {left.days} days left.\n"
        "✅ Checklist:\n"
        f"- Visa: {mark(checklist.visa)}\n"
        f"- Flight: {mark(checklist.flight)}\n"
        f"- Ticket: {mark(checklist.ticket)}\n"
        f"Progress: {checklist.percent}%\n"
        f"💰 Budget: {money(checklist.saved_budget)} / {money(budget_target)}\n"
        f"📉 Remaining: {money(remaining)}\n"
        f"📝 Notes: {notes_text}"
    )


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def cmd_start(ctx: TrackerContext) -> str:
    return "🏆 Finalissima Goal Tracker Activated! Use /status to check progress."


def cmd_status(ctx: TrackerContext) -> str:
    checklist = ctx.store.load_checklist()
    notes = ctx.store.load_notes()
    return format_status(checklist, notes, ctx.time_left(), ctx.budget_target)


def cmd_check(ctx: TrackerContext, item: str) -> str:
    checklist = ctx.store.load_checklist()
    set_field(checklist, item, True)
    ctx.store.save_checklist(checklist)
    return f"{item} marked as {DONE}"


def cmd_uncheck(ctx: TrackerContext, item: str) -> str:
    checklist = ctx.store.load_checklist()
    set_field(checklist, item, False)
    ctx.store.save_checklist(checklist)
    return f"{item} marked as {NOT_DONE}"


def cmd_progress(ctx: TrackerContext) -> str:
    checklist = ctx.store.load_checklist()
    total = len(CHECKLIST_ITEMS)
    return f"Progress: {checklist.completed}/{total} ({checklist.percent}%) complete."


def cmd_savenote(ctx: TrackerContext, text: str) -> str:
    notes = append_note(ctx.store.load_notes(), text)
    ctx.store.save_notes(notes)
    return f"Note saved {DONE}"


def cmd_notes(ctx: TrackerContext) -> str:
    notes = ctx.store.load_notes()
    if not notes:
        return "No saved notes."
    return "📝 Notes:\n- " + "\n- ".join(notes)


def cmd_clearnotes(ctx: TrackerContext) -> str:
    ctx.store.save_notes(clear_notes())
    return f"All notes cleared {NOT_DONE}"


def cmd_log(ctx: TrackerContext) -> str:
    try:
        lines = ctx.store.read_last_log_lines(LOG_LINES_SHOWN)
    except LogNotFoundError:
        return "No logs yet."
    if not lines:
        return "No logs yet."
    return f"📋 Last {LOG_LINES_SHOWN} Logs:\n" + "\n".join(lines)


def cmd_setbudget(ctx: TrackerContext, amount: str) -> str:
    checklist = ctx.store.load_checklist()
    set_budget(checklist, int(amount))
    ctx.store.save_checklist(checklist)
    return f"{DONE} Saved budget updated to {money(checklist.saved_budget)}"


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

_ITEM = "|".join(CHECKLIST_ITEMS)


def _command(name: str, arg: str | None = None) -> re.Pattern[str]:
    """Pattern for `/name[@Bot]` with an optional required argument group."""
    head = rf"^/{name}(?:@\w+)?"
    if arg is None:
        return re.compile(head + r"\s*$")
    return re.compile(head + rf"\s+({arg})\s*$")


_ROUTES: list[tuple[str, re.Pattern[str], Callable[..., str]]] = [
    ("start", _command("start"), cmd_start),
    ("status", _command("status"), cmd_status),
    ("check", _command("check", _ITEM), cmd_check),
    ("uncheck", _command("uncheck", _ITEM), cmd_uncheck),
    ("progress", _command("progress"), cmd_progress),
    # Only the first line of a multi-line note is kept
    ("savenote", re.compile(r"^/savenote(?:@\w+)?[ \t]+(.*\S)"), cmd_savenote),
    ("notes", _command("notes"), cmd_notes),
    ("clearnotes", _command("clearnotes"), cmd_clearnotes),
    ("log", _command("log"), cmd_log),
    ("setbudget", _command("setbudget", r"[0-9]+"), cmd_setbudget),
]


def dispatch(ctx: TrackerContext, text: str | None) -> str | None:
    """Run the command in `text` and return its reply, or None if unrecognized."""
    if not text:
        return None

    text = text.strip()
    for name, pattern, handler in _ROUTES:
        match = pattern.match(text)
        if match is None:
            continue
        logger.info("Handling /%s", name)
        return handler(ctx, *match.groups())

    logger.debug("Ignoring unrecognized message: %s", text[:40])
    return None
