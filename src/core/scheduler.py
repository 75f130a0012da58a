"""
Finalissima Goal Tracker — Weekly Reminder.

A proactive push (Fridays at 09:00 by default) with the countdown, checklist
and budget, sent to the configured chat and recorded in the reminder log.

This module is provider-agnostic: it depends on the NotificationPort
protocol, not on a specific messaging implementation. The Telegram-specific
scheduling lives in src.bot.telegram_bot.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.core.tracker import mark, money

if TYPE_CHECKING:
    from src.core.tracker import TrackerContext
    from src.ports.notification_port import NotificationPort

logger = logging.getLogger(__name__)


def build_reminder_message(ctx: TrackerContext) -> str:
    """Format the weekly reminder from the current checklist and countdown."""
    left = ctx.time_left()
    checklist = ctx.store.load_checklist()
    remaining = ctx.budget_target - checklist.saved_budget

    return (
        "⏰ Reminder:\n"
        f"📅 {left.months} months, {left.days} days left until {ctx.event_name}.\n"
        f"✅ Visa: {mark(checklist.visa)} | Flight: {mark(checklist.flight)}"
        f" | Ticket: {mark(checklist.ticket)}\n"
        f"💰 Budget: {money(checklist.saved_budget)} saved out of {money(ctx.budget_target)}\n"
        f"📉 Remaining: {money(remaining)}"
    )


async def send_weekly_reminder(
    ctx: TrackerContext,
    notifier: NotificationPort,
    chat_id: int | str,
) -> bool:
    """Send the reminder to `chat_id` and append it to the log.

    Returns True when the reminder went out. A failed send is logged and
    leaves the log untouched.
    """
    message = build_reminder_message(ctx)

    try:
        await notifier.send_message(chat_id, message)
    except Exception as exc:
        logger.error("Failed to send weekly reminder to %s: %s", chat_id, exc)
        return False

    ctx.store.append_log_entry(message, now=ctx.now())
    logger.info("Weekly reminder sent to %s", chat_id)
    return True
