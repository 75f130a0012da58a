"""
Finalissima Goal Tracker — Telegram Bot.

Telegram is the only user interface. Every command arrives here as message
text, goes through the shared Command Dispatch, and the reply (if any) is
sent back to the same chat. Unrecognized text is silently ignored.

The same Application is used by the long-polling runner (`main()`) and by
the webhook host in src.bot.webhook.
"""

from __future__ import annotations

import logging
from datetime import time as dt_time
from typing import TYPE_CHECKING

from telegram import BotCommand, Update
from telegram.ext import Application, ApplicationBuilder, ContextTypes, MessageHandler, filters

from src.core.tracker import BOT_COMMANDS, build_context, dispatch

if TYPE_CHECKING:
    from src.core.tracker import TrackerContext
    from src.ports.notification_port import NotificationPort

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Message handlers
# ---------------------------------------------------------------------------


async def handle_text(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Route a new text message through dispatch and reply when it matches."""
    message = update.effective_message
    if message is None or not message.text:
        return

    tracker: TrackerContext = context.bot_data["tracker"]
    reply = dispatch(tracker, message.text)
    if reply is None:
        return
    await message.reply_text(reply)


async def on_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log handler failures; one failing command never stops the bot."""
    logger.error("Update %s caused error: %s", update, context.error, exc_info=context.error)


async def _post_init(app: Application) -> None:
    """Publish the command menu once the bot is connected."""
    await app.bot.set_my_commands([BotCommand(name, desc) for name, desc in BOT_COMMANDS])
    logger.info("Registered %d bot commands", len(BOT_COMMANDS))


# ---------------------------------------------------------------------------
# App builder
# ---------------------------------------------------------------------------


def build_app(
    tracker: TrackerContext | None = None,
    notifier: NotificationPort | None = None,
    with_reminder: bool = True,
) -> Application:
    """Build and configure the Telegram Application with all handlers.

    Args:
        tracker: Dispatch context. Defaults to one built from settings.
        notifier: Notification port implementation. Defaults to TelegramNotifier
                  (created from the bot instance after app is built).
        with_reminder: Schedule the weekly reminder job (poller mode).
    """
    from src.config import settings

    app = ApplicationBuilder().token(settings.BOT_TOKEN).post_init(_post_init).build()

    if tracker is None:
        tracker = build_context(settings)

    if notifier is None:
        from src.adapters.telegram_notifier import TelegramNotifier
        notifier = TelegramNotifier(app.bot)

    app.bot_data["tracker"] = tracker
    app.bot_data["notifier"] = notifier

    # New messages only; edited messages are not dispatched again
    app.add_handler(MessageHandler(filters.TEXT & filters.UpdateType.MESSAGE, handle_text))
    app.add_error_handler(on_error)

    if with_reminder:
        _setup_weekly_reminder(
            app, tracker, notifier,
            chat_id=settings.CHAT_ID,
            weekday=settings.REMINDER_WEEKDAY,
            hour=settings.REMINDER_HOUR,
        )

    logger.info("Telegram bot application built with %d handlers", len(app.handlers[0]))
    return app


def _setup_weekly_reminder(
    app: Application,
    tracker: TrackerContext,
    notifier: NotificationPort,
    chat_id: str,
    weekday: int = 5,
    hour: int = 9,
) -> None:
    """Register the weekly reminder job (Friday 09:00 by default)."""
    from src.core.scheduler import send_weekly_reminder

    if not chat_id:
        logger.warning("CHAT_ID not set, weekly reminder disabled")
        return

    if app.job_queue is None:
        logger.warning("JobQueue unavailable (install python-telegram-bot[job-queue]), weekly reminder disabled")
        return

    reminder_time = dt_time(hour=hour, minute=0, tzinfo=tracker.tz)

    async def _reminder_job_callback(context: ContextTypes.DEFAULT_TYPE) -> None:
        await send_weekly_reminder(tracker, notifier, chat_id)

    app.job_queue.run_daily(
        _reminder_job_callback,
        time=reminder_time,
        days=(weekday,),
        name="weekly_reminder",
    )

    logger.info("Weekly reminder scheduled on weekday %d at %02d:00", weekday, hour)


def main() -> None:
    """Entry point: build the app and start polling."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.info("Starting Finalissima Goal Tracker bot...")
    app = build_app()
    app.run_polling()


if __name__ == "__main__":
    main()
