"""
Finalissima Goal Tracker — Entry Point.

`python main.py` starts the long-polling Telegram bot.
For webhook deployments run `python -m src.bot.webhook` instead.
"""

import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

from src.bot.telegram_bot import main

if __name__ == "__main__":
    main()
