# scripts/bank_demo.py

import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio
import logging
import random

from eventrepo.config.logging import configure_logging
from eventrepo.config.settings import get_settings
from eventrepo.dependencies import get_event_repository

ACCOUNT_IDS = (1, 2, 3)


async def run_bank():
    app_settings = get_settings()
    configure_logging(app_settings.log_level)
    logger = logging.getLogger(f"{app_settings.app_name}.bank_demo")
    repository = get_event_repository()

    for _ in range(20):
        account_id = random.choice(ACCOUNT_IDS)
        amount = random.randint(1, 1000)
        name = random.choice(("deposit", "deposit", "withdraw"))
        await repository.append(account_id, name, {"amount": amount})

    # Read side: one timeline across both event types, folded into balances.
    balances = {account_id: 0 for account_id in ACCOUNT_IDS}
    for event in await repository.read_by_names(["deposit", "withdraw"]):
        sign = 1 if event.name == "deposit" else -1
        balances[event.aggregate_id] += sign * event.attrs["amount"]

    for account_id in ACCOUNT_IDS:
        history = await repository.read_by_aggregate(account_id)
        logger.info(
            "account_balance",
            extra={"account_id": account_id, "balance": balances[account_id], "events": len(history)},
        )

asyncio.run(run_bank())
