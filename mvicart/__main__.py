#!/usr/bin/env python3
"""
Console demo of the cart store.

Loads the cart, removes the requested items and prints every state
snapshot and effect the store publishes.

Usage:
    python -m mvicart
    python -m mvicart --delay 0.2 --remove 2 --remove 999
    python -m mvicart --fail
"""

import argparse
import asyncio
import sys
from typing import Optional

from mvicart.cart import (
    CartState,
    FailingCartRepository,
    FakeCartRepository,
    LoadCart,
    RemoveItem,
    create_cart_store,
)
from mvicart.logging import configure_logging


def format_state(state: CartState) -> str:
    ids = ",".join(item.id for item in state.items) or "-"
    parts = [f"items=[{ids}]", f"loading={state.is_loading}"]
    if state.items:
        parts.append(f"subtotal={state.subtotal}")
    if state.error_message:
        parts.append(f"error={state.error_message!r}")
    return " ".join(parts)


async def run_demo(delay: Optional[float], remove_ids: list[str], fail: bool) -> int:
    data_source = FailingCartRepository(delay=delay or 0) if fail else FakeCartRepository(delay=delay)
    store = create_cart_store(data_source)

    store.subscribe_state(lambda state: print(f"[state]  {format_state(state)}"))
    store.subscribe_effects(lambda effect: print(f"[effect] {effect!r}"))

    store.submit(LoadCart())
    for item_id in remove_ids:
        store.submit(RemoveItem(item_id=item_id))

    await store.idle()
    await store.close()

    return 1 if store.state.error_message else 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Cart store console demo")
    parser.add_argument("--delay", type=float, default=None,
                        help="Simulated fetch delay in seconds (default: CART_FETCH_DELAY_SECONDS or 1.5)")
    parser.add_argument("--remove", action="append", default=[], metavar="ID", help="Item id to remove (repeatable)")
    parser.add_argument("--fail", action="store_true", help="Use a data source that always fails")
    args = parser.parse_args(argv)

    configure_logging()

    return asyncio.run(run_demo(args.delay, args.remove, args.fail))


if __name__ == "__main__":
    sys.exit(main())
