#!/usr/bin/env python3
"""
Prompt Engine Demo

Walks through every prompt type in one session.

Usage:
    python examples/prompts_demo.py
"""

import asyncio
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from prompt_engine import CANCELLED, form, load_config, question


async def demo() -> None:
    config = load_config()

    flavour = await question(
        "list",
        "Which flavour?",
        ["vanilla", "chocolate", "strawberry", "mint", "pistachio", "lemon", "coffee", "caramel"],
        config=config,
    )
    if flavour is CANCELLED:
        return

    toppings = await question(
        "checkbox",
        "Any toppings?",
        {
            "Sprinkles": "sprinkles",
            "Chocolate sauce": {"value": "sauce"},
            "Extra sauce": {"value": "extra-sauce", "requires": "Chocolate sauce"},
            "Wafer": {"value": "wafer", "selected": True},
        },
        config=config,
    )
    if toppings is CANCELLED:
        return

    account = await form(
        {
            "name": ("input", "Name for the order:", "guest"),
            "pin": ("password", "Loyalty PIN:"),
            "receipt": ("confirm", "Email a receipt?", False),
        },
        config=config,
    )
    if account is CANCELLED:
        return

    print()
    print(f"{account['name']} ordered {flavour} with {', '.join(toppings) or 'nothing on top'}.")


def main() -> None:
    asyncio.run(demo())


if __name__ == "__main__":
    main()
