"""Attribute and method forwarding on sync and async values."""

from __future__ import annotations

import asyncio
from typing import Any

from kusari import chain, slot


async def fetch_user(user_id: int) -> dict[str, Any]:
    await asyncio.sleep(0.05)
    return {"id": user_id, "name": "  ada lovelace  ", "tags": ["math", "engines"]}


class Greeter:
    def __init__(self, greeting: str) -> None:
        self.greeting = greeting

    def greet(self, name: str) -> str:
        return f"{self.greeting}, {name}!"


async def main() -> None:
    user = chain(1)(fetch_user)

    # Mapping keys and methods of the value are forwarded, even while pending.
    print("Name:", await user.name.strip().title())
    print("Tags:", await user(", ".join, slot.tags))

    # bind() picks the receiver of the next step.
    print(chain(Greeter("Hello")).bind(Greeter("Bonjour")).greet("Ada").value)

    # Failures surface through catch() or on await.
    missing = user.email.lower().catch(lambda e: f"no email ({type(e).__name__})")
    print(await missing)


if __name__ == "__main__":
    asyncio.run(main())
