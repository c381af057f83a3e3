"""Minimal Kusari example: the same chain, synchronous and asynchronous."""

from __future__ import annotations

import asyncio

from kusari import chain, slot


def add(a: int, b: int) -> int:
    return a + b


def double(x: int) -> int:
    return x * 2


def square(x: int) -> int:
    return x**2


def divide(a: float, b: float) -> float:
    return a / b


async def slow_double(x: int) -> int:
    await asyncio.sleep(0.1)
    return x * 2


async def main() -> None:
    # ((1 + 1) * 2) ** 2 / 8 + 1
    print("Sync result:", chain(1)(add, 1)(double)(square)(divide, slot, 8)(add, 1)())

    # Same chain with one async step; only the read-out is awaited.
    result = await chain(1)(add, 1)(slow_double)(square)(divide, slot, 8)(add, 1)()
    print("Async result:", result)


if __name__ == "__main__":
    asyncio.run(main())
