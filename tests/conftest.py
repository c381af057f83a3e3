"""Shared helpers for Kusari tests."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any


def add(a: int, b: int) -> int:
    return a + b


def double(x: int) -> int:
    return x * 2


def square(x: int) -> int:
    return x**2


def divide(a: float, b: float) -> float:
    return a / b


def fail(x: Any) -> Any:
    raise ValueError("intentional failure")


async def delayed(value: Any, delay: float = 0.01) -> Any:
    await asyncio.sleep(delay)
    return value


async def async_double(x: int) -> int:
    await asyncio.sleep(0.01)
    return x * 2


async def async_fail(x: Any) -> Any:
    await asyncio.sleep(0)
    raise ValueError("intentional failure")


async def as_result(x: int) -> dict[str, Any]:
    await asyncio.sleep(0.01)
    return {"result": x, "info": "x"}


class Counter:
    """A receiver with state that methods can read."""

    def __init__(self, factor: int) -> None:
        self.factor = factor

    def scale(self, x: int) -> int:
        return x * self.factor

    async def scale_later(self, x: int) -> int:
        await asyncio.sleep(0)
        return x * self.factor


@dataclass
class Point:
    x: int
    y: int

    def shifted(self, dx: int, dy: int = 0) -> Point:
        return Point(self.x + dx, self.y + dy)
