"""Pacer Protocol — decides how fast outbound calls may be issued."""

from typing import Protocol


class Pacer(Protocol):
    """Awaited before every outbound provider or model call."""

    async def wait(self) -> None: ...
