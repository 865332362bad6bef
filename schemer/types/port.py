from __future__ import annotations

from typing import IO


class Port:
    """An open file handle (or one of the standard streams) exposed to Lisp code.

    Ports are only released by an explicit close-input-port/close-output-port;
    an error raised mid-evaluation leaves any open port open.
    """

    __slots__ = ("handle", "mode", "name")

    def __init__(self, handle: IO[str], mode: str, name: str = ""):
        self.handle = handle
        self.mode = mode
        self.name = name

    @property
    def closed(self) -> bool:
        return self.handle.closed

    def close(self) -> None:
        self.handle.close()

    def __repr__(self) -> str:
        return "<IO port>"
