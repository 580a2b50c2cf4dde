import os

os.environ.setdefault("MPLBACKEND", "Agg")

from typing import List

import pytest

from autosweeper.transport import Transport


class RecordingTransport(Transport):
    """Transport that records sent commands; tests push replies with receive()."""

    def __init__(self) -> None:
        super().__init__()
        self.commands: List[str] = []

    def send(self, command: str) -> None:
        self.commands.append(command)

    def receive(self, message: str) -> None:
        assert self.on_message is not None
        self.on_message(message)


def map_message(*rows: str) -> str:
    return "map:\n" + "".join(row + "\n" for row in rows)


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()
