"""Pytest fixtures for tests."""

from collections import deque
from unittest.mock import Mock

import pytest

from pca9956b_cli.device import DeviceService
from pca9956b_cli.models import (
    NUM_CHANNELS,
    ChannelError,
    ChannelState,
    ChannelStatus,
    DeviceSnapshot,
)


def make_statuses(**overrides: dict) -> list[ChannelStatus]:
    """
    Build 24 channel statuses, all Off with no error.

    Keyword arguments named ``ch<N>`` override fields of channel N, e.g.
    ``make_statuses(ch5={"state": ChannelState.PWM})``.
    """
    statuses = []
    for index in range(NUM_CHANNELS):
        fields = {
            "index": index,
            "state": ChannelState.OFF,
            "error": ChannelError.NONE,
            "current": 0,
            "pwm": 0,
        }
        fields.update(overrides.get(f"ch{index}", {}))
        statuses.append(ChannelStatus(**fields))
    return statuses


class KeyScript:
    """
    Scripted key source.

    read_key() pops the next code and fails the test when the script is
    exhausted (the panel should have stopped reading). read_key_nowait()
    pops the next code or returns None, like a read that timed out.
    """

    def __init__(self, codes=()):
        self.codes = deque(ord(c) if isinstance(c, str) else c for c in codes)
        self.blocking_reads = 0

    def read_key(self) -> int:
        if not self.codes:
            raise AssertionError("Panel tried to read a key after the script ended")
        self.blocking_reads += 1
        return self.codes.popleft()

    def read_key_nowait(self):
        if not self.codes:
            return None
        return self.codes.popleft()


@pytest.fixture
def statuses() -> list[ChannelStatus]:
    """Statuses with a mix of states, errors and values."""
    return make_statuses(
        ch0={"state": ChannelState.ON, "current": 100, "pwm": 255},
        ch1={"state": ChannelState.PWM, "error": ChannelError.OPEN, "pwm": 128},
        ch2={"state": ChannelState.PWM_PLUS, "error": ChannelError.SHORT},
        ch3={"error": ChannelError.DOES_NOT_EXIST},
        ch5={"state": ChannelState.PWM, "current": 42, "pwm": 7},
    )


@pytest.fixture
def snapshot(statuses) -> DeviceSnapshot:
    return DeviceSnapshot.from_statuses(statuses)


@pytest.fixture
def device_service(statuses) -> Mock:
    """Device service whose fetch_all always returns the same statuses."""
    service = Mock(spec=DeviceService)
    service.fetch_all.return_value = statuses
    service.set_channel_state.return_value = None
    return service


@pytest.fixture
def key_script():
    """Factory for scripted key sources."""
    return KeyScript


@pytest.fixture
def status_factory():
    """Factory for 24 channel statuses (see make_statuses)."""
    return make_statuses
