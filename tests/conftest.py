from __future__ import annotations

import pytest

from lib_log_notify.errors import NotifyError
from tests.support import FixedClock


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def notify_error() -> NotifyError:
    return NotifyError("channel down", notifier="broken")
