import pytest

from tests.fakes import SleepRecorder


@pytest.fixture
def sleep():
    return SleepRecorder()
