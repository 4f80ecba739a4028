from unittest.mock import MagicMock

from src.core.events import Signal


def test_signal_subscribe_emit():
    event = Signal("test_evt")
    results = []

    def callback(payload):
        results.append(payload)

    event.connect(callback)
    event.emit("hello")

    assert len(results) == 1
    assert results[0] == "hello"


def test_signal_args_and_kwargs():
    sig = Signal("test_signal")
    mock_handler = MagicMock()

    sig.connect(mock_handler)
    sig.emit("data", 123, flag=True)

    mock_handler.assert_called_once_with("data", 123, flag=True)


def test_signal_disconnect():
    event = Signal("test_evt")
    results = []

    def callback():
        results.append(1)

    event.connect(callback)
    event.connect(callback)
    assert event.subscriber_count == 1

    event.disconnect(callback)
    event.disconnect(callback)
    event.emit()

    assert len(results) == 0


def test_signal_clear():
    event = Signal("test_evt")
    event.connect(MagicMock())
    event.connect(MagicMock())
    event.clear()
    assert event.subscriber_count == 0


def test_signal_disconnect_during_emit():
    """A subscriber may disconnect itself without skipping the next one."""
    event = Signal("self_removing")
    results = []

    def once():
        results.append("once")
        event.disconnect(once)

    def always():
        results.append("always")

    event.connect(once)
    event.connect(always)
    event.emit()
    event.emit()

    assert results == ["once", "always", "always"]


def test_signal_error_safety(caplog):
    """Ensure error in one subscriber doesnt block others"""
    event = Signal("err_evt")
    results = []

    def buggy_callback():
        raise ValueError("Bug")

    def worker_callback():
        results.append("ok")

    event.connect(buggy_callback)
    event.connect(worker_callback)

    event.emit()

    assert len(results) == 1
    assert results[0] == "ok"
    assert "Bug" in caplog.text
