import asyncio
import threading
from unittest.mock import MagicMock

from top_podcasts.delivery import EventLoopDeliveryContext, SerialDeliveryContext


def test_serial_context_runs_callbacks_in_order_on_one_thread():
    # Arrange
    seen: list[tuple[int, str]] = []

    def callback(value: int) -> None:
        seen.append((value, threading.current_thread().name))

    # Act
    with SerialDeliveryContext("ui") as context:
        for value in range(5):
            context.dispatch(callback, value)

    # Assert
    assert [value for value, _ in seen] == [0, 1, 2, 3, 4]
    assert len({thread_name for _, thread_name in seen}) == 1
    assert seen[0][1].startswith("ui")
    assert seen[0][1] != threading.current_thread().name


def test_serial_context_survives_failing_callback():
    # Arrange
    failing = MagicMock(side_effect=ValueError("consumer bug"))
    succeeding = MagicMock()

    # Act
    with SerialDeliveryContext() as context:
        context.dispatch(failing, 1)
        context.dispatch(succeeding, 2)

    # Assert
    failing.assert_called_once_with(1)
    succeeding.assert_called_once_with(2)


def test_event_loop_context_runs_callback_on_loop():
    # Arrange
    seen: list[str] = []

    async def run() -> None:
        loop = asyncio.get_running_loop()
        done = asyncio.Event()
        context = EventLoopDeliveryContext(loop)

        def callback(value: str) -> None:
            seen.append(value)
            done.set()

        worker = threading.Thread(target=context.dispatch, args=(callback, "result"))
        worker.start()
        await asyncio.wait_for(done.wait(), timeout=5)
        worker.join()

    # Act
    asyncio.run(run())

    # Assert
    assert seen == ["result"]
