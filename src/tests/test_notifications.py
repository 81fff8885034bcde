"""Tests for user-facing notifications."""

from unittest.mock import Mock

from notifications import DEFAULT_HISTORY_SIZE, Notification, Notifier


class TestNotifier:
    """Test suite for ``Notifier``."""

    def test_history_is_bounded(self):
        notifier = Notifier(history_size=3)

        for index in range(10):
            notifier.success('Success', f'saved {index}')

        assert len(notifier.history) == 3
        assert [item.message for item in notifier.history] == ['saved 7', 'saved 8', 'saved 9']

    def test_default_history_size(self):
        notifier = Notifier()
        for index in range(DEFAULT_HISTORY_SIZE + 5):
            notifier.error('Error', str(index))
        assert len(notifier.history) == DEFAULT_HISTORY_SIZE

    def test_sinks_receive_notifications(self):
        sink = Mock()
        notifier = Notifier([sink])

        published = notifier.error('Error', 'update Error: boom')

        sink.assert_called_once_with(Notification('error', 'Error', 'update Error: boom'))
        assert published.kind == 'error'

        notifier.remove_sink(sink)
        notifier.success('Success', 'ok')
        sink.assert_called_once()

    def test_failing_sink_does_not_block_others(self):
        second = Mock()
        notifier = Notifier([Mock(side_effect=RuntimeError('sink down')), second])

        notifier.success('Success', 'ok')

        second.assert_called_once()
        assert notifier.history[-1].message == 'ok'
