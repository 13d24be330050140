from datetime import datetime, timedelta, timezone

import pytest

from runlog_core.message_types import Emphasis, MessageType, format_line, timestamp_token

EXPECTED = {
    MessageType.GENERAL: ("", Emphasis.NORMAL),
    MessageType.GENERAL_SUB: (" |", Emphasis.NORMAL),
    MessageType.ALERT: ("!", Emphasis.WARNING),
    MessageType.ALERT_SUB: ("! |", Emphasis.WARNING),
    MessageType.HIGH_ALERT: ("!!", Emphasis.CRITICAL),
    MessageType.HIGH_ALERT_SUB: ("!! |", Emphasis.CRITICAL),
    MessageType.MAINTENANCE: ("~", Emphasis.MUTED),
    MessageType.MAINTENANCE_SUB: ("~ |", Emphasis.MUTED),
}


class TestMessageType:
    def test_table_covers_every_type(self):
        assert set(EXPECTED) == set(MessageType)

    @pytest.mark.parametrize("message_type", list(MessageType))
    def test_prefix_and_emphasis(self, message_type):
        prefix, emphasis = EXPECTED[message_type]
        assert message_type.prefix == prefix
        assert message_type.emphasis is emphasis


class TestFormatLine:
    @pytest.mark.parametrize("message_type", list(MessageType))
    def test_prefix_then_message(self, message_type):
        assert format_line(message_type, "x") == f"{EXPECTED[message_type][0]}x"

    def test_timestamp_token_is_utc(self):
        # 23:15 at UTC+2 is 21:15 UTC
        now = datetime(2024, 5, 1, 23, 15, 7, tzinfo=timezone(timedelta(hours=2)))
        assert timestamp_token(now) == "[21:15:07]"

    def test_timestamped_line(self):
        now = datetime(2024, 5, 1, 8, 0, 1, tzinfo=timezone.utc)
        line = format_line(MessageType.ALERT, "disk low", timestamps=True, now=now)
        assert line == "[08:00:01] !disk low"

    def test_rejects_unknown_type(self):
        with pytest.raises(TypeError):
            format_line("alert", "x")
