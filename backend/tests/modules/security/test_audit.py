"""Tests for the security event log."""

import logging

from modules.security.audit import SecurityEventLog
from modules.security.models import SecurityEventType


class TestSecurityEventLog:
    def test_records_newest_first(self):
        """Events are returned newest first with sequential ids."""
        log = SecurityEventLog()
        log.log_suspicious_input("1.1.1.1", "/api/chat", "first")
        log.log_api_abuse("2.2.2.2", "/api/chat", "second")

        events = log.get_events()

        assert [e.reason for e in events] == ["second", "first"]
        assert [e.id for e in events] == ["sec_2", "sec_1"]

    def test_is_bounded(self):
        """Only the most recent max_entries events are kept."""
        log = SecurityEventLog(max_entries=3)
        for i in range(5):
            log.log_api_abuse("ip", "/x", f"r{i}")

        assert len(log) == 3
        assert [e.reason for e in log.get_events()] == ["r4", "r3", "r2"]

    def test_filters_by_type_and_limit(self):
        """get_events filters by type and honours the limit."""
        log = SecurityEventLog()
        log.log_failed_auth("ip", "/api/admin/logs", "Invalid token")
        log.log_rate_limit_exceeded("ip", "/api/chat", "chat")
        log.log_failed_auth("ip", "/api/admin/logs", "Token has expired")

        failed = log.get_events(event_type=SecurityEventType.FAILED_AUTH)
        assert [e.reason for e in failed] == ["Token has expired", "Invalid token"]
        assert len(log.get_events(limit=1)) == 1

    def test_rate_limit_entry_carries_bucket(self):
        """Rate limit entries name the bucket."""
        log = SecurityEventLog()
        event = log.log_rate_limit_exceeded("9.9.9.9", "/api/chat", "chat")

        assert event.type == SecurityEventType.RATE_LIMIT_EXCEEDED
        assert event.metadata == {"bucket": "chat"}
        assert "chat" in event.reason

    def test_unauthorized_access_entry(self):
        """Unauthorized access entries keep ip and endpoint."""
        log = SecurityEventLog()
        event = log.log_unauthorized_access("5.5.5.5", "/api/chat", "Origin not allowed")

        assert event.type == SecurityEventType.UNAUTHORIZED_ACCESS
        assert event.ip_address == "5.5.5.5"
        assert event.endpoint == "/api/chat"

    def test_mirrors_to_application_log(self, caplog):
        """Every entry is also written to the application log at WARNING."""
        log = SecurityEventLog()
        with caplog.at_level(logging.WARNING, logger="modules.security.audit"):
            log.log_suspicious_input("1.2.3.4", "/api/chat", "script_injection: script tag")

        assert "[SECURITY] suspicious_input" in caplog.text
        assert "1.2.3.4" in caplog.text
