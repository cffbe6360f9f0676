"""Tests for the in-memory decision log."""

from py_sched.logging import LogEntry, Logger, LogLevel


class TestLogLevel:
    """Verify log level ordering."""

    def test_levels_are_ordered(self) -> None:
        """DEBUG < INFO < WARNING < ERROR."""
        assert LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARNING
        assert LogLevel.WARNING < LogLevel.ERROR


class TestLogEntry:
    """Verify log entry structure."""

    def test_entry_str_with_tick(self) -> None:
        """The tick appears after the source."""
        entry = LogEntry(level=LogLevel.INFO, message="CPU idle", source="sjf_io", tick=4)
        assert str(entry) == "[INFO] sjf_io@4: CPU idle"

    def test_entry_str_without_tick(self) -> None:
        """Entries without a tick omit it."""
        entry = LogEntry(level=LogLevel.ERROR, message="boom", source="host")
        assert str(entry) == "[ERROR] host: boom"


class TestLogger:
    """Verify logging, filtering and clearing."""

    def test_starts_empty(self) -> None:
        """A new logger has no entries."""
        assert Logger().entries == []

    def test_log_appends(self) -> None:
        """Entries are kept in order."""
        logger = Logger()
        logger.log(LogLevel.DEBUG, "first", source="a")
        logger.log(LogLevel.INFO, "second", source="b", tick=2)
        assert [e.message for e in logger.entries] == ["first", "second"]
        assert logger.entries[1].tick == 2
        expected = 2
        assert len(logger) == expected

    def test_entries_is_a_copy(self) -> None:
        """Mutating the returned list does not touch the log."""
        logger = Logger()
        logger.log(LogLevel.INFO, "x", source="a")
        logger.entries.clear()
        assert len(logger) == 1

    def test_filter_by_level(self) -> None:
        """min_level drops lower-severity entries."""
        logger = Logger()
        logger.log(LogLevel.DEBUG, "noise", source="a")
        logger.log(LogLevel.WARNING, "odd", source="a")
        assert [e.message for e in logger.filter(min_level=LogLevel.INFO)] == ["odd"]

    def test_filter_by_source(self) -> None:
        """source keeps only matching entries."""
        logger = Logger()
        logger.log(LogLevel.INFO, "one", source="stcf")
        logger.log(LogLevel.INFO, "two", source="fifo_io")
        assert [e.message for e in logger.filter(source="stcf")] == ["one"]

    def test_clear(self) -> None:
        """clear() empties the log."""
        logger = Logger()
        logger.log(LogLevel.INFO, "x", source="a")
        logger.clear()
        assert logger.entries == []


class TestDecisionRecords:
    """Verify structured decision entries."""

    def test_record_decision_fields(self) -> None:
        """A decision keeps the running and chosen PIDs."""
        logger = Logger()
        logger.record_decision(source="round_robin_io", tick=10, running_pid=2, chosen_pid=3)
        (entry,) = logger.entries
        assert entry.level is LogLevel.DEBUG
        assert entry.running_pid == 2
        expected_chosen = 3
        assert entry.chosen_pid == expected_chosen
        assert entry.is_decision is True
        assert str(entry) == "[DEBUG] round_robin_io@10: running=2 -> 3"

    def test_notes_are_not_decisions(self) -> None:
        """Plain log lines are excluded from decisions()."""
        logger = Logger()
        logger.log(LogLevel.INFO, "CPU idle", source="stcf", tick=4)
        logger.record_decision(source="stcf", tick=4, running_pid=1, chosen_pid=-1)
        assert [e.chosen_pid for e in logger.decisions()] == [-1]
        assert logger.entries[0].is_decision is False

    def test_timeline(self) -> None:
        """timeline() lists (tick, chosen PID) in order."""
        logger = Logger()
        for tick, pid in ((0, 1), (1, 1), (5, 2)):
            logger.record_decision(source="fifo_io", tick=tick, running_pid=1, chosen_pid=pid)
        logger.log(LogLevel.WARNING, "odd", source="host")
        assert logger.timeline() == [(0, 1), (1, 1), (5, 2)]
