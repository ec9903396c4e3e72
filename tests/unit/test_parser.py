"""Unit tests for unitfile.parser — aggregation of lexer events into records."""
from __future__ import annotations

import io
import warnings

import pytest

from unitfile.ast.nodes import UnitEntry, UnitOption, UnitSection, flatten
from unitfile.errors import (
    LineTooLongError,
    MisparseError,
    OptionNameError,
    ParseError,
    SectionError,
    UnexpectedEOFError,
)
from unitfile.grammar.tokens import EventType, LexEvent
from unitfile.parser.parser import (
    Aggregator,
    Parser,
    deserialize,
    parse,
    parse_options,
    parse_sections,
)


class _BrokenStream:
    """Serves ``data`` once, then fails like a dropped network mount."""

    def __init__(self, data: bytes) -> None:
        self._data = data

    def read(self, n: int) -> bytes:
        if self._data:
            chunk, self._data = self._data, b""
            return chunk
        raise OSError("stale file handle")


# ---------------------------------------------------------------------------
# Input kinds
# ---------------------------------------------------------------------------


class TestSources:
    def test_binary_stream(self) -> None:
        assert parse_options(io.BytesIO(b"[Unit]\nA=b\n")) == [UnitOption("Unit", "A", "b")]

    def test_bytes(self) -> None:
        assert parse_options(b"[Unit]\nA=b\n") == [UnitOption("Unit", "A", "b")]

    def test_bytearray(self) -> None:
        assert parse_options(bytearray(b"[Unit]\nA=b\n")) == [UnitOption("Unit", "A", "b")]

    def test_str(self) -> None:
        assert parse_options("[Unit]\nA=b\n") == [UnitOption("Unit", "A", "b")]

    def test_empty_input(self) -> None:
        result = parse(b"")
        assert result.sections == []
        assert result.options == []


# ---------------------------------------------------------------------------
# Section view
# ---------------------------------------------------------------------------


class TestParseSections:
    def test_service_unit(self, service_unit: bytes) -> None:
        sections = parse_sections(service_unit)
        assert [s.section for s in sections] == ["Unit", "Service", "Install"]
        assert sections[0].values("After") == ["network.target", "time-sync.target"]
        assert sections[1].entries[0] == UnitEntry("ExecStart", "/usr/bin/example \\\n  --verbose")
        assert sections[2].entries == (UnitEntry("WantedBy", "multi-user.target"),)

    def test_duplicate_sections_kept_apart(self) -> None:
        data = (
            b"[Route]\nGateway=10.0.10.1\nDestination=10.0.1.1/24\n\n"
            b"[Route]\nGateway=10.0.10.2\nDestination=10.0.2.1/24\n"
        )
        sections = parse_sections(data)
        assert len(sections) == 2
        assert sections[0].values("Gateway") == ["10.0.10.1"]
        assert sections[1].values("Gateway") == ["10.0.10.2"]

    def test_empty_section_is_kept(self) -> None:
        assert parse_sections(b"[A]\n[B]\nx=1\n") == [
            UnitSection("A"),
            UnitSection("B", (UnitEntry("x", "1"),)),
        ]

    def test_duplicate_keys_are_not_merged(self) -> None:
        sections = parse_sections(b"[Unit]\nDescription=Foo\nDescription=Bar\n")
        assert sections == [
            UnitSection("Unit", (UnitEntry("Description", "Foo"), UnitEntry("Description", "Bar"))),
        ]

    def test_sections_are_immutable(self) -> None:
        section = parse_sections(b"[Unit]\nA=b\n")[0]
        with pytest.raises(AttributeError):
            section.section = "Other"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Option view
# ---------------------------------------------------------------------------


class TestParseOptions:
    def test_options_in_input_order(self) -> None:
        opts = parse_options(b"[A]\nx=1\n[B]\ny=2\n[A]\nz=3\n")
        assert opts == [
            UnitOption("A", "x", "1"),
            UnitOption("B", "y", "2"),
            UnitOption("A", "z", "3"),
        ]

    def test_flattened_sections_match_options(self, service_unit: bytes) -> None:
        result = parse(service_unit)
        assert flatten(result.sections) == result.options
        assert parse_options(service_unit) == result.options

    def test_separate_parses_share_nothing(self) -> None:
        first = parse_options(b"[A]\nx=1\n")
        second = parse_options(b"[B]\ny=2\n")
        assert first == [UnitOption("A", "x", "1")]
        assert second == [UnitOption("B", "y", "2")]


# ---------------------------------------------------------------------------
# Errors and partial results
# ---------------------------------------------------------------------------


class TestErrors:
    @pytest.mark.parametrize("data, cause_type", [
        (b"[Unit", SectionError),
        (b"[Unit] junk\n", SectionError),
        (b"[Unit]\nNoEquals\n", OptionNameError),
        (b"[Unit]\nNoEquals", UnexpectedEOFError),
        (b"[Unit]\nA=" + b"x" * 4000, LineTooLongError),
    ])
    def test_lexer_errors_are_wrapped(self, data: bytes, cause_type: type) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse(data)
        assert isinstance(exc_info.value.cause, cause_type)
        assert exc_info.value.__cause__ is exc_info.value.cause

    def test_partial_results_are_returned(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse(b"[A]\nx=1\n[B]\ny=2\nbroken\n")
        err = exc_info.value
        assert err.sections == [
            UnitSection("A", (UnitEntry("x", "1"),)),
            UnitSection("B", (UnitEntry("y", "2"),)),
        ]
        assert err.options == [UnitOption("A", "x", "1"), UnitOption("B", "y", "2")]

    def test_error_message_mentions_progress(self) -> None:
        with pytest.raises(ParseError, match=r"after 1 section\(s\), 0 option\(s\)"):
            parse(b"[A]\nbroken\n")

    def test_stream_errors_are_wrapped(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            Parser(_BrokenStream(b"[Unit]\nA=b\n")).parse()
        assert isinstance(exc_info.value.cause, OSError)
        assert exc_info.value.options == [UnitOption("Unit", "A", "b")]

    def test_custom_line_max(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            Parser(b"[Unit]\nA=" + b"x" * 100, line_max=32).parse()
        assert isinstance(exc_info.value.cause, LineTooLongError)

    def test_parse_error_is_hashable(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse(b"[Unit]\nbroken\n")
        err = exc_info.value
        assert {err: 1}[err] == 1
        assert err != ParseError(err.cause, err.sections, err.options)


# ---------------------------------------------------------------------------
# Aggregator
# ---------------------------------------------------------------------------


class TestAggregator:
    def test_option_before_section_is_misparse(self) -> None:
        events = [LexEvent(EventType.OPTION, "Unit", "A", "b")]
        with pytest.raises(ParseError) as exc_info:
            Aggregator().consume(events)
        assert isinstance(exc_info.value.cause, MisparseError)
        assert "option before section" in str(exc_info.value)

    def test_builds_both_views_in_one_pass(self) -> None:
        events = iter([
            LexEvent(EventType.SECTION_START, "Route"),
            LexEvent(EventType.OPTION, "Route", "Gateway", "10.0.0.1"),
            LexEvent(EventType.SECTION_START, "Route"),
            LexEvent(EventType.OPTION, "Route", "Gateway", "10.0.0.2"),
        ])
        result = Aggregator().consume(events)
        assert [len(s.entries) for s in result.sections] == [1, 1]
        assert [o.value for o in result.options] == ["10.0.0.1", "10.0.0.2"]


# ---------------------------------------------------------------------------
# Deprecated alias
# ---------------------------------------------------------------------------


class TestDeserialize:
    def test_deserialize_warns_and_parses(self) -> None:
        with pytest.warns(DeprecationWarning, match="parse_options"):
            opts = deserialize(b"[Unit]\nA=b\n")
        assert opts == [UnitOption("Unit", "A", "b")]

    def test_parse_options_does_not_warn(self) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            parse_options(b"[Unit]\nA=b\n")

    def test_warning_points_at_caller(self) -> None:
        with pytest.warns(DeprecationWarning) as record:
            deserialize(b"[Unit]\nA=b\n")
        assert record[0].filename == __file__
