import math

import pytest

from drawing_ir.model import PathCommand, PathDataError
from drawing_ir.parser import parse_operands, parse_path_data
from drawing_ir.printer import format_path_number, serialize_path_data


def _assert_commands_close(actual, expected, tol=1e-3):
    assert [c.command for c in actual] == [c.command for c in expected]
    for a, e in zip(actual, expected):
        assert len(a.values) == len(e.values)
        for av, ev in zip(a.values, e.values):
            assert math.isclose(av, ev, abs_tol=tol)


def test_parse_absolute_commands():
    commands = parse_path_data("M 10 20 L 30 40")

    assert commands == [PathCommand('M', [10.0, 20.0]), PathCommand('L', [30.0, 40.0])]


def test_parse_accepts_exponents_and_compact_signs():
    commands = parse_path_data("M1e2,-2.5E-1 l.5-.5")

    assert commands == [PathCommand('M', [100.0, -0.25]), PathCommand('l', [0.5, -0.5])]


def test_parse_keeps_case_of_relative_commands():
    commands = parse_path_data("m0 0l1 1z")

    assert [c.command for c in commands] == ['m', 'l', 'z']
    assert commands[-1].values == []


def test_non_numeric_operand_drops_only_that_command(caplog):
    with caplog.at_level("WARNING"):
        commands = parse_path_data("M0 0 L10 # 5 L20 0")

    assert commands == [PathCommand('M', [0.0, 0.0]), PathCommand('L', [20.0, 0.0])]
    assert "Skipping 'L' command" in caplog.text


def test_incomplete_tuple_is_trimmed():
    commands = parse_path_data("M0 0 L10 10 20")

    assert commands[1] == PathCommand('L', [10.0, 10.0])


def test_command_without_complete_tuple_is_dropped():
    commands = parse_path_data("M0 0 L10 C1 2 3")

    assert commands == [PathCommand('M', [0.0, 0.0])]


def test_text_before_first_command_is_ignored(caplog):
    with caplog.at_level("WARNING"):
        commands = parse_path_data("  # M0 0 L1 1")

    assert [c.command for c in commands] == ['M', 'L']
    assert "before the first path command" in caplog.text


def test_parse_operands_rejects_garbage():
    with pytest.raises(PathDataError) as exc:
        parse_operands("1 2 foo")
    assert "foo" in str(exc.value)


def test_parse_non_string_returns_empty():
    assert parse_path_data(None) == []


@pytest.mark.parametrize(
    "value, expected",
    [
        (10.0, "10"),
        (0.5, "0.5"),
        (-3.25, "-3.25"),
        (1.23456, "1.2346"),
        (0.0, "0"),
        (-0.0, "0"),
        (1e6, "1000000"),
        (2e7, "2.000e+07"),
        (1.5e-5, "1.500e-05"),
        (-1e-4, "-0.0001"),
    ],
)
def test_format_path_number(value, expected):
    assert format_path_number(value) == expected


def test_serialize_joins_commands_without_separator():
    commands = [PathCommand('M', [0, 0]), PathCommand('L', [10, 0.5]), PathCommand('Z', [])]

    assert serialize_path_data(commands) == "M0 0L10 0.5Z"


@pytest.mark.parametrize(
    "d",
    [
        "M 0 0 L 40 0 L 40 20 L 0 20 Z",
        "M1.23456789 2 C 3.3333333 4 5 6 7 8",
        "m5 5 h10 v10 l-10 0 z",
        "M3 5 A 7 7 0 1 0 17 5 A 7 7 0 1 0 3 5",
        "M0.00001 -0.00002 L 2500000 -1e-9",
        "M10,20 Q 15,25 20,20 T 30 20 S 40 30 50 20",
    ],
)
def test_serialize_round_trip(d):
    parsed = parse_path_data(d)
    reparsed = parse_path_data(serialize_path_data(parsed))

    _assert_commands_close(reparsed, parsed)
