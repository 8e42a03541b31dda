# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from nagprobe.nagios.models import ExecutionResult, NagiosResult, NagiosStatus
from nagprobe.nagios.output import TIMEOUT_MESSAGE, classify, classify_execution, parse_perf_data, split_output


def test_split_output_first_line_is_message():
    output = "All good | time=120ms;500;1000 load=3.2\n\n  \nsecond line | extra=1 | more=2\n"
    message, perf_data, log_lines = split_output(output)
    assert message == "All good"
    assert perf_data == ["time=120ms;500;1000 load=3.2", "extra=1", "more=2"]
    assert log_lines == ["All good", "second line"]


def test_split_output_empty():
    assert split_output("") == ("", [], [])


def test_parse_perf_data_documented_example():
    _, perf_data, _ = split_output("All good | time=120ms;500;1000 load=3.2")
    assert parse_perf_data(perf_data) == {"time": 120.0, "load": 3.2}


def test_parse_perf_data_skips_malformed_tokens():
    values = parse_perf_data(["bad=abc good=5s novalue also=1.2.3 pct=7% size=10KB;;;0;100"])
    assert values == {"good": 5.0, "pct": 7.0, "size": 10.0}
    assert "bad" not in values
    assert "also" not in values


def test_parse_perf_data_strips_sign_and_units():
    assert parse_perf_data(["temp=-4.5C;0;10"]) == {"temp": 4.5}


@pytest.mark.parametrize("code", [0, 1, 2, 3])
def test_classify_standard_codes(code):
    result = classify(code, "Disk fine | used=42%\nlong text")
    assert result.status == NagiosStatus(code)
    assert result.message == "Disk fine"
    assert result.perf_data == {"used": 42.0}


def test_classify_error_code_maps_to_error():
    assert classify(2, "CRITICAL - down").status == NagiosStatus.ERROR


def test_classify_killed_process_is_timeout_error():
    result = classify(-1, "partial | x=1")
    assert result.status == NagiosStatus.ERROR
    assert result.message == TIMEOUT_MESSAGE
    assert dict(result.perf_data) == {}


def test_classify_unexpected_code_is_unknown():
    result = classify(7, "whatever")
    assert result.status == NagiosStatus.UNKNOWN
    assert "7" in result.message


def test_classify_can_disable_perf_data():
    assert dict(classify(0, "ok | a=1", perf_data=False).perf_data) == {}


def test_classify_execution_decodes_bytes():
    result = classify_execution(ExecutionResult(exit_code=1, output="Wärning | t=1\n".encode()))
    assert result.status == NagiosStatus.WARNING
    assert result.message == "Wärning"


def test_result_is_immutable_and_verdict():
    result = NagiosResult(NagiosStatus.WARNING, "meh", {"a": 1.0})
    with pytest.raises(TypeError):
        result.perf_data["b"] = 2.0  # type: ignore[index]
    assert result.is_success() is True
    assert result.is_success(treat_warnings_as_failure=True) is False
    assert NagiosResult(NagiosStatus.OK, "").is_success(treat_warnings_as_failure=True) is True
    assert NagiosResult(NagiosStatus.ERROR, "").is_success() is False
    assert NagiosResult(NagiosStatus.UNKNOWN, "").is_success() is False
