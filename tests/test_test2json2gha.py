import io
import json
import sys

import pytest

from dalec import test2json2gha as t2j

MODULE = "example.com/mod"


def _events(*events):
    return "\n".join(json.dumps(e) for e in events) + "\n"


def _run(text, module=MODULE):
    out = io.StringIO()
    failed = t2j.process(io.StringIO(text), out, module)
    return failed, out.getvalue()


def test_get_test_output_loc():
    assert t2j.get_test_output_loc("    foo_test.go:12: boom") == ("foo_test.go", "12")


def test_get_test_output_loc_needs_two_colons():
    assert t2j.get_test_output_loc("no colon here") is None
    assert t2j.get_test_output_loc("only:one") is None


def test_passing_test_group():
    text = _events(
        {"Action": "run", "Package": MODULE + "/pkg", "Test": "TestFoo"},
        {"Action": "output", "Package": MODULE + "/pkg", "Test": "TestFoo", "Output": "hello\n"},
        {"Action": "pass", "Package": MODULE + "/pkg", "Test": "TestFoo", "Elapsed": 1.5},
    )
    failed, output = _run(text)
    assert failed is False
    assert output == "::group::pkg.TestFoo 1.5s\nhello\n::endgroup::\n"


def test_failing_test_annotation():
    pkg = MODULE + "/pkg"
    text = _events(
        {"Action": "output", "Package": pkg, "Test": "TestBar", "Output": "    bar_test.go:12: boom\n"},
        {"Action": "fail", "Package": pkg, "Test": "TestBar", "Elapsed": 0},
    )
    failed, output = _run(text)
    assert failed is True
    assert output.startswith("::group::\u274c pkg.TestBar 0s\n")
    assert "::error file=pkg/bar_test.go,line=12::    bar_test.go:12: boom%0A\n" in output
    assert output.endswith("::endgroup::\n")


def test_package_events_are_ignored():
    text = _events({"Action": "output", "Package": MODULE, "Output": "ok\n"})
    assert _run(text) == (False, "")


def test_concatenated_events_decode():
    pkg = MODULE + "/a"
    text = json.dumps({"Action": "run", "Package": pkg, "Test": "T1"}) + json.dumps(
        {"Action": "pass", "Package": pkg, "Test": "T2"}
    )
    _, output = _run(text)
    assert output.count("::group::") == 2
    assert output.count("::endgroup::") == 2


def test_invalid_json_raises():
    with pytest.raises(ValueError):
        _run("{not json")


def test_write_result_without_name_writes_nothing():
    out = io.StringIO()
    t2j.write_result(t2j.TestResult(package="p", output="x"), out, "")
    assert out.getvalue() == ""


def test_main_exit_code_on_failure(monkeypatch):
    text = _events({"Action": "fail", "Package": "p", "Test": "TestX"})
    out = io.StringIO()
    monkeypatch.setattr(sys, "stdin", io.StringIO(text))
    monkeypatch.setattr(sys, "stdout", out)
    assert t2j.main([]) == 2
    assert "TestX" in out.getvalue()


def test_main_exit_code_on_bad_input(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO("[1, "))
    monkeypatch.setattr(sys, "stdout", io.StringIO())
    monkeypatch.setattr(sys, "stderr", io.StringIO())
    assert t2j.main([]) == 1