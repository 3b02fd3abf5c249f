"""Turn ``go test -json`` event streams into GitHub Actions log groups and error annotations."""

from __future__ import annotations

import argparse
import json
import posixpath
import sys
from dataclasses import dataclass
from typing import Any, Iterator, TextIO

_FAIL_MARK = "\u274c "


@dataclass
class TestEvent:
    """One event emitted by the test runner's JSON output."""

    __test__ = False

    time: str = ""
    action: str = ""
    package: str = ""
    test: str = ""
    elapsed: float = 0.0
    output: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TestEvent":
        return cls(
            time=data.get("Time") or "",
            action=data.get("Action") or "",
            package=data.get("Package") or "",
            test=data.get("Test") or "",
            elapsed=float(data.get("Elapsed") or 0.0),
            output=data.get("Output") or "",
        )


@dataclass
class TestResult:
    """Everything collected about a single test."""

    __test__ = False

    package: str = ""
    name: str = ""
    elapsed: float = 0.0
    failed: bool = False
    output: str = ""

    def handle(self, event: TestEvent) -> None:
        self.output += event.output
        self.package = event.package
        self.name = event.test
        self.elapsed = event.elapsed
        if event.action == "fail":
            self.failed = True


def _join(*parts: str) -> str:
    joined = "/".join(p for p in parts if p)
    return posixpath.normpath(joined) if joined else ""


def _fraction(value: int, precision: int) -> str:
    whole, frac = divmod(value, 10**precision)
    if not frac:
        return str(whole)
    return f"{whole}." + f"{frac:0{precision}d}".rstrip("0")


def _format_duration(seconds: float) -> str:
    """Format a duration in the ``1h2m3.5s`` / ``150ms`` style."""
    nanos = int(seconds * 1e9)
    if nanos == 0:
        return "0s"
    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)
    if nanos < 1_000:
        return f"{sign}{nanos}ns"
    if nanos < 1_000_000:
        return f"{sign}{_fraction(nanos, 3)}\u00b5s"
    if nanos < 1_000_000_000:
        return f"{sign}{_fraction(nanos, 6)}ms"

    total_seconds, frac = divmod(nanos, 10**9)
    text = _fraction((total_seconds % 60) * 10**9 + frac, 9) + "s"
    minutes = total_seconds // 60
    if minutes:
        text = f"{minutes % 60}m" + text
        hours = minutes // 60
        if hours:
            text = f"{hours}h" + text
    return sign + text


def _decode_events(text: str) -> Iterator[TestEvent]:
    decoder = json.JSONDecoder()
    pos = 0
    while True:
        while pos < len(text) and text[pos].isspace():
            pos += 1
        if pos >= len(text):
            return
        data, pos = decoder.raw_decode(text, pos)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        yield TestEvent.from_dict(data)


def _scan_lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def get_test_output_loc(line: str) -> tuple[str, str] | None:
    """The ``(file, line)`` of a ``file:line: message`` output line, or None."""
    file, sep, rest = line.partition(":")
    if not sep:
        return None
    number, sep, _ = rest.partition(":")
    if not sep:
        return None
    return file.strip(), number


def write_result(result: TestResult, out: TextIO, module_name: str) -> None:
    """Write one test's output as a log group, with an error annotation if it failed."""
    if not result.name:
        return

    package = result.package.removeprefix(module_name).removeprefix("/")
    group = package
    if group:
        group += "."
    group += result.name
    prefix = _FAIL_MARK if result.failed else ""

    out.write(f"::group::{prefix}{group} {_format_duration(result.elapsed)}\n")
    try:
        if not result.failed:
            out.write(result.output)
            return

        file = line = ""
        message = ""
        for text in _scan_lines(result.output):
            loc = get_test_output_loc(text)
            if loc is not None:
                file, line = loc
            message += text + "%0A"

        out.write(f"::error file={_join(package, file)},line={line}::{message}\n")
    finally:
        out.write("::endgroup::\n")


def process(stream: TextIO, out: TextIO, module_name: str) -> bool:
    """Read test events from ``stream`` and write grouped results; True if any test failed."""
    results: dict[tuple[str, str], TestResult] = {}
    for event in _decode_events(stream.read()):
        if not event.test:
            continue
        results.setdefault((event.package, event.test), TestResult()).handle(event)

    any_fail = False
    for result in results.values():
        any_fail = any_fail or result.failed
        write_result(result, out, module_name)
        out.flush()
    return any_fail


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Convert test JSON events on stdin into GitHub Actions output."
    )
    parser.add_argument(
        "--module", default="", help="module path stripped from package names"
    )
    args = parser.parse_args(argv)

    try:
        any_fail = process(sys.stdin, sys.stdout, args.module)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 2 if any_fail else 0


if __name__ == "__main__":
    raise SystemExit(main())