"""Shared test fixtures for devlog tests."""

import io
from datetime import datetime, timezone

import pytest

from devlog import colors
from devlog.handler import ATTR_PREFIX, KVD, SPACES_PER_LEVEL


def parse_output(text: str) -> dict:
    """Read handler output back into nested dicts.

    The first line holds time (optional), level and message. Every other line
    is one attribute; a line without a value is a group header whose children
    follow with one more indentation unit.
    """
    lines = text.split("\n")
    if len(lines) < 2:
        return {}

    out: dict = {}
    parts = colors.strip(lines[0]).split(" ")
    if len(parts) == 2:
        out["level"], out["msg"] = parts
    elif len(parts) == 3:
        out["time"], out["level"], out["msg"] = parts
    else:
        raise AssertionError(f"unexpected first line: {lines[0]!r}")

    # (map, indentation of its direct children)
    stack: list[tuple[dict, int]] = [(out, 0)]
    for raw in lines[1:]:
        line = colors.strip(raw)
        if not line.strip().removeprefix(ATTR_PREFIX).strip():
            continue

        indent_plus_key, found, raw_value = line.partition(KVD)
        assert found, f"no key/value delimiter in {line!r}"
        indent, found, raw_key = indent_plus_key.partition(ATTR_PREFIX)
        assert found, f"no attribute prefix in {line!r}"

        depth = len(indent)
        key, value = raw_key.strip(), raw_value.strip()
        assert key, f"empty key in {line!r}"

        while depth < stack[-1][1] and len(stack) > 1:
            stack.pop()

        current = stack[-1][0]
        if value:
            current[key] = value
        else:
            child: dict = {}
            current[key] = child
            stack.append((child, depth + SPACES_PER_LEVEL))

    return out


@pytest.fixture
def parse():
    return parse_output


@pytest.fixture
def fixed_time():
    return datetime(2009, 11, 9, 23, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def buf():
    return io.StringIO()
