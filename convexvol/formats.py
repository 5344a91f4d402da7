"""Text formats: order polytopes of posets and whitespace-separated point sets."""

import math
import re

_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)")


def linear_extensions_to_order_polytope(text):
    """Convert a poset description into the H-representation of its order polytope.

    The input starts with ``n m`` (elements and relations) followed by
    relations written as ``[i,j]``; each relation gives ``x_i <= x_j``.
    Text after the last closing bracket is ignored.
    """
    head, sep, rest = text.partition(" ")
    if not sep:
        raise ValueError("missing poset header 'n m'")
    m_text, _, body = rest.partition("\n")
    try:
        n = int(head)
        m = int(m_text)
    except ValueError as exc:
        raise ValueError("poset header must hold two integers") from exc

    lines = [
        f"order_{n}.ine",
        "H-representation",
        "begin",
        f" {2 * n + m} {n + 1} integer",
    ]
    for i in range(n):
        lines.append(" 0 " + "".join("1 " if i == j else "0 " for j in range(n)))
    for i in range(n):
        lines.append(" 1 " + "".join("-1 " if i == j else "0 " for j in range(n)))

    for segment in body.split("]")[:-1]:
        point = "".join(segment.split()).replace("[", "")
        if point.startswith(","):
            point = point[1:]
        if not point:
            continue
        parts = point.split(",")
        if len(parts) < 2:
            raise ValueError(f"relation {point!r} needs two elements")
        try:
            lower, upper = int(parts[0]), int(parts[1])
        except ValueError as exc:
            raise ValueError(f"relation {point!r} is not a pair of integers") from exc

        entries = ["0"] * max(lower - 1, 0) + ["1"]
        while len(entries) + 1 < upper:
            entries.append("0")
        entries.append("-1")
        while len(entries) < n:
            entries.append("0")
        lines.append(" 0 " + "".join(e + " " for e in entries))

    lines.append("end")
    lines.append("input_incidence")
    return "\n".join(lines) + "\n"


def _atof(text):
    match = _LEADING_NUMBER.match(text)
    return float(match.group()) if match else 0.0


def _divide(num, den):
    if den:
        return num / den
    if num == 0 or math.isnan(num):
        return math.nan
    return math.copysign(math.inf, num) * math.copysign(1.0, den)


def _skip_blanks(line, start):
    while start < len(line) and line[start] in " \t":
        start += 1
    return start


def _skip_chars(line, start, allowed):
    while start < len(line) and line[start] in allowed:
        start += 1
    return start


def _parse_line(line):
    values = []
    pos = _skip_blanks(line, 0)
    while pos < len(line) and (line[pos].isdigit() or line[pos] == "-"):
        end = _skip_chars(line, pos, "0123456789-.")
        num = _atof(line[pos:end])
        pos = _skip_blanks(line, end)
        if pos < len(line) and line[pos] == "/":
            start = pos + 1
            end = _skip_chars(line, start, "0123456789-./")
            num = _divide(num, _atof(line[start:end]))
            pos = _skip_blanks(line, end)
        values.append(num)
    return values


def read_pointset(lines):
    """Read rows of numbers (fractions like ``1/3`` allowed) from lines of text.

    Lines whose first character is not a digit, ``-``, space or ``.`` are skipped.
    """
    rows = []
    for raw in lines:
        line = raw.rstrip("\n")
        if not line:
            continue
        first = line[0]
        if not first.isdigit() and first not in "- .":
            continue
        rows.append(_parse_line(line))
    return rows