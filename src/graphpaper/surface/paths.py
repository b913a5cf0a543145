"""Path string helpers.

Geometry engines emit absolute path commands (``M``, ``L``, ``A``,
``Z``) plus ``R``, a Catmull-Rom curve through a list of points. SVG
has no ``R`` command, so ``to_svg_path`` rewrites it into cubic Bézier
segments before a path is serialized.
"""

from __future__ import annotations

import re
from typing import Iterable, Sequence

Point = tuple[float, float]

_TOKEN_RE = re.compile(r"[MLRACZmlracz]|-?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def fmt(value: float) -> str:
    """Compact number formatting for path data and SVG attributes."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def polyline(points: Sequence[Point]) -> str:
    """``M`` to the first point, then ``L`` through the rest."""
    if not points:
        return ""
    head, *rest = points
    parts = [f"M{fmt(head[0])} {fmt(head[1])}"]
    parts.extend(f"L{fmt(x)} {fmt(y)}" for x, y in rest)
    return "".join(parts)


def curve_through(points: Sequence[Point]) -> str:
    """Smooth curve through *points* using the ``R`` command."""
    if not points:
        return ""
    head, *rest = points
    path = f"M{fmt(head[0])} {fmt(head[1])}"
    if rest:
        path += "R" + " ".join(f"{fmt(x)} {fmt(y)}" for x, y in rest)
    return path


def _groups(d: str) -> list[tuple[str, list[float]]]:
    groups: list[tuple[str, list[float]]] = []
    for token in _TOKEN_RE.findall(d):
        if token.isalpha():
            groups.append((token.upper(), []))
        elif groups:
            groups[-1][1].append(float(token))
    return groups


def _pairs(values: Iterable[float]) -> list[Point]:
    values = list(values)
    return [(values[i], values[i + 1]) for i in range(0, len(values) - 1, 2)]


def catmull_rom(points: Sequence[Point]) -> str:
    """Cubic Bézier segments (``C``) for a Catmull-Rom spline through *points*."""
    segments: list[str] = []
    last = len(points) - 1
    for i in range(last):
        p0 = points[i - 1] if i > 0 else points[i]
        p1 = points[i]
        p2 = points[i + 1]
        p3 = points[i + 2] if i + 2 <= last else p2
        c1 = (p1[0] + (p2[0] - p0[0]) / 6, p1[1] + (p2[1] - p0[1]) / 6)
        c2 = (p2[0] - (p3[0] - p1[0]) / 6, p2[1] - (p3[1] - p1[1]) / 6)
        segments.append(
            f"C{fmt(c1[0])} {fmt(c1[1])} {fmt(c2[0])} {fmt(c2[1])} {fmt(p2[0])} {fmt(p2[1])}"
        )
    return "".join(segments)


def to_svg_path(d: str) -> str:
    """Rewrite ``R`` commands as Bézier curves; other paths pass through."""
    if "R" not in d.upper():
        return d

    out: list[str] = []
    current: Point = (0.0, 0.0)
    for cmd, nums in _groups(d):
        if cmd == "Z":
            out.append("Z")
            continue
        pairs = _pairs(nums)
        if cmd == "R":
            out.append(catmull_rom([current, *pairs]))
        else:
            out.append(cmd + " ".join(fmt(n) for n in nums))
        if pairs:
            current = pairs[-1]
    return "".join(out)


def path_points(d: str) -> list[Point]:
    """End points and vertices named in *d* (arc radii and flags skipped)."""
    points: list[Point] = []
    for cmd, nums in _groups(d):
        if cmd == "A":
            for i in range(0, len(nums) - 6, 7):
                points.append((nums[i + 5], nums[i + 6]))
        elif cmd != "Z":
            points.extend(_pairs(nums))
    return points
