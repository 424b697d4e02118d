"""Conda style versions and the constraint chosen for newly added packages."""

from __future__ import annotations

import re
from functools import total_ordering
from typing import Iterable

_SEPARATOR = re.compile(r"([.\-_])")
_SEGMENT = re.compile(r"[a-z0-9*]+")
_COMPONENT = re.compile(r"\d+|[a-z*]+")

_Segment = tuple[str, ...]
_Key = tuple[int, object]
_ZERO: _Key = (2, 0)


def _component_key(component: str) -> _Key:
    if component.isdigit():
        return (2, int(component))
    if component == "*":
        return (-1, "")
    if component == "dev":
        return (0, "")
    if component == "post":
        return (3, "")
    return (1, component)


def _segment_key(segment: _Segment) -> list[_Key]:
    keys = [_component_key(component) for component in segment]
    if keys and keys[0][0] != 2:
        keys.insert(0, _ZERO)
    return keys


def _compare_parts(left: list[list[_Key]], right: list[list[_Key]]) -> int:
    for position in range(max(len(left), len(right))):
        a = left[position] if position < len(left) else []
        b = right[position] if position < len(right) else []
        width = max(len(a), len(b))
        a = a + [_ZERO] * (width - len(a))
        b = b + [_ZERO] * (width - len(b))
        if a != b:
            return -1 if a < b else 1
    return 0


def _normalized(parts: list[list[_Key]]) -> tuple:
    trimmed = []
    for keys in parts:
        keys = list(keys)
        while keys and keys[-1] == _ZERO:
            keys.pop()
        trimmed.append(tuple(keys))
    while trimmed and not trimmed[-1]:
        trimmed.pop()
    return tuple(trimmed)


def _split(text: str, original: str) -> tuple[tuple[_Segment, ...], tuple[str, ...]]:
    parts = _SEPARATOR.split(text)
    segments = []
    for segment_text in parts[::2]:
        if not segment_text or not _SEGMENT.fullmatch(segment_text):
            raise ValueError(f"invalid version '{original}'")
        segments.append(tuple(_COMPONENT.findall(segment_text)))
    return tuple(segments), tuple(parts[1::2])


def _join(segments: tuple[_Segment, ...], separators: tuple[str, ...]) -> str:
    out = ["".join(segments[0])]
    for separator, segment in zip(separators, segments[1:]):
        out.append(separator)
        out.append("".join(segment))
    return "".join(out)


@total_ordering
class Version:
    """A conda version such as ``1.2.0``, ``1!2.0`` or ``1.0a1+local``."""

    __slots__ = ("epoch", "segments", "separators", "local", "local_separators")

    def __init__(self, text: str) -> None:
        original = text
        lowered = text.strip().lower()
        if not lowered:
            raise ValueError("empty version")
        epoch = None
        if "!" in lowered:
            epoch_text, _, lowered = lowered.partition("!")
            if not epoch_text.isdigit():
                raise ValueError(f"invalid epoch in version '{original}'")
            epoch = int(epoch_text)
        local: tuple[_Segment, ...] = ()
        local_separators: tuple[str, ...] = ()
        if "+" in lowered:
            lowered, _, local_text = lowered.partition("+")
            local, local_separators = _split(local_text, original)
        segments, separators = _split(lowered, original)
        self.epoch = epoch
        self.segments = segments
        self.separators = separators
        self.local = local
        self.local_separators = local_separators

    @classmethod
    def _from_parts(
        cls,
        epoch: int | None,
        segments: tuple[_Segment, ...],
        separators: tuple[str, ...],
        local: tuple[_Segment, ...],
        local_separators: tuple[str, ...],
    ) -> "Version":
        version = cls.__new__(cls)
        version.epoch = epoch
        version.segments = segments
        version.separators = separators
        version.local = local
        version.local_separators = local_separators
        return version

    def _keys(self) -> tuple[int, list[list[_Key]], list[list[_Key]]]:
        return (
            self.epoch or 0,
            [_segment_key(segment) for segment in self.segments],
            [_segment_key(segment) for segment in self.local],
        )

    def _compare(self, other: "Version") -> int:
        epoch_a, main_a, local_a = self._keys()
        epoch_b, main_b, local_b = other._keys()
        if epoch_a != epoch_b:
            return -1 if epoch_a < epoch_b else 1
        return _compare_parts(main_a, main_b) or _compare_parts(local_a, local_b)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._compare(other) == 0

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._compare(other) < 0

    def __hash__(self) -> int:
        epoch, main, local = self._keys()
        return hash((epoch, _normalized(main), _normalized(local)))

    def __str__(self) -> str:
        text = _join(self.segments, self.separators)
        if self.epoch is not None:
            text = f"{self.epoch}!{text}"
        if self.local:
            text = f"{text}+{_join(self.local, self.local_separators)}"
        return text

    def __repr__(self) -> str:
        return f"Version({str(self)!r})"

    def pop_segments(self, count: int = 1) -> "Version | None":
        """Drop the last ``count`` segments; None if nothing would remain."""
        if count >= len(self.segments):
            return None
        remaining = len(self.segments) - count
        return Version._from_parts(
            self.epoch,
            self.segments[:remaining],
            self.separators[: remaining - 1],
            self.local,
            self.local_separators,
        )

    def bump_last(self) -> "Version":
        """Increment the number in the last segment, e.g. ``1.2`` becomes ``1.3``."""
        last = list(self.segments[-1])
        numeric = [i for i, component in enumerate(last) if component.isdigit()]
        if not numeric:
            raise ValueError(f"cannot bump the last segment of version '{self}'")
        position = numeric[-1]
        last[position] = str(int(last[position]) + 1)
        return Version._from_parts(
            self.epoch,
            self.segments[:-1] + (tuple(last),),
            self.separators,
            self.local,
            self.local_separators,
        )


def determine_version_constraint(versions: Iterable[Version | str]) -> str | None:
    """Return a ``>=low,<high`` constraint that covers all given versions.

    The upper bound bumps the second to last segment of the highest version.
    None is returned when there are no versions or no bound can be made.
    """
    parsed = [v if isinstance(v, Version) else Version(v) for v in versions]
    if not parsed:
        return None
    lowest = min(parsed)
    highest = max(parsed)
    base = highest.pop_segments(1) or highest
    try:
        upper = base.bump_last()
    except ValueError:
        return None
    return f">={lowest},<{upper}"