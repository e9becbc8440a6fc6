#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/difftrail/diff/sequence.py
"""Minimal edit scripts between two sequences.

This module implements the sequence differencer used by the highlight
renderer. It compares two ordered sequences (lines of a file, or the bytes of
a single line) under a caller-supplied equality predicate and returns the
shortest list of insertions and deletions that turns one into the other.

The search is Myers' O(ND) algorithm with the linear-space "middle snake"
refinement, so memory stays proportional to the input length even for large
files with many changes.

Examples
--------
Diff two byte strings:
    >>> diff_sequences(b"foobar", b"foobaz")
    [Change(before_pos=5, after_pos=5, delete_count=1, insert_count=1)]

Diff file contents line by line, ignoring realigned spaces:
    >>> diff_lines(b"a  = 1\\nb = 2\\n", b"a = 1\\nb = 3\\n")
    [Change(before_pos=1, after_pos=1, delete_count=1, insert_count=1)]

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence, TypeVar

T = TypeVar("T")

EqualityPredicate = Callable[[T, T], bool]

LINE_TERMINATOR = b"\n"


@dataclass(frozen=True, slots=True)
class Change:
    """A single edit in an edit script.

    Parameters
    ----------
    before_pos : int
        Index of the first removed element in the before-sequence
    after_pos : int
        Index of the first inserted element in the after-sequence
    delete_count : int
        Number of elements removed from the before-sequence
    insert_count : int
        Number of elements inserted into the after-sequence

    """

    before_pos: int
    after_pos: int
    delete_count: int
    insert_count: int

    @property
    def before_end(self) -> int:
        """Index just past the last removed element."""
        return self.before_pos + self.delete_count

    @property
    def after_end(self) -> int:
        """Index just past the last inserted element."""
        return self.after_pos + self.insert_count

    @property
    def is_insertion(self) -> bool:
        return self.delete_count == 0 and self.insert_count > 0

    @property
    def is_deletion(self) -> bool:
        return self.insert_count == 0 and self.delete_count > 0

    @property
    def is_replacement(self) -> bool:
        return self.delete_count > 0 and self.insert_count > 0


def _identity_equal(a: object, b: object) -> bool:
    return a == b


class _MyersDiffer:
    """Mark the elements removed from ``before`` and added in ``after``.

    The result of a run is two boolean lists, ``deleted`` and ``inserted``,
    which :func:`diff_sequences` folds into :class:`Change` records.
    """

    def __init__(self, before: Sequence, after: Sequence, equal: EqualityPredicate) -> None:
        self.before = before
        self.after = after
        self.equal = equal
        self.deleted = [False] * len(before)
        self.inserted = [False] * len(after)

    def run(self) -> None:
        # Sub-problems are kept on an explicit stack, not the call stack
        stack = [(0, len(self.before), 0, len(self.after))]
        while stack:
            a0, a1, b0, b1 = stack.pop()

            # Strip the common prefix and suffix
            while a0 < a1 and b0 < b1 and self.equal(self.before[a0], self.after[b0]):
                a0 += 1
                b0 += 1
            while a0 < a1 and b0 < b1 and self.equal(self.before[a1 - 1], self.after[b1 - 1]):
                a1 -= 1
                b1 -= 1

            if a0 == a1:
                for j in range(b0, b1):
                    self.inserted[j] = True
                continue
            if b0 == b1:
                for i in range(a0, a1):
                    self.deleted[i] = True
                continue

            x, y, u, v = self._middle_snake(a0, a1, b0, b1)
            # Push the tail first so the head is processed first
            stack.append((u, a1, v, b1))
            stack.append((a0, x, b0, y))

    def _middle_snake(self, a0: int, a1: int, b0: int, b1: int) -> tuple[int, int, int, int]:
        """Find the middle snake of the optimal path through the given box.

        Returns the absolute start ``(x, y)`` and end ``(u, v)`` of a run of
        equal elements that lies on a shortest edit path, splitting the box
        into two sub-problems whose edit distances sum to the distance of
        the whole box.
        """
        before, after, equal = self.before, self.after, self.equal
        n = a1 - a0
        m = b1 - b0
        delta = n - m
        odd = delta % 2 != 0
        max_d = (n + m + 1) // 2
        offset = max_d + 1
        forward = [0] * (2 * max_d + 3)
        backward = [0] * (2 * max_d + 3)

        for d in range(max_d + 1):
            for k in range(-d, d + 1, 2):
                if k == -d or (k != d and forward[offset + k - 1] < forward[offset + k + 1]):
                    x = forward[offset + k + 1]
                else:
                    x = forward[offset + k - 1] + 1
                y = x - k
                start_x, start_y = x, y
                while x < n and y < m and equal(before[a0 + x], after[b0 + y]):
                    x += 1
                    y += 1
                forward[offset + k] = x

                reverse_k = delta - k
                if odd and -(d - 1) <= reverse_k <= d - 1 and x + backward[offset + reverse_k] >= n:
                    return a0 + start_x, b0 + start_y, a0 + x, b0 + y

            for k in range(-d, d + 1, 2):
                if k == -d or (k != d and backward[offset + k - 1] < backward[offset + k + 1]):
                    x = backward[offset + k + 1]
                else:
                    x = backward[offset + k - 1] + 1
                y = x - k
                start_x, start_y = x, y
                while x < n and y < m and equal(before[a1 - 1 - x], after[b1 - 1 - y]):
                    x += 1
                    y += 1
                backward[offset + k] = x

                forward_k = delta - k
                if not odd and -d <= forward_k <= d and forward[offset + forward_k] + x >= n:
                    # Convert the reversed snake back to forward coordinates
                    return a1 - x, b1 - y, a1 - start_x, b1 - start_y

        raise AssertionError("middle snake not found")  # pragma: no cover


def diff_sequences(
    before: Sequence[T],
    after: Sequence[T],
    equal: EqualityPredicate | None = None,
) -> list[Change]:
    """Compute a minimal edit script turning ``before`` into ``after``.

    Parameters
    ----------
    before : Sequence
        Original sequence (bytes, list of lines, ...)
    after : Sequence
        Updated sequence
    equal : callable, optional
        Predicate deciding whether an element of ``before`` and an element of
        ``after`` are unchanged. Must be pure and symmetric. Defaults to ``==``.

    Returns
    -------
    list[Change]
        Changes sorted by position. Elements outside every change are equal
        under ``equal`` and appear in the same order in both sequences.

    """
    differ = _MyersDiffer(before, after, equal or _identity_equal)
    differ.run()

    deleted, inserted = differ.deleted, differ.inserted
    n, m = len(before), len(after)
    changes: list[Change] = []
    i = j = 0
    while i < n or j < m:
        if i < n and j < m and not deleted[i] and not inserted[j]:
            i += 1
            j += 1
            continue
        start_i, start_j = i, j
        while i < n and deleted[i]:
            i += 1
        while j < m and inserted[j]:
            j += 1
        changes.append(Change(start_i, start_j, i - start_i, j - start_j))
    return changes


def merge_granular(changes: Sequence[Change], granularity: int) -> list[Change]:
    """Coalesce changes separated by fewer than ``granularity`` equal elements.

    A minimal script over natural text often alternates one-element changes
    with one-element matches around a single edited word. Merging those
    neighbours yields one contiguous span per edit.

    Parameters
    ----------
    changes : Sequence[Change]
        Edit script as returned by :func:`diff_sequences`
    granularity : int
        Minimum length of an unchanged run that keeps two changes apart

    Returns
    -------
    list[Change]
        Merged edit script; never longer than ``changes``

    """
    merged: list[Change] = []
    for change in changes:
        if merged:
            prev = merged[-1]
            if change.after_pos - prev.after_end < granularity:
                merged[-1] = Change(
                    prev.before_pos,
                    prev.after_pos,
                    change.before_end - prev.before_pos,
                    change.after_end - prev.after_pos,
                )
                continue
        merged.append(change)
    return merged


def split_lines(content: bytes) -> list[bytes]:
    """Split content into lines, keeping a trailing empty line if present.

    ``LINE_TERMINATOR.join(split_lines(content)) == content`` always holds.
    """
    return content.split(LINE_TERMINATOR)


def strip_spaces(line: bytes) -> bytes:
    """Remove every space character (tabs and other whitespace are kept)."""
    return line.replace(b" ", b"")


def space_insensitive_equal(a: bytes, b: bytes) -> bool:
    """Return True if two lines differ only in the number or placement of spaces."""
    return a == b or strip_spaces(a) == strip_spaces(b)


def diff_lines(before: bytes, after: bytes) -> list[Change]:
    """Diff two contents line by line using space-insensitive equality."""
    return diff_sequences(split_lines(before), split_lines(after), space_insensitive_equal)
