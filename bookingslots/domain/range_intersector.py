"""
Intersection of time-of-day pair-sequences.

This is the building block for multi-attendee availability: two people are
both free exactly where their pair-sequences intersect.
"""

from typing import List, Sequence

from .models import TimeOfDay


class RangeIntersector:
    """
    Intersects sorted, non-overlapping pair-sequences.

    Algorithm (two-pointer sweep, O(|A| + |B|)):
    1. Point at the first pair of each sequence
    2. The overlap of the current pairs is [max(starts), min(ends)) if non-empty
    3. Advance whichever side ends first, since it cannot overlap anything later
    4. Stop when either side has no full pair left
    """

    @staticmethod
    def intersect(
        range_a: Sequence[TimeOfDay],
        range_b: Sequence[TimeOfDay],
    ) -> List[TimeOfDay]:
        """
        Intersect two pair-sequences.

        Args:
            range_a: Flat (start, end, start, end, ...) sequence
            range_b: Flat (start, end, start, end, ...) sequence

        Returns:
            A pair-sequence covering the times present in both inputs
        """
        result: List[TimeOfDay] = []
        i = 0
        j = 0

        while i + 1 < len(range_a) and j + 1 < len(range_b):
            start_a, end_a = range_a[i], range_a[i + 1]
            start_b, end_b = range_b[j], range_b[j + 1]

            max_start = start_a if start_a.to_minutes() > start_b.to_minutes() else start_b
            min_end = end_a if end_a.to_minutes() < end_b.to_minutes() else end_b

            if max_start.to_minutes() < min_end.to_minutes():
                result.extend((max_start, min_end))

            if end_a.to_minutes() < end_b.to_minutes():
                i += 2
            else:
                j += 2

        return result

    @classmethod
    def intersect_all(cls, ranges: Sequence[Sequence[TimeOfDay]]) -> List[TimeOfDay]:
        """
        Fold ``intersect`` over several pair-sequences, left to right.

        Returns an empty list when no ranges are given or nothing is shared.
        """
        if not ranges:
            return []

        result = list(ranges[0])
        for other in ranges[1:]:
            result = cls.intersect(result, other)

            # Early exit if no common time
            if not result:
                return []

        return result


def intersect_ranges(
    range_a: Sequence[TimeOfDay],
    range_b: Sequence[TimeOfDay],
) -> List[TimeOfDay]:
    """Module-level shortcut for ``RangeIntersector.intersect``."""
    return RangeIntersector.intersect(range_a, range_b)


def intersect_all(ranges: Sequence[Sequence[TimeOfDay]]) -> List[TimeOfDay]:
    return RangeIntersector.intersect_all(ranges)
