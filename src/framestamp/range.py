"""Range class for spans of frames between two FrameStamps."""

from __future__ import annotations

import enum
import sys

from .errors import MixedOutTypeArithmeticError
from .framerate import FrameRate
from .framestamp import FrameStamp, Inherit, _resolve_rate
from .helpers import Round

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


#%%
class OutType(str, enum.Enum):
    """Whether the out point of a Range is the last frame or the one after it."""

    INCLUSIVE = "inclusive"
    EXCLUSIVE = "exclusive"
####


def _resolve_out_type(
    func_name: str,
    left: OutType,
    right: OutType,
    inherit_out_type: Inherit | str | None,
) -> OutType:
    if left is right:
        return left
    if inherit_out_type is None:
        raise MixedOutTypeArithmeticError(func_name, left, right)
    return left if Inherit(inherit_out_type) is Inherit.LEFT else right


#%%
class Range:
    """A span of frames, such as the in and out points of a clip.

    Args:
        stamp_in (FrameStamp): The first frame of the range.
        stamp_out (FrameStamp | int | str | FeetAndFrames): The out point. A
            value that is not a FrameStamp is parsed at the rate of
            ``stamp_in``.
        out_type (OutType | str): ``OutType.EXCLUSIVE`` (the default) if
            ``stamp_out`` is the frame after the range,
            ``OutType.INCLUSIVE`` if it is the last frame of the range.

    Raises:
        ValueError: If the rates differ or the out point is before the in
            point.
    """

    __slots__ = ("_stamp_in", "_stamp_out", "_out_type")

    def __init__(
        self,
        stamp_in: FrameStamp,
        stamp_out,
        out_type: OutType | str = OutType.EXCLUSIVE,
    ) -> None:
        if not isinstance(stamp_in, FrameStamp):
            raise TypeError(
                f"{__class__.__name__}.stamp_in should be a FrameStamp, not a "
                f"{stamp_in.__class__.__name__}"
            )
        if not isinstance(stamp_out, FrameStamp):
            stamp_out = FrameStamp.with_frames(stamp_out, stamp_in.rate)

        out_type = OutType(out_type)

        if stamp_in.rate != stamp_out.rate:
            raise ValueError("`stamp_in` and `stamp_out` must have same rate")

        exclusive_out = stamp_out
        if out_type is OutType.INCLUSIVE:
            exclusive_out = stamp_out.add(1)
        if exclusive_out < stamp_in:
            raise ValueError("`stamp_out` must be greater than or equal to `stamp_in`")

        self._stamp_in = stamp_in
        self._stamp_out = stamp_out
        self._out_type = out_type

    ####

    @classmethod
    def with_duration(
        cls,
        stamp_in: FrameStamp,
        duration,
        out_type: OutType | str = OutType.EXCLUSIVE,
    ) -> Self:
        """Create a Range from an in point and a length.

        Args:
            stamp_in (FrameStamp): The first frame of the range.
            duration (FrameStamp | int | str | FeetAndFrames): The length of
                the range. Values that are not FrameStamps are parsed at the
                rate of ``stamp_in``.
            out_type (OutType | str): The out type of the new Range.

        Raises:
            ValueError: If the duration is negative or has another rate.

        Returns:
            Range: The new Range.
        """
        if not isinstance(duration, FrameStamp):
            duration = FrameStamp.with_frames(duration, stamp_in.rate)

        if duration.rate != stamp_in.rate:
            raise ValueError("`stamp_in` and `duration` must have same rate")
        if duration.seconds < 0:
            raise ValueError("`duration` must be greater than `0`")

        stamp_out = stamp_in.add(duration)
        new_range = cls(stamp_in, stamp_out, OutType.EXCLUSIVE)
        if OutType(out_type) is OutType.INCLUSIVE:
            return new_range.with_inclusive_out()
        return new_range

    @property
    def stamp_in(self) -> FrameStamp:
        return self._stamp_in

    @property
    def stamp_out(self) -> FrameStamp:
        return self._stamp_out

    @property
    def out_type(self) -> OutType:
        return self._out_type

    @property
    def rate(self) -> FrameRate:
        return self._stamp_in.rate

    def with_inclusive_out(self) -> Range:
        """Return the same span with the out point on its last frame."""
        if self._out_type is OutType.INCLUSIVE:
            return self
        return Range(self._stamp_in, self._stamp_out.sub(1), OutType.INCLUSIVE)

    def with_exclusive_out(self) -> Range:
        """Return the same span with the out point on the frame after it."""
        if self._out_type is OutType.EXCLUSIVE:
            return self
        return Range(self._stamp_in, self._stamp_out.add(1), OutType.EXCLUSIVE)

    def duration(self) -> FrameStamp:
        """Return the length of the range.

        Returns:
            FrameStamp: The duration, at the rate of the range.
        """
        return self.with_exclusive_out()._stamp_out.sub(self._stamp_in)

    def contains(self, stamp) -> bool:
        """Return True if ``stamp`` is one of the frames of the range.

        Args:
            stamp (FrameStamp | int | str | FeetAndFrames): The point to test.
                Values that are not FrameStamps are parsed at the rate of the
                range.
        """
        if not isinstance(stamp, FrameStamp):
            stamp = FrameStamp.with_frames(stamp, self.rate)
        stamp_out = self.with_exclusive_out()._stamp_out
        return self._stamp_in.seconds <= stamp.seconds < stamp_out.seconds

    def overlaps(self, other: Range) -> bool:
        """Return True if the two ranges share at least part of a frame."""
        left = self.with_exclusive_out()
        right = other.with_exclusive_out()
        if left._stamp_in.seconds >= right._stamp_out.seconds:
            return False
        return left._stamp_out.seconds > right._stamp_in.seconds

    def _overlap_bounds(
        self,
        func_name: str,
        other: Range,
        inherit_rate: Inherit | str | None,
        inherit_out_type: Inherit | str | None,
    ) -> tuple[FrameRate, OutType, FrameStamp, FrameStamp]:
        """Return the rate, out type and exclusive bounds for combining ranges.

        The bounds are the latest in point and the earliest out point,
        re-snapped to the resolved rate. For overlapping ranges that is the
        intersection, otherwise it is the gap between them, reversed.
        """
        out_type = _resolve_out_type(
            func_name, self._out_type, other._out_type, inherit_out_type
        )
        rate = _resolve_rate(func_name, self.rate, other.rate, inherit_rate)

        left = self.with_exclusive_out()
        right = other.with_exclusive_out()

        latest_in = max(left._stamp_in.seconds, right._stamp_in.seconds)
        earliest_out = min(left._stamp_out.seconds, right._stamp_out.seconds)
        latest_in = FrameStamp.with_seconds(latest_in, rate)
        earliest_out = FrameStamp.with_seconds(earliest_out, rate)

        return rate, out_type, latest_in, earliest_out

    def _from_bounds(self, first: FrameStamp, second: FrameStamp, out_type: OutType) -> Range:
        stamp_in, stamp_out = sorted((first, second), key=lambda stamp: stamp.seconds)
        new_range = Range(stamp_in, stamp_out, OutType.EXCLUSIVE)
        if out_type is OutType.INCLUSIVE:
            return new_range.with_inclusive_out()
        return new_range

    @staticmethod
    def _zero(rate: FrameRate, out_type: OutType) -> Range:
        zero = FrameStamp(0, rate)
        return Range.with_duration(zero, zero, out_type)

    def intersection(
        self,
        other: Range,
        inherit_rate: Inherit | str | None = None,
        inherit_out_type: Inherit | str | None = None,
    ) -> Range | None:
        """Return the frames both ranges have in common.

        Args:
            other (Range): The range to intersect with.
            inherit_rate (Inherit | str | None): Which rate the result has
                when the two rates differ.
            inherit_out_type (Inherit | str | None): Which out type the result
                has when the two out types differ.

        Raises:
            MixedRateArithmeticError: If the rates differ and no
                ``inherit_rate`` is given.
            MixedOutTypeArithmeticError: If the out types differ and no
                ``inherit_out_type`` is given.

        Returns:
            Range | None: The overlap, or None if the ranges do not overlap.
        """
        _, out_type, latest_in, earliest_out = self._overlap_bounds(
            "intersection", other, inherit_rate, inherit_out_type
        )
        if not self.overlaps(other):
            return None
        return self._from_bounds(latest_in, earliest_out, out_type)

    def intersection_or_zero(
        self,
        other: Range,
        inherit_rate: Inherit | str | None = None,
        inherit_out_type: Inherit | str | None = None,
    ) -> Range:
        """Like :meth:`intersection`, with a zero-length range at 00:00:00:00
        instead of None.
        """
        rate, out_type, latest_in, earliest_out = self._overlap_bounds(
            "intersection", other, inherit_rate, inherit_out_type
        )
        if not self.overlaps(other):
            return self._zero(rate, out_type)
        return self._from_bounds(latest_in, earliest_out, out_type)

    def separation(
        self,
        other: Range,
        inherit_rate: Inherit | str | None = None,
        inherit_out_type: Inherit | str | None = None,
    ) -> Range | None:
        """Return the gap between two ranges that do not overlap.

        Takes the same options and raises the same errors as
        :meth:`intersection`.

        Returns:
            Range | None: The frames between the ranges, or None if they
                overlap.
        """
        _, out_type, latest_in, earliest_out = self._overlap_bounds(
            "separation", other, inherit_rate, inherit_out_type
        )
        if self.overlaps(other):
            return None
        return self._from_bounds(latest_in, earliest_out, out_type)

    def separation_or_zero(
        self,
        other: Range,
        inherit_rate: Inherit | str | None = None,
        inherit_out_type: Inherit | str | None = None,
    ) -> Range:
        rate, out_type, latest_in, earliest_out = self._overlap_bounds(
            "separation", other, inherit_rate, inherit_out_type
        )
        if self.overlaps(other):
            return self._zero(rate, out_type)
        return self._from_bounds(latest_in, earliest_out, out_type)

    def shift(
        self,
        delta,
        inherit_rate: Inherit | str | None = None,
        round: Round | str = Round.CLOSEST,
    ) -> Range:
        """Move both ends of the range by ``delta``.

        Args:
            delta (FrameStamp | int | str | FeetAndFrames): The offset.
            inherit_rate (Inherit | str | None): Which rate the result has
                when ``delta`` has another rate.
            round (Round | str): How to round the new ends to whole frames.

        Returns:
            Range: The moved range, with the same out type.
        """
        stamp_in = self._stamp_in.add(delta, inherit_rate=inherit_rate, round=round)
        stamp_out = self._stamp_out.add(delta, inherit_rate=inherit_rate, round=round)
        return Range(stamp_in, stamp_out, self._out_type)

    def smpte_timecode_wrap_tod(self) -> Range:
        """Wrap the in point to a time of day, keeping the duration.

        Raises:
            InvalidSMPTERateError: If time-of-day timecode is not defined for
                the rate.
        """
        stamp_in = self._stamp_in.smpte_wrap_tod()
        return Range.with_duration(stamp_in, self.duration(), self._out_type)

    def __contains__(self, stamp) -> bool:
        return self.contains(stamp)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        return (
            self._out_type is other._out_type
            and self.rate == other.rate
            and self._stamp_in.seconds == other._stamp_in.seconds
            and self._stamp_out.seconds == other._stamp_out.seconds
        )

    def __hash__(self) -> int:
        return hash((self._stamp_in.seconds, self._stamp_out.seconds, self._out_type, self.rate))

    def __str__(self) -> str:
        """Return a description like '<01:00:00:00 - 02:00:00:00 :exclusive <23.98 NTSC>>'."""
        return (
            f"<{self._stamp_in.smpte_timecode()} - {self._stamp_out.smpte_timecode()}"
            f" :{self._out_type.value} {self.rate}>"
        )

    def __repr__(self) -> str:
        return (
            f"{__class__.__name__}({self._stamp_in!r}, {self._stamp_out!r},"
            f" OutType.{self._out_type.name})"
        )
####
