"""FrameStamp class for frame-accurate time calculations."""

from __future__ import annotations

import enum
import logging
import operator
import sys
from decimal import Decimal
from fractions import Fraction
from typing import Callable

from . import drop_frame
from .errors import (
    FrameStampParseError,
    InvalidSMPTERateError,
    MixedRateArithmeticError,
)
from .film_format import FilmFormat
from .framerate import FrameRate
from .helpers import (
    Round,
    _Rational,
    divrem,
    ensure_round_enabled,
    round_rational,
    to_fraction,
)
from .sources import (
    FeetAndFrames,
    PremiereTicks,
    RuntimeStr,
    Sections,
    SMPTETimecodeStr,
    frames_from,
    seconds_from,
)

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

logger = logging.getLogger(__name__)

_FRAME_SOURCES = (int, str, FeetAndFrames)
_NOT_OPERANDS = (bool, PremiereTicks, RuntimeStr)
_SCALARS = (int, Fraction, float, Decimal)


#%%
class Inherit(str, enum.Enum):
    """Which operand's rate (or out type) the result of a binary operation keeps."""

    LEFT = "left"
    RIGHT = "right"
####


def _resolve_rate(
    func_name: str,
    left: FrameRate,
    right: FrameRate,
    inherit_rate: Inherit | str | None,
) -> FrameRate:
    """Pick the rate for the result of a binary operation.

    Raises:
        MixedRateArithmeticError: If the rates differ and ``inherit_rate`` is
            None.
    """
    if left == right:
        return left
    if inherit_rate is None:
        raise MixedRateArithmeticError(func_name, left, right)

    inherit_rate = Inherit(inherit_rate)
    rate = left if inherit_rate is Inherit.LEFT else right
    logger.debug("%s: mixed rates %s and %s, using %s", func_name, left, right, rate)
    return rate


def _is_frame_source(value) -> bool:
    """Return True for values the operators parse with :meth:`FrameStamp.with_frames`."""
    return isinstance(value, _FRAME_SOURCES) and not isinstance(value, _NOT_OPERANDS)


def _is_operand(value) -> bool:
    return isinstance(value, FrameStamp) or _is_frame_source(value)


def _is_scalar(value) -> bool:
    return isinstance(value, _SCALARS) and not isinstance(value, _NOT_OPERANDS)


#%%
class FrameStamp:
    """A frame-accurate point in time.

    A FrameStamp holds the exact number of seconds since the start of the
    clip and the rate the clip plays at. The seconds always fall on a frame
    boundary of the rate.

    Use :meth:`with_frames` and :meth:`with_seconds` to build FrameStamps from
    timecode, frame counts, runtimes, feet+frames or Premiere ticks.

    Args:
        seconds (Fraction | int | Decimal | float): The exact seconds.
        rate (FrameRate): The playback rate.

    Raises:
        FrameStampParseError: If the seconds do not fall on a whole frame.
    """

    __slots__ = ("_seconds", "_rate")

    def __init__(self, seconds: _Rational, rate: FrameRate) -> None:
        if not isinstance(rate, FrameRate):
            raise TypeError(
                f"{__class__.__name__}.rate should be a FrameRate, not a "
                f"{rate.__class__.__name__}"
            )
        seconds = to_fraction(seconds)
        if (seconds * rate.playback).denominator != 1:
            raise FrameStampParseError(FrameStampParseError.Reason.PARTIAL_FRAME)

        self._seconds = seconds
        self._rate = rate

    ####

    @classmethod
    def with_seconds(
        cls,
        seconds,
        rate: FrameRate,
        round: Round | str = Round.CLOSEST,
    ) -> Self:
        """Create a FrameStamp from a seconds value.

        Args:
            seconds (Fraction | int | float | Decimal | str | RuntimeStr |
                PremiereTicks): The seconds source. A str is parsed as a
                runtime, like '01:00:03.6'.
            rate (FrameRate): The playback rate.
            round (Round | str): How to snap the seconds to the nearest frame.
                ``Round.OFF`` refuses values that are not on a frame.

        Raises:
            FrameStampParseError: If the source cannot be parsed, or falls
                between frames with ``Round.OFF``.

        Returns:
            FrameStamp: The new FrameStamp.
        """
        exact = seconds_from(seconds, rate)
        frames = round_rational(exact * rate.playback, round)
        return cls(frames / rate.playback, rate)

    @classmethod
    def with_frames(cls, frames, rate: FrameRate) -> Self:
        """Create a FrameStamp from a frame count.

        Args:
            frames (int | str | SMPTETimecodeStr | FeetAndFrames): The frame
                count source. A str is parsed as SMPTE timecode, or as 35mm
                4-perf feet+frames ('5400+00').
            rate (FrameRate): The playback rate.

        Raises:
            FrameStampParseError: If the source cannot be parsed, or is
                beyond 24 hours of drop-frame timecode.

        Returns:
            FrameStamp: The new FrameStamp.
        """
        frame_count = frames_from(frames, rate)
        if rate.is_drop and abs(frame_count) > drop_frame.max_frames(rate):
            raise FrameStampParseError(
                FrameStampParseError.Reason.DROP_FRAME_MAXIMUM_EXCEEDED
            )
        return cls(Fraction(frame_count) / rate.playback, rate)

    @classmethod
    def smpte_midnight(cls, rate: FrameRate) -> Self:
        """Return the FrameStamp of '24:00:00:00' at ``rate``.

        Raises:
            InvalidSMPTERateError: If time-of-day timecode is not defined for
                the rate.
        """
        if not rate.is_smpte:
            raise InvalidSMPTERateError(rate)
        return cls.with_frames(SMPTETimecodeStr("24:00:00:00"), rate)

    @classmethod
    def from_record(cls, record: tuple) -> Self:
        """Rebuild a FrameStamp from the tuple returned by :meth:`to_record`."""
        seconds_num, seconds_den, rate_num, rate_den, ntsc = record
        rate = FrameRate(Fraction(rate_num, rate_den), ntsc, coerce_timebases=False)
        return cls(Fraction(seconds_num, seconds_den), rate)

    def to_record(self) -> tuple[int, int, int, int, str | None]:
        """Return a plain tuple for storing this FrameStamp.

        Returns:
            tuple: seconds numerator, seconds denominator, playback numerator,
                playback denominator and the ntsc tag ('non_drop', 'drop' or
                None).
        """
        ntsc = None if self._rate.ntsc is None else self._rate.ntsc.value
        return (
            self._seconds.numerator,
            self._seconds.denominator,
            self._rate.playback.numerator,
            self._rate.playback.denominator,
            ntsc,
        )

    @property
    def seconds(self) -> Fraction:
        return self._seconds

    @property
    def rate(self) -> FrameRate:
        return self._rate

    def rebase(self, rate: FrameRate) -> Self:
        """Return a FrameStamp with the same frame count at another rate.

        The timecode stays the same but the seconds change, as when a clip is
        conformed to a new playback speed.
        """
        if rate == self._rate:
            return self
        return self.with_frames(self.frames(), rate)

    def _cast(self, other) -> FrameStamp:
        if isinstance(other, FrameStamp):
            return other
        return FrameStamp.with_frames(other, self._rate)

    # comparisons

    def compare(self, other) -> int:
        """Compare the seconds of two FrameStamps.

        Args:
            other (FrameStamp | int | str | FeetAndFrames): The value to compare
                with. Anything but a FrameStamp is parsed at this rate.

        Returns:
            int: -1, 0 or 1 if this FrameStamp is earlier, equal or later.
        """
        other = self._cast(other)
        return (self._seconds > other._seconds) - (self._seconds < other._seconds)

    def eq(self, other) -> bool:
        return self.compare(other) == 0

    def lt(self, other) -> bool:
        return self.compare(other) < 0

    def lte(self, other) -> bool:
        return self.compare(other) <= 0

    def gt(self, other) -> bool:
        return self.compare(other) > 0

    def gte(self, other) -> bool:
        return self.compare(other) >= 0

    # arithmetic

    def _arithmetic(
        self,
        func_name: str,
        func: Callable[[Fraction, Fraction], Fraction],
        other,
        inherit_rate: Inherit | str | None,
        round: Round | str,
    ) -> FrameStamp:
        other = self._cast(other)
        rate = _resolve_rate(func_name, self._rate, other._rate, inherit_rate)
        return FrameStamp.with_seconds(func(self._seconds, other._seconds), rate, round)

    def add(
        self,
        other,
        inherit_rate: Inherit | str | None = None,
        round: Round | str = Round.CLOSEST,
    ) -> FrameStamp:
        """Add two FrameStamps.

        Args:
            other (FrameStamp | int | str | FeetAndFrames): The value to add.
                Anything but a FrameStamp is parsed at this rate.
            inherit_rate (Inherit | str | None): Which rate the result has when
                the two rates differ.
            round (Round | str): How to round the result to a whole frame.

        Raises:
            MixedRateArithmeticError: If the rates differ and no
                ``inherit_rate`` is given.

        Returns:
            FrameStamp: The sum.
        """
        return self._arithmetic("add", operator.add, other, inherit_rate, round)

    def sub(
        self,
        other,
        inherit_rate: Inherit | str | None = None,
        round: Round | str = Round.CLOSEST,
    ) -> FrameStamp:
        """Subtract ``other`` from this FrameStamp. See :meth:`add`."""
        return self._arithmetic("sub", operator.sub, other, inherit_rate, round)

    def mult(self, multiplier: _Rational, round: Round | str = Round.CLOSEST) -> FrameStamp:
        """Scale the seconds of this FrameStamp.

        Args:
            multiplier (Fraction | int | float | Decimal): The scale factor.
            round (Round | str): How to round the result to a whole frame.

        Returns:
            FrameStamp: The scaled FrameStamp.
        """
        seconds = self._seconds * to_fraction(multiplier)
        return FrameStamp.with_seconds(seconds, self._rate, round)

    def div(self, divisor: _Rational, round: Round | str = Round.TRUNC) -> FrameStamp:
        """Divide the seconds of this FrameStamp.

        The result is truncated to a whole frame unless ``round`` says
        otherwise.
        """
        seconds = self._seconds / to_fraction(divisor)
        return FrameStamp.with_seconds(seconds, self._rate, round)

    def divrem(
        self,
        divisor: _Rational,
        round_frames: Round | str = Round.CLOSEST,
        round_remainder: Round | str = Round.CLOSEST,
    ) -> tuple[FrameStamp, FrameStamp]:
        """Divide the frame count and keep the remainder.

        '01:00:00:01' divided by 4 is '00:15:00:00' with a remainder of
        '00:00:00:01'. The quotient is truncated and the remainder has the
        sign of this FrameStamp.

        Args:
            divisor (Fraction | int | float | Decimal): The divisor.
            round_frames (Round | str): How to round the frame count before
                dividing. Cannot be ``Round.OFF``.
            round_remainder (Round | str): How to round the remainder to a
                whole frame. Cannot be ``Round.OFF``.

        Raises:
            ValueError: If either rounding option is ``Round.OFF``.

        Returns:
            tuple: The quotient and remainder FrameStamps.
        """
        ensure_round_enabled(round_frames, "round_frames")
        round_remainder = ensure_round_enabled(round_remainder, "round_remainder")

        quotient, remainder = divrem(self.frames(round_frames), to_fraction(divisor))
        remainder = round_rational(remainder, round_remainder)

        return (
            FrameStamp.with_frames(quotient, self._rate),
            FrameStamp.with_frames(remainder, self._rate),
        )

    def rem(
        self,
        divisor: _Rational,
        round_frames: Round | str = Round.CLOSEST,
        round_remainder: Round | str = Round.CLOSEST,
    ) -> FrameStamp:
        """Return the remainder of :meth:`divrem`."""
        _, remainder = self.divrem(divisor, round_frames, round_remainder)
        return remainder

    def minus(self) -> FrameStamp:
        return FrameStamp(-self._seconds, self._rate)

    def abs(self) -> FrameStamp:
        return FrameStamp(abs(self._seconds), self._rate)

    # renderers

    def frames(self, round: Round | str = Round.CLOSEST) -> int:
        """Return the number of frames since '00:00:00:00'.

        Args:
            round (Round | str): How to round a count that falls between frames.

        Returns:
            int: The frame count.
        """
        frames = round_rational(self._seconds * self._rate.playback, round)
        return int(frames)

    def smpte_timecode_sections(self, round: Round | str = Round.CLOSEST) -> Sections:
        """Return the fields of the SMPTE timecode of this FrameStamp.

        Args:
            round (Round | str): How to round the frames field when the rate
                has a fractional timebase. ``Round.OFF`` keeps it exact.

        Returns:
            Sections: The timecode fields.
        """
        rate = self._rate
        timebase = rate.timebase

        frames = abs(self.frames())
        frames += drop_frame.frame_num_adjustment(frames, rate)

        hours, remainder = divrem(frames, timebase * 3600)
        minutes, remainder = divrem(remainder, timebase * 60)
        seconds, remainder = divrem(remainder, timebase)

        return Sections(
            negative=self._seconds < 0,
            hours=hours,
            minutes=minutes,
            seconds=seconds,
            frames=round_rational(remainder, round),
        )

    def smpte_timecode(self, round: Round | str = Round.CLOSEST) -> str:
        """Return the SMPTE timecode, like '01:00:00:00' or '00:01:00;02'.

        Drop-frame rates use a ';' before the frames field.
        """
        sections = self.smpte_timecode_sections(round)
        return SMPTETimecodeStr.from_sections(sections, self._rate)

    def smpte_wrap_tod(self) -> Self:
        """Wrap this FrameStamp to a time of day between 00:00:00:00 and 24:00:00:00.

        '25:00:00:00' becomes '01:00:00:00' and '-01:00:00:00' becomes
        '23:00:00:00'.

        Raises:
            InvalidSMPTERateError: If time-of-day timecode is not defined for
                the rate.
        """
        midnight = self.smpte_midnight(self._rate)
        return self.with_frames(self.frames() % midnight.frames(), self._rate)

    def runtime(self, precision: int = 9, trim_zeros: bool = True) -> str:
        """Return the real-world elapsed time, like '01:00:03.6'.

        Args:
            precision (int): Decimal places of the seconds.
            trim_zeros (bool): If True, trailing zeros are removed.

        Returns:
            str: The runtime string.
        """
        return RuntimeStr.from_seconds(self._seconds, precision, trim_zeros)

    def premiere_ticks(self, round: Round | str = Round.CLOSEST) -> int:
        """Return the number of Adobe Premiere Pro ticks.

        Raises:
            ValueError: If ``round`` is ``Round.OFF``.
        """
        round = ensure_round_enabled(round)
        return PremiereTicks.from_seconds(self._seconds, round)

    def feet_and_frames(
        self,
        film_format: FilmFormat | str = FilmFormat.FF35MM_4PERF,
        round: Round | str = Round.CLOSEST,
    ) -> FeetAndFrames:
        """Return the film length. ``str()`` of the result reads like '5400+00'.

        Args:
            film_format (FilmFormat | str): The film gauge to count feet in.
            round (Round | str): How to round the frame count.

        Raises:
            ValueError: If ``round`` is ``Round.OFF``.

        Returns:
            FeetAndFrames: The feet and leftover frames.
        """
        round = ensure_round_enabled(round)
        return FeetAndFrames.from_frames(self.frames(round), film_format)

    # operators

    def __eq__(self, other: object) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return self.eq(other)

    def __lt__(self, other) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return self.lt(other)

    def __le__(self, other) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return self.lte(other)

    def __gt__(self, other) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return self.gt(other)

    def __ge__(self, other) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return self.gte(other)

    def __hash__(self) -> int:
        return hash(self._seconds)

    def __add__(self, other) -> FrameStamp:
        if not _is_operand(other):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other) -> FrameStamp:
        if not _is_frame_source(other):
            return NotImplemented
        return self._cast(other).add(self)

    def __sub__(self, other) -> FrameStamp:
        if not _is_operand(other):
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other) -> FrameStamp:
        if not _is_frame_source(other):
            return NotImplemented
        return self._cast(other).sub(self)

    def __mul__(self, other) -> FrameStamp:
        if not _is_scalar(other):
            return NotImplemented
        return self.mult(other)

    __rmul__ = __mul__

    def __truediv__(self, other) -> FrameStamp:
        if not _is_scalar(other):
            return NotImplemented
        return self.div(other)

    def __divmod__(self, other) -> tuple[FrameStamp, FrameStamp]:
        """Truncating :meth:`divrem`, the remainder keeps the sign of self."""
        if not _is_scalar(other):
            return NotImplemented
        return self.divrem(other)

    def __mod__(self, other) -> FrameStamp:
        if not _is_scalar(other):
            return NotImplemented
        return self.rem(other)

    def __neg__(self) -> FrameStamp:
        return self.minus()

    def __abs__(self) -> FrameStamp:
        return self.abs()

    def __str__(self) -> str:
        """Return the timecode and rate, like '<01:00:00:00 <23.98 NTSC>>'."""
        return f"<{self.smpte_timecode()} {self._rate}>"

    def __repr__(self) -> str:
        return (
            f"{__class__.__name__}(Fraction({self._seconds.numerator},"
            f" {self._seconds.denominator}), {self._rate!r})"
        )
####


#%%
class FrameStampBuilder:
    """Helper class to pre-configure the creation of FrameStamps.

    Keyword arguments given to the builder are used as defaults each time a
    FrameStamp is created with it. Calling the builder is the same as calling
    :meth:`with_frames`.

    Example:
        >>> at_23_98 = FrameStampBuilder(rate=rates.F23_98, round="floor")
        >>> at_23_98("01:00:00:00")
        >>> at_23_98.with_seconds(3600)

    Args:
        kwargs (dict): Default keyword arguments for
            :meth:`FrameStamp.with_frames` and :meth:`FrameStamp.with_seconds`.
            Keywords a constructor does not take are ignored by it.
    """

    _accepted = {
        "with_frames": {"rate"},
        "with_seconds": {"rate", "round"},
    }

    def __init__(self, **kwargs) -> None:
        self.kwargs = kwargs

    def _merged(self, func_name: str, kwargs: dict) -> dict:
        defaults = {
            key: value
            for key, value in self.kwargs.items()
            if key in self._accepted[func_name]
        }
        return defaults | kwargs

    def with_frames(self, *args, **kwargs) -> FrameStamp:
        return FrameStamp.with_frames(*args, **self._merged("with_frames", kwargs))

    def with_seconds(self, *args, **kwargs) -> FrameStamp:
        return FrameStamp.with_seconds(*args, **self._merged("with_seconds", kwargs))

    def __call__(self, *args, **kwargs) -> FrameStamp:
        """Create a FrameStamp from a frame count source.

        Returns:
            FrameStamp: FrameStamp instance given the arguments.
        """
        return self.with_frames(*args, **kwargs)
####
