"""FrameRate class for describing the playback speed of a media stream."""

from __future__ import annotations

import enum
import logging
import math
import re
from decimal import Decimal
from fractions import Fraction

from .errors import FrameRateParseError
from .helpers import _RateSource, round_rational

logger = logging.getLogger(__name__)

_Reason = FrameRateParseError.Reason

NTSC_DROP_BASE = Fraction(30000, 1001)

_RATIONAL_RE = re.compile(r"^\s*(?P<first>[0-9]+)\s*/\s*(?P<second>[0-9]+)\s*$")


#%%
class Ntsc(str, enum.Enum):
    """NTSC flavour of a FrameRate. ``None`` is used for non-NTSC rates."""

    NON_DROP = "non_drop"
    DROP = "drop"
####


#%%
class FrameRate:
    """The rate at which frames are played back.

    Args:
        rate (Fraction | int | float | Decimal | str | tuple[int, int]): The
            playback speed in frames per second. A str can be an integer
            ('24'), a float ('23.976') or a rational ('24000/1001'). A tuple
            is read as (numerator, denominator).
        ntsc (Ntsc | str | None): ``Ntsc.NON_DROP`` or ``Ntsc.DROP`` for NTSC
            rates, ``None`` for every other rate. NTSC rates that are not
            expressed over 1001 are rounded to the nearest whole frame and
            converted, so ``24`` becomes ``24000/1001``.
        coerce_timebases (bool): If True, a rate below 1 is treated as a
            seconds-per-frame timebase and flipped. Ignored for integers.

    Raises:
        FrameRateParseError: If the rate is not valid.
    """

    def __init__(
        self,
        rate: _RateSource,
        ntsc: Ntsc | str | None,
        coerce_timebases: bool = True,
    ) -> None:
        self._ntsc = self._parse_ntsc(ntsc)
        self._playback = self._parse_playback(rate, self._ntsc, coerce_timebases)

    ####

    @staticmethod
    def _parse_ntsc(ntsc: Ntsc | str | None) -> Ntsc | None:
        if ntsc is None or isinstance(ntsc, Ntsc):
            return ntsc
        if isinstance(ntsc, str):
            try:
                return Ntsc(ntsc)
            except ValueError:
                pass
        raise FrameRateParseError(_Reason.INVALID_NTSC)

    @classmethod
    def _parse_playback(
        cls, rate: _RateSource, ntsc: Ntsc | None, coerce_timebases: bool
    ) -> Fraction:
        """Validate the rate and turn it into an exact playback speed.

        Args:
            rate (_RateSource): The user supplied rate.
            ntsc (Ntsc | None): The already validated ntsc flavour.
            coerce_timebases (bool): Whether to flip seconds-per-frame values.

        Returns:
            Fraction: The playback speed in frames per second.
        """
        if isinstance(rate, str):
            rate, coerce_timebases = cls._parse_string(rate, coerce_timebases)

        if isinstance(rate, bool):
            raise FrameRateParseError(_Reason.UNRECOGNIZED_FORMAT)

        if isinstance(rate, int):
            coerce_timebases = False
            playback = Fraction(rate)
        elif isinstance(rate, float):
            playback = Fraction(repr(rate))
            if ntsc is None and playback.denominator != 1:
                raise FrameRateParseError(_Reason.IMPRECISE)
        elif isinstance(rate, (tuple, list)):
            if len(rate) != 2:
                raise FrameRateParseError(_Reason.UNRECOGNIZED_FORMAT)
            numerator, denominator = map(int, rate)
            if denominator == 0:
                raise FrameRateParseError(_Reason.NON_POSITIVE)
            playback = Fraction(numerator, denominator)
        elif isinstance(rate, (Fraction, Decimal)):
            playback = Fraction(rate)
        else:
            raise FrameRateParseError(_Reason.UNRECOGNIZED_FORMAT)

        if playback <= 0:
            raise FrameRateParseError(_Reason.NON_POSITIVE)

        if coerce_timebases and playback.numerator < playback.denominator:
            playback = 1 / playback

        if ntsc is not None and playback.denominator != 1001:
            coerced = Fraction(round_rational(playback) * 1000, 1001)
            logger.debug("coerced NTSC rate %s to %s", playback, coerced)
            playback = coerced

        if ntsc is Ntsc.DROP and (playback / NTSC_DROP_BASE).denominator != 1:
            raise FrameRateParseError(_Reason.BAD_DROP_RATE)

        return playback

    @staticmethod
    def _parse_string(rate: str, coerce_timebases: bool) -> tuple[int | float | Fraction, bool]:
        """Parse a rate string as an integer, a float or a rational."""
        try:
            return int(rate), coerce_timebases
        except ValueError:
            pass

        try:
            value = float(rate)
        except ValueError:
            value = None
        if value is not None:
            if not math.isfinite(value):
                raise FrameRateParseError(_Reason.UNRECOGNIZED_FORMAT)
            return value, coerce_timebases

        match = _RATIONAL_RE.match(rate)
        if match is None:
            raise FrameRateParseError(_Reason.UNRECOGNIZED_FORMAT)

        first, second = sorted(
            (int(match.group("first")), int(match.group("second"))), reverse=True
        )
        if second == 0:
            raise FrameRateParseError(_Reason.NON_POSITIVE)
        return Fraction(first, second), True

    @property
    def playback(self) -> Fraction:
        """Return the playback speed in frames per second.

        Returns:
            Fraction: The exact playback speed.
        """
        return self._playback

    @property
    def ntsc(self) -> Ntsc | None:
        """Return the NTSC flavour, or None for non-NTSC rates."""
        return self._ntsc

    @property
    def is_ntsc(self) -> bool:
        return self._ntsc is not None

    @property
    def is_drop(self) -> bool:
        return self._ntsc is Ntsc.DROP

    @property
    def timebase(self) -> Fraction:
        """Return the frames-per-second used to count timecode fields.

        For NTSC rates this is the playback speed rounded to the nearest
        whole frame (24 for 23.98), otherwise it is the playback speed.

        Returns:
            Fraction: The timebase.
        """
        if self.is_ntsc:
            return Fraction(round_rational(self._playback))
        return self._playback

    @property
    def is_smpte(self) -> bool:
        """Return True if SMPTE time-of-day timecode is defined for this rate.

        That is the case for NTSC rates and for whole-frame rates.
        """
        return self.is_ntsc or self._playback.denominator == 1

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FrameRate):
            return self._playback == other._playback and self._ntsc is other._ntsc
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._playback, self._ntsc))

    def __str__(self) -> str:
        """Return a short human readable description like '<29.97 NTSC DF>'.

        Returns:
            str: The description of this rate.
        """
        value = round(float(self._playback), 2)
        if self._ntsc is None:
            return f"<{value} fps>"
        if self._ntsc is Ntsc.DROP:
            return f"<{value} NTSC DF>"
        if (self._playback / NTSC_DROP_BASE).denominator == 1:
            return f"<{value} NTSC NDF>"
        return f"<{value} NTSC>"

    def __repr__(self) -> str:
        ntsc = None if self._ntsc is None else f"Ntsc.{self._ntsc.name}"
        return (
            f"{__class__.__name__}(Fraction({self._playback.numerator},"
            f" {self._playback.denominator}), ntsc={ntsc}, coerce_timebases=False)"
        )
####