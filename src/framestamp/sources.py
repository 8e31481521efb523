"""Parsers and value types for the formats a FrameStamp can be built from.

Frame count sources: ``int``, ``str``, :class:`SMPTETimecodeStr` and
:class:`FeetAndFrames`. Seconds sources: ``Fraction``, ``int``, ``float``,
``Decimal``, ``str``, :class:`RuntimeStr` and :class:`PremiereTicks`.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal
from fractions import Fraction
from typing import TYPE_CHECKING, NamedTuple

from . import drop_frame
from .errors import FrameStampParseError
from .film_format import FilmFormat
from .helpers import Round, divrem, round_rational, to_fraction

if TYPE_CHECKING:
    from .framerate import FrameRate

logger = logging.getLogger(__name__)

_Reason = FrameStampParseError.Reason

SMPTE_TIMECODE_RE = re.compile(
    r"^(?P<negative>-)?"
    r"((?P<section_1>[0-9]+)[:;])?"
    r"((?P<section_2>[0-9]+)[:;])?"
    r"((?P<section_3>[0-9]+)[:;])?"
    r"(?P<frames>[0-9]+)$"
)

RUNTIME_RE = re.compile(
    r"^(?P<negative>-)?"
    r"((?P<section_1>[0-9]+)[:;])?"
    r"((?P<section_2>[0-9]+)[:;])?"
    r"(?P<seconds>[0-9]+(\.[0-9]+)?)$"
)

FEET_AND_FRAMES_RE = re.compile(r"^(?P<negative>-)?(?P<feet>[0-9]+)\+(?P<frames>[0-9]+)$")


def _split_sections(match: re.Match) -> tuple[int, int, int]:
    """Right-align the optional leading sections of a timecode or runtime.

    Returns:
        tuple: hours, minutes and seconds (missing values are 0). For a
            runtime only hours and minutes are meaningful.
    """
    present = [
        int(match.group(name))
        for name in ("section_1", "section_2", "section_3")
        if match.re.groupindex.get(name) and match.group(name) is not None
    ]
    padded = [0] * (3 - len(present)) + present
    return padded[0], padded[1], padded[2]


#%%
class Sections(NamedTuple):
    """The fields of a SMPTE timecode."""

    negative: bool
    hours: int
    minutes: int
    seconds: int
    frames: int | Fraction
####


#%%
class SMPTETimecodeStr(str):
    """A SMPTE timecode string, like '01:00:00:00' or '-00:01:00;02'.

    Sections may be left out from the left ('3:04' is three seconds and four
    frames) and may overflow ('00:00:62:04' is one minute two seconds and
    four frames).
    """

    def sections(self) -> Sections:
        """Parse this string into its timecode fields.

        Raises:
            FrameStampParseError: If the string is not a timecode.

        Returns:
            Sections: The parsed fields.
        """
        match = SMPTE_TIMECODE_RE.match(self)
        if match is None:
            raise FrameStampParseError(_Reason.UNRECOGNIZED_FORMAT)

        hours, minutes, seconds = _split_sections(match)
        return Sections(
            negative=match.group("negative") is not None,
            hours=hours,
            minutes=minutes,
            seconds=seconds,
            frames=int(match.group("frames")),
        )

    def frames(self, rate: FrameRate) -> int:
        """Return the linear frame count of this timecode at ``rate``.

        Raises:
            FrameStampParseError: If the string is not a timecode, or names a
                frame that drop-frame timecode skips.
        """
        sections = self.sections()
        timebase = rate.timebase

        seconds = (sections.hours * 60 + sections.minutes) * 60 + sections.seconds
        frames = seconds * timebase + sections.frames
        frames += drop_frame.parse_adjustment(sections, rate)
        frames = round_rational(frames)

        return -frames if sections.negative else frames

    @classmethod
    def from_sections(cls, sections: Sections, rate: FrameRate) -> SMPTETimecodeStr:
        """Render timecode fields as a timecode string."""
        frames_sep = ";" if rate.is_drop else ":"
        sign = "-" if sections.negative else ""
        frames = sections.frames
        if isinstance(frames, Fraction) and frames.denominator != 1:
            frames_text = f"{float(frames):05.2f}"
        else:
            frames_text = f"{int(frames):02d}"
        return cls(
            f"{sign}{sections.hours:02d}:{sections.minutes:02d}"
            f":{sections.seconds:02d}{frames_sep}{frames_text}"
        )
####


#%%
class RuntimeStr(str):
    """A runtime string of real-world elapsed time, like '01:00:03.6'."""

    def seconds(self) -> Fraction:
        """Return the exact seconds described by this runtime.

        Raises:
            FrameStampParseError: If the string is not a runtime.
        """
        match = RUNTIME_RE.match(self)
        if match is None:
            raise FrameStampParseError(_Reason.UNRECOGNIZED_FORMAT)

        _, hours, minutes = _split_sections(match)
        seconds = Fraction(match.group("seconds"))
        seconds += (hours * 60 + minutes) * 60

        return -seconds if match.group("negative") else seconds

    @classmethod
    def from_seconds(
        cls, seconds: Fraction, precision: int = 9, trim_zeros: bool = True
    ) -> RuntimeStr:
        """Render seconds as a runtime string.

        Args:
            seconds (Fraction): The seconds to render.
            precision (int): Number of decimal places to round to (halves
                round up).
            trim_zeros (bool): If True, trailing zeros of the fractional part
                are removed, leaving at least '.0'.

        Returns:
            RuntimeStr: The runtime string.
        """
        scale = 10 ** precision
        scaled = round_rational(abs(seconds) * scale)
        whole_seconds, fractional = divmod(scaled, scale)
        hours, remainder = divmod(whole_seconds, 3600)
        minutes, whole_seconds = divmod(remainder, 60)

        fractional_text = f"{fractional:0{precision}d}" if precision > 0 else ""
        if trim_zeros:
            fractional_text = fractional_text.rstrip("0")
        if not fractional_text:
            fractional_text = "0"

        sign = "-" if seconds < 0 and scaled != 0 else ""
        return cls(
            f"{sign}{hours:02d}:{minutes:02d}:{whole_seconds:02d}.{fractional_text}"
        )
####


#%%
class FeetAndFrames(NamedTuple):
    """A film length in feet and frames, like '5400+00'.

    Negative values carry the sign on both ``feet`` and ``frames``.
    """

    feet: int
    frames: int
    film_format: FilmFormat = FilmFormat.FF35MM_4PERF

    @classmethod
    def from_string(
        cls, value: str, film_format: FilmFormat = FilmFormat.FF35MM_4PERF
    ) -> FeetAndFrames:
        """Parse a 'FEET+FRAMES' string.

        Raises:
            FrameStampParseError: If the string is not a feet+frames value.
        """
        match = FEET_AND_FRAMES_RE.match(value)
        if match is None:
            raise FrameStampParseError(_Reason.UNRECOGNIZED_FORMAT)

        feet = int(match.group("feet"))
        frames = int(match.group("frames"))
        if match.group("negative"):
            feet, frames = -feet, -frames
        return cls(feet, frames, FilmFormat(film_format))

    @classmethod
    def from_frames(
        cls, frames: int, film_format: FilmFormat = FilmFormat.FF35MM_4PERF
    ) -> FeetAndFrames:
        film_format = FilmFormat(film_format)
        feet, remainder = divrem(frames, film_format.frames_per_foot())
        return cls(feet, int(remainder), film_format)

    def total_frames(self) -> int:
        return self.feet * self.film_format.frames_per_foot() + self.frames

    def __str__(self) -> str:
        sign = "-" if self.feet < 0 or self.frames < 0 else ""
        return f"{sign}{abs(self.feet)}+{abs(self.frames):02d}"
####


#%%
class PremiereTicks(int):
    """A count of Adobe Premiere Pro ticks."""

    PER_SECOND = 254016000000

    def seconds(self) -> Fraction:
        return Fraction(int(self), self.PER_SECOND)

    @classmethod
    def from_seconds(
        cls, seconds: Fraction, round: Round | str = Round.CLOSEST
    ) -> PremiereTicks:
        return cls(round_rational(seconds * cls.PER_SECOND, round))
####


def frames_from(value, rate: FrameRate) -> int:
    """Return the linear frame count described by ``value`` at ``rate``.

    A plain ``str`` is read as SMPTE timecode first and as 35mm 4-perf
    feet+frames when that fails.

    Args:
        value (int | str | SMPTETimecodeStr | FeetAndFrames): The source.
        rate (FrameRate): The rate to interpret the source at.

    Raises:
        FrameStampParseError: If a string source cannot be parsed.
        TypeError: If the source type is not supported.

    Returns:
        int: The frame count.
    """
    if isinstance(value, (bool, PremiereTicks, RuntimeStr)):
        raise TypeError(
            f"Type {value.__class__.__name__} is not a frame count source."
        )
    if isinstance(value, int):
        return int(value)
    if isinstance(value, FeetAndFrames):
        return value.total_frames()
    if isinstance(value, SMPTETimecodeStr):
        return value.frames(rate)
    if isinstance(value, str):
        try:
            return SMPTETimecodeStr(value).frames(rate)
        except FrameStampParseError as error:
            if error.reason is _Reason.BAD_DROP_FRAMES:
                raise
            logger.debug("%r is not a timecode, trying feet+frames", value)
        return FeetAndFrames.from_string(value).total_frames()
    raise TypeError(
        f"Type {value.__class__.__name__} is not a frame count source."
    )


def seconds_from(value, rate: FrameRate | None = None) -> Fraction:
    """Return the exact seconds described by ``value``.

    Args:
        value (Fraction | int | float | Decimal | str | RuntimeStr |
            PremiereTicks): The source. A plain ``str`` is read as a runtime.
        rate (FrameRate): Unused, kept so both source readers share a
            signature.

    Raises:
        FrameStampParseError: If a string source cannot be parsed.
        TypeError: If the source type is not supported.

    Returns:
        Fraction: The seconds.
    """
    if isinstance(value, PremiereTicks):
        return value.seconds()
    if isinstance(value, SMPTETimecodeStr):
        raise TypeError("Type SMPTETimecodeStr is not a seconds source.")
    if isinstance(value, str):
        return RuntimeStr(value).seconds()
    if isinstance(value, bool) or not isinstance(value, (Fraction, int, float, Decimal)):
        raise TypeError(f"Type {value.__class__.__name__} is not a seconds source.")
    try:
        return to_fraction(value)
    except ValueError as error:
        raise FrameStampParseError(_Reason.UNRECOGNIZED_FORMAT) from error
