"""Drop-frame timecode calculations.

Drop-frame timecode skips the first ``drop_rate`` frame numbers of every
minute, except every tenth minute, so that the displayed clock stays in sync
with the wall clock at NTSC rates. No frames of media are ever dropped, only
timecode values.
"""

from __future__ import annotations

from fractions import Fraction
from typing import TYPE_CHECKING

from .errors import FrameStampParseError
from .helpers import round_rational

if TYPE_CHECKING:
    from .framerate import FrameRate
    from .sources import Sections

DROP_FACTOR = Fraction("0.066666")


def drop_rate(rate: FrameRate) -> int:
    """Return the number of timecode values skipped per minute.

    Args:
        rate (FrameRate): A drop-frame rate.

    Returns:
        int: 2 for 29.97, 4 for 59.94 and so on.
    """
    return round_rational(rate.timebase * DROP_FACTOR)


def _frames_per_minute(rate: FrameRate) -> tuple[int, int, int]:
    timebase = int(rate.timebase)
    whole = timebase * 60
    dropped = whole - drop_rate(rate)
    ten_minutes = dropped * 9 + whole
    return whole, dropped, ten_minutes


def parse_adjustment(sections: Sections, rate: FrameRate) -> int:
    """Return the frame count adjustment for parsed timecode sections.

    The adjustment is added to the frame count computed as if the timecode
    were non-drop.

    Args:
        sections (Sections): The parsed timecode fields.
        rate (FrameRate): The rate the timecode was parsed at.

    Raises:
        FrameStampParseError: If the timecode names a frame that drop-frame
            timecode skips.

    Returns:
        int: A negative (or zero) number of frames.
    """
    if not rate.is_drop:
        return 0

    dropped = drop_rate(rate)
    has_bad_frames = sections.frames < dropped and sections.seconds == 0
    if has_bad_frames and sections.minutes % 10 != 0:
        raise FrameStampParseError(FrameStampParseError.Reason.BAD_DROP_FRAMES)

    total_minutes = sections.hours * 60 + sections.minutes
    return -dropped * (total_minutes - total_minutes // 10)


def frame_num_adjustment(frame_number: int, rate: FrameRate) -> int:
    """Return the adjustment that turns a frame count into timecode fields.

    Adding the result to ``frame_number`` gives a count that can be split into
    hours, minutes, seconds and frames as if it were non-drop.

    Args:
        frame_number (int): A non-negative linear frame count.
        rate (FrameRate): The rate of the frame count.

    Returns:
        int: The number of timecode values skipped before ``frame_number``.
    """
    if not rate.is_drop:
        return 0

    dropped = drop_rate(rate)
    whole, per_minute, ten_minutes = _frames_per_minute(rate)

    tens, remainder = divmod(frame_number, ten_minutes)
    adjustment = 9 * dropped * tens

    if remainder < whole:
        return adjustment

    remainder -= whole
    return adjustment + dropped + dropped * (remainder // per_minute)


def max_frames(rate: FrameRate) -> int:
    """Return the frame count of '24:00:00;00' at a drop-frame rate."""
    _, _, ten_minutes = _frames_per_minute(rate)
    return ten_minutes * 6 * 24
