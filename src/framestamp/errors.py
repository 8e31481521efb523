"""Exceptions raised by the framestamp package."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .framerate import FrameRate


#%%
class FramestampError(Exception):
    """Raised when an error occurred in a framestamp calculation."""
####


#%%
class FrameRateParseError(FramestampError, ValueError):
    """Raised when a value cannot be turned into a valid FrameRate.

    Args:
        reason (FrameRateParseError.Reason): Why the value was rejected.
    """

    class Reason(str, enum.Enum):
        INVALID_NTSC = "invalid_ntsc"
        UNRECOGNIZED_FORMAT = "unrecognized_format"
        IMPRECISE = "imprecise"
        NON_POSITIVE = "non_positive"
        BAD_DROP_RATE = "bad_drop_rate"

    _messages = {
        Reason.INVALID_NTSC: "ntsc must be Ntsc.NON_DROP, Ntsc.DROP or None",
        Reason.UNRECOGNIZED_FORMAT: "framerate string format not recognized",
        Reason.IMPRECISE: (
            "floats are not precise enough to create a non-NTSC FrameRate"
        ),
        Reason.NON_POSITIVE: "framerate must be positive",
        Reason.BAD_DROP_RATE: "drop-frame rates must be divisible by 30000/1001",
    }

    def __init__(self, reason: FrameRateParseError.Reason) -> None:
        self.reason = reason
        super().__init__(self._messages[reason])
####


#%%
class FrameStampParseError(FramestampError, ValueError):
    """Raised when a source value cannot be turned into a FrameStamp.

    Args:
        reason (FrameStampParseError.Reason): Why the value was rejected.
    """

    class Reason(str, enum.Enum):
        UNRECOGNIZED_FORMAT = "unrecognized_format"
        BAD_DROP_FRAMES = "bad_drop_frames"
        DROP_FRAME_MAXIMUM_EXCEEDED = "drop_frame_maximum_exceeded"
        PARTIAL_FRAME = "partial_frame"

    _messages = {
        Reason.UNRECOGNIZED_FORMAT: "string format not recognized",
        Reason.BAD_DROP_FRAMES: (
            "frames value not allowed for drop-frame timecode. frame should"
            " have been dropped"
        ),
        Reason.DROP_FRAME_MAXIMUM_EXCEEDED: (
            "drop-frame timecode cannot exceed 24 hours"
        ),
        Reason.PARTIAL_FRAME: "`seconds` is not cleanly divisible by `rate.playback`",
    }

    def __init__(self, reason: FrameStampParseError.Reason) -> None:
        self.reason = reason
        super().__init__(self._messages[reason])
####


#%%
class MixedRateArithmeticError(FramestampError):
    """Raised when two values with different rates are combined.

    Set ``inherit_rate`` to ``"left"`` or ``"right"`` on the failing call to
    pick the rate of the result.
    """

    def __init__(self, func_name: str, left_rate: FrameRate, right_rate: FrameRate) -> None:
        self.func_name = func_name
        self.left_rate = left_rate
        self.right_rate = right_rate
        super().__init__(
            f"attempted `{func_name}(a, b)` where `a.rate` does not match"
            f" `b.rate`. try `inherit_rate=\"left\"` or `inherit_rate=\"right\"`"
            f" to fix. left: {left_rate}, right: {right_rate}"
        )
####


#%%
class MixedOutTypeArithmeticError(FramestampError):
    """Raised when an inclusive and an exclusive Range are combined."""

    def __init__(self, func_name: str, left_out_type, right_out_type) -> None:
        self.func_name = func_name
        self.left_out_type = left_out_type
        self.right_out_type = right_out_type
        super().__init__(
            f"attempted `{func_name}(a, b)` where `a.out_type` does not match"
            f" `b.out_type`. try `inherit_out_type=\"left\"` or"
            f" `inherit_out_type=\"right\"` to fix. left:"
            f" {left_out_type.value}, right: {right_out_type.value}"
        )
####


#%%
class InvalidSMPTERateError(FramestampError, ValueError):
    """Raised when time-of-day timecode is requested for a non-SMPTE rate."""

    def __init__(self, rate: FrameRate) -> None:
        self.rate = rate
        super().__init__(
            "`framerate` must be NTSC or whole-frame. time-of-day timecode is"
            f" not defined for other rates, got {rate}"
        )
####
