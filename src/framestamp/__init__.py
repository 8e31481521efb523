"""Frame-accurate timecode, runtime and film footage calculations."""

import logging

from . import rates
from .errors import (
    FrameRateParseError,
    FramestampError,
    FrameStampParseError,
    InvalidSMPTERateError,
    MixedOutTypeArithmeticError,
    MixedRateArithmeticError,
)
from .film_format import FilmFormat
from .framerate import FrameRate, Ntsc
from .framestamp import FrameStamp, FrameStampBuilder, Inherit
from .helpers import Round
from .range import OutType, Range
from .sources import (
    FeetAndFrames,
    PremiereTicks,
    RuntimeStr,
    Sections,
    SMPTETimecodeStr,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "FeetAndFrames",
    "FilmFormat",
    "FrameRate",
    "FrameRateParseError",
    "FrameStamp",
    "FrameStampBuilder",
    "FrameStampParseError",
    "FramestampError",
    "Inherit",
    "InvalidSMPTERateError",
    "MixedOutTypeArithmeticError",
    "MixedRateArithmeticError",
    "Ntsc",
    "OutType",
    "PremiereTicks",
    "Range",
    "Round",
    "RuntimeStr",
    "SMPTETimecodeStr",
    "Sections",
    "rates",
]
