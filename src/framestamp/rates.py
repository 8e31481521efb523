"""Common frame rates, ready to use."""

from __future__ import annotations

from fractions import Fraction

from .framerate import FrameRate, Ntsc

#: 23.98 NTSC, the usual rate for film-originated HD material.
F23_98 = FrameRate(Fraction(24000, 1001), Ntsc.NON_DROP)
F24 = FrameRate(24, None)
F29_97_NDF = FrameRate(Fraction(30000, 1001), Ntsc.NON_DROP)
F29_97_DF = FrameRate(Fraction(30000, 1001), Ntsc.DROP)
F30 = FrameRate(30, None)
F47_95 = FrameRate(Fraction(48000, 1001), Ntsc.NON_DROP)
F48 = FrameRate(48, None)
F59_94_NDF = FrameRate(Fraction(60000, 1001), Ntsc.NON_DROP)
F59_94_DF = FrameRate(Fraction(60000, 1001), Ntsc.DROP)
F60 = FrameRate(60, None)

__all__ = [
    "F23_98",
    "F24",
    "F29_97_NDF",
    "F29_97_DF",
    "F30",
    "F47_95",
    "F48",
    "F59_94_NDF",
    "F59_94_DF",
    "F60",
]
