"""Shared test fixtures."""

import pytest

from framestamp import FrameStamp, Range, rates


@pytest.fixture
def tc():
    """Build a FrameStamp from a timecode string, at 23.98 unless told otherwise."""

    def build(timecode: str, rate=rates.F23_98) -> FrameStamp:
        return FrameStamp.with_frames(timecode, rate)

    return build


@pytest.fixture
def tc_range(tc):
    """Build a Range from two timecode strings."""

    def build(stamp_in: str, stamp_out: str, out_type="exclusive", rate=rates.F23_98) -> Range:
        return Range(tc(stamp_in, rate), tc(stamp_out, rate), out_type)

    return build
