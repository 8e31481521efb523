"""Tests for building and rendering FrameStamps."""

from fractions import Fraction
from typing import NamedTuple

import pytest

from framestamp import (
    FeetAndFrames,
    FilmFormat,
    FrameRate,
    FrameStamp,
    FrameStampBuilder,
    FrameStampParseError,
    InvalidSMPTERateError,
    Ntsc,
    PremiereTicks,
    Round,
    rates,
)
from framestamp.drop_frame import max_frames

Reason = FrameStampParseError.Reason


class ParseCase(NamedTuple):
    rate: FrameRate
    seconds: Fraction
    frames: int
    timecode: str
    runtime: str
    ticks: int
    feet_and_frames_35mm_4perf: str
    feet_and_frames_35mm_2perf: str
    feet_and_frames_16mm: str


def _negate_ff(value: str) -> str:
    return value if value.startswith("-") else f"-{value}"


def _negative(case: ParseCase) -> ParseCase:
    return ParseCase(
        rate=case.rate,
        seconds=-case.seconds,
        frames=-case.frames,
        timecode=f"-{case.timecode}",
        runtime=f"-{case.runtime}",
        ticks=-case.ticks,
        feet_and_frames_35mm_4perf=_negate_ff(case.feet_and_frames_35mm_4perf),
        feet_and_frames_35mm_2perf=_negate_ff(case.feet_and_frames_35mm_2perf),
        feet_and_frames_16mm=_negate_ff(case.feet_and_frames_16mm),
    )


PARSE_CASES = [
    ParseCase(
        rates.F23_98, Fraction(18018, 5), 86_400, "01:00:00:00", "01:00:03.6",
        915_372_057_600_000, "5400+00", "2700+00", "4320+00",
    ),
    ParseCase(
        rates.F23_98, Fraction(12012, 5), 57_600, "00:40:00:00", "00:40:02.4",
        610_248_038_400_000, "3600+00", "1800+00", "2880+00",
    ),
    ParseCase(
        rates.F23_98, Fraction(2_008_629_623, 24_000), 2_006_623, "23:13:29:07",
        "23:14:52.900958333", 21_259_335_929_832_000, "125413+15", "62706+31",
        "100331+03",
    ),
    ParseCase(
        rates.F24, Fraction(3600), 86_400, "01:00:00:00", "01:00:00.0",
        914_457_600_000_000, "5400+00", "2700+00", "4320+00",
    ),
    ParseCase(
        rates.F29_97_DF, Fraction(457_457, 7500), 1828, "00:01:01;00",
        "00:01:00.994266667", 15_493_519_641_600, "114+04", "57+04", "91+08",
    ),
    ParseCase(
        rates.F29_97_DF, Fraction(31_031, 15_000), 62, "00:00:02;02",
        "00:00:02.068733333", 525_491_366_400, "3+14", "1+30", "3+02",
    ),
    ParseCase(
        rates.F29_97_DF, Fraction(3003, 50), 1800, "00:01:00;02", "00:01:00.06",
        15_256_200_960_000, "112+08", "56+08", "90+00",
    ),
    ParseCase(
        rates.F29_97_DF, Fraction(1_800_799, 15_000), 3598, "00:02:00;02",
        "00:02:00.053266667", 30_495_450_585_600, "224+14", "112+14", "179+18",
    ),
    ParseCase(
        rates.F29_97_DF, Fraction(2_999_997, 5000), 17_982, "00:10:00;00",
        "00:09:59.9994", 152_409_447_590_400, "1123+14", "561+30", "899+02",
    ),
    ParseCase(
        rates.F29_97_DF, Fraction(3_300_297, 5000), 19_782, "00:11:00;02",
        "00:11:00.0594", 167_665_648_550_400, "1236+06", "618+06", "989+02",
    ),
    ParseCase(
        rates.F29_97_DF, Fraction(8_999_991, 2500), 107_892, "01:00:00;00",
        "00:59:59.9964", 914_456_685_542_400, "6743+04", "3371+20", "5394+12",
    ),
    ParseCase(
        rates.F59_94_DF, Fraction(61_061, 60_000), 61, "00:00:01;01",
        "00:00:01.017683333", 258_507_849_600, "3+13", "1+29", "3+01",
    ),
    ParseCase(
        rates.F59_94_DF, Fraction(21_021, 20_000), 63, "00:00:01;03",
        "00:00:01.05105", 266_983_516_800, "3+15", "1+31", "3+03",
    ),
    ParseCase(
        rates.F59_94_DF, Fraction(3003, 50), 3600, "00:01:00;04", "00:01:00.06",
        15_256_200_960_000, "225+00", "112+16", "180+00",
    ),
]

ALL_CASES = PARSE_CASES + [_negative(case) for case in PARSE_CASES]


def _case_id(case: ParseCase) -> str:
    return f"{case.timecode} {case.rate}"


@pytest.mark.parametrize("case", ALL_CASES, ids=_case_id)
class TestParseTable:
    def _check(self, stamp: FrameStamp, case: ParseCase):
        assert stamp.seconds == case.seconds
        assert stamp.rate == case.rate

    def test_from_frames(self, case):
        self._check(FrameStamp.with_frames(case.frames, case.rate), case)

    def test_from_timecode(self, case):
        self._check(FrameStamp.with_frames(case.timecode, case.rate), case)

    def test_from_feet_and_frames(self, case):
        self._check(FrameStamp.with_frames(case.feet_and_frames_35mm_4perf, case.rate), case)

        two_perf = FeetAndFrames.from_string(
            case.feet_and_frames_35mm_2perf, FilmFormat.FF35MM_2PERF
        )
        self._check(FrameStamp.with_frames(two_perf, case.rate), case)

        sixteen = FeetAndFrames.from_string(case.feet_and_frames_16mm, FilmFormat.FF16MM)
        self._check(FrameStamp.with_frames(sixteen, case.rate), case)

    def test_from_seconds(self, case):
        self._check(FrameStamp.with_seconds(case.seconds, case.rate), case)

    def test_from_runtime(self, case):
        self._check(FrameStamp.with_seconds(case.runtime, case.rate), case)

    def test_from_ticks(self, case):
        self._check(FrameStamp.with_seconds(PremiereTicks(case.ticks), case.rate), case)

    def test_renderers(self, case):
        stamp = FrameStamp(case.seconds, case.rate)
        assert stamp.frames() == case.frames
        assert stamp.smpte_timecode() == case.timecode
        assert stamp.runtime() == case.runtime
        assert stamp.premiere_ticks() == case.ticks
        assert str(stamp.feet_and_frames()) == case.feet_and_frames_35mm_4perf
        assert str(stamp.feet_and_frames(FilmFormat.FF35MM_2PERF)) == case.feet_and_frames_35mm_2perf
        assert str(stamp.feet_and_frames("ff16mm")) == case.feet_and_frames_16mm


class TestFloatSeconds:
    @pytest.mark.parametrize(
        "seconds, rate, timecode",
        [
            (3603.6, rates.F23_98, "01:00:00:00"),
            (60.06, rates.F29_97_DF, "00:01:00;02"),
            (599.9994, rates.F29_97_DF, "00:10:00;00"),
        ],
    )
    def test_float(self, seconds, rate, timecode):
        assert FrameStamp.with_seconds(seconds, rate).smpte_timecode() == timecode


class TestDropFrameRoundTrip:
    @pytest.mark.parametrize(
        "timecode, rate",
        [
            ("23:58:34;10", rates.F29_97_DF),
            ("23:58:33;46", rates.F59_94_DF),
            ("23:58:36;11", FrameRate(Fraction(90_000, 1001), "drop")),
            ("23:58:33;75", FrameRate(Fraction(90_000, 1001), "drop")),
        ],
    )
    def test_round_trip(self, timecode, rate):
        assert FrameStamp.with_frames(timecode, rate).smpte_timecode() == timecode

    @pytest.mark.parametrize("rate", [rates.F29_97_DF, rates.F59_94_DF])
    def test_frame_counts_survive_timecode(self, rate):
        for frames in range(0, 12 * 60 * 60, 7):
            timecode = FrameStamp.with_frames(frames, rate).smpte_timecode()
            assert FrameStamp.with_frames(timecode, rate).frames() == frames

    @pytest.mark.parametrize("rate", [rates.F29_97_DF, rates.F59_94_DF])
    def test_maximum(self, rate):
        stamp = FrameStamp.with_frames(max_frames(rate), rate)
        assert stamp.smpte_timecode() == "24:00:00;00"

        with pytest.raises(FrameStampParseError) as error:
            FrameStamp.with_frames(max_frames(rate) + 1, rate)
        assert error.value.reason is Reason.DROP_FRAME_MAXIMUM_EXCEEDED

        with pytest.raises(FrameStampParseError):
            FrameStamp.with_frames(-max_frames(rate) - 1, rate)

    def test_skipped_frame_rejected(self):
        with pytest.raises(FrameStampParseError) as error:
            FrameStamp.with_frames("00:01:00;01", rates.F29_97_DF)
        assert error.value.reason is Reason.BAD_DROP_FRAMES

    @pytest.mark.parametrize(
        "timecode, frames",
        [("00:01:01;00", 1828), ("00:01:01;01", 1829), ("00:10:00;00", 17_982)],
    )
    def test_low_frames_allowed_after_first_second(self, timecode, frames):
        stamp = FrameStamp.with_frames(timecode, rates.F29_97_DF)
        assert stamp.frames() == frames
        assert stamp.smpte_timecode() == timecode

    def test_mid_minute_timecode(self):
        # (8 * 60 + 20) * 30 + 18 = 15018 non-drop frames, less 2 skipped
        # values for each of the 8 minutes that are not a tenth minute.
        stamp = FrameStamp.with_frames("00:08:20;18", rates.F29_97_DF)
        assert stamp.frames() == 15_002
        assert stamp.smpte_timecode() == "00:08:20;18"
        assert FrameStamp.with_frames(15_000, rates.F29_97_DF).smpte_timecode() == "00:08:20;16"


class TestLenientTimecode:
    @pytest.mark.parametrize(
        "timecode, expected",
        [
            ("00:59:59:24", "01:00:00:00"),
            ("00:00:62:04", "00:01:02:04"),
            ("00:62:62:04", "01:03:02:04"),
            ("123:00:00:00", "123:00:00:00"),
            ("01:00:00:48", "01:00:02:00"),
            ("3:04", "00:00:03:04"),
            ("4", "00:00:00:04"),
            ("1:02:03", "00:01:02:03"),
        ],
    )
    def test_normalized(self, timecode, expected):
        assert FrameStamp.with_frames(timecode, rates.F23_98).smpte_timecode() == expected

    @pytest.mark.parametrize(
        "runtime, expected",
        [("3.5", "00:00:03.5"), ("1:03.5", "00:01:03.5")],
    )
    def test_partial_runtime(self, runtime, expected):
        assert FrameStamp.with_seconds(runtime, rates.F24).runtime() == expected


class TestParseErrors:
    def test_unrecognized_frames(self):
        with pytest.raises(FrameStampParseError, match="string format not recognized"):
            FrameStamp.with_frames("notatimecode", rates.F23_98)

    def test_unrecognized_seconds(self):
        with pytest.raises(FrameStampParseError, match="string format not recognized"):
            FrameStamp.with_seconds("notatimecode", rates.F23_98)

    def test_partial_frame(self):
        with pytest.raises(FrameStampParseError) as error:
            FrameStamp.with_seconds(Fraction(239, 240), rates.F24, round=Round.OFF)
        assert error.value.reason is Reason.PARTIAL_FRAME

    def test_partial_frame_constructor(self):
        with pytest.raises(FrameStampParseError):
            FrameStamp(Fraction(1, 48), rates.F24)

    def test_rate_type(self):
        with pytest.raises(TypeError):
            FrameStamp(0, 24)

    def test_on_frame_with_round_off(self):
        stamp = FrameStamp.with_seconds(Fraction(1, 2), rates.F24, round="off")
        assert stamp.frames() == 12


class TestSecondsRounding:
    @pytest.mark.parametrize(
        "seconds, mode, expected",
        [
            (Fraction(239, 240), Round.CLOSEST, Fraction(1)),
            (Fraction(-239, 240), Round.CLOSEST, Fraction(-1)),
            (Fraction(234, 240), Round.CLOSEST, Fraction(23, 24)),
            (Fraction(-234, 240), Round.CLOSEST, Fraction(-23, 24)),
            (Fraction(239, 240), Round.FLOOR, Fraction(23, 24)),
            (Fraction(-231, 240), Round.FLOOR, Fraction(-1)),
            (Fraction(231, 240), Round.CEIL, Fraction(1)),
            (Fraction(-239, 240), Round.CEIL, Fraction(-23, 24)),
            (Fraction(239, 240), Round.TRUNC, Fraction(23, 24)),
            (Fraction(-239, 240), Round.TRUNC, Fraction(-23, 24)),
        ],
    )
    def test_round(self, seconds, mode, expected):
        assert FrameStamp.with_seconds(seconds, rates.F24, round=mode).seconds == expected

    @pytest.mark.parametrize(
        "ticks, mode, expected",
        [
            (5_292_000_000, Round.CLOSEST, Fraction(1, 24)),
            (-5_292_000_000, Round.CLOSEST, Fraction(-1, 24)),
            (5_291_999_999, Round.CLOSEST, Fraction(0)),
            (-5_291_999_999, Round.CLOSEST, Fraction(0)),
            (2_646_000_000, Round.CEIL, Fraction(1, 24)),
            (-2_646_000_000, Round.CEIL, Fraction(0)),
            (10_583_999_999, Round.FLOOR, Fraction(0)),
            (-10_583_999_999, Round.FLOOR, Fraction(-1, 24)),
        ],
    )
    def test_round_ticks(self, ticks, mode, expected):
        stamp = FrameStamp.with_seconds(PremiereTicks(ticks), rates.F24, round=mode)
        assert stamp.seconds == expected

    @pytest.mark.parametrize(
        "seconds, expected",
        [(3, 3), (-3, -3), (2, 3), (-2, -3), (1, 0), (-1, 0), (0, 0)],
    )
    def test_slow_rate(self, seconds, expected):
        rate = FrameRate(Fraction(1, 3), None, coerce_timebases=False)
        assert FrameStamp.with_seconds(seconds, rate).seconds == expected


class TestMidnight:
    @pytest.mark.parametrize(
        "rate, expected",
        [
            (rates.F23_98, Fraction(432_432, 5)),
            (rates.F29_97_NDF, Fraction(432_432, 5)),
            (rates.F47_95, Fraction(432_432, 5)),
            (rates.F59_94_NDF, Fraction(432_432, 5)),
            (rates.F29_97_DF, Fraction(53_999_946, 625)),
            (rates.F59_94_DF, Fraction(53_999_946, 625)),
            (rates.F24, Fraction(86_400)),
            (rates.F30, Fraction(86_400)),
            (rates.F48, Fraction(86_400)),
            (rates.F60, Fraction(86_400)),
        ],
    )
    def test_midnight(self, rate, expected):
        assert FrameStamp.smpte_midnight(rate).seconds == expected

    def test_non_smpte_rate(self):
        with pytest.raises(InvalidSMPTERateError):
            FrameStamp.smpte_midnight(FrameRate(Fraction(24_000, 1001), None))


class TestRecord:
    def test_to_record(self, tc):
        assert tc("01:00:00:00").to_record() == (18018, 5, 24_000, 1001, "non_drop")

    def test_non_ntsc(self, tc):
        assert tc("01:00:00:00", rates.F24).to_record() == (3600, 1, 24, 1, None)

    @pytest.mark.parametrize("rate", [rates.F23_98, rates.F29_97_DF, rates.F24])
    def test_round_trip(self, tc, rate):
        stamp = tc("-01:02:03:04", rate)
        rebuilt = FrameStamp.from_record(stamp.to_record())
        assert rebuilt == stamp
        assert rebuilt.rate == rate


class TestFormatting:
    def test_str(self, tc):
        assert str(tc("01:00:00:00")) == "<01:00:00:00 <23.98 NTSC>>"
        assert str(tc("00:01:00;02", rates.F29_97_DF)) == "<00:01:00;02 <29.97 NTSC DF>>"

    def test_repr(self, tc):
        assert repr(tc("01:00:00:00")) == (
            "FrameStamp(Fraction(18018, 5), FrameRate(Fraction(24000, 1001),"
            " ntsc=Ntsc.NON_DROP, coerce_timebases=False))"
        )

    def test_runtime_precision(self, tc):
        stamp = tc("23:13:29:07")
        assert stamp.runtime(4) == "23:14:52.901"
        assert stamp.runtime(4, trim_zeros=False) == "23:14:52.9010"

    def test_feet_and_frames_fields(self, tc):
        length = tc("01:00:00:00").feet_and_frames()
        assert isinstance(length, FeetAndFrames)
        assert (length.feet, length.frames) == (5400, 0)
        assert length.film_format is FilmFormat.FF35MM_4PERF

        two_perf = FrameStamp.with_frames(1828, rates.F29_97_DF).feet_and_frames(
            FilmFormat.FF35MM_2PERF
        )
        assert (two_perf.feet, two_perf.frames) == (57, 4)
        assert str(two_perf) == "57+04"

    def test_rebuilt_rate_is_equal(self):
        assert FrameRate(24, Ntsc.NON_DROP) == rates.F23_98


class TestFrameStampBuilder:
    def test_call_uses_with_frames(self):
        build = FrameStampBuilder(rate=rates.F23_98, round="floor")
        assert build("01:00:00:00").seconds == Fraction(18018, 5)

    def test_with_seconds_uses_round(self):
        build = FrameStampBuilder(rate=rates.F24, round="floor")
        assert build.with_seconds(Fraction(239, 240)).seconds == Fraction(23, 24)

    def test_keyword_overrides_default(self):
        build = FrameStampBuilder(rate=rates.F24, round="floor")
        stamp = build.with_seconds(Fraction(239, 240), round="ceil")
        assert stamp.seconds == 1

    def test_rate_override(self):
        build = FrameStampBuilder(rate=rates.F24)
        assert build("01:00:00;00", rate=rates.F29_97_DF).frames() == 107_892
