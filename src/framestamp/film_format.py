"""Film gauges and their perforation geometry."""

from __future__ import annotations

import enum


#%%
class FilmFormat(str, enum.Enum):
    """Physical film formats used to count feet+frames.

    35mm formats have 64 perforations per foot. 16mm has 40 perforations per
    physical foot, but editorial counts it in logical feet of 20 frames, as
    Avid does.
    """

    FF35MM_4PERF = "ff35mm_4perf"
    FF35MM_2PERF = "ff35mm_2perf"
    FF16MM = "ff16mm"

    def perfs_per_frame(self) -> int:
        return _PERFS_PER_FRAME[self]

    def perfs_per_foot(self, physical: bool = False) -> int:
        """Return the number of perforations in a foot of this format.

        Args:
            physical (bool): For 16mm, return the perforations of a physical
                foot of film instead of the logical editorial foot.

        Returns:
            int: The perforations per foot.
        """
        if self is FilmFormat.FF16MM:
            return 40 if physical else 20
        return 64

    def frames_per_foot(self, physical: bool = False) -> int:
        """Return how many frames make up a foot of this format.

        Returns:
            int: 16 for 35mm 4-perf, 32 for 35mm 2-perf, 20 for 16mm (40 when
                ``physical`` is True).
        """
        return self.perfs_per_foot(physical) // self.perfs_per_frame()
####


_PERFS_PER_FRAME = {
    FilmFormat.FF35MM_4PERF: 4,
    FilmFormat.FF35MM_2PERF: 2,
    FilmFormat.FF16MM: 1,
}
