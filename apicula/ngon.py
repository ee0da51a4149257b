"""Triangulation of tri/quad index lists for FB_ngon_encoding."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

_NO_INDEX = 0xFFFF


def _faces(indices: Sequence[int]) -> Iterator[tuple[int, ...]]:
    it = iter(indices)
    return zip(it, it, it, it)


def encode_ngons(
    indices: Sequence[int], index_ranges: Sequence[range]
) -> tuple[list[int], list[range]]:
    """Triangulate faces so that FB_ngon_encoding can rebuild the quads.

    ``indices`` holds faces in groups of four, with 0xffff as the fourth
    index of a triangle. Returns the triangle indices and, for each input
    range, the range of the new list that holds its triangles.
    """
    tris: list[int] = []
    new_ranges: list[range] = []
    for index_range in index_ranges:
        start = len(tris)
        last_face_index = _NO_INDEX
        for a, b, c, d in _faces(indices[index_range.start:index_range.stop]):
            # Never start two consecutive faces at the same index.
            if last_face_index != a:
                last_face_index = a
                tris.extend((a, b, c))
                if d != _NO_INDEX:
                    tris.extend((a, c, d))
            else:
                last_face_index = c
                tris.extend((c, a, b))
                if d != _NO_INDEX:
                    tris.extend((c, d, a))
        new_ranges.append(range(start, len(tris)))
    return tris, new_ranges