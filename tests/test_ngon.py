from apicula.ngon import encode_ngons


def test_single_triangle():
    tris, ranges = encode_ngons([0, 1, 2, 0xFFFF], [range(0, 4)])
    assert tris == [0, 1, 2]
    assert ranges == [range(0, 3)]


def test_single_quad():
    tris, _ = encode_ngons([0, 1, 2, 3], [range(0, 4)])
    assert tris == [0, 1, 2, 0, 2, 3]


def test_consecutive_faces_do_not_share_first_index():
    indices = [0, 1, 2, 0xFFFF, 0, 2, 3, 0xFFFF]
    tris, _ = encode_ngons(indices, [range(0, 8)])
    assert tris[:3] == [0, 1, 2]
    assert tris[3:] == [3, 0, 2]
    assert tris[0] != tris[3]


def test_quad_after_shared_start():
    indices = [5, 6, 7, 8, 5, 8, 9, 10]
    tris, _ = encode_ngons(indices, [range(0, 8)])
    assert tris[6:] == [9, 5, 8, 9, 10, 5]


def test_ranges_cover_output_and_count():
    indices = [0, 1, 2, 0xFFFF, 3, 4, 5, 6, 7, 8, 9, 0xFFFF]
    tris, ranges = encode_ngons(indices, [range(0, 4), range(4, 12)])
    assert ranges[0].stop == ranges[1].start
    assert ranges[-1].stop == len(tris)
    # one tri, then one quad and one tri
    assert len(ranges[0]) == 3
    assert len(ranges[1]) == 6 + 3
    assert 0xFFFF not in tris


def test_triangles_use_only_face_vertices():
    indices = [10, 11, 12, 13]
    tris, _ = encode_ngons(indices, [range(0, 4)])
    assert set(tris) == {10, 11, 12, 13}