from apicula.extract import (
    FileNameAllocator,
    empty_file_name,
    file_extension,
    find_next_compression_start_byte,
    find_next_stamp,
    report_line,
)


def test_find_next_stamp_finds_each_kind():
    for stamp in (b"BMD0", b"BTX0", b"BCA0", b"BTP0", b"BTA0"):
        data = b"xx" + stamp + b"yy"
        assert find_next_stamp(data) == 2


def test_find_next_stamp_rejects_other_stamps():
    assert find_next_stamp(b"BXX0 BMD1 BMD") is None


def test_find_next_stamp_respects_start():
    data = b"BMD0....BTX0"
    assert find_next_stamp(data, 0) == 0
    assert find_next_stamp(data, 1) == 8
    assert find_next_stamp(data, 9) is None


def test_find_next_compression_start_byte():
    data = bytes([0x00, 0x11, 0x05, 0x10])
    assert find_next_compression_start_byte(data) == 1
    assert find_next_compression_start_byte(data, 2) == 3
    assert find_next_compression_start_byte(bytes([1, 2, 3])) is None


def test_file_extension():
    assert file_extension(b"BMD0") == "nsbmd"
    assert file_extension(b"BTA0") == "nsbta"
    assert file_extension(b"ZZZ0") == "nsbxx"


def test_empty_file_name():
    assert empty_file_name(b"BTX0") == "empty_texture_file"
    assert empty_file_name(b"QQQ0") == "empty_unknown_file"


def test_report_line_pluralises():
    line = report_line({b"BMD0": 1, b"BTX0": 2})
    assert line == "Found 1 BMD, 2 BTXs, 0 BCAs, 0 BTPs, 0 BTAs."


def test_allocator_adds_counter_on_clash():
    alloc = FileNameAllocator()
    first = alloc.allocate("model", "nsbmd")
    second = alloc.allocate("model", "nsbmd")
    third = alloc.allocate("model", "nsbmd")
    assert first == "model.nsbmd"
    assert second == "model.001.nsbmd"
    assert third == "model.002.nsbmd"


def test_allocator_names_are_unique():
    alloc = FileNameAllocator()
    names = [alloc.allocate("a", "nsbtx") for _ in range(20)]
    names += [alloc.allocate("a", "nsbca") for _ in range(3)]
    assert len(set(names)) == len(names)