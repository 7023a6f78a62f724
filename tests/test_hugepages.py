import pytest

from syslab.hugepages import (
    HugepageError,
    default_hugepage_size,
    free_hugepages,
    hugepage_dir,
    parse_sysfs_value,
    str_to_size,
    strsplit,
)


def test_str_to_size_suffixes_scale_by_1024():
    assert str_to_size("2M") == str_to_size("2048K")
    assert str_to_size("1G") == str_to_size("1024M")
    assert str_to_size("2048 kB") == str_to_size("2m")


def test_str_to_size_plain_and_bases():
    assert str_to_size("  7") == 7
    assert str_to_size("0x10") == str_to_size("16")
    assert str_to_size("010") == str_to_size("8")


def test_str_to_size_rejects_negative_and_garbage():
    assert str_to_size("-5") == 0
    assert str_to_size("  -1G") == 0
    assert str_to_size("abc") == 0
    assert str_to_size("99999999999999999999999") == 0


def test_str_to_size_only_one_space_gap():
    assert str_to_size("3  K") == 3


def test_strsplit_mount_line_keeps_rest_in_last_token():
    line = "hugetlbfs /mnt/huge hugetlbfs rw,relatime,pagesize=2M 0 0"
    assert strsplit(line, 4, " ") == [
        "hugetlbfs",
        "/mnt/huge",
        "hugetlbfs",
        "rw,relatime,pagesize=2M 0 0",
    ]


def test_strsplit_collapses_delimiters_and_stops_at_nul():
    assert strsplit("  a  b", 4, " ") == ["a", "b"]
    assert strsplit("a\0b", 4, " ") == ["a"]
    assert strsplit("a b", 0, " ") == []


def test_parse_sysfs_value(tmp_path):
    p = tmp_path / "v"
    p.write_text("42\n")
    assert parse_sysfs_value(p) == 42
    p.write_text("0x1f\n")
    assert parse_sysfs_value(p) == 0x1F


@pytest.mark.parametrize("content", ["42", "abc\n", ""])
def test_parse_sysfs_value_errors(tmp_path, content):
    p = tmp_path / "v"
    p.write_text(content)
    with pytest.raises(HugepageError):
        parse_sysfs_value(p)


def test_parse_sysfs_value_missing_file(tmp_path):
    with pytest.raises(HugepageError):
        parse_sysfs_value(tmp_path / "missing")


@pytest.fixture
def meminfo(tmp_path):
    p = tmp_path / "meminfo"
    p.write_text("MemTotal:  1000 kB\nHugepagesize:       2048 kB\nOther: 1\n")
    return p


def test_default_hugepage_size(meminfo):
    assert default_hugepage_size(meminfo) == str_to_size("2048 kB")


def test_default_hugepage_size_missing_entry(tmp_path):
    p = tmp_path / "meminfo"
    p.write_text("MemTotal:  1000 kB\n")
    with pytest.raises(HugepageError):
        default_hugepage_size(p)


def test_hugepage_dir_explicit_and_default(tmp_path, meminfo):
    mounts = tmp_path / "mounts"
    mounts.write_text(
        "proc /proc proc rw 0 0\n"
        "hugetlbfs /mnt/big hugetlbfs rw,pagesize=1G 0 0\n"
        "hugetlbfs /mnt/plain hugetlbfs rw,relatime 0 0\n"
    )
    assert hugepage_dir(str_to_size("1G"), mounts, meminfo) == "/mnt/big"
    assert hugepage_dir(str_to_size("2M"), mounts, meminfo) == "/mnt/plain"
    assert hugepage_dir(str_to_size("16M"), mounts, meminfo) is None


def test_hugepage_dir_bad_line(tmp_path, meminfo):
    mounts = tmp_path / "mounts"
    mounts.write_text("short line\n")
    with pytest.raises(HugepageError):
        hugepage_dir(str_to_size("2M"), mounts, meminfo)


def _sysfs(tmp_path, free, resv):
    d = tmp_path / "hugepages-2048kB"
    d.mkdir()
    (d / "free_hugepages").write_text(f"{free}\n")
    (d / "resv_hugepages").write_text(f"{resv}\n")
    return tmp_path


def test_free_hugepages_subtracts_reserved(tmp_path):
    root = _sysfs(tmp_path, 10, 2)
    assert free_hugepages("hugepages-2048kB", root) == 8


def test_free_hugepages_reserved_exceeds_free(tmp_path):
    root = _sysfs(tmp_path, 1, 5)
    assert free_hugepages("hugepages-2048kB", root) == 0


def test_free_hugepages_capped(tmp_path):
    root = _sysfs(tmp_path, 1 << 40, 0)
    assert free_hugepages("hugepages-2048kB", root) == 0xFFFFFFFF


def test_free_hugepages_missing(tmp_path):
    assert free_hugepages("nothing", tmp_path) == 0