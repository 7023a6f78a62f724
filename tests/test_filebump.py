from syslab.filebump import bump_file, main


def test_new_file_gets_greeting(tmp_path):
    path = tmp_path / "f.txt"
    previous, written = bump_file(path)
    assert previous == b""
    assert written == b"1:Hello, World!"
    assert path.read_bytes() == b"1:Hello, World!"


def test_digit_is_incremented(tmp_path):
    path = tmp_path / "f.txt"
    path.write_bytes(b"5abc")
    previous, written = bump_file(path)
    assert previous == b"5abc"
    assert path.read_bytes() == written == b"6abc"


def test_nine_and_non_digit_wrap_to_zero(tmp_path):
    path = tmp_path / "f.txt"
    path.write_bytes(b"9x")
    bump_file(path)
    assert path.read_bytes() == b"0x"
    path.write_bytes(b"zz")
    bump_file(path)
    assert path.read_bytes() == b"0z"


def test_only_first_49_bytes_read(tmp_path):
    path = tmp_path / "f.txt"
    original = b"3" + b"a" * 99
    path.write_bytes(original)
    previous, written = bump_file(path)
    assert len(previous) == 49
    content = path.read_bytes()
    assert len(content) == len(original)
    assert content[1:] == original[1:]
    assert content[:1] != original[:1]


def test_repeated_bumps_cycle(tmp_path):
    path = tmp_path / "f.txt"
    bump_file(path)
    firsts = []
    for _ in range(10):
        _, written = bump_file(path)
        firsts.append(written[:1])
    assert len(set(firsts)) == 10
    assert path.read_bytes()[1:] == b":Hello, World!"


def test_main_return_codes_and_output(tmp_path, capsys):
    path = tmp_path / "example.txt"
    assert main([str(path)]) == 1
    assert "file write: 1:Hello, World!" in capsys.readouterr().out
    assert main([str(path)]) == 0
    assert "Read from file: 1:Hello, World!" in capsys.readouterr().out