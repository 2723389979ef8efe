import errno

import pytest

from aeslab import cli
from aeslab.config import load_settings


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    monkeypatch.delenv("AESLAB_DEFAULT_MODE", raising=False)
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


@pytest.fixture
def files(tmp_path):
    key = tmp_path / "key.bin"
    key.write_bytes(bytes(range(32)))
    plain = tmp_path / "plain.txt"
    plain.write_bytes(b"The quick brown fox jumps over the lazy dog.\n" * 20)
    return tmp_path, key, plain


@pytest.mark.parametrize("mode", ["cbc", "ecb"])
def test_encrypt_then_decrypt(files, mode):
    tmp_path, key, plain = files
    enc = tmp_path / "cipher.bin"
    dec = tmp_path / "roundtrip.txt"

    assert cli.main([str(plain), str(enc), "-k", str(key), "-e", "-m", mode]) == 0
    assert enc.read_bytes()[0] == (1 if mode == "cbc" else 0)
    assert cli.main([str(plain), str(enc), "-k", str(key), "-e", "-m", mode, "-f"]) == 0
    assert cli.main([str(enc), str(dec), "-k", str(key), "-d", "-v"]) == 0
    assert dec.read_bytes() == plain.read_bytes()


def test_default_mode_is_cbc(files):
    tmp_path, key, plain = files
    enc = tmp_path / "cipher.bin"
    assert cli.main([str(plain), str(enc), "-k", str(key), "-e"]) == 0
    assert enc.read_bytes()[0] == 1


def test_existing_output_needs_force(files):
    tmp_path, key, plain = files
    out = tmp_path / "exists.bin"
    out.write_bytes(b"keep me")
    assert cli.main([str(plain), str(out), "-k", str(key), "-e"]) == errno.EINVAL
    assert out.read_bytes() == b"keep me"


@pytest.mark.parametrize("argv_extra", [
    [],                 # neither -e nor -d
    ["-e", "-d"],       # both
    ["-e", "-m", "ctr"],
])
def test_argument_errors(files, argv_extra):
    tmp_path, key, plain = files
    argv = [str(plain), str(tmp_path / "o.bin"), "-k", str(key)] + argv_extra
    assert cli.main(argv) == errno.EINVAL
    assert not (tmp_path / "o.bin").exists()


def test_missing_key_argument(files):
    tmp_path, _key, plain = files
    assert cli.main([str(plain), str(tmp_path / "o.bin"), "-e"]) == errno.EINVAL


def test_missing_key_file(files):
    tmp_path, _key, plain = files
    argv = [str(plain), str(tmp_path / "o.bin"), "-k", str(tmp_path / "nope"), "-e"]
    assert cli.main(argv) == errno.EBADF


def test_missing_input_file(files):
    tmp_path, key, _plain = files
    argv = [str(tmp_path / "nope"), str(tmp_path / "o.bin"), "-k", str(key), "-e"]
    assert cli.main(argv) == errno.EBADF


@pytest.mark.parametrize("size,code", [
    (8, errno.EBADF),     # too short to read a key
    (20, errno.EINVAL),   # readable, but not an AES key size
    (40, errno.EINVAL),   # larger than AES-256
])
def test_bad_key_sizes(files, size, code):
    tmp_path, key, plain = files
    key.write_bytes(b"k" * size)
    assert cli.main([str(plain), str(tmp_path / "o.bin"), "-k", str(key), "-e"]) == code
    assert not (tmp_path / "o.bin").exists()


def test_malformed_ciphertext_leaves_no_output(files):
    tmp_path, key, _plain = files
    bad = tmp_path / "bad.bin"
    bad.write_bytes(b"\x00" + b"x" * 20)
    out = tmp_path / "o.txt"
    assert cli.main([str(bad), str(out), "-k", str(key), "-d"]) == errno.EINVAL
    assert not out.exists()
    assert [p.name for p in tmp_path.iterdir() if p.name.startswith(".o.txt")] == []


def test_self_test_flag(monkeypatch, capsys):
    monkeypatch.setenv("AESLAB_ROUNDTRIP_VECTORS", "1")
    monkeypatch.setenv("AESLAB_SAC_TRIALS", "1")
    load_settings.cache_clear()
    assert cli.main(["--test"]) == 0
    assert "Overall: PASS" in capsys.readouterr().out
