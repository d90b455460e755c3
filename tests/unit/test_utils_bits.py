import pytest
from src.hack_toolchain.utils import is_unsigned_nbit, to_bin, from_bin, MAX_ADDRESS

def test_to_bin():
    assert to_bin(5, 15) == "000000000000101"
    assert to_bin(MAX_ADDRESS, 15) == "1" * 15

def test_to_bin_rejects_overflow():
    with pytest.raises(ValueError):
        to_bin(1 << 15, 15)

def test_from_bin():
    assert from_bin("0000000000010000") == 16
    with pytest.raises(ValueError):
        from_bin("01x")
    with pytest.raises(ValueError):
        from_bin("")

def test_nbit_checks():
    assert is_unsigned_nbit(32767, 15)
    assert not is_unsigned_nbit(32768, 15)
    assert not is_unsigned_nbit(-1, 15)
