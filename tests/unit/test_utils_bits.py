import pytest
from hack_toolchain.utils import (
    u16, sign_extend, is_unsigned_nbit, is_address, to_bin16, from_bin16, split_bits,
)

def test_split_bits():
    x = 0b1101_0010
    # fields: [7:5]=110, [3:1]=001
    assert split_bits(x, ((7,5),(3,1))) == (6, 1)

def test_u16_and_formats():
    assert u16(-1) == 0xFFFF
    assert to_bin16(1) == "0"*15 + "1"
    assert to_bin16(-1) == "1"*16
    assert from_bin16("1110110000010000") == 0xEC10

def test_from_bin16_rejects_bad_words():
    with pytest.raises(ValueError):
        from_bin16("0101")
    with pytest.raises(ValueError):
        from_bin16("01010101010101012")

def test_sign_extend():
    assert sign_extend(0xFFFF, 16) == -1
    assert sign_extend(0x7FFF, 16) == 32767

def test_nbit_checks():
    assert is_unsigned_nbit(32767, 15)
    assert not is_unsigned_nbit(32768, 15)
    assert is_address(0)
    assert not is_address(-1)
    assert not is_address(1 << 15)
