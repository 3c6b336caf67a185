import pytest
from riscv_mini_asm.utils import u32, sign_extend, fits_unsigned, fits_signed, bits, to_bin32, to_hex32

def test_bits():
    x = 0b1101_0010
    assert bits(x, 7, 5) == 0b110
    assert bits(x, 3, 1) == 0b001
    with pytest.raises(ValueError):
        bits(x, 1, 3)

def test_u32_and_formats():
    assert u32(-4) == 0xFFFFFFFC
    assert to_bin32(1) == "0" * 31 + "1"
    assert to_bin32(-1) == "1" * 32
    assert to_hex32(0x1234) == "0x00001234"
    assert to_hex32(0xFE208EE3, prefix=False) == "fe208ee3"

def test_sign_extend():
    assert sign_extend(0x1FFC, 13) == -4
    assert sign_extend(0x0FFE, 13) == 4094
    assert sign_extend(0x1000, 13) == -4096

def test_nbit_checks():
    assert fits_unsigned(4095, 12)
    assert not fits_unsigned(4096, 12)
    assert not fits_unsigned(-1, 12)
    assert fits_signed(4094, 13)
    assert fits_signed(-4096, 13)
    assert not fits_signed(4096, 13)
    assert not fits_signed(-4100, 13)
