# tests/arch/chip8/test_chip8_alu.py
"""
レジスタ転送・算術論理演算命令（6xkk, 7xkk, 8xy*, Cxkk）の検証。
"""
import random
import unittest

from chip8_tracer.transport.bus import Bus, RAM
from chip8_tracer.arch.chip8.cpu import Chip8Cpu

class TestChip8AluInstructions(unittest.TestCase):
    def setUp(self):
        self.bus = Bus()
        self.bus.register_device(0x000, 0xFFF, RAM(0x1000))
        self.cpu = Chip8Cpu(self.bus, rng=random.Random(1234))
        self.state = self.cpu.get_state()

    def _execute(self, *words):
        for offset, word in enumerate(words):
            self.bus.load(0x200 + offset * 2, word >> 8)
            self.bus.load(0x201 + offset * 2, word & 0xFF)
        self.state.pc = 0x200
        for _ in words:
            self.cpu.step()

    def test_ld_vx_byte_all_registers(self):
        for x in range(16):
            for kk in (0x00, 0x7F, 0xFF):
                self._execute(0x6000 | (x << 8) | kk)
                self.assertEqual(self.state.v[x], kk)

    def test_add_vx_byte_wraps_without_flag(self):
        self.state.v[1] = 0xFF
        self.state.v[0xF] = 0x55
        self._execute(0x7101)
        self.assertEqual(self.state.v[1], 0x00)
        self.assertEqual(self.state.v[0xF], 0x55)

    def test_ld_or_and_xor(self):
        self.state.v[0] = 0b1100
        self.state.v[1] = 0b1010
        self._execute(0x8011)
        self.assertEqual(self.state.v[0], 0b1110)
        self.state.v[0] = 0b1100
        self._execute(0x8012)
        self.assertEqual(self.state.v[0], 0b1000)
        self.state.v[0] = 0b1100
        self._execute(0x8013)
        self.assertEqual(self.state.v[0], 0b0110)
        self._execute(0x8010)
        self.assertEqual(self.state.v[0], 0b1010)

    def test_add_vx_vy_overflow_sets_carry(self):
        self.state.v[0] = 255
        self.state.v[1] = 1
        self._execute(0x8014)
        self.assertEqual(self.state.v[0], 0)
        self.assertEqual(self.state.v[0xF], 1)

    def test_add_vx_vy_no_overflow_clears_carry(self):
        self.state.v[0] = 10
        self.state.v[1] = 20
        self.state.v[0xF] = 1
        self._execute(0x8014)
        self.assertEqual(self.state.v[0], 30)
        self.assertEqual(self.state.v[0xF], 0)

    def test_add_into_vf_leaves_flag(self):
        self.state.v[0xF] = 200
        self.state.v[1] = 100
        self._execute(0x8F14)
        self.assertEqual(self.state.v[0xF], 1)

    def test_sub_vx_vy_wraps_and_reports_borrow(self):
        self.state.v[0] = 0x10
        self.state.v[1] = 0x20
        self._execute(0x8015)
        self.assertEqual(self.state.v[0], 0xF0)
        self.assertEqual(self.state.v[0xF], 0)

    def test_sub_vx_vy_without_borrow(self):
        self.state.v[0] = 0x20
        self.state.v[1] = 0x10
        self._execute(0x8015)
        self.assertEqual(self.state.v[0], 0x10)
        self.assertEqual(self.state.v[0xF], 1)

    def test_sub_equal_values_flag_is_zero(self):
        self.state.v[0] = 0x33
        self.state.v[1] = 0x33
        self._execute(0x8015)
        self.assertEqual(self.state.v[0], 0)
        self.assertEqual(self.state.v[0xF], 0)

    def test_shr_moves_lsb_into_flag(self):
        self.state.v[2] = 0x05
        self._execute(0x8206)
        self.assertEqual(self.state.v[2], 0x02)
        self.assertEqual(self.state.v[0xF], 1)

    def test_subn(self):
        self.state.v[0] = 0x10
        self.state.v[1] = 0x30
        self._execute(0x8017)
        self.assertEqual(self.state.v[0], 0x20)
        self.assertEqual(self.state.v[0xF], 1)

        self.state.v[0] = 0x30
        self.state.v[1] = 0x10
        self._execute(0x8017)
        self.assertEqual(self.state.v[0], 0xE0)
        self.assertEqual(self.state.v[0xF], 0)

    def test_shl_moves_msb_into_flag(self):
        self.state.v[0] = 0x81
        self._execute(0x800E)
        self.assertEqual(self.state.v[0], 0x02)
        self.assertEqual(self.state.v[0xF], 1)

        self.state.v[0] = 0x40
        self._execute(0x800E)
        self.assertEqual(self.state.v[0], 0x80)
        self.assertEqual(self.state.v[0xF], 0)

    # x == F: VFへフラグを書いた後、その値を使って結果を求め、VFは結果で終わる。
    def test_sub_into_vf_ends_with_result(self):
        self.state.v[0xF] = 0x30
        self.state.v[1] = 0x10
        self._execute(0x8F15)
        self.assertEqual(self.state.v[0xF], 0xF1)  # flag=1, 1 - 0x10

    def test_shr_into_vf_ends_with_result(self):
        self.state.v[0xF] = 0x03
        self._execute(0x8F06)
        self.assertEqual(self.state.v[0xF], 0x00)  # flag=1, 1 >> 1

    def test_subn_into_vf_ends_with_result(self):
        self.state.v[0xF] = 0x10
        self.state.v[1] = 0x30
        self._execute(0x8F17)
        self.assertEqual(self.state.v[0xF], 0x2F)  # flag=1, 0x30 - 1

    def test_shl_into_vf_ends_with_result(self):
        self.state.v[0xF] = 0x81
        self._execute(0x8F0E)
        self.assertEqual(self.state.v[0xF], 0x02)  # flag=1, 1 << 1

    def test_rnd_masks_random_byte(self):
        expected = random.Random(1234).randrange(0x100) & 0x0F
        self._execute(0xC30F)
        self.assertEqual(self.state.v[3], expected)

    def test_rnd_with_zero_mask(self):
        self.state.v[3] = 0xAA
        self._execute(0xC300)
        self.assertEqual(self.state.v[3], 0)

if __name__ == '__main__':
    unittest.main()
