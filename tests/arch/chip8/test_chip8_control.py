# tests/arch/chip8/test_chip8_control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ、キー入力待ち）の検証。
"""
import unittest

from chip8_tracer.transport.bus import Bus, RAM
from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.core.errors import StackOverflowError, StackUnderflowError, MachineHaltedError

class TestChip8ControlInstructions(unittest.TestCase):
    def setUp(self):
        self.bus = Bus()
        self.bus.register_device(0x000, 0xFFF, RAM(0x1000))
        self.cpu = Chip8Cpu(self.bus)
        self.state = self.cpu.get_state()

    def _load(self, address, *words):
        for offset, word in enumerate(words):
            self.bus.load(address + offset * 2, word >> 8)
            self.bus.load(address + offset * 2 + 1, word & 0xFF)

    def test_jp_addr(self):
        self._load(0x200, 0x1234)
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x234)

    def test_call_then_ret_returns_after_call(self):
        self._load(0x200, 0x2206)
        self._load(0x206, 0x00EE)
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x206)
        self.assertEqual(self.state.sp, 1)
        self.assertEqual(self.state.stack[0], 0x202)
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x202)
        self.assertEqual(self.state.sp, 0)

    def test_se_vx_byte(self):
        self.state.v[1] = 0x42
        self._load(0x200, 0x3142)
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x204)

        self.cpu.reset()
        self.state = self.cpu.get_state()
        self.state.v[1] = 0x41
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x202)

    def test_sne_vx_byte(self):
        self.state.v[1] = 0x41
        self._load(0x200, 0x4142)
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x204)

    def test_se_and_sne_vx_vy(self):
        self.state.v[1] = 7
        self.state.v[2] = 7
        self._load(0x200, 0x5120, 0x0000, 0x9120)
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x204)
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x206)

        self.state.v[2] = 8
        self.state.pc = 0x204
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x208)

    def test_jp_v0_addr(self):
        self.state.v[0] = 4
        self._load(0x200, 0xB300)
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x304)

    def test_skp_and_sknp(self):
        self.state.v[3] = 0xA
        self._load(0x200, 0xE39E, 0x0000, 0xE3A1)
        self.cpu.set_keys([k == 0xA for k in range(16)])
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x204)
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x206)

        self.cpu.set_keys([False] * 16)
        self.state.pc = 0x204
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x208)

    def test_wait_for_key_repeats_until_pressed(self):
        self._load(0x200, 0xF50A)
        self.state.delay_timer = 10
        for _ in range(3):
            self.cpu.step()
            self.assertEqual(self.state.pc, 0x200)
            self.assertTrue(self.cpu.is_awaiting_key)
        # 待機中もタイマは進む
        self.assertEqual(self.state.delay_timer, 7)

        self.cpu.keypad.press_only([0x5, 0x9])
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x202)
        self.assertEqual(self.state.v[5], 0x9)  # 最後に一致したキー
        self.assertFalse(self.cpu.is_awaiting_key)

    def test_call_overflow_is_fatal(self):
        self._load(0x200, 0x2200)  # 自分自身を呼び続ける
        for _ in range(16):
            self.cpu.step()
        self.assertEqual(self.state.sp, 16)
        with self.assertRaises(StackOverflowError):
            self.cpu.step()
        self.assertIsInstance(self.cpu.fault, StackOverflowError)

    def test_ret_on_empty_stack_is_fatal(self):
        self._load(0x200, 0x00EE)
        with self.assertRaises(StackUnderflowError):
            self.cpu.step()

    def test_fault_latches_until_reset(self):
        self._load(0x200, 0x00EE)
        with self.assertRaises(StackUnderflowError):
            self.cpu.step()
        with self.assertRaises(MachineHaltedError):
            self.cpu.step()

        self._load(0x200, 0x1200)
        self.cpu.reset()
        self.assertIsNone(self.cpu.fault)
        self.cpu.step()
        self.assertEqual(self.cpu.get_state().pc, 0x200)

if __name__ == '__main__':
    unittest.main()
