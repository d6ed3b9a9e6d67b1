import unittest
from chip8_tracer.transport.bus import Bus, RAM
from chip8_tracer.core.errors import OutOfBoundsAccessError

class TestBusAbnormal(unittest.TestCase):
    def setUp(self):
        self.bus = Bus()
        self.bus.register_device(0x000, 0xFFF, RAM(0x1000)) # 4KB RAM

    def test_read_out_of_bounds(self):
        with self.assertRaises(OutOfBoundsAccessError):
            self.bus.read(0x1000)
        with self.assertRaises(IndexError):
            self.bus.peek(-1)

    def test_write_out_of_bounds(self):
        with self.assertRaises(OutOfBoundsAccessError):
            self.bus.write(0x2000, 0xFF)
        self.assertEqual(self.bus.get_and_clear_activity_log(), [])

    def test_ram_invalid_init(self):
        with self.assertRaises(ValueError):
            RAM(-1)
        with self.assertRaises(ValueError):
            RAM(0)

    def test_register_device_invalid_range(self):
        # Start > End
        with self.assertRaises(ValueError):
            self.bus.register_device(0x2000, 0x1000, RAM(0x100))

        # Negative address
        with self.assertRaises(ValueError):
            self.bus.register_device(-1, 0x100, RAM(0x100))

    def test_register_device_size_mismatch(self):
        with self.assertRaises(ValueError):
            self.bus.register_device(0x1000, 0x10FF, RAM(0x200))

if __name__ == '__main__':
    unittest.main()
