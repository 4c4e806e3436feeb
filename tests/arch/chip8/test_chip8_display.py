import unittest

from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.arch.chip8.instructions import decode_opcode, execute_instruction
from chip8_tracer.core.errors import MemoryAccessError


class TestChip8DisplayInstructions(unittest.TestCase):
    def setUp(self):
        self.cpu = Chip8Cpu()
        self.state = self.cpu.get_state()
        self.io = self.cpu._io
        self.fb = self.cpu.framebuffer

    def _execute(self, opcode, current_pc=0x200):
        self.state.pc = current_pc
        op = decode_opcode(opcode, current_pc)
        self.state.pc = (self.state.pc + op.length) & 0xFFFF
        return execute_instruction(op, self.state, self.io)

    def _sprite(self, data, addr=0x300):
        self.state.memory[addr:addr + len(data)] = bytes(data)
        self.state.i = addr

    def test_draw_twice_clears_and_sets_collision(self):
        self._sprite([0b11110000, 0b10010000])
        self.state.v[1] = 10
        self.state.v[2] = 5
        desc = self._execute(0xD122)
        self.assertEqual(self.state.v[0xF], 0)
        self.assertEqual(self.fb.lit_count(), 6)
        self.assertEqual(self.fb.pixel(10, 5), 1)
        self.assertEqual(self.fb.pixel(13, 5), 1)
        self.assertEqual(self.fb.pixel(11, 6), 0)
        self.assertEqual(desc, "Drawing sprite at 10, 5 with height 2")

        self._execute(0xD122)
        self.assertEqual(self.state.v[0xF], 1)
        self.assertEqual(self.fb.lit_count(), 0)

    def test_draw_wraps_toroidally(self):
        self._sprite([0xFF, 0xFF])
        self.state.v[1] = 63
        self.state.v[2] = 31
        self._execute(0xD122)
        # 列は 63, 0..6、行は 31, 0
        for y in (31, 0):
            self.assertEqual(self.fb.pixel(63, y), 1)
            for x in range(7):
                self.assertEqual(self.fb.pixel(x, y), 1)
            self.assertEqual(self.fb.pixel(7, y), 0)
        self.assertEqual(self.fb.lit_count(), 16)

    def test_partial_overlap_sets_collision(self):
        self._sprite([0b10000000])
        self.state.v[1] = 0
        self.state.v[2] = 0
        self._execute(0xD121)
        self._sprite([0b11000000], addr=0x310)
        self._execute(0xD121)
        self.assertEqual(self.state.v[0xF], 1)
        self.assertEqual(self.fb.pixel(0, 0), 0)
        self.assertEqual(self.fb.pixel(1, 0), 1)

    def test_vf_as_coordinate_is_read_before_flag_reset(self):
        self._sprite([0b10000000])
        self.state.v[0xF] = 4
        self.state.v[1] = 2
        self._execute(0xDF11)
        self.assertEqual(self.fb.pixel(4, 2), 1)
        self.assertEqual(self.state.v[0xF], 0)

    def test_cls(self):
        self._sprite([0xFF])
        self._execute(0xD011)
        self.assertGreater(self.fb.lit_count(), 0)
        desc = self._execute(0x00E0)
        self.assertEqual(self.fb.lit_count(), 0)
        self.assertEqual(desc, "Clearing screen")

    def test_sprite_out_of_bounds_leaves_framebuffer_untouched(self):
        self.state.i = 0xFFE
        self.state.memory[0xFFE] = 0xFF
        with self.assertRaises(MemoryAccessError):
            self._execute(0xD014)
        self.assertEqual(self.fb.lit_count(), 0)


if __name__ == '__main__':
    unittest.main()
