import os
import sys
import time
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication

from chip8_tracer.config.models import EmulatorConfig
from chip8_tracer.core.snapshot import EmulatorStatus
from chip8_tracer.ui.app import build_arg_parser, main
from chip8_tracer.ui.main_window import MainWindow


class TestMainWindow(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def setUp(self):
        self.window = MainWindow(EmulatorConfig())

    def tearDown(self):
        self.window.close()
        self.window.debugger.stop(timeout=5)

    def _refresh_until(self, predicate, timeout=5.0):
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            self.window.refresh()
            if predicate():
                return True
            time.sleep(0.01)
        return False

    def test_idle_state(self):
        self.assertFalse(self.window.pause_action.isEnabled())
        self.assertFalse(self.window.stop_action.isEnabled())
        self.assertEqual(self.window.status_label.text(), "Idle")

    def test_run_displays_trace_and_registers(self):
        # 0x200: LD VA, 0x05 / 0x202: LD F, VA / 0x204: DRW V0, V0, 5 / 0x206: JP 0x206
        self.window.start(bytes([0x6A, 0x05, 0xFA, 0x29, 0xD0, 0x05, 0x12, 0x06]))
        self.assertTrue(self._refresh_until(lambda: len(self.window.trace_view.lines()) == 4))
        self.assertEqual(self.window.trace_view.lines()[-1], "0206: 1206 - Endless loop at 0x206")
        self.assertEqual(self.window.register_view.value_text("VA"), "0x05")
        self.assertTrue(self.window.pause_action.isEnabled())
        self.assertTrue(self._refresh_until(lambda: self.window.host.latest_frame() is not None
                                            and any(self.window.host.latest_frame())))

    def test_pause_action(self):
        self.window.start(bytes([0x12, 0x00]))
        self.window.pause_action.setChecked(True)
        self.assertTrue(self._refresh_until(lambda: self.window.status_label.text() == "Paused"))
        self.assertEqual(self.window.pause_action.text(), "Resume")
        self.window.pause_action.setChecked(False)
        self.assertTrue(self._refresh_until(lambda: self.window.status_label.text() == "Running"))

    def test_stop_action(self):
        self.window.start(bytes([0x12, 0x00]))
        self.window.stop_action.trigger()
        self.assertEqual(self.window.debugger.read_snapshot().status, EmulatorStatus.STOPPED)
        self.assertFalse(self.window.stop_action.isEnabled())


class TestApp(unittest.TestCase):
    def test_arg_parser(self):
        args = build_arg_parser().parse_args(["pong.ch8", "--paused", "--debug"])
        self.assertEqual(args.program, "pong.ch8")
        self.assertTrue(args.paused)
        self.assertTrue(args.debug)
        self.assertIsNone(args.config)

    def test_missing_program_returns_error(self):
        self.assertEqual(main(["/nonexistent/program.ch8"]), 1)


if __name__ == '__main__':
    unittest.main()
