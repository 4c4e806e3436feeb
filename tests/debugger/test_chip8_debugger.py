# tests/debugger/test_chip8_debugger.py
"""
chip8_tracer.debugger.debuggerモジュールの単体テスト。
実際のエミュレーションスレッドを起動し、制御面（開始、一時停止、停止、スナップショット）を検証します。
"""
import time

import pytest

from chip8_tracer.config.models import EmulatorConfig
from chip8_tracer.core.errors import HostInitError, ProgramLoadError
from chip8_tracer.core.snapshot import EmulatorStatus
from chip8_tracer.debugger.debugger import Debugger
from chip8_tracer.transport.host import QueueHost

# @intent:test_suite デバッガのライフサイクル管理とスレッド間の公開レコードを検証します。

# 0x200: ADD V0, 1 / 0x202: JP 0x200
COUNTER_PROGRAM = bytes([0x70, 0x01, 0x12, 0x00])


def _wait_for(predicate, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return False


class FailingHost(QueueHost):
    def open(self) -> None:
        raise OSError("no display")


class TestDebugger:
    @pytest.fixture
    def debugger(self):
        debugger = Debugger(EmulatorConfig(instruction_hz=1000))
        yield debugger
        debugger.stop(timeout=5)

    def test_initial_snapshot_is_idle(self, debugger):
        snapshot = debugger.read_snapshot()
        assert snapshot.status == EmulatorStatus.IDLE
        assert snapshot.trace == ()
        assert not debugger.is_running

    def test_start_and_stop(self, debugger):
        debugger.start(COUNTER_PROGRAM)
        assert debugger.is_running
        assert _wait_for(lambda: len(debugger.read_snapshot().trace) >= 4)
        snapshot = debugger.read_snapshot()
        assert snapshot.status == EmulatorStatus.RUNNING
        assert snapshot.trace[0] == "0200: 7001 - Adding 0x01 to V0"

        debugger.stop(timeout=5)
        assert not debugger.is_running
        assert debugger.read_snapshot().status == EmulatorStatus.STOPPED

    def test_frames_are_presented(self, debugger):
        debugger.start(COUNTER_PROGRAM)
        host = debugger.host
        assert _wait_for(lambda: host.frame_count > 0)
        assert len(host.latest_frame()) == 64 * 32

    def test_start_twice_is_rejected(self, debugger):
        debugger.start(COUNTER_PROGRAM)
        with pytest.raises(RuntimeError):
            debugger.start(COUNTER_PROGRAM)

    def test_oversized_program_is_rejected_before_start(self, debugger):
        with pytest.raises(ProgramLoadError):
            debugger.start(bytes(0xE01))
        assert not debugger.is_running
        assert debugger.read_snapshot().status == EmulatorStatus.IDLE

    def test_host_init_failure(self):
        debugger = Debugger(host=FailingHost())
        with pytest.raises(HostInitError):
            debugger.start(COUNTER_PROGRAM)
        assert not debugger.is_running

    def test_pause_and_resume(self, debugger):
        debugger.start(COUNTER_PROGRAM)
        assert _wait_for(lambda: len(debugger.read_snapshot().trace) >= 2)
        debugger.pause()
        assert _wait_for(lambda: debugger.read_snapshot().is_paused)
        time.sleep(0.05)  # 一時停止前に実行中だった命令の公開を待つ
        frozen = debugger.read_snapshot()
        time.sleep(0.1)
        assert debugger.read_snapshot().state.v[0] == frozen.state.v[0]

        debugger.resume()
        assert _wait_for(lambda: debugger.read_snapshot().state.v[0] != frozen.state.v[0])
        assert debugger.read_snapshot().status == EmulatorStatus.RUNNING

    def test_start_paused(self, debugger):
        debugger.start(COUNTER_PROGRAM, paused=True)
        assert _wait_for(lambda: debugger.read_snapshot().status == EmulatorStatus.PAUSED)
        time.sleep(0.05)
        assert debugger.read_snapshot().trace == ()

    def test_quit_event_stops_thread(self, debugger):
        debugger.start(COUNTER_PROGRAM)
        debugger.host.post_quit()
        assert _wait_for(lambda: not debugger.is_running)
        assert debugger.read_snapshot().status == EmulatorStatus.STOPPED

    def test_key_event_resolves_wait(self, debugger):
        # 0x200: LD V2, K / 0x202: JP 0x202
        debugger.start(bytes([0xF2, 0x0A, 0x12, 0x02]))
        assert _wait_for(lambda: len(debugger.read_snapshot().trace) == 1)
        debugger.host.post_key_down(ord("F"))  # 論理キー 0xE
        assert _wait_for(lambda: len(debugger.read_snapshot().trace) == 2)
        assert debugger.read_snapshot().state.v[2] == 0xE

    def test_fault_is_reported(self, debugger):
        # 0x200: RET (空のスタック)
        debugger.start(bytes([0x00, 0xEE]))
        assert _wait_for(lambda: debugger.read_snapshot().status == EmulatorStatus.FAULTED)
        assert "empty call stack" in debugger.read_snapshot().error
        assert _wait_for(lambda: not debugger.is_running)

    def test_restart_after_stop(self, debugger):
        debugger.start(COUNTER_PROGRAM)
        debugger.stop(timeout=5)
        debugger.start(bytes([0x12, 0x00]))
        assert _wait_for(lambda: len(debugger.read_snapshot().trace) == 1)
        assert debugger.read_snapshot().trace[0] == "0200: 1200 - Endless loop at 0x200"
