# chip8_tracer/debugger/emulation.py
"""
エミュレーションループ。

エミュレーションスレッド上で動作し、マシン状態・フレームバッファ・入力ラッチを排他的に所有します。
1回のループで停止要求の確認、ホストイベントの処理、ティックのサンプリング、
2つのクロックゲートの駆動を行います。
"""
import logging
import queue
import threading
import time
from typing import Optional

from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.core.errors import Chip8Error, ExecutionError
from chip8_tracer.core.scheduler import DualClockScheduler
from chip8_tracer.core.snapshot import EmulatorStatus
from chip8_tracer.debugger.publisher import SnapshotPublisher
from chip8_tracer.peripherals.keypad import KeyMap
from chip8_tracer.transport.host import Host, HostEventType

logger = logging.getLogger(__name__)

# @intent:responsibility スケジューラに従って命令の実行、タイマーの更新、フレームの受け渡しを行います。
class EmulationLoop:
    def __init__(self, cpu: Chip8Cpu, keymap: KeyMap, publisher: SnapshotPublisher,
                 host: Host, scheduler: DualClockScheduler,
                 shutdown: "queue.Queue[bool]"):
        self._cpu = cpu
        self._keymap = keymap
        self._publisher = publisher
        self._host = host
        self._scheduler = scheduler
        self._shutdown = shutdown
        # 命令ティック毎に共有レコードから読み出した一時停止フラグ。タイマーの凍結にも使う。
        self._paused = publisher.is_paused()

    # @intent:responsibility 停止要求またはQUITイベントまでループを回します。
    # @intent:post-condition 正常終了ならSTOPPED、実行時エラーならFAULTEDが公開レコードに記録されます。
    def run(self) -> None:
        self._scheduler.reset(self._host.ticks_ms())
        self._publisher.set_status(EmulatorStatus.RUNNING)
        try:
            while self.run_once():
                time.sleep(0)
        except ExecutionError as e:
            logger.error("Emulation halted: %s", e)
            self._publisher.fault(str(e))
            return
        self._publisher.set_status(EmulatorStatus.STOPPED)

    # @intent:responsibility ループを1回だけ回します。
    # @intent:return ループを継続すべきならTrue。
    def run_once(self) -> bool:
        if self._shutdown_requested():
            logger.info("Shutdown requested")
            return False
        if not self._handle_events():
            logger.info("Quit event received")
            return False
        self._scheduler.tick(self._host.ticks_ms(), self._execute_instruction, self._render_frame)
        return True

    def _shutdown_requested(self) -> bool:
        try:
            self._shutdown.get_nowait()
        except queue.Empty:
            return False
        return True

    def _handle_events(self) -> bool:
        for event in self._host.poll_events():
            if event.kind == HostEventType.QUIT:
                return False
            key = self._keymap.index_of(event.key_code)
            if key is None:
                continue
            if event.kind == HostEventType.KEY_DOWN:
                # 一時停止中の押下はキー状態だけを更新し、キー待ちは解除しない。
                self._cpu.key_down(key, resolve_wait=not self._paused)
            elif event.kind == HostEventType.KEY_UP:
                self._cpu.key_up(key)
        return True

    # @intent:responsibility 命令クロック毎に呼ばれ、0または1命令を実行して結果を公開します。
    def _execute_instruction(self) -> None:
        self._paused = self._publisher.is_paused()
        if self._paused:
            return
        entry = self._cpu.step()
        if entry is None:  # キー待ち
            return
        logger.debug(entry.line)
        self._publisher.publish(entry, self._cpu.get_state())

    # @intent:responsibility タイマークロック毎に呼ばれ、タイマーを減らしてフレームをホストへ渡します。
    def _render_frame(self) -> None:
        if not self._paused:
            self._cpu.tick_timers()
        self._host.present(self._cpu.framebuffer.to_bytes())


# @intent:responsibility EmulationLoopをバックグラウンドスレッドで実行します。
class EmulationThread(threading.Thread):
    """
    ループ内の例外をスレッド外へ伝播させず、公開レコードの終了ステータスとして報告します。
    """
    def __init__(self, loop: EmulationLoop, host: Host, publisher: SnapshotPublisher):
        super().__init__(name="chip8-emulation", daemon=True)
        self._loop = loop
        self._host = host
        self._publisher = publisher
        self.error: Optional[BaseException] = None

    def run(self) -> None:
        try:
            self._loop.run()
        except Chip8Error as e:
            self.error = e
            logger.error("Emulation thread failed: %s", e)
            self._publisher.fault(str(e))
        except Exception as e:
            self.error = e
            logger.exception("Unexpected error in emulation thread")
            self._publisher.fault(f"{type(e).__name__}: {e}")
        finally:
            self._host.close()
