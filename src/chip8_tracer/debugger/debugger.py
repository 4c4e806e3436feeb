# chip8_tracer/debugger/debugger.py
"""
デバッガモジュール。

オブザーバ（UIスレッドなど）に公開される制御面です。
エミュレーションスレッドの起動、一時停止/再開、停止、およびスナップショットの読み出しを提供します。
"""
import logging
import queue
import random
from typing import Optional

from chip8_tracer.config.builder import MachineBuilder
from chip8_tracer.config.models import EmulatorConfig
from chip8_tracer.core.errors import HostInitError
from chip8_tracer.core.snapshot import Snapshot
from chip8_tracer.debugger.emulation import EmulationLoop, EmulationThread
from chip8_tracer.debugger.publisher import SnapshotPublisher
from chip8_tracer.peripherals.keypad import KeyMap
from chip8_tracer.transport.host import Host, QueueHost

logger = logging.getLogger(__name__)

# @intent:responsibility エミュレーションスレッドのライフサイクル管理と、公開スナップショットへのアクセスを行います。
class Debugger:
    """
    CHIP-8マシンの実行を制御するクラス。
    """
    def __init__(self, config: Optional[EmulatorConfig] = None, host: Optional[Host] = None,
                 rng: Optional[random.Random] = None):
        self._config = config if config is not None else EmulatorConfig()
        self._host = host if host is not None else QueueHost()
        self._rng = rng
        self._publisher = SnapshotPublisher(self._config.trace_capacity)
        self._shutdown: "queue.Queue[bool]" = queue.Queue(maxsize=1)
        self._thread: Optional[EmulationThread] = None

    @property
    def host(self) -> Host:
        return self._host

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # @intent:responsibility マシンを構築し、エミュレーションスレッドを開始します。
    # @intent:pre-condition 既に実行中のマシンが無いこと。
    # @intent:post-condition 起動時のエラー（ProgramLoadError, HostInitError）は呼び出し元へ送出され、スレッドは生成されません。
    def start(self, program: bytes, keymap: Optional[KeyMap] = None, paused: bool = False) -> None:
        if self.is_running:
            raise RuntimeError("Emulator is already running; stop it first.")

        builder = MachineBuilder(self._config)
        cpu = builder.build_cpu(program, rng=self._rng)
        try:
            self._host.open()
        except HostInitError:
            raise
        except Exception as e:
            raise HostInitError(f"Host initialization failed: {e}") from e

        self._shutdown = queue.Queue(maxsize=1)
        self._publisher.reset(cpu.get_state(), paused=paused)
        loop = EmulationLoop(
            cpu=cpu,
            keymap=keymap if keymap is not None else self._config.keymap,
            publisher=self._publisher,
            host=self._host,
            scheduler=builder.build_scheduler(),
            shutdown=self._shutdown,
        )
        self._thread = EmulationThread(loop, self._host, self._publisher)
        self._thread.start()
        logger.info("Emulation started (%d byte program)", len(program))

    def pause(self, paused: bool = True) -> None:
        self._publisher.set_paused(paused)
        logger.info("Emulation %s", "paused" if paused else "resumed")

    def resume(self) -> None:
        self.pause(False)

    # @intent:responsibility 停止要求を送り、スレッドの終了を待ちます。
    def stop(self, timeout: Optional[float] = None) -> None:
        thread = self._thread
        if thread is None:
            return
        if thread.is_alive():
            try:
                self._shutdown.put_nowait(True)
            except queue.Full:
                pass  # 停止要求は既に送信済み
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("Emulation thread did not stop within %s seconds", timeout)
                return
        self._thread = None
        logger.info("Emulation stopped")

    def read_snapshot(self) -> Snapshot:
        return self._publisher.read_snapshot()
