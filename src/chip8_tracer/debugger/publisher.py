# chip8_tracer/debugger/publisher.py
"""
スナップショット公開モジュール。

エミュレーションスレッドが書き込み、オブザーバスレッドが読み出す唯一の共有領域
（トレースログ、状態のコピー、一時停止フラグ）を保持します。
全てのアクセスは短いクリティカルセクション内で行われ、ロックを保持したまま
描画やブロッキング処理を行うことはありません。
"""
import threading
from collections import deque
from typing import Deque, Optional

from chip8_tracer.arch.chip8.state import Chip8State
from chip8_tracer.core.snapshot import EmulatorStatus, Snapshot, TraceEntry

DEFAULT_TRACE_CAPACITY = 100

# @intent:responsibility ロックで保護された公開レコードへの読み書きを提供します。
class SnapshotPublisher:
    """
    トレースログ（容量を超えると古いものから破棄）と、最後に実行された命令直後の状態のコピーを保持します。
    読み出し側がログと状態の不整合な組み合わせを観測することはありません。
    """
    def __init__(self, capacity: int = DEFAULT_TRACE_CAPACITY):
        if capacity <= 0:
            raise ValueError(f"Trace capacity must be positive: {capacity}")
        self._lock = threading.Lock()
        self._trace: Deque[str] = deque(maxlen=capacity)
        self._state: Optional[Chip8State] = None
        self._paused = False
        self._status = EmulatorStatus.IDLE
        self._error: Optional[str] = None

    @property
    def capacity(self) -> int:
        return self._trace.maxlen

    # @intent:responsibility 新しいマシンの開始時にログを消去し、初期状態を公開します。
    def reset(self, state: Chip8State, paused: bool = False) -> None:
        with self._lock:
            self._trace.clear()
            self._state = state.copy()
            self._paused = paused
            self._status = EmulatorStatus.IDLE
            self._error = None

    # @intent:responsibility 実行済み命令のトレース行を追記し、状態のコピーを上書きします。
    # @intent:rationale 自己ループ検出後に同じ行が続く場合は追記も状態の更新も行わず、無限ループを1行にまとめる。
    def publish(self, entry: TraceEntry, state: Chip8State) -> bool:
        """
        公開した場合はTrue、重複として捨てた場合はFalseを返します。
        """
        line = entry.line
        copied = state.copy()  # ロックの外でコピーする
        with self._lock:
            if state.endloop and self._trace and self._trace[-1] == line:
                return False
            self._trace.append(line)
            self._state = copied
            return True

    def is_paused(self) -> bool:
        with self._lock:
            return self._paused

    def set_paused(self, paused: bool) -> None:
        with self._lock:
            self._paused = paused

    def set_status(self, status: EmulatorStatus) -> None:
        with self._lock:
            self._status = status

    # @intent:responsibility 致命的エラーによる終了を記録します。
    def fault(self, message: str) -> None:
        with self._lock:
            self._status = EmulatorStatus.FAULTED
            self._error = message

    def read_snapshot(self) -> Snapshot:
        """
        公開レコードの一貫したコピーを返します。
        実行中で一時停止フラグが立っている場合、ステータスはPAUSEDとして報告されます。
        """
        with self._lock:
            trace = tuple(self._trace)
            state = self._state
            status = self._status
            if status == EmulatorStatus.RUNNING and self._paused:
                status = EmulatorStatus.PAUSED
            error = self._error
        return Snapshot(
            trace=trace,
            state=state.copy() if state is not None else None,
            status=status,
            error=error,
        )
