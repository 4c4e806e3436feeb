# chip8_tracer/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、デコード済み命令、1命令分の実行記録（トレース行）、
およびオブザーバへ公開されるマシン全体の状態を表す不変のデータ構造を定義します。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from chip8_tracer.core.state import CpuState


# @intent:responsibility デコードされた命令を記録します。
@dataclass(frozen=True)
class Operation:
    """
    フェッチ・デコードされた1命令。
    オペコードのニブルフィールドへのアクセサを提供します。
    """
    address: int  # 命令自身のアドレス（PC更新前）
    opcode: int   # 16bit ビッグエンディアン
    key: int      # ディスパッチキー（maps.dispatch_key参照）
    length: int = 2

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

    @property
    def x(self) -> int:
        return (self.opcode >> 8) & 0xF

    @property
    def y(self) -> int:
        return (self.opcode >> 4) & 0xF

    @property
    def n(self) -> int:
        return self.opcode & 0xF

    @property
    def kk(self) -> int:
        return self.opcode & 0xFF

    @property
    def nnn(self) -> int:
        return self.opcode & 0xFFF


# @intent:responsibility 実行された1命令の記録（トレースログの1行）を保持します。
@dataclass(frozen=True)
class TraceEntry:
    address: int
    opcode: int
    description: str

    @property
    def line(self) -> str:
        """トレースログに記録される1行。例: "0200: 6A05 - Moving 0x05 into VA" """
        return f"{self.address:04X}: {self.opcode:04X} - {self.description}"

    def __str__(self) -> str:
        return self.line


# @intent:responsibility エミュレーションスレッドの外部から観測される実行状態を定義します。
class EmulatorStatus(Enum):
    IDLE = "IDLE"          # まだ開始されていない
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"      # 実行中だが一時停止フラグが立っている
    STOPPED = "STOPPED"    # 停止要求、またはQUITイベントで終了した
    FAULTED = "FAULTED"    # 致命的な実行時エラーで終了した


# @intent:responsibility ある一時点における公開済みのマシン状態を不変に記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    オブザーバが読み出す公開レコードのコピー。
    traceは古い順に並んだトレース行、stateは最後に実行された命令直後の状態のコピーです。
    """
    trace: Tuple[str, ...]
    state: Optional[CpuState]
    status: EmulatorStatus
    error: Optional[str] = None

    # @intent:rationale traceはタプルで保持し、読み出し側がリストを変更して共有レコードを壊すことを防ぐ。

    @property
    def is_running(self) -> bool:
        return self.status in (EmulatorStatus.RUNNING, EmulatorStatus.PAUSED)

    @property
    def is_paused(self) -> bool:
        return self.status == EmulatorStatus.PAUSED
