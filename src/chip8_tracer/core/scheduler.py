# chip8_tracer/core/scheduler.py
"""
Core Layer (クロックスケジューラ)

エミュレーションスレッド内で動作する協調型のスケジューラです。
ホストのミリ秒ティックを1ループにつき1回サンプリングし、
命令実行クロックとタイマー/描画クロックという2つの独立した固定周期ゲートを駆動します。
"""
from typing import Callable


# @intent:responsibility 固定周波数で発火する単一のゲートを表します。
# @intent:rationale 経過時間がどれだけ長くても1回の判定で発火するのは最大1回とし、
#                  遅延分の追いつき実行（バックログ消化）は行わない。
class ClockGate:
    def __init__(self, freq_hz: int):
        if freq_hz <= 0:
            raise ValueError(f"Clock frequency must be positive: {freq_hz}")
        self.freq_hz = freq_hz
        self.period_ms = 1000 // freq_hz
        self._last_tick = 0

    def ready(self, now_ms: int) -> bool:
        """
        前回の発火から周期以上が経過していればTrueを返し、発火時刻を更新します。
        """
        if now_ms - self._last_tick >= self.period_ms:
            self._last_tick = now_ms
            return True
        return False

    def reset(self, now_ms: int = 0) -> None:
        self._last_tick = now_ms


# @intent:responsibility 命令実行とタイマー/描画の2つのクロックドメインを管理します。
class DualClockScheduler:
    """
    instruction_hz で命令ハンドラを、timer_hz でフレームハンドラを呼び出します。
    2つのゲートは互いに独立しており、一方のハンドラが何もしなくても他方には影響しません。
    """
    def __init__(self, instruction_hz: int = 500, timer_hz: int = 60):
        self.instruction_gate = ClockGate(instruction_hz)
        self.timer_gate = ClockGate(timer_hz)

    def tick(self, now_ms: int,
             on_instruction: Callable[[], None],
             on_frame: Callable[[], None]) -> None:
        if self.instruction_gate.ready(now_ms):
            on_instruction()
        if self.timer_gate.ready(now_ms):
            on_frame()

    def reset(self, now_ms: int = 0) -> None:
        self.instruction_gate.reset(now_ms)
        self.timer_gate.reset(now_ms)
