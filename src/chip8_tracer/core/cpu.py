# chip8_tracer/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from chip8_tracer.core.errors import ExecutionError
from chip8_tracer.core.snapshot import Operation, TraceEntry
from chip8_tracer.core.state import CpuState
from chip8_tracer.common.types import RegisterLayoutInfo, RegisterMap

# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    全てのCPUエミュレーションの基底となる抽象クラス。
    基本的な状態管理と命令サイクル（フェッチ→デコード→PC更新→実行）の抽象化を提供します。
    """
    def __init__(self):
        self._state: CpuState = self._create_initial_state()
        self._instruction_count: int = 0
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    # @intent:responsibility 初期状態のCpuStateオブジェクトを生成します。
    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        """
        CPUの初期状態を生成して返します。
        """
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._instruction_count = 0

    def get_state(self) -> CpuState:
        """
        現在のCPUの状態（レジスタ値など）を返します。
        返されるのは内部状態そのものであり、コピーではありません。
        """
        return self._state

    @property
    def instruction_count(self) -> int:
        return self._instruction_count

    # @intent:responsibility 現在のPCから次の命令（オペコード）をフェッチします。
    @abstractmethod
    def _fetch(self) -> int:
        """
        現在のPCからメモリの次の命令を読み出して返します。PCは更新しません。
        """
        pass

    # @intent:responsibility フェッチしたオペコードを解析し、Operationオブジェクトに変換します。
    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        pass

    # @intent:responsibility デコードされた命令を実行し、CPUの状態を更新します。
    # @intent:return トレースに記録される命令の説明文。
    @abstractmethod
    def _execute(self, operation: Operation) -> str:
        pass

    # @intent:responsibility CPUを1命令サイクル進め、その実行記録を返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー（ブロック判定→フェッチ→デコード→PC更新→実行）を定義します。
    #                  アーキテクチャ固有の振る舞い（キー待ちなど）はフックメソッドで対応します。
    def step(self) -> Optional[TraceEntry]:
        """
        CPUを1命令サイクル進め、実行した命令のTraceEntryを返します。
        命令の実行がブロックされている場合は何もせずNoneを返します。
        """
        # 1. ブロック判定 (Hook)
        if self._is_blocked():
            return None

        initial_pc = self._state.pc
        opcode = -1
        try:
            # 2. フェッチ
            opcode = self._fetch()

            # 3. デコード
            operation = self._decode(opcode)

            # 4. PC更新 (Hook)
            # 副作用の計算より前にPCを進める。PCを明示的に設定する命令はこれを上書きする。
            self._update_pc(operation)

            # 5. 実行
            description = self._execute(operation)
        except ExecutionError as e:
            if e.address < 0:
                e.address = initial_pc
                e.opcode = opcode
            raise

        self._instruction_count += 1
        return TraceEntry(address=initial_pc, opcode=opcode, description=description)

    # @intent:responsibility 命令の実行がブロックされているかを返します。
    def _is_blocked(self) -> bool:
        """
        デフォルトは常にFalse。オーバーライドしてキー待ちなどの挙動を実装する。
        """
        return False

    # @intent:responsibility 命令実行前にPCを更新します。
    def _update_pc(self, operation: Operation) -> None:
        self._state.pc = (self._state.pc + operation.length) & 0xFFFF

    @abstractmethod
    def get_register_map(self) -> RegisterMap:
        """
        現在のレジスタ値を辞書形式で返す。
        UIがCPUの内部構造を知らなくても値を表示できるようにするために使用される。
        """
        pass

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        """
        レジスタをUI上でどのように配置・グループ化すべきかの定義を返す。
        """
        pass
