# chip8_tracer/core/errors.py
"""
例外階層の定義。

起動時の致命的エラー（プログラム読み込み失敗、ホスト初期化失敗）と、
実行時の致命的エラー（スタック破綻、範囲外アクセス）を区別します。
未知のオペコードはエラーではなく、NOPとして扱われます。
"""


class Chip8Error(Exception):
    """全てのCHIP-8関連エラーの基底クラス。"""


# --- 起動時エラー ---

class ProgramLoadError(Chip8Error):
    """プログラムイメージが読み込めない、またはサイズ上限を超えている。"""


class HostInitError(Chip8Error):
    """ホスト（ウィンドウ、入力、クロック）の初期化に失敗した。"""


# --- 実行時エラー ---

# @intent:responsibility 命令実行中に検出された致命的エラーを表します。
# @intent:rationale 発生したアドレスとオペコードを保持し、オブザーバへの報告に使います。
class ExecutionError(Chip8Error):
    def __init__(self, message: str, address: int = -1, opcode: int = -1):
        super().__init__(message)
        self.address = address
        self.opcode = opcode

    def __str__(self) -> str:
        message = super().__str__()
        if self.address < 0:
            return message
        if self.opcode < 0:  # フェッチ自体が失敗した
            return f"{message} (PC=0x{self.address:04X})"
        return f"{message} (PC=0x{self.address:04X}, opcode=0x{self.opcode:04X})"


class StackOverflowError(ExecutionError):
    """16段を超えるサブルーチン呼び出し。"""


class StackUnderflowError(ExecutionError):
    """空のスタックからの復帰。"""


class MemoryAccessError(ExecutionError):
    """4KBのアドレス空間外へのアクセス。"""


class KeyIndexError(ExecutionError):
    """0x0-0xFの範囲外のキー番号を参照した。"""
