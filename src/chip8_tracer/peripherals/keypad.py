# chip8_tracer/peripherals/keypad.py
"""
16キーのキーパッドと入力ラッチ。

キーの押下状態（EX9E/EXA1が参照）と、FX0Aによる「キー待ち」レジスタを保持します。
キー待ちが解除されるのは押下エッジイベントのみで、離上イベントや押しっぱなしの状態では解除されません。
"""
from typing import Iterable, List, Optional, Tuple

KEY_COUNT = 16

# 従来の 1234/QWER/ASDF/ZXCV 配置。論理キー 0x0..0xF の順に並べる。
# ホストのキーコードは大文字のASCIIコードであり、QtのKey_*値と一致します。
DEFAULT_LAYOUT = "X123QWEASDZC4RFV"


# @intent:responsibility 論理キー番号からホストキーコードへの不変の対応表です。
class KeyMap:
    def __init__(self, codes: Iterable[int]):
        codes = tuple(codes)
        if len(codes) != KEY_COUNT:
            raise ValueError(f"Key map must have exactly {KEY_COUNT} entries, got {len(codes)}.")
        self._codes: Tuple[int, ...] = codes

    # @intent:responsibility 既定のキー配置を生成します。
    # @intent:rationale プロセス全体で共有される可変テーブルではなく、呼び出し毎に新しい定数データを返す。
    @classmethod
    def default(cls) -> "KeyMap":
        return cls(ord(c) for c in DEFAULT_LAYOUT)

    @property
    def codes(self) -> Tuple[int, ...]:
        return self._codes

    def index_of(self, key_code: int) -> Optional[int]:
        """ホストキーコードに対応する論理キー番号を返します。対応が無ければNone。"""
        for index, code in enumerate(self._codes):
            if code == key_code:
                return index
        return None

    def __eq__(self, other) -> bool:
        return isinstance(other, KeyMap) and self._codes == other._codes

    def __repr__(self) -> str:
        return f"KeyMap({list(self._codes)!r})"


# @intent:responsibility キーの押下状態とキー待ちステートマシン（Idle / WaitingForKey）を管理します。
class Keypad:
    def __init__(self):
        self.key_states: List[bool] = [False] * KEY_COUNT
        self.wait_register: Optional[int] = None

    @property
    def is_waiting(self) -> bool:
        return self.wait_register is not None

    # @intent:responsibility Idle -> WaitingForKey(register) へ遷移します。
    def begin_wait(self, register: int) -> None:
        self.wait_register = register

    def press(self, key: int, resolve_wait: bool = True) -> Optional[int]:
        """
        押下エッジを記録します。
        キー待ち中で resolve_wait が真なら待ちを解除し、押されたキーを格納すべきレジスタ番号を返します。
        """
        self.key_states[key] = True
        if self.wait_register is not None and resolve_wait:
            register = self.wait_register
            self.wait_register = None
            return register
        return None

    def release(self, key: int) -> None:
        self.key_states[key] = False

    def is_pressed(self, key: int) -> bool:
        if not 0 <= key < KEY_COUNT:
            raise IndexError(f"Key {key} out of range for {KEY_COUNT}-key keypad.")
        return self.key_states[key]
