# chip8_tracer/transport/host.py
"""
Transport Layer (ホストインターフェース)

このモジュールは、エミュレーションループとホスト環境（ウィンドウ、キーボード、時計）との
境界を抽象化します。コアはミリ秒ティック、入力イベント、フレームの受け渡しだけを必要とし、
ウィンドウ生成や実際の描画はホスト側の責務です。
"""
import queue
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from chip8_tracer.common.types import Frame

# @intent:responsibility ホストから届くイベントの種類を定義します。
class HostEventType(Enum):
    KEY_DOWN = "KEY_DOWN"
    KEY_UP = "KEY_UP"
    QUIT = "QUIT"    # ウィンドウクローズ、Escapeキーなど

# @intent:responsibility 個々のホストイベントを記録します。
@dataclass(frozen=True)
class HostEvent:
    kind: HostEventType
    key_code: int = 0  # ホストのキーコード（KEY_DOWN/KEY_UPのみ）

# @intent:responsibility エミュレーションスレッドから見たホスト環境のインターフェースを定義します。
class Host(ABC):
    """
    エミュレーションループが利用するホスト環境の抽象基底クラス。
    ticks_ms/poll_events/present はエミュレーションスレッドからのみ呼ばれます。
    """
    def open(self) -> None:
        """ホスト資源を初期化します。失敗した場合は HostInitError を送出します。"""
        pass

    def close(self) -> None:
        pass

    @abstractmethod
    def ticks_ms(self) -> int:
        """単調増加するミリ秒ティックを返します。"""
        pass

    @abstractmethod
    def poll_events(self) -> List[HostEvent]:
        """前回の呼び出し以降に発生したイベントを発生順に返します。"""
        pass

    @abstractmethod
    def present(self, frame: Frame) -> None:
        """64x32（行優先、各セル0/1）のフレームをレンダラへ渡します。"""
        pass

# @intent:responsibility スレッドセーフなキューとフレームスロットで、UIスレッドとエミュレーションスレッドを仲介します。
# @intent:rationale UIスレッドはイベントを積み、最後に渡されたフレームを読むだけで、エミュレーションの状態には触れない。
class QueueHost(Host):
    def __init__(self):
        self._events: "queue.Queue[HostEvent]" = queue.Queue()
        self._frame_lock = threading.Lock()
        self._frame: Optional[Frame] = None
        self._frame_count = 0
        self._origin = time.monotonic()

    def open(self) -> None:
        self._origin = time.monotonic()

    def ticks_ms(self) -> int:
        return int((time.monotonic() - self._origin) * 1000)

    def poll_events(self) -> List[HostEvent]:
        events = []
        while True:
            try:
                events.append(self._events.get_nowait())
            except queue.Empty:
                return events

    def present(self, frame: Frame) -> None:
        with self._frame_lock:
            self._frame = frame
            self._frame_count += 1

    # --- UIスレッド側のAPI ---

    def post_event(self, event: HostEvent) -> None:
        self._events.put(event)

    def post_key_down(self, key_code: int) -> None:
        self.post_event(HostEvent(HostEventType.KEY_DOWN, key_code))

    def post_key_up(self, key_code: int) -> None:
        self.post_event(HostEvent(HostEventType.KEY_UP, key_code))

    def post_quit(self) -> None:
        self.post_event(HostEvent(HostEventType.QUIT))

    def latest_frame(self) -> Optional[Frame]:
        """最後に渡されたフレーム。まだ描画されていなければNone。"""
        with self._frame_lock:
            return self._frame

    @property
    def frame_count(self) -> int:
        with self._frame_lock:
            return self._frame_count
