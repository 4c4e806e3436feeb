"""
PySide6アプリケーションのエントリポイント。
"""
import argparse
import logging
import sys

from PySide6.QtWidgets import QApplication

from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.models import EmulatorConfig
from chip8_tracer.core.errors import Chip8Error
from chip8_tracer.loader.loader import ProgramLoader
from .main_window import MainWindow


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CHIP-8 emulator with an instruction tracer")
    parser.add_argument('program', help="A compiled CHIP-8 program to load")
    parser.add_argument('--config', help="YAML configuration file", default=None)
    parser.add_argument('--paused', help="Start with execution paused", action="store_true")
    parser.add_argument('--debug', help="Enable verbose debug logging", action="store_true")
    return parser


# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # 起動時エラーはウィンドウを作る前に報告して終了する
    try:
        config = ConfigLoader().load_from_file(args.config) if args.config else EmulatorConfig()
        program = ProgramLoader().load_file(args.program)
    except (Chip8Error, OSError, ValueError) as e:
        logging.getLogger(__name__).error("%s", e)
        return 1

    app = QApplication(sys.argv[:1])
    main_win = MainWindow(config)
    try:
        main_win.start(program, paused=args.paused)
    except Chip8Error as e:
        logging.getLogger(__name__).error("%s", e)
        return 1
    main_win.resize(main_win.sizeHint())
    main_win.show()
    return app.exec()


if __name__ == '__main__':
    sys.exit(main())
