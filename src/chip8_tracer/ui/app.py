# src/chip8_tracer/ui/app.py
"""
アプリケーションのエントリポイント。
構成とプログラムを読み込み、メインウィンドウを起動します。

使い方: chip8-tracer [program.ch8] [--config system.yaml]
"""
import sys
from typing import List, Optional, Tuple

from PySide6.QtWidgets import QApplication

from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.models import SystemConfig

# @intent:responsibility コマンドライン引数から (プログラムパス, 構成ファイルパス) を取り出します。
def parse_args(argv: List[str]) -> Tuple[Optional[str], Optional[str]]:
    program = None
    config_path = None
    args = list(argv)
    while args:
        arg = args.pop(0)
        if arg == "--config":
            if not args:
                raise ValueError("--config requires a path")
            config_path = args.pop(0)
        elif program is None:
            program = arg
        else:
            raise ValueError(f"Unexpected argument: {arg}")
    return program, config_path

def load_config(program: Optional[str], config_path: Optional[str]) -> SystemConfig:
    config = ConfigLoader().load_from_file(config_path) if config_path else SystemConfig()
    if program:
        config.program = program
    return config

def main():
    program, config_path = parse_args(sys.argv[1:])
    config = load_config(program, config_path)

    from .main_window import MainWindow
    app = QApplication(sys.argv)
    main_win = MainWindow(config)
    main_win.show()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
