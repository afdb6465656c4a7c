"""cept — Selenium IDE の記録を PHP Codeception の Cest クラスに変換するツール"""

__version__ = "0.1.0"
