"""描画 モジュール"""
