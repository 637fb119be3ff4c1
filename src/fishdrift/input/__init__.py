"""入力処理 モジュール"""
