"""
Tests for the normalized KuCoin and Yobit services.
"""
