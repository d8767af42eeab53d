"""
Tests for the KuCoin REST v1 client and its GuardsMaps.
"""
