"""
Tests for the exchange clients.
"""
