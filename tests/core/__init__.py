"""
Tests for the core validation, selection and retry primitives.
"""
