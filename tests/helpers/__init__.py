"""Shared helpers for SimpleWeb tests."""
