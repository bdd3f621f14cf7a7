"""Pytest configuration and fixtures"""
import os

# Keep tests off the on-disk database unless a test asks for it
os.environ.setdefault("CART_STORAGE_BACKEND", "memory")
os.environ.setdefault("CART_WRITE_BACKOFF_MS", "0")
