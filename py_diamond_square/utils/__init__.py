"""Shared utilities: default random source and logging setup."""
