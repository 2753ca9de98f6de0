"""Shared helpers: response envelopes and logging setup."""
