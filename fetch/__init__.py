"""Upstream clients, response cache and the explorer service."""
