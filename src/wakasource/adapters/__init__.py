"""Upstream service adapters."""
