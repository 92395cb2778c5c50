"""Clearing-house operator toolkit."""
