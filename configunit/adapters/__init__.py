"""Adapters implementing configunit ports."""
