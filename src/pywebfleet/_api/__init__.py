"""Webfleet extern action modules (internal)."""
