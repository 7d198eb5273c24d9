"""Shared helpers: logging setup and timezone handling."""
