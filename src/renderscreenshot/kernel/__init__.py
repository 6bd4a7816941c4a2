"""Kernel – errors and time, shared by every other layer."""
