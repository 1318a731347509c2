"""Shared utilities for tocideator."""
