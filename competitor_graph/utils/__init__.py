"""Shared utilities for competitor_graph."""
