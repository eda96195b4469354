"""CLI module for chainlog."""
