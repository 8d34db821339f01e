"""Core reconciliation building blocks."""
