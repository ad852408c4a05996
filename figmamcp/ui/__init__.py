"""Terminal output helpers for the figmamcp CLI."""
