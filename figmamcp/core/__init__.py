"""Core domain logic for figmamcp."""
