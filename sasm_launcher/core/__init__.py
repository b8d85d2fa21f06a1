"""Core functionality for sasm_launcher."""
