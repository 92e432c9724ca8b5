"""Host adapters for the inline diagnostics mode."""
