"""Host adapters embedding the interpreter in UI toolkits."""
