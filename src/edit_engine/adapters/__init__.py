"""Host adapters that put the engine on a screen."""
