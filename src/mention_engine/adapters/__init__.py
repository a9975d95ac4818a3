"""Host adapters that bridge the engine to UI toolkits."""
