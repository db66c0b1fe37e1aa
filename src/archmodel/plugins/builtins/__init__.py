"""Built-in discovery strategies shipped with archmodel."""
