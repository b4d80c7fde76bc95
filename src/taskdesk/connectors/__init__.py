"""Front-ends that drive the screen machine (console REPL)."""
