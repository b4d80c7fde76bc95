"""Front-end independent UI logic (screen state machine)."""
