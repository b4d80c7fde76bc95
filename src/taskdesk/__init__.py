"""taskdesk: a small account + personal task list app on a local SQLite file."""

__version__ = "0.1.0"
