"""Core domain — config store, history, project directory, switcher."""
