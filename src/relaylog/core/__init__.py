"""Core dispatcher, record model and ambient services for relaylog."""
