"""
Central configuration for the Diffie-Hellman visualizer.
Avoids hardcoded literals spread across files.
"""
import os

# Parties (A publishes first in the interactive exchange)
PARTY_A_NAME = "Alice"
PARTY_B_NAME = "Bob"

# Logging
LOG_LEVEL = os.getenv("DH_LOG_LEVEL", "INFO").upper()
LOGGER_NAME = "dh_visualizer"

# GUI
WINDOW_TITLE = "Diffie-Hellman Visualizer"
WINDOW_GEOMETRY = (100, 100, 900, 700)
ACCENT_COLOR = "red"
ERROR_COLOR = "#ff5555"

# CLI
PROG_NAME = "dh-visualizer"
