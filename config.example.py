# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "ROUTINE_APP_NAME": "App display name (default: routine-helper).",
    "ROUTINE_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Connectors
    "ROUTINE_CONSOLE_ENABLED": "Run the interactive console (true/false).",
    # Paths (gitignored)
    "ROUTINE_DATA_DIR": "Local data directory (default: .local/routine).",
    "ROUTINE_SNAPSHOT_PATH": "Tasks/routines JSON snapshot (default: <data_dir>/snapshot.json).",
    "ROUTINE_SAVE_SNAPSHOT": "Write the snapshot back on exit (true/false).",
    # Defaults
    "ROUTINE_DEFAULT_TARGET_DAYS": "target_days for new routines (default: 30).",
    # Clock
    "ROUTINE_TODAY": "Pin 'today' to a YYYY-MM-DD date instead of the system clock.",
}
