# config.example.py

"""
Documentation-only module (safe to commit).

Configuration is read from environment variables, optionally via a local .env
file (loaded with python-dotenv; already-set variables win).

This file exists to make the repo self-documenting.
"""

ENV_VARS = {
    "TODO_APP_NAME": "Name shown in the console banner (default: todolist).",
    "TODO_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "TODO_DATA_DIR": "Directory for local data (default: .local/todolist).",
    "TODO_DB_PATH": "SQLite file with the tasks table (default: <data_dir>/todos.sqlite3).",
    "TODO_LOG_DIR": "Directory for todolist.log (default: <data_dir>).",
}
