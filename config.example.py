# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real access tokens. Put them in .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "GANTT_APP_NAME": "App display name (default: gantt-sync).",
    "GANTT_LOG_LEVEL": "Console logging level (default: INFO).",
    "GANTT_DATA_DIR": "Local data directory holding gantt.log (default: .local/gantt).",
    # Remote list
    "GANTT_SITE_URL": "SharePoint site URL. Empty => offline demo list.",
    "GANTT_LIST_TITLE": "Title of the task list on that site (default: Tasks).",
    "GANTT_ACCESS_TOKEN": "Bearer token for the SharePoint REST API.",
    # HTTP
    "GANTT_HTTP_TIMEOUT_SECONDS": "Per-request HTTP timeout (default: 20).",
    "GANTT_VERIFY_TLS": "Verify TLS certificates (true/false, default: true).",
}
