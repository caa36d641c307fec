"""
Project constants definitions
"""

# ============================================================
# Connection
# ============================================================

DEFAULT_SSH_PORT = 22
CONNECT_TIMEOUT = 10

# ============================================================
# Channel / Transfer I/O
# ============================================================

EXEC_CHUNK_SIZE = 1024
TRANSFER_CHUNK_SIZE = 8192
REMOTE_DIR_MODE = 0o755

# ============================================================
# Configuration
# ============================================================

ENV_PREFIX = "RSSH_"
