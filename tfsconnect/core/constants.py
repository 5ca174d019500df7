"""
Project constants definitions
"""

# ============================================================
# Local State
# ============================================================

DEFAULT_CONFIG_PATH = "~/.tfsconnect/config.toml"
DEFAULT_STATE_DIR = "~/.tfsconnect/state"
DEFAULT_REGISTRY_PATH = "~/.tfsconnect/registered.json"
DEFAULT_SESSION_NAME = "default"
STATE_FILE_MODE = 0o600

# ============================================================
# REST API
# ============================================================

DEFAULT_API_VERSION = "1.0"
DEFAULT_HTTP_TIMEOUT = 30
PROJECT_COLLECTIONS_PATH = "_apis/projectCollections"
CONNECTION_DATA_PATH = "_apis/connectionData"

# ============================================================
# Resolution
# ============================================================

DEFAULT_NAME_PATTERN = "*"
URL_SCHEMES = ("http", "https")

# ============================================================
# Environment
# ============================================================

ENV_PREFIX = "TFS_"
