# constants.py
from pathlib import Path

### Paths
PATH_APP_CONFIG = Path(__file__).parent / "config"
PATH_DAEMON_CONFIG = Path("/etc/httpdaemon/")
PATH_USER_CONFIG = Path("~/.config/httpdaemon/").expanduser().resolve()

# Files
FNAME_APPLICATION_SCHEMA = "httpdaemon_config_schema.yaml"
FNAME_APPLICATION_CONFIG = "httpdaemon_config.yaml"

# Dict keys
KEY_APPLICATION_SCHEMA = 'main'

### Logging
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_LEVEL = "WARNING"

### API
DAEMON_HTTP_PORT = 2822
MIN_PORT = 1
MAX_PORT = 65535
BIND_ADDRESS = "0.0.0.0"
SOCKET_TIMEOUT = 1.0

### Envelope codes
CODE_OK = 0
CODE_PARSE_ERROR = -1
CODE_MISSING_PARAMETER = -2
CODE_HANDLER_ERROR = -3
CODE_ROUTE_NOT_FOUND = -4

# methods whose form-encoded bodies are merged into the request params
FORM_BODY_METHODS = ('POST', 'PUT', 'PATCH')
FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'
