import logging
from pathlib import Path

from httpdaemon.constants import KEY_APPLICATION_SCHEMA
from httpdaemon.library.config_utils import load_yaml_file
from httpdaemon.library.config_utils import validate_config

logger = logging.getLogger(__name__)


def load_configuration(file_app_config, file_app_schema, key: str = KEY_APPLICATION_SCHEMA) -> dict:
    """
    Load the application configuration and validate it against its schema.

    Both files are namespaced; only the `key` section of each is used. A
    missing configuration file is not an error: the schema defaults apply.

    Raises:
        FileNotFoundError: If the schema file does not exist.
        ValueError: If either file is malformed or a fatal key is invalid.
    """
    app_schema_full = load_yaml_file(file_app_schema)
    app_schema = app_schema_full.get(key, app_schema_full)

    if Path(file_app_config).expanduser().is_file():
        app_config_full = load_yaml_file(file_app_config)
        app_config = app_config_full.get(key, app_config_full)
    else:
        logger.warning(f'No configuration file at {file_app_config}; using defaults')
        app_config = {}

    validated_config, errors = validate_config(config=app_config, schema=app_schema)
    logger.info("App config loaded | key=%s | problems=%d", key, len(errors or []))
    return validated_config
