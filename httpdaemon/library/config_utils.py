import yaml
from pathlib import Path
import logging
from typing import Any, Dict, List, Tuple

logger = logging.getLogger(__name__)

# schema `type` names understood by validate_config
SCHEMA_TYPES = {
    'str': str,
    'int': int,
    'float': (float, int),
    'bool': bool,
    'list': list,
    'dict': dict,
}


def _schema_type(key: str, rules: dict):
    type_name = rules.get('type', 'str')
    if type_name not in SCHEMA_TYPES:
        logger.warning(f"Unknown type in schema for '{key}'. Using 'str'.")
        return str
    return SCHEMA_TYPES[type_name]


def _type_names(expected_type) -> str:
    if isinstance(expected_type, tuple):
        return ', '.join(t.__name__ for t in expected_type)
    return expected_type.__name__


def validate_config(config: dict, schema: dict, strict: bool = True) -> Tuple[Dict[str, Any], List[dict]]:
    """
    Validate `config` against a dict-based schema, returning a new dict
    that merges defaults and logs warnings for errors. Supports range validation.

    Args:
        config (dict): The configuration to be validated.
        schema (dict): Schema describing expected keys, types, allowed values, and ranges.
        strict (bool): If True, keys not in the schema are dropped.

    Returns:
        tuple: The *merged* config with defaults applied, and the list of problems found.

    Raises:
        ValueError: If validation fails for any critical (fatal) schema items
    """
    validated_config = {}
    errors = []

    logger.debug('Checking config against schema...')
    for key, rules in schema.items():
        default_val = rules.get('default')
        required = rules.get('required', False)
        allowed = rules.get('allowed')
        value_range = rules.get('range', None)
        description = rules.get('description', 'No description provided')
        fatal = rules.get('fatal', False)
        expected_type = _schema_type(key, rules)

        if key not in config:
            if required:
                errors.append(
                    {'key': key,
                     'error': f"'{key}' configuration key is required, but missing. Reasonable value: {default_val}. Description: {description}",
                     'fatal': fatal}
                )
            validated_config[key] = default_val
            continue

        value = config[key]
        logger.debug(f'{key}: {value}')

        # bool is an int subclass; only accept it where the schema asks for bool
        wrong_bool = isinstance(value, bool) and expected_type is not bool
        if wrong_bool or not isinstance(value, expected_type):
            errors.append(
                {'key': key,
                 'error': f"'{key}' must be of type {_type_names(expected_type)}, got {type(value).__name__}.",
                 'fatal': fatal}
            )
            validated_config[key] = default_val
            continue

        if allowed and value not in allowed:
            errors.append(
                {'key': key,
                 'error': f"'{key}' must be one of {allowed}, got {value}.",
                 'fatal': fatal}
            )
            validated_config[key] = default_val
            continue

        if value_range and isinstance(value, (int, float)):
            min_val, max_val = value_range
            if not (min_val <= value <= max_val):
                errors.append(
                 {'key': key,
                  'error': f"'{key}' must be within the range {value_range}, got {value}.",
                  'fatal': fatal}
                )
                validated_config[key] = default_val
                continue

        validated_config[key] = value

    extra_keys = set(config.keys()) - set(schema.keys())
    if strict:
        for extra_key in extra_keys:
            logger.warning(f"Extra key '{extra_key}' is not defined in schema and will be removed.")
    else:
        for extra_key in extra_keys:
            logger.debug(f"Extra key '{extra_key}' in config not in schema. Keeping as-is.")
            validated_config[extra_key] = config[extra_key]

    if errors:
        fatal = False
        logger.warning('Configuration was not valid due to the following problems:')
        for e in errors:
            logger.warning(e['error'])
            if e['fatal']:
                logger.error(f'Fatal configuration error in {e["key"]}')
                fatal = True
            else:
                logger.warning(f'A reasonable value for {e["key"]} was substituted.')
        if fatal:
            raise ValueError(f"Configuration validation failed: {errors}")

    logger.info("Configuration validated successfully.")
    return validated_config, errors


def load_yaml_file(filepath: str) -> dict:
    """
    Safely load a YAML file and return its contents as a dictionary.

    Args:
        filepath (str): Path to the YAML file.

    Returns:
        dict: Parsed contents of the YAML file.

    Raises:
        FileNotFoundError: If the specified file does not exist.
        ValueError: If the file cannot be parsed or is not a dictionary.
    """
    path = Path(filepath).expanduser().resolve()

    logger.info(f"Reading yaml file at {path}")

    if not path.is_file():
        raise FileNotFoundError(f"YAML file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML file '{path}': {e}")

    if not isinstance(data, dict):
        raise ValueError(f"YAML file '{path}' does not contain a valid dictionary.")

    logger.info(f"YAML file '{path}' loaded successfully.")
    return data
