from pydantic_settings import BaseSettings, SettingsConfigDict

from httpdaemon.constants import DAEMON_HTTP_PORT


class ClientSettings(BaseSettings):
    """
    Configuration settings for talking to a peer daemon.

    Attributes:
        daemon_url (str): The base URL of the daemon API.
        timeout (float): Seconds to wait for a response.
    """
    model_config = SettingsConfigDict(env_prefix='HTTPDAEMON_')

    daemon_url: str = f'http://localhost:{DAEMON_HTTP_PORT}'
    timeout: float = 5.0


def get_settings() -> ClientSettings:
    return ClientSettings()
