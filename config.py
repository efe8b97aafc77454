"""
Runtime settings for the Battlesnake server.

Everything is read from environment variables so the same build can be
deployed with a different port or appearance without code changes.
"""

import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

TRUTHY = {'1', 'true', 'yes', 'on'}


@dataclass(frozen=True)
class Settings:
    host: str = '0.0.0.0'
    port: int = 8080
    debug: bool = False
    log_level: str = 'INFO'

    # Appearance, see https://docs.battlesnake.com/references/personalization
    author: str = 'YourUsername'
    color: str = '#023047'
    head: str = 'pixel'
    tail: str = 'pixel'

    def info(self) -> Dict[str, str]:
        """Payload for the info endpoint"""
        return {
            "apiversion": "1",
            "author": self.author,
            "color": self.color,
            "head": self.head,
            "tail": self.tail,
        }


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment (os.environ by default)"""
    env = os.environ if environ is None else environ
    defaults = Settings()

    port = env.get('PORT', str(defaults.port))
    try:
        port = int(port)
    except ValueError:
        raise ValueError(f"PORT must be an integer, got {port!r}") from None

    return Settings(
        host=env.get('HOST', defaults.host),
        port=port,
        debug=env.get('DEBUG', '').strip().lower() in TRUTHY,
        log_level=env.get('LOG_LEVEL', defaults.log_level).upper(),
        author=env.get('BATTLESNAKE_AUTHOR', defaults.author),
        color=env.get('BATTLESNAKE_COLOR', defaults.color),
        head=env.get('BATTLESNAKE_HEAD', defaults.head),
        tail=env.get('BATTLESNAKE_TAIL', defaults.tail),
    )
