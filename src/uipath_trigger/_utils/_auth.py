import base64
import json
from pathlib import Path
from typing import Dict

from ..models.token import AccessTokenData
from .constants import DOTENV_FILE


def parse_access_token(access_token: str) -> AccessTokenData:
    token_parts = access_token.split(".")
    if len(token_parts) < 2:
        raise ValueError("Invalid access token")
    payload = base64.urlsafe_b64decode(
        token_parts[1] + "=" * (-len(token_parts[1]) % 4)
    )
    return json.loads(payload)


def update_env_file(env_contents: Dict[str, str], env_path: Path | None = None):
    env_path = env_path or Path.cwd() / DOTENV_FILE
    if env_path.exists():
        with open(env_path, "r") as f:
            for line in f:
                if "=" in line:
                    key, value = line.strip().split("=", 1)
                    if key not in env_contents:
                        env_contents[key] = value
    lines = [f"{key}={value}\n" for key, value in env_contents.items()]
    with open(env_path, "w") as f:
        f.writelines(lines)
