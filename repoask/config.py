import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from .errors import ConfigError

# --- Configuration ---
DEFAULT_IGNORES = [
    ".git/", ".hg/", ".svn/", "__pycache__/", "*.pyc", "*.pyo", "*.pyd",
    "build/", "dist/", "eggs/", ".eggs/", "wheels/", "*.egg-info/", "*.egg",
    ".env", ".venv", "env/", "venv/", "node_modules/", "target/",
    ".pytest_cache/", ".mypy_cache/", ".tox/", ".nox/", "htmlcov/",
    ".vscode/", ".idea/", ".DS_Store", "Thumbs.db",
    "*.png", "*.jpg", "*.jpeg", "*.gif", "*.bmp", "*.tiff", "*.ico",
    "*.mp3", "*.wav", "*.ogg", "*.flac", "*.mp4", "*.avi", "*.mov",
    "*.zip", "*.tar.gz", "*.rar", "*.7z", "*.iso", "*.pdf",
    "*.o", "*.so", "*.dll", "*.exe", "*.jar", "*.sqlite", "*.db", "*.lock",
]
INCLUDE_FILES_BY_DEFAULT = False
TICK_INTERVAL = 0.05

COMPLETION_ENDPOINT = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-4o-2024-11-20"
DEFAULT_TIMEOUT = 120.0
TOKEN_PATH = Path.home() / ".sgpt" / "token"


@dataclass(frozen=True)
class Settings:
    model: str = DEFAULT_MODEL
    endpoint: str = COMPLETION_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "warning"
    log_file: Optional[Path] = None
    token: Optional[str] = None

    def with_token(self, token_path: Path = TOKEN_PATH) -> "Settings":
        if self.token: return self
        return replace(self, token=load_token(token_path))


def load_settings(model: Optional[str] = None, log_level: Optional[str] = None) -> Settings:
    timeout_raw = os.environ.get("REPOASK_TIMEOUT")
    try:
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT
    except ValueError as exc:
        raise ConfigError(f"REPOASK_TIMEOUT must be a number, got {timeout_raw!r}") from exc
    log_file = os.environ.get("REPOASK_LOG_FILE")
    return Settings(
        model=model or os.environ.get("REPOASK_MODEL") or DEFAULT_MODEL,
        endpoint=os.environ.get("REPOASK_ENDPOINT") or COMPLETION_ENDPOINT,
        timeout=timeout,
        log_level=log_level or os.environ.get("REPOASK_LOG_LEVEL") or "warning",
        log_file=Path(log_file) if log_file else None,
        token=os.environ.get("OPENAI_API_KEY") or None,
    )


def load_token(token_path: Path = TOKEN_PATH) -> str:
    try:
        lines = token_path.read_text(encoding="utf-8").strip().splitlines()
    except OSError as exc:
        raise ConfigError(f"Failed to read token from {token_path} (or set OPENAI_API_KEY)") from exc
    if not lines:
        raise ConfigError(f"Token file {token_path} is empty")
    return lines[0].strip()


def configure_logging(level: str = "warning", log_file: Optional[Path] = None) -> None:
    level_value = getattr(logging, level.strip().upper(), logging.WARNING)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
    root = logging.getLogger()
    root.setLevel(level_value)
    if not root.handlers:
        root.addHandler(handler)
