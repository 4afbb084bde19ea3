import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

DEFAULT_CONFIG_PATH = Path.home() / ".webhook.flow.toml"


class ConfigStore:
    """Reads the [app] table of the webhook-flow TOML config file."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path).expanduser() if path else DEFAULT_CONFIG_PATH

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> Dict[str, Any]:
        # A missing file is fine, every value can come from the command line.
        if not self.exists():
            return {}
        with self.path.open("rb") as f:
            data = tomllib.load(f)
        section = data.get("app", {})
        if not isinstance(section, dict):
            raise ValueError(f"[app] in {self.path} must be a table")
        return section
