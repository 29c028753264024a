"""Application paths configuration."""

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AppPaths:
    config_path: Path
    session_path: Path

    @classmethod
    def default(cls) -> "AppPaths":
        home = Path.home()
        data_home = Path(os.environ.get("XDG_DATA_HOME", str(home / ".local" / "share")))

        return cls(
            config_path=Path("settings.yml"),
            session_path=data_home / "tokolist" / "session.json",
        )
