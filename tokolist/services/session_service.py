"""JSON-file storage for the signed-in session.

Holds the single ``{token, user}`` object the backend hands out at login.
Failures are logged and reported through return values, never raised, so a
broken session file behaves like a signed-out user.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from tokolist.domain.session import Session

logger = logging.getLogger("TokoList.SessionService")


class SessionService:
    def __init__(self, path: Path):
        self.path = Path(path)

    def save_user(self, session: Session) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                f.write(session.model_dump_json(indent=2))
            logger.info("Session saved to %s", self.path)
            return True
        except OSError as e:
            logger.error("Failed to save session: %s", e)
            return False

    def get_user(self) -> Optional[Session]:
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
            return Session.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.error("Failed to read session: %s", e)
            return None

    def remove_user(self) -> bool:
        try:
            self.path.unlink(missing_ok=True)
            return True
        except OSError as e:
            logger.error("Failed to remove session: %s", e)
            return False
