"""Example: drive a shift through the service layer (no Flask).

The controller is only a thin layer; the lifecycle lives in ShiftSessionManager.
"""

import importlib
import sys

from config import get_settings_module

from src.shift_tracker.shift_tracker.container import build_container


def main(user_id: str, location: str = "123 Main St"):
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        backend=settings.RECORD_STORE,
        firebase_config=settings.FIREBASE_CONFIG,
        db_config=settings.DB_CONFIG,
    )

    manager = container.sessions.open_session(user_id)
    if not manager.current_state().is_open:
        print("started", manager.start_shift(user_id, location))
    manager.end_shift()
    print(manager.current_state().to_dict())
    container.sessions.close_session(user_id)


if __name__ == "__main__":
    main(*sys.argv[1:])
