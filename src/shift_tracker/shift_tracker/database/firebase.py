from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore


@dataclass
class FirebaseConfig:
    credentials: str = ""
    project_id: str = ""

    @classmethod
    def from_dict(cls, firebase_config: dict) -> "FirebaseConfig":
        return cls(
            credentials=str(firebase_config.get("credentials") or ""),
            project_id=str(firebase_config.get("project_id") or ""),
        )


class FirebaseConnection:
    """Singleton-like holder of the firebase_admin App.

    A service account JSON path is used when configured, otherwise Application
    Default Credentials (GOOGLE_APPLICATION_CREDENTIALS, metadata server, ...).
    """

    _instance: Optional["FirebaseConnection"] = None

    def __init__(self, config: FirebaseConfig):
        self._config = config
        self._app: Optional[firebase_admin.App] = None

    @classmethod
    def get_instance(cls, config: FirebaseConfig) -> "FirebaseConnection":
        if cls._instance is None:
            cls._instance = FirebaseConnection(config)
        return cls._instance

    @property
    def app(self) -> firebase_admin.App:
        if self._app is None:
            try:
                self._app = firebase_admin.get_app()
            except ValueError:
                if self._config.credentials:
                    cred = credentials.Certificate(self._config.credentials)
                else:
                    cred = credentials.ApplicationDefault()
                options = {"projectId": self._config.project_id} if self._config.project_id else None
                self._app = firebase_admin.initialize_app(cred, options)
        return self._app

    def client(self):
        return firestore.client(app=self.app)
