# src/taskdesk/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..ui.screens import AppModel
from .ports import AuthRepo, TaskRepo


@dataclass
class AppState:
    """
    Everything a front-end needs: settings, the two stores, and the current
    screen model. `model` is replaced (never mutated) by ui.screens.update().
    """

    settings: Any
    auth: AuthRepo
    tasks: TaskRepo
    model: AppModel = field(default_factory=AppModel)
