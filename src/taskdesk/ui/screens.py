# src/taskdesk/ui/screens.py

"""
Screen state machine: Registration -> Login -> Dashboard.

All UI state lives in immutable dataclasses. A front-end turns user input into
events and calls `update(model, event, auth=..., tasks=...)`, which returns the
next model. Drawing is the front-end's business; nothing here knows about
pixels, windows or mice.

Screen changes only happen through TRANSITIONS.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Union

from ..auth.auth_models import AuthOutcome
from ..core.ports import AuthRepo, TaskRepo
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)

MSG_REGISTERED = "Registration successful! Redirecting to login..."
MSG_REGISTER_FAILED = "Username already exists or invalid input!"
MSG_FILL_ALL = "Please fill in all fields!"
MSG_LOGGED_IN = "Login successful! Redirecting to dashboard..."
MSG_ADD_FAILED = "Could not add task."

DEFAULT_INPUT_MAX_LEN = 255


class Screen(StrEnum):
    REGISTRATION = "registration"
    LOGIN = "login"
    DASHBOARD = "dashboard"


class Trigger(StrEnum):
    REGISTERED = "registered"
    AUTHENTICATED = "authenticated"
    SWITCH = "switch"
    LOGOUT = "logout"


TRANSITIONS: dict[tuple[Screen, Trigger], Screen] = {
    (Screen.REGISTRATION, Trigger.REGISTERED): Screen.LOGIN,
    (Screen.REGISTRATION, Trigger.SWITCH): Screen.LOGIN,
    (Screen.LOGIN, Trigger.SWITCH): Screen.REGISTRATION,
    (Screen.LOGIN, Trigger.AUTHENTICATED): Screen.DASHBOARD,
    (Screen.DASHBOARD, Trigger.LOGOUT): Screen.LOGIN,
}


def next_screen(screen: Screen, trigger: Trigger) -> Screen | None:
    """Target screen for `trigger`, or None if the table has no such edge."""
    return TRANSITIONS.get((screen, trigger))


class Field(StrEnum):
    USERNAME = "username"
    PASSWORD = "password"
    TITLE = "title"


# ---- per-screen state ----


@dataclass(frozen=True, slots=True)
class CredentialsForm:
    username: str = ""
    password: str = ""
    focus: Field | None = None


@dataclass(frozen=True, slots=True)
class DashboardView:
    username: str
    # Snapshot of the store; refreshed after every mutation.
    tasks: tuple[Task, ...] = ()
    new_title: str = ""
    input_focused: bool = False
    # 0-based; each page holds up to tasks.max_tasks rows.
    page: int = 0


@dataclass(frozen=True, slots=True)
class Popup:
    message: str
    success: bool


@dataclass(frozen=True, slots=True)
class AppModel:
    screen: Screen = Screen.REGISTRATION
    registration: CredentialsForm = field(default_factory=CredentialsForm)
    login: CredentialsForm = field(default_factory=CredentialsForm)
    dashboard: DashboardView | None = None
    popup: Popup | None = None

    @property
    def current_user(self) -> str | None:
        return self.dashboard.username if self.dashboard is not None else None


# ---- events ----


@dataclass(frozen=True, slots=True)
class Focus:
    target: Field | None


@dataclass(frozen=True, slots=True)
class TypeText:
    text: str


@dataclass(frozen=True, slots=True)
class Backspace:
    pass


@dataclass(frozen=True, slots=True)
class ClearField:
    pass


@dataclass(frozen=True, slots=True)
class Submit:
    pass


@dataclass(frozen=True, slots=True)
class SwitchScreen:
    pass


@dataclass(frozen=True, slots=True)
class AddTask:
    pass


@dataclass(frozen=True, slots=True)
class CompleteTask:
    task_id: int


@dataclass(frozen=True, slots=True)
class DeleteTask:
    task_id: int


@dataclass(frozen=True, slots=True)
class DismissPopup:
    pass


@dataclass(frozen=True, slots=True)
class Logout:
    pass


@dataclass(frozen=True, slots=True)
class Refresh:
    pass


@dataclass(frozen=True, slots=True)
class ShowPage:
    page: int


Event = Union[
    Focus,
    TypeText,
    Backspace,
    ClearField,
    Submit,
    SwitchScreen,
    AddTask,
    CompleteTask,
    DeleteTask,
    DismissPopup,
    Logout,
    Refresh,
    ShowPage,
]


# ---- helpers ----


def printable_ascii(text: str) -> str:
    """Keep only the characters a form field accepts (printable ASCII, 32..126)."""
    return "".join(ch for ch in text if 32 <= ord(ch) <= 126)


def _append(buf: str, text: str, max_len: int) -> str:
    return (buf + printable_ascii(text))[:max_len]


def _go(model: AppModel, trigger: Trigger, **changes) -> AppModel:
    target = next_screen(model.screen, trigger)
    if target is None:
        logger.debug("No transition screen=%s trigger=%s", model.screen, trigger)
        return model
    logger.debug("Screen %s -> %s (%s)", model.screen, target, trigger)
    return replace(model, screen=target, **changes)


def _form_attr(screen: Screen) -> str:
    return "registration" if screen is Screen.REGISTRATION else "login"


def _refresh(view: DashboardView, tasks: TaskRepo) -> DashboardView:
    offset = view.page * tasks.max_tasks
    return replace(view, tasks=tuple(tasks.fetch_tasks(view.username, offset=offset)))


# ---- per-screen update ----


def _update_form(
    model: AppModel, event: Event, auth: AuthRepo, tasks: TaskRepo, max_len: int
) -> AppModel:
    attr = _form_attr(model.screen)
    form: CredentialsForm = getattr(model, attr)

    if isinstance(event, Focus):
        target = event.target if event.target in (Field.USERNAME, Field.PASSWORD) else None
        return replace(model, **{attr: replace(form, focus=target)})

    if isinstance(event, TypeText) and form.focus is not None:
        name = form.focus.value
        value = _append(getattr(form, name), event.text, max_len)
        return replace(model, **{attr: replace(form, **{name: value})})

    if isinstance(event, Backspace) and form.focus is not None:
        name = form.focus.value
        return replace(model, **{attr: replace(form, **{name: getattr(form, name)[:-1]})})

    if isinstance(event, ClearField) and form.focus is not None:
        return replace(model, **{attr: replace(form, **{form.focus.value: ""})})

    if isinstance(event, SwitchScreen):
        return _go(model, Trigger.SWITCH)

    if not isinstance(event, Submit):
        return model

    if model.screen is Screen.REGISTRATION:
        if not form.username or not form.password:
            return replace(model, popup=Popup(MSG_FILL_ALL, False))
        result = auth.register(form.username, form.password)
        if not result:
            msg = result.message if result.outcome is AuthOutcome.STORAGE_ERROR else MSG_REGISTER_FAILED
            return replace(model, popup=Popup(msg, False))
        return _go(
            model,
            Trigger.REGISTERED,
            registration=CredentialsForm(),
            login=CredentialsForm(username=result.username or form.username, focus=Field.PASSWORD),
            popup=Popup(MSG_REGISTERED, True),
        )

    result = auth.login(form.username, form.password)
    if not result:
        return replace(model, popup=Popup(result.message, False))
    view = _refresh(DashboardView(username=result.username or form.username), tasks)
    return _go(
        model,
        Trigger.AUTHENTICATED,
        login=CredentialsForm(),
        dashboard=view,
        popup=Popup(MSG_LOGGED_IN, True),
    )


def _update_dashboard(model: AppModel, event: Event, tasks: TaskRepo, max_len: int) -> AppModel:
    view = model.dashboard
    if view is None:
        # Can't be on the dashboard without a user; fall back to login.
        logger.error("Dashboard screen without a user; returning to login")
        return replace(model, screen=Screen.LOGIN)

    if isinstance(event, Focus):
        return replace(model, dashboard=replace(view, input_focused=event.target is Field.TITLE))

    if isinstance(event, TypeText) and view.input_focused:
        return replace(model, dashboard=replace(view, new_title=_append(view.new_title, event.text, max_len)))

    if isinstance(event, Backspace) and view.input_focused:
        return replace(model, dashboard=replace(view, new_title=view.new_title[:-1]))

    if isinstance(event, ClearField) and view.input_focused:
        return replace(model, dashboard=replace(view, new_title=""))

    if isinstance(event, (Submit, AddTask)):
        if not view.new_title:
            return model
        task_id = tasks.add_task(view.username, view.new_title)
        view = _refresh(replace(view, new_title=""), tasks)
        popup = Popup(MSG_ADD_FAILED, False) if task_id is None else model.popup
        return replace(model, dashboard=view, popup=popup)

    if isinstance(event, CompleteTask):
        tasks.mark_complete(event.task_id, username=view.username)
        return replace(model, dashboard=_refresh(view, tasks))

    if isinstance(event, DeleteTask):
        tasks.delete_task(event.task_id, username=view.username)
        return replace(model, dashboard=_refresh(view, tasks))

    if isinstance(event, Refresh):
        return replace(model, dashboard=_refresh(view, tasks))

    if isinstance(event, ShowPage):
        return replace(model, dashboard=_refresh(replace(view, page=max(0, event.page)), tasks))

    if isinstance(event, Logout):
        return _go(model, Trigger.LOGOUT, dashboard=None)

    return model


def update(
    model: AppModel,
    event: Event,
    *,
    auth: AuthRepo,
    tasks: TaskRepo,
    max_len: int = DEFAULT_INPUT_MAX_LEN,
) -> AppModel:
    """
    Advance the UI by one event.

    Any event clears a visible popup first and is then handled as usual;
    DismissPopup only clears it.
    """
    if model.popup is not None:
        model = replace(model, popup=None)
    if isinstance(event, DismissPopup):
        return model

    if model.screen is Screen.DASHBOARD:
        return _update_dashboard(model, event, tasks, max_len)
    return _update_form(model, event, auth, tasks, max_len)
