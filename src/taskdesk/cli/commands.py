# src/taskdesk/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from ..ui.screens import (
    DEFAULT_INPUT_MAX_LEN,
    AddTask,
    AppModel,
    ClearField,
    CompleteTask,
    DeleteTask,
    Event,
    Field,
    Focus,
    Logout,
    Refresh,
    Screen,
    ShowPage,
    Submit,
    SwitchScreen,
    TypeText,
    printable_ascii,
    update,
)

CommandHandler = Callable[[AppState, list[str]], str]

MSG_CREDENTIALS_ASCII = "Usernames and passwords can only use plain ASCII characters."
MSG_TITLE_ASCII = "Task titles can only use plain ASCII characters; nothing was added."

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /login, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def render_model(model: AppModel, *, max_tasks: int | None = None, total: int | None = None) -> str:
    """
    Text rendering of the current screen (popup first, then screen body).

    `total` is the user's task count; when the dashboard shows fewer rows than
    that, a paging note tells which rows are on screen.
    """
    lines: list[str] = []
    if model.popup is not None:
        tag = "OK" if model.popup.success else "!!"
        lines.append(f"[{tag}] {model.popup.message}")

    if model.screen is Screen.REGISTRATION:
        lines.append("[Register] /register <username> <password>   (have an account? /login)")
    elif model.screen is Screen.LOGIN:
        lines.append("[Login] /login <username> <password>   (new here? /register)")
    elif model.dashboard is not None:
        view = model.dashboard
        lines.append(f"Welcome, {view.username}!")
        if not view.tasks:
            if view.page == 0:
                lines.append("  (no tasks yet, add one with /add <title>)")
            else:
                lines.append(f"  (no tasks on page {view.page + 1}, try /list 1)")
        for t in view.tasks:
            mark = "x" if t.completed else " "
            lines.append(f"  {t.id:>4}  [{mark}] {t.title}")
        if view.tasks and total is not None and total > len(view.tasks):
            first = view.page * (max_tasks or len(view.tasks)) + 1
            last = first + len(view.tasks) - 1
            lines.append(f"  (showing tasks {first}-{last} of {total}, /list <page> for more)")
    return "\n".join(lines)


def render_state(state: AppState) -> str:
    """render_model with the store's page size and the current user's task count."""
    user = state.model.current_user
    total = state.tasks.count_tasks(user) if user else None
    return render_model(state.model, max_tasks=state.tasks.max_tasks, total=total)


def dispatch(state: AppState, *events: Event) -> AppModel:
    """Feed events through the screen machine and store the resulting model on state."""
    max_len = int(getattr(state.settings, "input_max_len", DEFAULT_INPUT_MAX_LEN))
    model = state.model
    for ev in events:
        model = update(model, ev, auth=state.auth, tasks=state.tasks, max_len=max_len)
    state.model = model
    return model


def _fill_and_submit(state: AppState, username: str, password: str) -> str:
    if printable_ascii(username) != username or printable_ascii(password) != password:
        # The form drops these characters.
        return MSG_CREDENTIALS_ASCII
    dispatch(
        state,
        Focus(Field.USERNAME),
        ClearField(),
        TypeText(username),
        Focus(Field.PASSWORD),
        ClearField(),
        TypeText(password),
        Submit(),
    )
    return render_state(state)


def add_title(state: AppState, title: str) -> str:
    """Add a task from the dashboard title field; refuses titles the field would mangle."""
    if printable_ascii(title) != title:
        return MSG_TITLE_ASCII
    dispatch(state, Focus(Field.TITLE), ClearField(), TypeText(title), AddTask())
    return render_state(state)


def _parse_int(args: list[str]) -> int | None:
    if len(args) != 1:
        return None
    try:
        return int(args[0])
    except ValueError:
        return None


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    user = state.model.current_user
    lines = [
        "Status:",
        f"  Screen: {state.model.screen.value}",
        f"  User: {user or '-'}",
        f"  Database: {getattr(settings, 'db_path', '?')}",
        f"  Owner check: {'ON' if state.tasks.owner_check else 'OFF'}",
        f"  Task cap: {state.tasks.max_tasks}",
    ]
    if user:
        lines.append(f"  Your tasks: {state.tasks.count_tasks(user)}")
    return "\n".join(lines)


def cmd_register(state: AppState, args: list[str]) -> str:
    """
    /register                      -> switch to the registration screen
    /register <user> <password>    -> create an account
    """
    if state.model.screen is Screen.DASHBOARD:
        return f"Logged in as {state.model.current_user}. Use /logout first."
    if state.model.screen is Screen.LOGIN:
        dispatch(state, SwitchScreen())
    if not args:
        return render_state(state)
    if len(args) < 2:
        return "Usage: /register <username> <password>"
    return _fill_and_submit(state, args[0], " ".join(args[1:]))


def cmd_login(state: AppState, args: list[str]) -> str:
    """
    /login                      -> switch to the login screen
    /login <user> <password>    -> log in and open the dashboard
    """
    if state.model.screen is Screen.DASHBOARD:
        return f"Logged in as {state.model.current_user}. Use /logout first."
    if state.model.screen is Screen.REGISTRATION:
        dispatch(state, SwitchScreen())
    if not args:
        return render_state(state)
    if len(args) < 2:
        return "Usage: /login <username> <password>"
    return _fill_and_submit(state, args[0], " ".join(args[1:]))


def cmd_add(state: AppState, args: list[str]) -> str:
    if state.model.screen is not Screen.DASHBOARD:
        return "Log in first (/login <username> <password>)."
    if not args:
        return "Usage: /add <title>"
    return add_title(state, " ".join(args))


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list           -> reload the page on screen
    /list <page>    -> show page <page> (1-based, one page per task cap)
    """
    if state.model.screen is not Screen.DASHBOARD:
        return render_state(state)
    if not args:
        dispatch(state, Refresh())
        return render_state(state)
    page = _parse_int(args)
    if page is None or page < 1:
        return "Usage: /list [page]"
    dispatch(state, ShowPage(page - 1))
    return render_state(state)


def cmd_done(state: AppState, args: list[str]) -> str:
    if state.model.screen is not Screen.DASHBOARD:
        return "Log in first (/login <username> <password>)."
    task_id = _parse_int(args)
    if task_id is None:
        return "Usage: /done <task id>"
    dispatch(state, CompleteTask(task_id))
    return render_state(state)


def cmd_del(state: AppState, args: list[str]) -> str:
    if state.model.screen is not Screen.DASHBOARD:
        return "Log in first (/login <username> <password>)."
    task_id = _parse_int(args)
    if task_id is None:
        return "Usage: /del <task id>"
    dispatch(state, DeleteTask(task_id))
    return render_state(state)


def cmd_logout(state: AppState, args: list[str]) -> str:
    if state.model.screen is not Screen.DASHBOARD:
        return "Not logged in."
    user = state.model.current_user
    dispatch(state, Logout())
    logger.info("User logged out user=%s", user)
    return render_state(state)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show screen, user and store settings.")
registry.register("register", cmd_register, help_text="Create an account: /register <user> <password>.")
registry.register("login", cmd_login, help_text="Log in: /login <user> <password>.")
registry.register("add", cmd_add, help_text="Add a task: /add <title>.")
registry.register("list", cmd_list, help_text="Show your tasks: /list [page].", aliases=["ls"])
registry.register("done", cmd_done, help_text="Mark a task completed: /done <id>.", aliases=["complete"])
registry.register("del", cmd_del, help_text="Delete a task: /del <id>.", aliases=["delete", "rm"])
registry.register("logout", cmd_logout, help_text="Log out and return to the login screen.")
