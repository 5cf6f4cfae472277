"""Dialog presentation contract.

The orchestrator hands a presenter an UpdatePrompt; the presenter renders
it, waits for the user's choice and awaits exactly one of the callbacks.
on_later is None when the user must not be able to dismiss the dialog.
"""

import inspect
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

Action = Callable[[], Awaitable[None]]

DEFAULT_APP_NAME = "App"
DIALOG_TITLE = "Update Available"


@dataclass(frozen=True)
class UpdatePrompt:
    is_force_update: bool
    app_name: str
    on_update: Action
    on_later: Action | None


def dialog_message(app_name: str = "") -> str:
    return (f"A new version of {app_name or 'the app'} is available. "
            f"Please update to the latest version.")


class DialogPresenter(ABC):
    """Renders update prompts for one UI host."""

    def can_present(self) -> bool:
        """False when the host UI is gone or has no compatible root."""
        return True

    @abstractmethod
    async def present(self, prompt: UpdatePrompt):
        """Show the prompt and run the callback the user picked."""


class CallbackPresenter(DialogPresenter):
    """Delegates rendering to a caller-supplied function.

    The renderer receives the prompt and returns the chosen action
    ("update" or "later"), either directly or as an awaitable. Returning
    None means the dialog was closed without a choice.
    """

    UPDATE = "update"
    LATER = "later"

    def __init__(self, renderer, is_available: Callable[[], bool] | None = None):
        self._renderer = renderer
        self._is_available = is_available

    def can_present(self) -> bool:
        if self._is_available is None:
            return True
        return self._is_available()

    async def present(self, prompt: UpdatePrompt):
        choice = self._renderer(prompt)
        if inspect.isawaitable(choice):
            choice = await choice

        if choice == self.UPDATE:
            await prompt.on_update()
        elif choice == self.LATER:
            if prompt.on_later is None:
                raise ValueError("Renderer chose 'later' but dismissal is not allowed")
            await prompt.on_later()
        elif choice is not None:
            raise ValueError(f"Unknown dialog choice: {choice!r}")
