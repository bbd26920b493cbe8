"""Main Textual application for the design mentor chat."""

from __future__ import annotations

from datetime import datetime
import logging
import sys
from typing import Any

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.css.query import NoMatches
from textual.widgets import Button, Footer, Header, Input, OptionList

from .commands import IMAGINE_COMMAND, is_submittable
from .config import load_config, resolve_api_key
from .dispatcher import RequestDispatcher
from .image_store import ImageStore, ImageStoreError
from .logging_utils import configure_logging
from .models import Author, Message
from .orchestrator import ConversationOrchestrator
from .provider import GeminiProvider
from .task_manager import TaskManager
from .widgets.conversation import ConversationView
from .widgets.input_box import InputBox
from .widgets.status_bar import StatusBar

LOGGER = logging.getLogger(__name__)

ACTIVE_REQUEST_TASK = "active_request"


def build_orchestrator(
    config: dict[str, Any], environ: dict[str, str] | None = None
) -> ConversationOrchestrator:
    """Wire provider, dispatcher, and orchestrator from validated config."""
    gemini_cfg = config["gemini"]
    mentor_cfg = config["mentor"]
    provider = GeminiProvider(
        api_key=resolve_api_key(gemini_cfg, environ),
        text_model=str(gemini_cfg["text_model"]),
        image_model=str(gemini_cfg["image_model"]),
    )
    if not provider.api_key:
        LOGGER.warning(
            "app.api_key.missing",
            extra={"event": "app.api_key.missing", "env": gemini_cfg["api_key_env"]},
        )
    dispatcher = RequestDispatcher(
        provider,
        persona=str(mentor_cfg["persona"]),
        grounding_enabled=bool(gemini_cfg["grounding_enabled"]),
    )
    return ConversationOrchestrator(dispatcher, greeting=str(mentor_cfg["greeting"]))


class MentorChatApp(App[None]):
    """Render the conversation and forward submissions to the orchestrator."""

    CSS = """
    #app-root {
        layout: vertical;
        height: 1fr;
    }
    #conversation {
        height: 1fr;
        padding: 0 1;
    }
    #pending-indicator {
        color: $text-muted;
        padding: 0 1;
    }
    """

    DEFAULT_ACTION_DESCRIPTIONS: dict[str, str] = {
        "send_message": "Send",
        "quit": "Quit",
        "scroll_up": "Scroll Up",
        "scroll_down": "Scroll Down",
    }

    SLASH_COMMANDS: tuple[tuple[str, str], ...] = (
        (f"{IMAGINE_COMMAND} <prompt>", "Generate a design concept image"),
    )

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        orchestrator: ConversationOrchestrator | None = None,
    ) -> None:
        self.config = config if config is not None else load_config()
        configure_logging(self.config["logging"])
        LOGGER.info(
            "app.python",
            extra={
                "event": "app.python",
                "executable": sys.executable,
                "version": sys.version.split()[0],
            },
        )
        self.window_title = str(self.config["app"]["title"])
        self.orchestrator = orchestrator or build_orchestrator(self.config)
        self.orchestrator.add_listener(self._on_message_appended)
        self._image_store = ImageStore(str(self.config["ui"]["image_dir"]))
        self._task_manager = TaskManager()
        self._binding_specs = self._binding_specs_from_config(self.config)
        super().__init__()

    @classmethod
    def _binding_specs_from_config(cls, config: dict[str, Any]) -> list[Binding]:
        """Build bindings for every action with a non-blank configured key."""
        keybinds = config.get("keybinds", {})
        bindings: list[Binding] = []
        for action_name, description in cls.DEFAULT_ACTION_DESCRIPTIONS.items():
            binding_key = keybinds.get(action_name)
            if isinstance(binding_key, str) and binding_key.strip():
                bindings.append(
                    Binding(
                        key=binding_key.strip(),
                        action=action_name,
                        description=description,
                        show=True,
                    )
                )
        return bindings

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="app-root"):
            yield ConversationView(id="conversation")
            yield InputBox()
            yield StatusBar(id="status_bar")
        yield Footer()

    async def on_mount(self) -> None:
        self.title = self.window_title
        self.sub_title = "Ready"
        for binding in self._binding_specs:
            self.bind(
                binding.key,
                binding.action,
                description=binding.description,
                show=binding.show,
            )
        for message in self.orchestrator.messages:
            await self._add_bubble(message)
        self._update_status_bar()
        self.query_one("#message_input", Input).focus()

    def _timestamp(self) -> str:
        if not bool(self.config["ui"]["show_timestamps"]):
            return ""
        return datetime.now().strftime("%H:%M")

    def _update_status_bar(self) -> None:
        gemini_cfg = self.config["gemini"]
        self.query_one(StatusBar).set_status(
            awaiting_response=self.orchestrator.is_awaiting_response,
            text_model=str(gemini_cfg["text_model"]),
            image_model=str(gemini_cfg["image_model"]),
            message_count=self.orchestrator.message_count,
        )

    def _set_input_enabled(self, enabled: bool) -> None:
        input_widget = self.query_one("#message_input", Input)
        input_widget.disabled = not enabled
        self.query_one("#send_button", Button).disabled = not enabled
        if enabled:
            input_widget.focus()

    async def _add_bubble(self, message: Message) -> None:
        ui_cfg = self.config["ui"]
        color = (
            ui_cfg["user_message_color"]
            if message.author is Author.USER
            else ui_cfg["assistant_message_color"]
        )
        image_path = None
        if message.has_image:
            try:
                image_path = self._image_store.save(message)
            except ImageStoreError as exc:
                LOGGER.warning(
                    "app.image.save_failed",
                    extra={"event": "app.image.save_failed", "error": str(exc)},
                )
        bubble = await self.query_one(ConversationView).add_message(
            message, timestamp=self._timestamp(), image_path=image_path
        )
        bubble.styles.border_left = ("thick", color)

    async def _on_message_appended(self, message: Message) -> None:
        conversation = self.query_one(ConversationView)
        await self._add_bubble(message)
        if message.author is Author.USER:
            await conversation.show_pending()
        else:
            await conversation.hide_pending()
        self._update_status_bar()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "message_input":
            await self.send_user_message()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send_button":
            event.stop()
            await self.send_user_message()

    def on_input_changed(self, event: Input.Changed) -> None:
        """Mirror edits into the pending buffer and toggle the command hints."""
        if event.input.id != "message_input":
            return
        self.orchestrator.pending_input = event.value
        menu = self.query_one("#slash_menu", OptionList)
        menu.clear_options()
        prefix = event.value.split(" ", 1)[0]
        if event.value.startswith("/") and " " not in event.value:
            for command, description in self.SLASH_COMMANDS:
                if command.startswith(prefix):
                    menu.add_option(f"{command} - {description}")
        menu.set_class(menu.option_count == 0, "hidden")

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option_list.id != "slash_menu":
            return
        input_widget = self.query_one("#message_input", Input)
        input_widget.value = f"{IMAGINE_COMMAND} "
        input_widget.cursor_position = len(input_widget.value)
        input_widget.focus()
        event.stop()

    async def action_send_message(self) -> None:
        await self.send_user_message()

    def action_scroll_up(self) -> None:
        self.query_one(ConversationView).scroll_up(animate=False)

    def action_scroll_down(self) -> None:
        self.query_one(ConversationView).scroll_down(animate=False)

    async def send_user_message(self) -> None:
        """Start a submission in the background so the UI keeps handling events."""
        input_widget = self.query_one("#message_input", Input)
        text = input_widget.value
        if (
            self.orchestrator.is_awaiting_response
            or self._task_manager.is_running(ACTIVE_REQUEST_TASK)
        ):
            self.sub_title = "Busy. Wait for the current reply."
            return
        if not is_submittable(text):
            self.sub_title = "Cannot send an empty message."
            return
        # Clear before the task starts; queued Input.Changed events must not restore it.
        input_widget.value = ""
        self._task_manager.spawn(ACTIVE_REQUEST_TASK, self._run_submission(text))

    async def _run_submission(self, text: str) -> None:
        self._set_input_enabled(False)
        self.sub_title = "Waiting for response..."
        try:
            await self.orchestrator.submit(text)
        finally:
            try:
                self._set_input_enabled(True)
                self._update_status_bar()
            except NoMatches:
                # The app is shutting down and its widgets are gone.
                pass
            self.sub_title = "Ready"

    async def wait_for_reply(self) -> None:
        """Await the in-flight submission, if any."""
        await self._task_manager.wait(ACTIVE_REQUEST_TASK)

    async def on_unmount(self) -> None:
        await self._task_manager.cancel_all()
