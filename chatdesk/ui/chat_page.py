"""NiceGUI chat interface with saved sessions, attachments, modes and voice."""

from functools import partial

from nicegui import Client, app, events, ui

from chatdesk.client.assistant import AssistantClient
from chatdesk.composer.attachments import ACCEPTED_EXTENSIONS, AttachmentError, read_attachment
from chatdesk.composer.modes import MODES
from chatdesk.config import get_client_config
from chatdesk.engine.conversation import ConversationEngine
from chatdesk.identity import clear_identity, resolve_user_key
from chatdesk.models.conversation import AttachmentKind, Message, Mode, Role
from chatdesk.storage.backend import get_storage
from chatdesk.storage.session_store import SessionStore
from chatdesk.storage.usage import UsageCounter
from chatdesk.ui.theme import CUSTOM_CSS
from chatdesk.voice.base import NullDictation
from chatdesk.voice.browser import BrowserDictation, BrowserPlayback
from chatdesk.voice.dictation import DictationController


@ui.page("/")
def chat_page(client: Client) -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    config = get_client_config()
    storage = get_storage()
    user_key = resolve_user_key(app.storage.user)

    engine = ConversationEngine(
        assistant=AssistantClient(config),
        store=SessionStore(storage),
        counter=UsageCounter(storage),
        user_key=user_key,
        playback=BrowserPlayback(client) if config.voice_enabled else None,
    )
    composer = engine.composer

    messages_container: ui.column
    history_container: ui.column
    composer_extras: ui.column
    input_field: ui.textarea
    send_btn: ui.button
    mic_btn: ui.button

    def render_avatar(is_user: bool) -> None:
        css = "avatar-user" if is_user else "avatar-assistant"
        icon = "person" if is_user else "smart_toy"
        avatar_classes = f"w-9 h-9 rounded-full flex items-center justify-center {css}"
        with ui.element("div").classes(avatar_classes):
            ui.icon(icon).classes("text-white text-lg")

    def render_message(msg: Message) -> None:
        is_user = msg.role is Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.row().classes(f"w-full {align} gap-3 items-end"):
            if not is_user:
                render_avatar(False)
            with ui.column().classes("max-w-[70%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    attachment = msg.attachment
                    if attachment is not None and attachment.kind is AttachmentKind.IMAGE:
                        ui.image(attachment.content).classes("max-h-48 w-48 rounded-lg mb-2")
                    # Markdown for answers, plain text for questions
                    if is_user:
                        ui.label(msg.text).classes("text-sm leading-relaxed whitespace-pre-wrap")
                    else:
                        ui.markdown(msg.text).classes("text-sm leading-relaxed")
                ui.label(msg.sent_at.astimezone().strftime("%I:%M %p")).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )
            if is_user:
                render_avatar(True)

    def render_thinking() -> None:
        with ui.row().classes("w-full justify-start gap-3 items-end"):
            render_avatar(False)
            with ui.element("div").classes("message-assistant px-4 py-3"):
                with ui.row().classes("items-center gap-2"):
                    with ui.row().classes("gap-1"):
                        for _ in range(3):
                            ui.element("div").classes("typing-dot")
                    ui.label("Thinking...").classes("text-sm text-gray-500 italic")

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not engine.transcript:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("forum").classes("text-5xl text-gray-300")
                    ui.label("What can I help with?").classes("text-lg text-gray-400")
            else:
                for msg in engine.transcript:
                    render_message(msg)
            if engine.busy:
                render_thinking()

    def open_session(session_id: str) -> None:
        engine.open(session_id)
        drawer.hide()

    def refresh_history() -> None:
        history_container.clear()
        with history_container:
            if engine.user_key is None:
                ui.label("Log in to keep your chat history").classes("text-sm text-gray-400 px-3")
                return
            if not engine.sessions:
                ui.label("No chat history yet").classes("text-sm text-gray-400 px-3")
                return
            for session in engine.sessions:
                active = "history-active" if session.id == engine.active_session_id else ""
                with ui.row().classes(f"w-full history-item {active} items-center no-wrap"):
                    ui.label(session.title or "Untitled").classes(
                        "flex-grow truncate cursor-pointer text-sm"
                    ).on("click", partial(open_session, session.id))
                    ui.button(icon="close", on_click=partial(engine.remove, session.id)).props(
                        "flat round dense size=sm"
                    ).tooltip("Delete chat")

    def toggle_mode(mode: Mode) -> None:
        composer.toggle_mode(mode)
        refresh_composer()

    def remove_attachment() -> None:
        composer.clear_attachment()
        refresh_composer()

    def refresh_composer() -> None:
        input_field.props["placeholder"] = composer.placeholder()
        input_field.update()
        send_btn.set_enabled(not engine.busy)

        composer_extras.clear()
        with composer_extras:
            attachment = composer.attachment
            if attachment is not None:
                with ui.row().classes("items-center gap-2 chip px-3 py-1"):
                    ui.label("🖼️" if attachment.kind is AttachmentKind.IMAGE else "📄")
                    if attachment.kind is AttachmentKind.IMAGE:
                        ui.image(attachment.content).classes("w-10 h-10 rounded")
                    ui.label(attachment.name).classes("text-sm truncate max-w-xs")
                    ui.button(icon="close", on_click=remove_attachment).props("flat round dense size=sm")
            if config.modes_enabled:
                with ui.row().classes("gap-2"):
                    for mode, mode_cfg in MODES.items():
                        selected = "mode-active" if composer.mode is mode else ""
                        ui.button(
                            f"{mode_cfg.icon} {mode_cfg.label}", on_click=partial(toggle_mode, mode)
                        ).props("flat dense no-caps").classes(f"mode-btn {selected}")

    def refresh_all() -> None:
        refresh_messages()
        refresh_history()
        refresh_composer()

    async def send_message() -> None:
        await engine.submit()

    async def handle_upload(e: events.UploadEventArguments) -> None:
        data = await e.file.read()
        upload.reset()
        try:
            attachment = read_attachment(e.file.name, e.file.content_type, data)
        except AttachmentError as err:
            ui.notify(str(err), type="negative")
            return
        composer.stage_attachment(attachment)
        refresh_composer()

    def refresh_mic() -> None:
        if dictation.listening:
            mic_btn.props("icon=mic_off").classes(add="mic-listening")
        else:
            mic_btn.props("icon=mic").classes(remove="mic-listening")

    def new_chat() -> None:
        engine.start_new()
        drawer.hide()

    def logout() -> None:
        clear_identity(app.storage.user)
        engine.set_user(None)
        ui.navigate.to("/")

    dictation = DictationController(
        service=BrowserDictation.for_page(client) if config.voice_enabled else NullDictation(),
        composer=composer,
        submit=send_message,
        notify=lambda notice: ui.notify(notice, type="warning"),
        locale=config.dictation_locale,
        auto_send_delay=config.auto_send_delay,
        on_change=refresh_mic,
    )

    # === UI Layout ===
    with ui.left_drawer(value=False).classes("bg-white") as drawer:
        ui.button("+ New Chat", on_click=new_chat).props(
            "outline no-caps"
        ).classes("w-full mb-3")
        history_container = ui.column().classes("w-full gap-1")

    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.button(icon="menu", on_click=drawer.toggle).props("flat round color=white")
                ui.label("chatdesk").classes("text-lg font-semibold text-white")
            with ui.row().classes("items-center gap-3"):
                ui.link("Dashboard", "/dashboard").classes("text-white/80 text-sm")
                if user_key:
                    ui.label(user_key).classes("text-xs text-white/80")
                    ui.button("Logout", on_click=logout).props("flat dense no-caps color=white")
                ui.button(icon="add", on_click=engine.start_new).props("flat round color=white")

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-4")

        # Input
        with ui.column().classes("w-full p-4 gap-2 bg-white border-t"):
            composer_extras = ui.column().classes("w-full gap-2")
            with ui.row().classes("w-full gap-3 items-end no-wrap"):
                upload = (
                    ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                    .props(f'accept="{ACCEPTED_EXTENSIONS}"')
                    .classes("hidden")
                )
                ui.button(icon="attach_file", on_click=lambda: upload.run_method("pickFiles")).props(
                    "flat round"
                )
                with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                    input_field = (
                        ui.textarea(placeholder=composer.placeholder())
                        .props("autogrow borderless dense rows=1")
                        .classes("w-full")
                        .bind_value(composer, "text")
                        .on("keydown.enter.prevent", send_message)
                    )
                mic_btn = ui.button(icon="mic", on_click=dictation.toggle).props("flat round")
                mic_btn.set_visibility(config.voice_enabled)
                send_btn = (
                    ui.button(icon="send", on_click=send_message)
                    .props("round unelevated")
                    .classes("send-btn")
                )

    engine.subscribe(refresh_all)
    engine.mount()
