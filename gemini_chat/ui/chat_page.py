"""NiceGUI multi-conversation chat interface."""

from nicegui import ui

from gemini_chat.gateway.errors import MissingCredentialError
from gemini_chat.models.schemas import Message, Role, Theme
from gemini_chat.ui.session import ChatSession, get_chat_session

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    .message-user {
        background: #2563eb;
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }
    .body--dark .message-assistant { background: #374151; color: #f3f4f6; }

    .conversation-row { border-radius: 8px; cursor: pointer; }
    .conversation-row:hover { background: rgba(127, 127, 127, 0.12); }
    .conversation-row.active { background: rgba(127, 127, 127, 0.22); }
    .conversation-row .row-actions { opacity: 0; transition: opacity 0.2s; }
    .conversation-row:hover .row-actions { opacity: 1; }

    .message-assistant pre { margin: 0.5rem 0; overflow-x: auto; }
    .message-assistant code { font-family: 'Menlo', 'Monaco', monospace; }
</style>
"""

THINKING_TEXT = "Thinking..."


def _format_time(message: Message) -> str:
    return message.timestamp.astimezone().strftime("%I:%M %p")


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session: ChatSession = get_chat_session()
    store = session.store
    prefs = session.preferences

    dark = ui.dark_mode(prefs.theme == Theme.DARK)
    editing: dict[str, str | None] = {"id": None}

    input_field: ui.textarea
    send_btn: ui.button

    def warn_if_unsaved() -> None:
        if store.persistence_error is not None:
            ui.notify(
                f"Chat history is no longer being saved: {store.persistence_error}",
                type="warning",
            )

    def refresh_all() -> None:
        conversation_list.refresh()
        messages_view.refresh()

    # === Sidebar actions ===

    def new_chat() -> None:
        store.create_conversation()
        refresh_all()
        warn_if_unsaved()

    def select_chat(conversation_id: str) -> None:
        if editing["id"] is not None:
            return
        store.select_conversation(conversation_id)
        refresh_all()

    def delete_chat(conversation_id: str) -> None:
        store.delete_conversation(conversation_id)
        refresh_all()
        warn_if_unsaved()

    def start_rename(conversation_id: str) -> None:
        editing["id"] = conversation_id
        conversation_list.refresh()

    def save_rename(conversation_id: str, title: str) -> None:
        store.rename_conversation(conversation_id, title)
        editing["id"] = None
        conversation_list.refresh()
        warn_if_unsaved()

    def cancel_rename() -> None:
        editing["id"] = None
        conversation_list.refresh()

    def toggle_theme() -> None:
        dark.toggle()
        prefs.theme = Theme.DARK if dark.value else Theme.LIGHT

    def toggle_sidebar() -> None:
        drawer.toggle()
        prefs.sidebar_open = bool(drawer.value)

    def save_token() -> None:
        prefs.credential = token_input.value or ""
        token_dialog.close()
        update_send_button()
        ui.notify("API token saved", type="positive")

    @ui.refreshable
    def conversation_list() -> None:
        for conversation in store.conversations:
            active = "active" if conversation.id == store.current_id else ""
            with ui.row().classes(
                f"conversation-row {active} w-full items-center no-wrap px-2 py-1 gap-2"
            ).on("click", lambda _, cid=conversation.id: select_chat(cid)):
                ui.icon("chat_bubble_outline").classes("text-base")
                if editing["id"] == conversation.id:
                    title_input = (
                        ui.input(value=conversation.title)
                        .props("dense autofocus borderless")
                        .classes("flex-grow")
                    )
                    title_input.on(
                        "keydown.enter",
                        lambda _, cid=conversation.id, inp=title_input: save_rename(
                            cid, inp.value or ""
                        ),
                    )
                    title_input.on("keydown.escape", cancel_rename)
                    ui.button(
                        icon="check",
                        on_click=lambda cid=conversation.id, inp=title_input: save_rename(
                            cid, inp.value or ""
                        ),
                    ).props("flat dense round size=sm")
                    ui.button(icon="close", on_click=cancel_rename).props(
                        "flat dense round size=sm"
                    )
                else:
                    ui.label(conversation.title).classes("flex-grow text-sm ellipsis")
                    with ui.row().classes("row-actions no-wrap gap-0"):
                        ui.button(
                            icon="edit",
                            on_click=lambda cid=conversation.id: start_rename(cid),
                        ).props("flat dense round size=sm")
                        ui.button(
                            icon="delete",
                            on_click=lambda cid=conversation.id: delete_chat(cid),
                        ).props("flat dense round size=sm color=negative")

    # === Messages ===

    def render_message(message: Message) -> None:
        is_user = message.role == Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes("max-w-[75%] gap-1"):
                with ui.element("div").classes(f"px-4 py-2 {bubble}"):
                    if is_user:
                        ui.label(message.content).classes("text-sm whitespace-pre-wrap")
                    else:
                        ui.markdown(message.content).classes("text-sm")
                ui.label(_format_time(message)).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )

    @ui.refreshable
    def messages_view() -> None:
        conversation = store.current
        if conversation is None or not conversation.messages:
            with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                ui.icon("forum").classes("text-5xl text-gray-300")
                ui.label("Start a conversation").classes("text-lg text-gray-400")
                if not prefs.credential:
                    ui.label("Set your Gemini API token in settings first").classes(
                        "text-sm text-gray-400"
                    )
            return

        for message in conversation.messages:
            render_message(message)

        if session.is_loading:
            with ui.row().classes("w-full justify-start items-center gap-2"):
                ui.spinner("dots", size="lg")
                ui.label(THINKING_TEXT).classes("text-sm text-gray-500 italic")

    # === Sending ===

    def update_send_button() -> None:
        send_btn.set_enabled(session.can_send(input_field.value or ""))

    def on_sending() -> None:
        refresh_all()
        update_send_button()

    async def send_message() -> None:
        text = input_field.value or ""
        if not text.strip() or session.is_loading:
            return

        input_field.value = ""
        try:
            await session.send_message(text, on_sending=on_sending)
        except MissingCredentialError as e:
            input_field.value = text
            ui.notify(e.message, type="warning")
            token_dialog.open()
        finally:
            update_send_button()
            refresh_all()
            warn_if_unsaved()

    # === UI Layout ===

    with ui.dialog() as token_dialog, ui.card().classes("w-96"):
        ui.label("Gemini API Configuration").classes("text-lg font-semibold")
        token_input = ui.input(
            "API Token",
            placeholder="Enter your Gemini API token",
            value=prefs.credential,
            password=True,
            password_toggle_button=True,
        ).classes("w-full")
        ui.button("Save Token", on_click=save_token).classes("w-full")

    with ui.header().classes("items-center justify-between px-4 py-2"):
        with ui.row().classes("items-center gap-2"):
            ui.button(icon="menu", on_click=toggle_sidebar).props("flat round color=white")
            ui.icon("smart_toy").classes("text-2xl")
            ui.label("Gemini Chat").classes("text-lg font-semibold")
        with ui.row().classes("items-center gap-1"):
            ui.button(icon="dark_mode", on_click=toggle_theme).props("flat round color=white")
            ui.button(icon="settings", on_click=token_dialog.open).props(
                "flat round color=white"
            )

    with ui.left_drawer(value=prefs.sidebar_open, bordered=True).classes("p-3") as drawer:
        ui.label("Chats").classes("text-lg font-semibold")
        ui.button("New Chat", icon="add", on_click=new_chat).props("outline").classes(
            "w-full my-2"
        )
        conversation_list()

    with ui.column().classes("w-full max-w-3xl mx-auto gap-4 pb-32"):
        messages_view()

    with ui.footer().classes("bg-transparent"):
        with ui.row().classes("w-full max-w-3xl mx-auto items-end gap-3 no-wrap"):
            input_field = (
                ui.textarea(
                    placeholder="Type your message...",
                    on_change=lambda _: update_send_button(),
                )
                .props("autogrow outlined dense rows=1")
                .classes("flex-grow")
                .on("keydown.enter.prevent", send_message)
            )
            send_btn = ui.button(icon="send", on_click=send_message).props("round unelevated")

    update_send_button()
    # Sends from other tabs share the loading flag
    ui.timer(0.5, update_send_button)
