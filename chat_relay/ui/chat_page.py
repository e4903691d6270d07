"""NiceGUI chat interface streaming replies through the relay endpoint."""

from nicegui import events, ui

from chat_relay.models.schemas import Message, Role
from chat_relay.ui.consumer import ChatSession

CUSTOM_CSS = """
<style>
    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #2563eb 0%, #1e40af 100%); }

    .message-user {
        background: #2563eb;
        color: white;
        border-radius: 18px 18px 4px 18px;
        white-space: pre-wrap;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
        white-space: pre-wrap;
    }

    .avatar-user { background: #2563eb; }
    .avatar-assistant { background: #6b7280; }

    .typing-dot {
        width: 8px; height: 8px;
        background: #9ca3af;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .input-box {
        background: #f9fafb;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
    }
    .input-box:focus-within { border-color: #2563eb; }
</style>
"""


def build_chat_page(relay_url: str) -> None:
    """Main chat page.

    Args:
        relay_url: Relay endpoint the session posts messages to.
    """
    ui.add_head_html(CUSTOM_CSS)

    messages_container: ui.column
    banner_container: ui.column
    input_field: ui.textarea
    send_btn: ui.button

    def render_avatar(is_user: bool) -> None:
        css = "avatar-user" if is_user else "avatar-assistant"
        icon = "person" if is_user else "smart_toy"
        avatar_classes = f"w-9 h-9 rounded-full flex items-center justify-center {css}"
        with ui.element("div").classes(avatar_classes):
            ui.icon(icon).classes("text-white text-lg")

    def render_message(msg: Message) -> None:
        is_user = msg.role == Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.row().classes(f"w-full {align} gap-3 items-end"):
            if not is_user:
                render_avatar(False)
            with ui.column().classes("max-w-[70%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    ui.label(msg.content).classes("text-sm leading-relaxed")
                ui.label(msg.timestamp.strftime("%I:%M %p")).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )
            if is_user:
                render_avatar(True)

    def render_typing_indicator() -> None:
        with ui.row().classes("w-full justify-start gap-3 items-end"):
            render_avatar(False)
            with ui.element("div").classes("message-assistant px-4 py-3"):
                with ui.row().classes("gap-1"):
                    for _ in range(3):
                        ui.element("div").classes("typing-dot")

    def refresh_banner() -> None:
        banner_container.clear()
        with banner_container:
            if session.is_configured:
                with ui.row().classes(
                    "w-full items-center gap-2 px-4 py-2 rounded-lg bg-green-100 text-green-800"
                ):
                    ui.icon("check_circle")
                    ui.label("Configuration complete! Ready to chat with your assistant")
            else:
                with ui.row().classes(
                    "w-full items-center gap-2 px-4 py-2 rounded-lg bg-amber-100 text-amber-800"
                ):
                    ui.icon("warning")
                    ui.label("Please configure your API credentials to begin chatting")

    def refresh_controls() -> None:
        input_field.set_enabled(session.is_configured and not session.is_loading)
        send_btn.set_enabled(session.can_submit(input_field.value or ""))
        if session.is_configured:
            placeholder = "Type your message..."
        else:
            placeholder = "Please configure API credentials first"
        input_field.props(f'placeholder="{placeholder}"')

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not len(session.conversation):
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("forum").classes("text-5xl text-gray-300")
                    ui.label("Ready to Chat!").classes("text-lg text-gray-400")
            else:
                for msg in session.conversation:
                    render_message(msg)
                if session.is_loading:
                    render_typing_indicator()
        refresh_controls()

    def on_api_key_change(e: events.ValueChangeEventArguments) -> None:
        session.api_key = e.value or ""
        refresh_banner()
        refresh_controls()

    def on_assistant_id_change(e: events.ValueChangeEventArguments) -> None:
        session.assistant_id = e.value or ""
        refresh_banner()
        refresh_controls()

    session = ChatSession(relay_url, on_update=refresh_messages)

    async def send_message() -> None:
        text = input_field.value or ""
        if not session.can_submit(text):
            return
        input_field.value = ""
        await session.submit(text)

    def new_chat() -> None:
        if not session.new_chat():
            ui.notify("Wait for the current reply to finish", type="warning")

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header with configuration
        with ui.column().classes("w-full header px-5 py-4 gap-3"):
            with ui.row().classes("w-full items-center justify-between"):
                with ui.row().classes("items-center gap-3"):
                    ui.icon("forum").classes("text-white text-3xl")
                    ui.label("Vapi Chat").classes("text-lg font-semibold text-white")
                ui.button(icon="add", on_click=new_chat).props("flat round color=white")
            with ui.row().classes("w-full gap-3 no-wrap"):
                ui.input(
                    label="API Key",
                    password=True,
                    password_toggle_button=True,
                    on_change=on_api_key_change,
                ).props("dense filled bg-color=white").classes("flex-grow")
                ui.input(
                    label="Assistant ID",
                    on_change=on_assistant_id_change,
                ).props("dense filled bg-color=white").classes("flex-grow")
            banner_container = ui.column().classes("w-full")

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-4")

        # Input
        with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
            with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                input_field = (
                    ui.textarea(on_change=lambda _: refresh_controls())
                    .props("autogrow borderless dense rows=1")
                    .classes("w-full")
                    .on("keydown.enter.exact.prevent", send_message)
                )
            send_btn = ui.button(icon="send", on_click=send_message).props(
                "round unelevated color=primary"
            )

    refresh_banner()
    refresh_messages()


def register_chat_page(relay_url: str) -> None:
    """Serve the chat page at ``/``, talking to the relay at ``relay_url``."""

    @ui.page("/")
    def index() -> None:
        build_chat_page(relay_url)
