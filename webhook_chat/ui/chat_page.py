"""NiceGUI page with the upload and chat tabs."""

from collections.abc import Callable
from datetime import datetime

from nicegui import app, events, ui

from webhook_chat.config.settings import AppSettings, get_settings
from webhook_chat.config.store import ConfigStore
from webhook_chat.models.schemas import ChatMessage, MessageRole, OutgoingFile, WebhookConfig
from webhook_chat.services.chat_service import ChatService
from webhook_chat.services.ingestion_service import IngestionService
from webhook_chat.state.previews import get_preview_store
from webhook_chat.state.upload_queue import UploadQueue
from webhook_chat.transport.client import WebhookClient
from webhook_chat.ui.settings_dialog import settings_dialog
from webhook_chat.ui.upload_panel import (
    ACCEPT,
    format_size,
    release_on_teardown,
    upload_panel,
)

SAMPLE_QUESTIONS = [
    "Summarize the documents I just uploaded.",
    "What are the key points in the PDF?",
    "Analyze the tone of the audio file.",
    "Extract data from the image.",
]

CUSTOM_CSS = """
<style>
    body { background: #f5f5f5; }

    .message-user {
        background: #4f46e5;
        color: white;
        border-radius: 18px 4px 18px 18px;
    }

    .message-assistant {
        background: #f1f5f9;
        color: #1e293b;
        border-radius: 4px 18px 18px 18px;
    }

    .message-error {
        background: #fef2f2;
        color: #b91c1c;
        border: 1px solid #fecaca;
        border-radius: 4px 18px 18px 18px;
    }

    .typing-dot {
        width: 8px; height: 8px;
        background: #059669;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }
</style>
"""


class PageState:
    """Webhook config currently in effect for one browser tab."""

    def __init__(self, config: WebhookConfig) -> None:
        self.config = config


def format_time(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp / 1000).strftime("%I:%M %p")


def render_avatar(role: MessageRole) -> None:
    is_user = role is MessageRole.USER
    css = "bg-indigo-600" if is_user else "bg-emerald-600"
    with ui.element("div").classes(
        f"w-8 h-8 rounded-full flex items-center justify-center shrink-0 {css}"
    ):
        ui.icon("person" if is_user else "smart_toy").classes("text-white text-base")


def render_message(msg: ChatMessage) -> None:
    is_user = msg.role is MessageRole.USER
    align = "flex-row-reverse" if is_user else "flex-row"
    if is_user:
        bubble = "message-user"
    elif msg.is_error:
        bubble = "message-error"
    else:
        bubble = "message-assistant"

    with ui.row().classes(f"w-full {align} gap-3 items-start no-wrap"):
        render_avatar(msg.role)
        with ui.column().classes(f"max-w-[75%] gap-1 {'items-end' if is_user else 'items-start'}"):
            if msg.content:
                with ui.element("div").classes(f"px-4 py-3 text-sm {bubble}"):
                    if msg.role is MessageRole.ASSISTANT and not msg.is_error:
                        ui.markdown(msg.content)
                    else:
                        ui.label(msg.content).classes("whitespace-pre-wrap")
            for att in msg.attachments:
                with ui.row().classes("items-center gap-2 px-3 py-2 bg-white border rounded-lg"):
                    ui.icon("attach_file").classes("text-gray-500")
                    ui.label(att.name).classes("text-xs font-medium truncate max-w-[12rem]")
                    ui.label(format_size(att.size_bytes)).classes("text-[10px] text-gray-400")
            ui.label(format_time(msg.timestamp)).classes("text-[10px] text-gray-400")


def render_typing_indicator() -> None:
    with ui.row().classes("w-full gap-3 items-start no-wrap"):
        render_avatar(MessageRole.ASSISTANT)
        with ui.row().classes("message-assistant px-4 py-3 gap-1 items-center"):
            for _ in range(3):
                ui.element("div").classes("typing-dot")


def chat_panel(
    service: ChatService, state: PageState, open_settings: Callable[[], None]
) -> None:
    """Render the chat tab for one browser session."""
    attached: list[OutgoingFile] = []

    @ui.refreshable
    def messages_view() -> None:
        conversation = service.conversation
        if not conversation.messages:
            with ui.column().classes("w-full items-center justify-center gap-3 py-16"):
                ui.icon("forum").classes("text-5xl text-gray-300")
                ui.label(
                    "Ask me anything about the documents you uploaded, or attach new ones here."
                ).classes("text-gray-400 text-center")
                with ui.row().classes("justify-center gap-2"):
                    for question in SAMPLE_QUESTIONS:
                        ui.button(
                            question, on_click=lambda q=question: send(q, [])
                        ).props("outline rounded no-caps color=indigo size=sm")
            return
        for msg in conversation.messages:
            render_message(msg)
        if conversation.is_waiting:
            render_typing_indicator()

    @ui.refreshable
    def attachments_view() -> None:
        if not attached:
            return
        with ui.row().classes("w-full gap-2 px-4 pt-3"):
            for index, file in enumerate(attached):
                with ui.row().classes("items-center gap-1 px-2 py-1 bg-indigo-50 rounded-lg"):
                    ui.icon("attach_file").classes("text-indigo-600 text-sm")
                    ui.label(file.name).classes("text-xs truncate max-w-[10rem]")
                    ui.button(
                        icon="close", on_click=lambda i=index: detach(i)
                    ).props("flat round dense size=xs")

    def detach(index: int) -> None:
        del attached[index]
        attachments_view.refresh()

    async def handle_attach(e: events.UploadEventArguments) -> None:
        content = await e.file.read()
        attached.append(
            OutgoingFile(name=e.file.name, mime_type=e.file.content_type, content=content)
        )
        attachments_view.refresh()

    async def send(text: str, files: list[OutgoingFile]) -> None:
        turn = service.start_turn(text, files)
        if turn is None:
            return
        messages_view.refresh()
        scroll.scroll_to(percent=1.0)

        reply = await service.finish_turn(turn)
        if reply.is_error:
            ui.notify("The chat webhook returned an error", type="negative")
        messages_view.refresh()
        scroll.scroll_to(percent=1.0)

    async def send_input() -> None:
        text = input_field.value or ""
        files = list(attached)
        if service.conversation.is_waiting or (not text.strip() and not files):
            return
        input_field.value = ""
        attached.clear()
        attach_picker.reset()
        attachments_view.refresh()
        await send(text, files)

    with ui.column().classes("w-full items-center justify-center gap-4 py-24").bind_visibility_from(
        state, "config", backward=lambda c: not c.chat_url
    ):
        ui.icon("link_off").classes("text-5xl text-gray-300")
        ui.label(
            "Please configure your webhook URLs to start chatting. "
            "You need a Chat Webhook URL to send and receive messages."
        ).classes("text-gray-500 text-center max-w-md")
        ui.button("Open Settings", icon="settings", on_click=open_settings).props(
            "unelevated color=indigo"
        )

    with ui.column().classes("w-full max-w-3xl mx-auto h-full gap-0").bind_visibility_from(
        state, "config", backward=lambda c: bool(c.chat_url)
    ):
        with ui.scroll_area().classes("w-full flex-grow bg-white") as scroll:
            with ui.column().classes("w-full gap-4 p-5"):
                messages_view()

        with ui.column().classes("w-full bg-white border-t gap-0"):
            attachments_view()
            with ui.row().classes("w-full p-4 gap-3 items-end no-wrap"):
                attach_picker = (
                    ui.upload(
                        multiple=True,
                        auto_upload=True,
                        on_upload=handle_attach,
                    )
                    .props(f'accept="{ACCEPT}"')
                    .classes("hidden")
                )
                ui.button(
                    icon="attach_file",
                    on_click=lambda: attach_picker.run_method("pickFiles"),
                ).props("flat round color=indigo").tooltip("Attach files to your prompt")
                input_field = (
                    ui.input(placeholder="Type your message...")
                    .props("outlined dense rounded")
                    .classes("flex-grow")
                    .on("keydown.enter", send_input)
                )
                ui.button(icon="send", on_click=send_input).props(
                    "round unelevated color=indigo"
                ).bind_enabled_from(
                    service.conversation, "is_waiting", backward=lambda waiting: not waiting
                )


@ui.page("/")
def index_page() -> None:
    """Main page: one set of services per browser tab."""
    ui.add_head_html(CUSTOM_CSS)
    settings: AppSettings = get_settings()

    store = ConfigStore(
        app.storage.user,
        WebhookConfig(
            ingestion_url=settings.default_ingestion_url,
            chat_url=settings.default_chat_url,
        ),
    )
    state = PageState(store.load())
    client = WebhookClient(timeout=settings.request_timeout)

    queue = UploadQueue(get_preview_store())
    ingestion = IngestionService(client, lambda: state.config, queue)
    chat = ChatService(client, lambda: state.config)

    release_on_teardown(ui.context.client, queue)

    def on_save(config: WebhookConfig) -> None:
        state.config = config

    open_settings = settings_dialog(store, on_save)

    with ui.header().classes("bg-slate-900 items-center justify-between px-4"):
        with ui.row().classes("items-center gap-3"):
            ui.icon("bolt").classes("text-indigo-400 text-3xl")
            ui.label("Webhook Chat").classes("text-lg font-semibold text-white")
        with ui.tabs().props("dense inline-label indicator-color=indigo-4") as tabs:
            upload_tab = ui.tab("upload", label="Upload Data", icon="cloud_upload")
            chat_tab = ui.tab("chat", label="Chat", icon="chat")
        ui.button(icon="settings", on_click=open_settings).props("flat round color=white")

    with ui.tab_panels(tabs, value=upload_tab).classes("w-full bg-transparent").style(
        "height: calc(100vh - 4rem)"
    ):
        with ui.tab_panel(upload_tab).classes("p-0"):
            upload_panel(ingestion, settings, open_settings)
        with ui.tab_panel(chat_tab).classes("p-0 h-full"):
            chat_panel(chat, state, open_settings)
