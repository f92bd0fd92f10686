"""Upload tab: context text, file picker, queue and submit button."""

from collections.abc import Callable

from nicegui import Client, events, ui

from webhook_chat.config.settings import AppSettings
from webhook_chat.models.schemas import (
    SUPPORTED_MIME_TYPES,
    FileKind,
    OutgoingFile,
    UploadItem,
    UploadStatus,
)
from webhook_chat.services.ingestion_service import IngestionService
from webhook_chat.state.upload_queue import UploadQueue
from webhook_chat.transport.errors import ConfigError

KIND_ICONS = {
    FileKind.IMAGE: "image",
    FileKind.VIDEO: "movie",
    FileKind.AUDIO: "music_note",
    FileKind.DOCUMENT: "description",
    FileKind.OTHER: "insert_drive_file",
}

STATUS_ICONS = {
    UploadStatus.PENDING: "schedule",
    UploadStatus.UPLOADING: "sync",
    UploadStatus.SUCCESS: "check_circle",
    UploadStatus.ERROR: "error",
}

ACCEPT = ",".join(SUPPORTED_MIME_TYPES)


def format_size(size_bytes: int) -> str:
    return f"{size_bytes / (1024 * 1024):.2f} MB"


def release_on_teardown(client: Client, queue: UploadQueue) -> None:
    """Clear ``queue`` and its previews once ``client`` is deleted.

    A dropped websocket that reconnects keeps the queue.
    """
    client.on_delete(queue.clear)


def upload_panel(
    service: IngestionService,
    settings: AppSettings,
    open_settings: Callable[[], None],
) -> None:
    """Render the upload tab for one browser session."""

    def remove(item_id: str) -> None:
        if service.queue.remove(item_id):
            queue_list.refresh()

    def render_item(item: UploadItem) -> None:
        with ui.row().classes("w-full items-center gap-3 p-3 bg-white border rounded-lg"):
            if item.preview_url:
                ui.image(item.preview_url).classes("w-10 h-10 rounded object-cover")
            else:
                ui.icon(KIND_ICONS[item.kind]).classes("text-2xl text-gray-500")
            with ui.column().classes("flex-grow gap-0 min-w-0"):
                ui.label(item.file.name).classes("text-sm font-medium truncate")
                details = f"{format_size(item.file.size_bytes)} • {item.kind.value.upper()}"
                ui.label(details).classes("text-xs text-gray-400")
            ui.icon("schedule").classes("text-xl text-gray-500").bind_name_from(
                item, "status", backward=lambda s: STATUS_ICONS[s]
            ).bind_visibility_from(item, "status", backward=lambda s: s is not UploadStatus.PENDING)
            ui.button(icon="close", on_click=lambda: remove(item.id)).props(
                "flat round dense color=grey"
            ).bind_visibility_from(item, "status", backward=lambda s: s is UploadStatus.PENDING)

    @ui.refreshable
    def queue_list() -> None:
        for item in service.queue.items:
            render_item(item)

    @ui.refreshable
    def status_banner() -> None:
        report = service.report
        if report is None:
            return
        css = (
            "bg-green-50 text-green-700 border-green-200"
            if report.success
            else "bg-red-50 text-red-700 border-red-200"
        )
        ui.label(report.message).classes(
            f"w-full p-3 border rounded-lg text-sm whitespace-pre-wrap {css}"
        )

    async def handle_upload(e: events.UploadEventArguments) -> None:
        content = await e.file.read()
        service.queue.add(
            [OutgoingFile(name=e.file.name, mime_type=e.file.content_type, content=content)]
        )
        queue_list.refresh()

    def handle_rejected() -> None:
        ui.notify(
            f"File rejected. Maximum size is {settings.max_upload_mb}MB.",
            type="warning",
        )

    async def submit() -> None:
        try:
            report = await service.submit()
        except ConfigError as e:
            ui.notify(e.message, type="warning")
            open_settings()
            return
        status_banner.refresh()
        if report is None or not report.success:
            return

        await service.clear_later(settings.clear_delay)
        picker.reset()
        queue_list.refresh()
        status_banner.refresh()

    with ui.column().classes("w-full max-w-3xl mx-auto gap-6 p-4 md:p-8"):
        with ui.column().classes("gap-1"):
            ui.label("Knowledge Base Upload").classes("text-2xl font-semibold text-gray-800")
            ui.label(
                "Upload documents and provide a prompt or context to send to the ingestion webhook."
            ).classes("text-gray-500")

        ui.textarea(
            "Context / Prompt",
            placeholder="Enter context, instructions, or a prompt describing the files...",
        ).props("outlined autogrow").classes("w-full").bind_value(
            service, "text_context"
        ).bind_enabled_from(service, "is_processing", backward=lambda busy: not busy)

        picker = (
            ui.upload(
                label="Click or drag files to upload",
                multiple=True,
                auto_upload=True,
                max_file_size=settings.max_upload_bytes,
                on_upload=handle_upload,
                on_rejected=handle_rejected,
            )
            .props(f'accept="{ACCEPT}" flat bordered')
            .classes("w-full")
            .bind_enabled_from(service, "is_processing", backward=lambda busy: not busy)
        )
        ui.label(
            "Supports PDF, DOCX, TXT, images, audio (MP3/WAV) and video (MP4/WEBM). "
            f"Max file size: {settings.max_upload_mb}MB"
        ).classes("text-xs text-gray-400 -mt-4")

        with ui.column().classes("w-full gap-2"):
            queue_list()

        status_banner()

        ui.button("Send to Knowledge Base", icon="send", on_click=submit).props(
            "unelevated color=indigo size=lg"
        ).classes("w-full").bind_enabled_from(service, "can_submit")
