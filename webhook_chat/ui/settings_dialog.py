"""Dialog for editing the two webhook URLs."""

from collections.abc import Callable

from nicegui import ui

from webhook_chat.config.store import ConfigStore
from webhook_chat.models.schemas import WebhookConfig

URL_PLACEHOLDER = "https://your-n8n-instance.com/webhook/..."


def settings_dialog(
    store: ConfigStore,
    on_save: Callable[[WebhookConfig], None],
) -> Callable[[], None]:
    """Build the settings dialog and return a function that opens it.

    The inputs are reloaded from the store every time the dialog opens.
    """
    with ui.dialog() as dialog, ui.card().classes("w-[32rem] max-w-full gap-4"):
        with ui.row().classes("w-full items-center gap-2"):
            ui.icon("settings").classes("text-2xl text-indigo-600")
            ui.label("Webhook Settings").classes("text-lg font-semibold")

        ingestion_input = ui.input("Ingestion Webhook URL", placeholder=URL_PLACEHOLDER).classes(
            "w-full"
        )
        ui.label(
            "The workflow URL that handles file uploads and processing "
            "(e.g. vector store creation)."
        ).classes("text-xs text-gray-500 -mt-3")

        chat_input = ui.input("Chat Webhook URL", placeholder=URL_PLACEHOLDER).classes("w-full")
        ui.label("The workflow URL that receives questions and returns answers.").classes(
            "text-xs text-gray-500 -mt-3"
        )

        def save() -> None:
            config = WebhookConfig(
                ingestion_url=ingestion_input.value or "",
                chat_url=chat_input.value or "",
            )
            store.save(config)
            on_save(config)
            dialog.close()
            ui.notify("Settings saved", type="positive")

        with ui.row().classes("w-full justify-end gap-2"):
            ui.button("Cancel", on_click=dialog.close).props("flat")
            ui.button("Save", icon="save", on_click=save).props("unelevated color=indigo")

    def open_settings() -> None:
        config = store.load()
        ingestion_input.value = config.ingestion_url
        chat_input.value = config.chat_url
        dialog.open()

    return open_settings
