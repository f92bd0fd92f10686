"""Webhook Chat - knowledge base uploads and chat over workflow webhooks.

Combines NiceGUI for the browser interface, HTTPX for webhook calls,
FastAPI for the small HTTP surface, and Pydantic for data validation.

Components:
    - config: Environment settings and persisted webhook URLs
    - models: Messages, attachments and upload items
    - transport: Multipart request building and response normalization
    - state: Conversation log, upload queue and image previews
    - services: Chat turns and ingestion batches
    - api: Health and preview routes
    - ui: Web interface for uploads and chat
"""

__version__ = "0.1.0"
