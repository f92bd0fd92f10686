"""NiceGUI interface - thin visualization layer for uploads and chat.

Responsibilities:
    - Upload tab with context text, file picker and queue statuses
    - Chat tab with transcript, attachments and typing indicator
    - Settings dialog for the two webhook URLs

Contains minimal business logic. Delegates all operations to the services.
"""
