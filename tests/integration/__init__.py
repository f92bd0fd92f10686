"""Integration tests for components working together.

Coverage:
    - WebhookClient posting real multipart bodies to a fake webhook
    - ChatService and IngestionService driving state from webhook results
    - FastAPI health and preview routes
"""
