"""Test package for Webhook Chat.

Structure:
    - unit/: Individual function and class tests
    - integration/: Webhook client and services against an in-process
      fake webhook, plus the FastAPI app

The fake webhook is a FastAPI app reached through httpx.ASGITransport, so
no network access is needed. Leverages pytest with pytest-check for soft
assertions.
"""
