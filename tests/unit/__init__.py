"""Unit tests for individual components in isolation.

Coverage:
    - transport/: Multipart building, response parsing, error hints
    - config/: Settings and the persisted webhook config
    - state/: Conversation log and upload queue
    - models/: Pydantic validation
    - ui/: Upload tab helpers that need no browser
"""
