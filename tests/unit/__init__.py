"""Unit tests for individual components in isolation.

Coverage:
    - models/: Pydantic validation, title derivation and storage encoding
    - storage/: Session store, usage counter and activity statistics
    - composer/: Attachment ingestion, framing and modes
    - engine/: Conversation state machine and write-through
    - client/: Assistant HTTP client over mock transports
    - voice/: Dictation controller and browser recognition stream
    - config and identity: Environment settings and user resolution
"""
