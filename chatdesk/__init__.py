"""chatdesk - conversational client for a remote assistant endpoint.

Combines NiceGUI for the chat interface, FastAPI for hosting, httpx for the
assistant call and Pydantic for data validation.

Components:
    - storage: durable key-value storage, session store and usage counter
    - composer: outgoing message framing (attachments and modes)
    - client: HTTP client for the assistant endpoint
    - engine: conversation state machine and session synchronization
    - voice: dictation and spoken playback interfaces
    - api: host application and stats endpoints
    - ui: web pages for chatting and activity overview
    - models: message, session and wire schemas
"""

__version__ = "0.1.0"
