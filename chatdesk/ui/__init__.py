"""NiceGUI interface - thin visualization layer over the conversation engine.

Pages:
    - /: chat with saved-session sidebar, attachments, modes and voice
    - /dashboard: global usage and personal activity figures

Contains no business logic; every user intent is forwarded to the engine,
and the pages re-render from its state.
"""
