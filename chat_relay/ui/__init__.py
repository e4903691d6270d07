"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Credential entry and configuration status
    - Chat message display with streaming updates
    - Loading state that blocks concurrent submissions

State lives in ChatSession; the page only renders it.
"""
