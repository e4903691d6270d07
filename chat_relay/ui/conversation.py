"""In-memory conversation list owned by a chat session."""

from collections.abc import Iterator

from chat_relay.models.schemas import Message


class Conversation:
    """Ordered, append-only list of messages.

    The only permitted change to existing entries is ``update_last``, which
    swaps the final message for a copy with new content.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    @property
    def last(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    def append(self, message: Message) -> None:
        self._messages.append(message)

    def update_last(self, content: str) -> None:
        """Replace the content of the final message.

        Role and timestamp of the replaced message are kept. Does nothing
        when the conversation is empty.

        Args:
            content: The new full content of the last message.
        """
        if not self._messages:
            return
        self._messages[-1] = self._messages[-1].model_copy(update={"content": content})

    def clear(self) -> None:
        self._messages.clear()
