from .publish_message import ChatBroadcaster, PublishChatMessageUseCase

__all__ = ["ChatBroadcaster", "PublishChatMessageUseCase"]
