import typing

UserId = typing.NewType("UserId", str)
ConversationId = typing.NewType("ConversationId", str)
MessageId = typing.NewType("MessageId", str)
IsoTimestamp = typing.NewType("IsoTimestamp", str)
