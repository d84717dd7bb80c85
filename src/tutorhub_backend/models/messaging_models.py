import typing

from pydantic import BaseModel, Field, field_validator

from tutorhub_backend.utils.base_types import (
    ConversationId,
    IsoTimestamp,
    MessageId,
    UserId,
)
from tutorhub_backend.utils.datetime_utils import normalize_iso_timestamp


class MessagingRelationshipSet(BaseModel):
    """
    Ids of the users related to the requester, grouped by relationship.
    allUserIds is only filled in for roles with platform-wide visibility; None is read as empty.
    """

    allUserIds: typing.Optional[list[UserId]] = None
    staffIds: list[UserId] = Field(default_factory=list)
    tutorIds: list[UserId] = Field(default_factory=list)
    studentIds: list[UserId] = Field(default_factory=list)
    parentIds: list[UserId] = Field(default_factory=list)
    childIds: list[UserId] = Field(default_factory=list)


class StoredMessageItemModel(BaseModel):
    # Full item as stored in DynamoDB
    conversationId: ConversationId
    messageId: MessageId
    senderId: UserId
    recipientId: UserId
    body: str
    createdAt: IsoTimestamp

    @field_validator("createdAt")
    @classmethod
    def _created_at_in_utc(cls, value: str) -> IsoTimestamp:
        # Purges compare createdAt as a string, so every stored value must be UTC
        return IsoTimestamp(normalize_iso_timestamp(value))


class MessageRetentionResultModel(BaseModel):
    referenceTime: IsoTimestamp
    cutoff: IsoTimestamp
    retentionMonths: int
    deletedCount: int
