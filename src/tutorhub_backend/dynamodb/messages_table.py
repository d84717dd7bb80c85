import logging
import typing
from datetime import datetime

import boto3
import pydantic
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from tutorhub_backend.models.messaging_models import StoredMessageItemModel
from tutorhub_backend.utils.aws_env_vars import get_aws_region
from tutorhub_backend.utils.base_types import ConversationId
from tutorhub_backend.utils.datetime_utils import to_utc_iso

_LOGGER = logging.getLogger(__name__)
_LOGGER.setLevel(logging.INFO)


class MessagesTable:
    """
    Data Abstraction Layer for the Messages DynamoDB table.

    Table Schema:
      - PK: conversationId (String)
      - SK: messageId (String)
      - Attributes: senderId, recipientId, body, createdAt (ISO-8601 UTC string)
    """

    def __init__(self, table_name: str) -> None:
        self.client = boto3.resource("dynamodb", region_name=get_aws_region())
        self.table = self.client.Table(table_name)
        _LOGGER.info(f"MessagesTable initialized for table: {table_name}")

    def save_message(self, message: StoredMessageItemModel) -> StoredMessageItemModel:
        try:
            self.table.put_item(Item=message.model_dump(exclude_none=True))
            _LOGGER.debug(f"Saved message {message.messageId} in conversation {message.conversationId}")
            return message
        except ClientError as e:
            _LOGGER.error(
                f"Error saving message {message.messageId}: {e.response['Error']['Message']}",
                exc_info=True,
            )
            raise

    def _parse_items(self, ddb_items: list[dict[str, typing.Any]]) -> list[StoredMessageItemModel]:
        parsed_items = []
        for item in ddb_items:
            try:
                parsed_items.append(StoredMessageItemModel.model_validate(item))
            except pydantic.ValidationError as e:
                _LOGGER.error(f"Skipping invalid message item (messageId: {item.get('messageId')}): {e}")
        return parsed_items

    def get_messages_for_conversation(self, conversation_id: ConversationId) -> list[StoredMessageItemModel]:
        """
        Returns every message in a conversation, ordered by messageId ascending.
        """
        query_kwargs: dict[str, typing.Any] = {
            "KeyConditionExpression": Key("conversationId").eq(conversation_id),
            "ScanIndexForward": True,
        }

        messages: list[StoredMessageItemModel] = []
        try:
            while True:
                response = self.table.query(**query_kwargs)
                messages.extend(self._parse_items(response.get("Items", [])))
                last_evaluated_key = response.get("LastEvaluatedKey")
                if not last_evaluated_key:
                    break
                query_kwargs["ExclusiveStartKey"] = last_evaluated_key
        except ClientError as e:
            _LOGGER.error(
                f"Error fetching messages for conversation {conversation_id}: {e.response['Error']['Message']}",
                exc_info=True,
            )
            raise

        return messages

    def delete_messages_created_before(self, cutoff: datetime) -> int:
        """
        Deletes every message whose createdAt is strictly older than `cutoff`.

        :param cutoff: Retention cutoff. Messages created exactly at the cutoff are kept.
        :return: Number of messages deleted.
        """
        cutoff_iso = to_utc_iso(cutoff)
        _LOGGER.info(f"Purging messages created before {cutoff_iso}")

        scan_kwargs: dict[str, typing.Any] = {
            "FilterExpression": Attr("createdAt").lt(cutoff_iso),
            "ProjectionExpression": "conversationId, messageId",
        }

        deleted_count = 0
        try:
            with self.table.batch_writer() as batch:
                while True:
                    response = self.table.scan(**scan_kwargs)
                    for item in response.get("Items", []):
                        batch.delete_item(
                            Key={"conversationId": item["conversationId"], "messageId": item["messageId"]}
                        )
                        deleted_count += 1
                    last_evaluated_key = response.get("LastEvaluatedKey")
                    if not last_evaluated_key:
                        break
                    scan_kwargs["ExclusiveStartKey"] = last_evaluated_key
        except ClientError as e:
            _LOGGER.error(
                f"Error purging messages created before {cutoff_iso}: {e.response['Error']['Message']}",
                exc_info=True,
            )
            raise

        _LOGGER.info(f"Purged {deleted_count} messages created before {cutoff_iso}")
        return deleted_count
