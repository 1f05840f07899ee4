"""
Messaging service: sending, conversation lists and threads.
"""

from typing import Dict, List, Mapping, Optional, Sequence
from sqlalchemy.ext.asyncio import AsyncSession
import uuid
import logging

from nyumba.models.message import Message
from nyumba.models.user import Profile
from nyumba.repositories.message import MessageRepository
from nyumba.repositories.property import PropertyRepository
from nyumba.repositories.user import UserRepository
from nyumba.services.notifier import MessageNotifier, notifier as default_notifier
from nyumba.utils.exceptions import BadRequestError, NotFoundError, PropertyNotFoundError

logger = logging.getLogger(__name__)

UNKNOWN_PARTNER = "Unknown"


def group_conversations(
    messages: Sequence[Message],
    user_id: uuid.UUID,
    partner_names: Mapping[uuid.UUID, str]
) -> List[dict]:
    """
    Collapse a user's messages into one entry per conversation partner.

    Each entry carries the newest message with that partner and the number
    of messages the user received from them and has not read. Entries are
    ordered by their newest message, newest first.
    """
    ordered = sorted(messages, key=lambda message: message.created_at, reverse=True)

    conversations: Dict[uuid.UUID, dict] = {}
    for message in ordered:
        partner_id = message.partner_of(user_id)
        conversation = conversations.get(partner_id)
        if conversation is None:
            conversation = {
                "partner_id": str(partner_id),
                "partner_name": partner_names.get(partner_id) or UNKNOWN_PARTNER,
                "last_message": message.to_dict(),
                "unread_count": 0,
            }
            conversations[partner_id] = conversation
        if message.receiver_id == user_id and not message.read:
            conversation["unread_count"] += 1

    return list(conversations.values())


class MessagingService:

    def __init__(self, db_session: AsyncSession, notifier: Optional[MessageNotifier] = None):
        self.db = db_session
        self.message_repo = MessageRepository(db_session)
        self.user_repo = UserRepository(db_session)
        self.property_repo = PropertyRepository(db_session)
        self.notifier = notifier or default_notifier

    async def send_message(
        self,
        sender: Profile,
        receiver_id: uuid.UUID,
        content: str,
        property_id: Optional[uuid.UUID] = None
    ) -> Message:
        """
        Store a message and notify the receiver's open connections.

        Raises:
            BadRequestError: If the content is blank or the receiver is the sender
            NotFoundError: If the receiver doesn't exist
        """
        content = (content or "").strip()
        if not content:
            raise BadRequestError("Message cannot be empty")

        if receiver_id == sender.id:
            raise BadRequestError("You cannot message yourself")

        if not await self.user_repo.exists(receiver_id):
            raise NotFoundError("User", str(receiver_id))

        if property_id is not None and not await self.property_repo.exists(property_id):
            raise PropertyNotFoundError(str(property_id))

        message = await self.message_repo.create({
            "sender_id": sender.id,
            "receiver_id": receiver_id,
            "property_id": property_id,
            "content": content,
        })

        reached = self.notifier.publish(receiver_id, {"event": "message", "message_id": str(message.id)})
        logger.info(f"Message {message.id} sent from {sender.id} to {receiver_id} ({reached} live connections)")
        return message

    async def list_conversations(self, user: Profile) -> List[dict]:
        messages = await self.message_repo.get_for_user(user.id)
        partner_ids = {message.partner_of(user.id) for message in messages}
        names = await self.user_repo.get_names(partner_ids)
        return group_conversations(messages, user.id, names)

    async def get_thread(self, user: Profile, partner_id: uuid.UUID) -> dict:
        """Both directions oldest first; the user's received messages become read."""
        marked = await self.message_repo.mark_thread_read(user.id, partner_id)
        if marked:
            logger.debug(f"Marked {marked} messages from {partner_id} as read for {user.id}")

        messages = await self.message_repo.get_thread(user.id, partner_id)
        names = await self.user_repo.get_names([partner_id])
        return {
            "partner_id": str(partner_id),
            "partner_name": names.get(partner_id) or UNKNOWN_PARTNER,
            "messages": [message.to_dict() for message in messages],
        }

    async def unread_count(self, user: Profile) -> int:
        return await self.message_repo.count_unread(user.id)
