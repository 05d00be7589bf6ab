from fastapi import HTTPException
from datetime import datetime, timezone
from typing import List
import logging

from config import content_key
from core.content_generator import ContentGenerator
from core.lifecycle import MESSAGE_LIFECYCLE, MessageStatus
from core.session import Session
from database import KeyValueStore, load_value, save_value
from models.content import Conversation, Message, MessageCreate

logger = logging.getLogger(__name__)

MESSAGES_KEY = content_key("messages")


async def get_conversations(generator: ContentGenerator, session: Session) -> List[Conversation]:
    return session.visible(generator.generate_conversations())


async def get_conversation(generator: ContentGenerator, session: Session, conversation_id: str) -> Conversation:
    for conversation in await get_conversations(generator, session):
        if conversation.id == conversation_id:
            return conversation
    raise HTTPException(status_code=404, detail="Conversation not found")


async def get_agency_conversation(generator: ContentGenerator, session: Session) -> Conversation:
    """The thread a client user has with the agency team."""
    conversations = await get_conversations(generator, session)
    if not conversations:
        raise HTTPException(status_code=404, detail="No conversation with the agency yet")
    return conversations[0]


async def get_messages(store: KeyValueStore, generator: ContentGenerator, session: Session,
                       conversation_id: str) -> List[Message]:
    await get_conversation(generator, session, conversation_id)
    sent = await load_value(store, MESSAGES_KEY, {})
    return generator.generate_messages(conversation_id) + [Message(**m) for m in sent.get(conversation_id, [])]


async def send_message(store: KeyValueStore, generator: ContentGenerator, session: Session,
                       conversation_id: str, data: MessageCreate) -> Message:
    conversation = await get_conversation(generator, session, conversation_id)
    text = data.content.strip()
    if not text:
        raise HTTPException(status_code=400, detail="Message cannot be empty")

    user = session.user
    if session.is_client_user():
        sender_role = "client"
        recipient, recipient_id = conversation.agency_user_name, conversation.agency_user_id
    else:
        sender_role = "agency"
        recipient, recipient_id = conversation.client_name, conversation.client_id

    # composing -> sent -> delivered
    status = MessageStatus.COMPOSING
    for target in (MessageStatus.SENT, MessageStatus.DELIVERED):
        status = MESSAGE_LIFECYCLE.transition(status, target)

    existing = await get_messages(store, generator, session, conversation_id)
    now = datetime.now(timezone.utc).isoformat()
    message = Message(
        id=max((m.id for m in existing), default=0) + 1,
        content=text,
        sender=user.name,
        sender_id=user.id,
        sender_role=sender_role,
        recipient=recipient or "",
        recipient_id=recipient_id or "",
        status=status,
        sent_at=now,
        delivered_at=now,
        conversation_id=conversation_id,
    )
    sent = await load_value(store, MESSAGES_KEY, {})
    sent.setdefault(conversation_id, []).append(message.model_dump(mode="json"))
    if not await save_value(store, MESSAGES_KEY, sent):
        raise HTTPException(status_code=503, detail="Message could not be sent, please try again")
    logger.info("Message %d sent in %s by %s", message.id, conversation_id, user.email)
    return message
