from fastapi import APIRouter, Depends
from typing import List
from models.content import Conversation, Message, MessageCreate
from core.auth import get_store, get_generator, require_session
from core.content_generator import ContentGenerator
from core.session import Session
from controllers import message_controller
from database import KeyValueStore

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("/conversations", response_model=List[Conversation])
async def get_conversations(generator: ContentGenerator = Depends(get_generator), session: Session = Depends(require_session)):
    return await message_controller.get_conversations(generator, session)


@router.get("/client", response_model=Conversation)
async def get_agency_conversation(generator: ContentGenerator = Depends(get_generator), session: Session = Depends(require_session)):
    return await message_controller.get_agency_conversation(generator, session)


@router.get("/conversations/{conversation_id}", response_model=Conversation)
async def get_conversation(conversation_id: str, generator: ContentGenerator = Depends(get_generator), session: Session = Depends(require_session)):
    return await message_controller.get_conversation(generator, session, conversation_id)


@router.get("/conversations/{conversation_id}/messages", response_model=List[Message])
async def get_messages(conversation_id: str, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(require_session)):
    return await message_controller.get_messages(store, generator, session, conversation_id)


@router.post("/conversations/{conversation_id}/messages", response_model=Message)
async def send_message(conversation_id: str, data: MessageCreate, store: KeyValueStore = Depends(get_store), generator: ContentGenerator = Depends(get_generator), session: Session = Depends(require_session)):
    return await message_controller.send_message(store, generator, session, conversation_id, data)
