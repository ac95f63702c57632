"""
FastAPI surface exposing the ragbooks chat state and actions to a web front-end.
"""

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from ragbooks import settings
from ragbooks.client import RagServiceClient
from ragbooks.errors import NotReadyError, QueryInProgressError, QuestionValidationError
from ragbooks.formatter import Block, format_response
from ragbooks.models import Book, ConversationTurn, NewBook, RagResult
from ragbooks.orchestrator import ChatOrchestrator

logging.basicConfig(level=settings.LOG_LEVEL)
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    orchestrator = ChatOrchestrator(RagServiceClient())
    await orchestrator.initialize()
    app.state.orchestrator = orchestrator
    yield


app = FastAPI(title="RAG Books API", description="Conversation front-end for a book RAG service", lifespan=lifespan)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify actual origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_orchestrator(request: Request) -> ChatOrchestrator:
    """Orchestrator created at startup."""
    return request.app.state.orchestrator


class QuestionRequest(BaseModel):
    """Request model for asking questions."""
    question: str


class SearchRequest(BaseModel):
    """Request model for searching books."""
    query: str


class AskResponse(BaseModel):
    """Answer plus its display blocks."""
    result: RagResult
    blocks: List[Block]
    turn: Optional[ConversationTurn] = None


class SessionResponse(BaseModel):
    """Current chat state."""
    session_id: Optional[str]
    loading: bool
    error: Optional[str]
    current_query: str
    rag_response: Optional[RagResult]


class HealthResponse(BaseModel):
    """Response model for health check."""
    status: str


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok")


@app.get("/session", response_model=SessionResponse)
async def get_session(orchestrator: ChatOrchestrator = Depends(get_orchestrator)) -> SessionResponse:
    """Current session id, busy flag, last error and last answer."""
    return SessionResponse(
        session_id=orchestrator.session_id,
        loading=orchestrator.loading,
        error=orchestrator.error,
        current_query=orchestrator.current_query,
        rag_response=orchestrator.rag_response,
    )


@app.get("/conversations", response_model=List[ConversationTurn])
async def get_conversations(orchestrator: ChatOrchestrator = Depends(get_orchestrator)):
    """The conversation log, oldest first."""
    return orchestrator.history()


@app.post("/ask", response_model=AskResponse)
async def ask_question(request: QuestionRequest, orchestrator: ChatOrchestrator = Depends(get_orchestrator)):
    """
    Answer a question and record it in the conversation.

    Args:
        request: Question request

    Returns:
        The answer, its formatted blocks and the recorded turn
    """
    try:
        result = await orchestrator.ask(request.question)
    except QuestionValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except QueryInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except NotReadyError as e:
        raise HTTPException(status_code=503, detail=str(e))

    if result is None:
        raise HTTPException(status_code=500, detail=orchestrator.error)

    return AskResponse(
        result=result,
        blocks=format_response(result.response),
        turn=orchestrator.last_turn,
    )


@app.post("/clear", response_model=SessionResponse)
async def clear_conversation(orchestrator: ChatOrchestrator = Depends(get_orchestrator)) -> SessionResponse:
    """Clear the conversation and start a new session."""
    orchestrator.clear()
    return await get_session(orchestrator)


@app.delete("/error", status_code=204)
async def dismiss_error(orchestrator: ChatOrchestrator = Depends(get_orchestrator)) -> None:
    """Dismiss the current error."""
    orchestrator.clear_error()


@app.get("/books", response_model=List[Book])
async def list_books(orchestrator: ChatOrchestrator = Depends(get_orchestrator)):
    """Books in the library, refreshed from the remote service when it is reachable."""
    return await orchestrator.fetch_books()


@app.post("/books", response_model=Book, status_code=201)
async def add_book(new_book: NewBook, orchestrator: ChatOrchestrator = Depends(get_orchestrator)):
    """Add a book to the library."""
    book = await orchestrator.add_book(new_book)
    if book is None:
        raise HTTPException(status_code=500, detail=orchestrator.error)
    return book


@app.post("/search", response_model=List[Book])
async def search_books(request: SearchRequest, orchestrator: ChatOrchestrator = Depends(get_orchestrator)):
    """Search books by title, content or tag."""
    found = await orchestrator.search_books(request.query)
    if orchestrator.error:
        raise HTTPException(status_code=500, detail=orchestrator.error)
    return found


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
