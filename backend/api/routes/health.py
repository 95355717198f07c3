from fastapi import APIRouter, Request

router = APIRouter()

@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint"""
    state = request.app.state
    return {
        "status": "healthy",
        "version": "1.0.0",
        "services": {
            "content_filter": getattr(state, "content_filter", None) is not None,
            "retriever": getattr(state, "retriever", None) is not None,
            "completion": getattr(state, "orchestrator", None) is not None,
            "telegram": hasattr(state, "notifier") and state.notifier.enabled,
            "chat_log": hasattr(state, "chat_log_recorder") and state.chat_log_recorder.enabled,
        }
    }
