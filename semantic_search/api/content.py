from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from ..schemas.content import ContentRequest, SearchRequest, OperationResult
from ..services.pipeline import SemanticSearch

router = APIRouter()

# HTTP status per error kind; anything unlisted is an upstream failure
ERROR_STATUS = {
    "InvalidInput": 400,
    "SearchTimeout": 504,
    "PersistenceError": 503,
}


def get_semantic_search(request: Request) -> SemanticSearch:
    return request.app.state.semantic_search


def _respond(result: OperationResult) -> JSONResponse:
    status_code = 200 if result.ok else ERROR_STATUS.get(result.error.kind, 502)
    return JSONResponse(
        status_code=status_code,
        content=result.model_dump(mode="json", exclude_none=True),
    )


@router.post("/content")
async def add_content(req: ContentRequest, service: SemanticSearch = Depends(get_semantic_search)):
    """Embed and store a piece of content."""
    return _respond(await service.add(req.text))


@router.post("/search")
async def search(req: SearchRequest, service: SemanticSearch = Depends(get_semantic_search)):
    """
    Search stored content by meaning.

    - threshold: minimum similarity (default 0.6, must be within [0, 1])
    - match_count: maximum number of results (default 5)
    """
    result = await service.search(req.query, threshold=req.threshold, match_count=req.match_count)
    return _respond(result)
