from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request

from servicebill.core.providers import build_model_configs
from servicebill.llms.errors import AllProvidersExhaustedError
from servicebill.llms.router import FallbackRouter
from servicebill.llms.types import AvailabilityResult, FallbackResponse, ModelConfig, Provider
from servicebill.schemas.document import DocumentType
from servicebill.schemas.request import GenerateRequest, ModifyRequest, ParseRequest
from servicebill.schemas.response import ModifyResponse, ParseResponse
from servicebill.services.modify_service import modify_document
from servicebill.services.parse_service import DocumentParseError, NoDetailsFoundError, parse_details
from servicebill.utils.logger import logger

MAX_PROMPT_LENGTH = 20_000


@asynccontextmanager
async def lifespan(app: FastAPI):
    router = FallbackRouter(build_model_configs())
    app.state.router = router
    logger.info(
        "router_ready",
        extra={"models": len(router.configs), "configured": len(router.list_available())},
    )
    yield
    await router.close()


app = FastAPI(title="servicebill", lifespan=lifespan)


def _router(request: Request) -> FallbackRouter:
    return request.app.state.router


def _exhausted(e: AllProvidersExhaustedError) -> HTTPException:
    return HTTPException(status_code=502, detail=str(e))


@app.get("/")
async def root():
    return {
        "message": "servicebill API",
        "docs": "/docs",
        "health": "/health",
        "parse": "POST /parse/{document_type}",
        "modify": "POST /modify",
    }


@app.get("/health")
async def get_health(request: Request):
    router = _router(request)
    available = router.list_available()
    configured = {c.provider for c in available}
    providers = {
        p.value: "configured" if p in configured else "missing_key"
        for p in Provider
    }
    return {
        "status": "ok" if available else "degraded",
        "providers": providers,
        "configured_models": len(available),
    }


@app.get("/models", response_model=list[ModelConfig])
async def get_models(request: Request) -> list[ModelConfig]:
    return _router(request).list_available()


@app.get("/models/availability", response_model=list[AvailabilityResult])
async def get_models_availability(request: Request) -> list[AvailabilityResult]:
    return await _router(request).check_availability()


@app.post("/generate", response_model=FallbackResponse)
async def post_generate(request: Request, body: GenerateRequest) -> FallbackResponse:
    if len(body.prompt) > MAX_PROMPT_LENGTH:
        raise HTTPException(status_code=413, detail="Prompt exceeds maximum length")
    try:
        return await _router(request).call_with_fallback(
            body.prompt,
            max_tokens=body.max_tokens,
            temperature=body.temperature,
        )
    except AllProvidersExhaustedError as e:
        raise _exhausted(e)


@app.post("/parse/{document_type}", response_model=ParseResponse)
async def post_parse(request: Request, document_type: DocumentType, body: ParseRequest) -> ParseResponse:
    if len(body.text) > MAX_PROMPT_LENGTH:
        raise HTTPException(status_code=413, detail="Text exceeds maximum length")
    try:
        parsed = await parse_details(_router(request), body.text, document_type)
    except AllProvidersExhaustedError as e:
        raise _exhausted(e)
    except (NoDetailsFoundError, DocumentParseError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    return ParseResponse(
        document_type=document_type,
        details=parsed.details,
        provider=parsed.provider,
        model=parsed.model,
    )


@app.post("/modify", response_model=ModifyResponse)
async def post_modify(request: Request, body: ModifyRequest) -> ModifyResponse:
    if len(body.instruction) > MAX_PROMPT_LENGTH:
        raise HTTPException(status_code=413, detail="Instruction exceeds maximum length")
    return await modify_document(_router(request), body.document, body.instruction)
