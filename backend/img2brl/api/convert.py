"""GET/POST /api/convert: image to braille in the requested output mode."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from img2brl.acquisition.fetcher import SourceAcquirer
from img2brl.config import Settings
from img2brl.dependencies import get_acquirer, get_conversion_service, get_settings
from img2brl.engine.conversion import ConversionService
from img2brl.models.failures import ConversionFailure, InternalError
from img2brl.models.options import TransformOptions
from img2brl.models.requests import ConvertParams
from img2brl.models.source import Upload, select_source
from img2brl.models.state import RequestState, RequestTrace
from img2brl.rendering import Rendered, get_renderer
from img2brl.rendering.base import Outcome

logger = logging.getLogger(__name__)

router = APIRouter()


def process_request(
    params: ConvertParams,
    upload: Upload | None,
    *,
    cfg: Settings,
    acquirer: SourceAcquirer,
    service: ConversionService,
    user_agent: str | None = None,
) -> Rendered:
    """Acquire, convert and render one request. Never raises for expected failures."""
    trace = RequestTrace()
    language = params.lang if params.lang in cfg.available_languages else cfg.default_language
    renderer = get_renderer(params.mode, language=language, default=cfg.default_mode)
    options = TransformOptions.from_form(
        trim=params.trim,
        normalize=params.normalize,
        negate=params.negate,
        resize=params.resize,
        cols=params.cols,
        default_columns=cfg.default_columns,
    )

    outcome: Outcome
    try:
        trace.advance(RequestState.ACQUIRING)
        acquired = acquirer.acquire(select_source(upload, params.url), user_agent=user_agent)
        if acquired is None:
            outcome = None
        else:
            outcome = service.convert(acquired, options, trace)
    except ConversionFailure as e:
        logger.info("Request failed in %s: %s: %s", trace.state.name, e.kind, e.message)
        trace.fail(e.kind)
        outcome = e
    except Exception:
        logger.exception("Unanticipated failure in %s", trace.state.name)
        trace.fail(InternalError.kind)
        outcome = InternalError()

    trace.advance(RequestState.RENDERED)
    rendered = renderer.render(outcome, trace.elapsed)
    logger.info(
        "%s response %d in %.3fs (%s)",
        renderer.mode,
        rendered.status_code,
        trace.elapsed,
        trace.failure_kind or "ok",
    )
    return rendered


def _to_response(rendered: Rendered) -> Response:
    return Response(
        content=rendered.body,
        status_code=rendered.status_code,
        media_type=rendered.media_type,
        headers=rendered.headers,
    )


@router.post("/convert")
async def convert_form(
    request: Request,
    img: UploadFile | None = File(default=None),
    url: str | None = Form(default=None),
    mode: str | None = Form(default=None),
    trim: str | None = Form(default=None),
    normalize: str | None = Form(default=None),
    negate: str | None = Form(default=None),
    resize: str | None = Form(default=None),
    cols: str | None = Form(default=None),
    lang: str | None = Form(default=None),
    cfg: Settings = Depends(get_settings),
    acquirer: SourceAcquirer = Depends(get_acquirer),
    service: ConversionService = Depends(get_conversion_service),
) -> Response:
    upload = None
    if img is not None:
        data = await img.read()
        upload = Upload(
            filename=img.filename or "",
            content_type=img.content_type or "application/octet-stream",
            data=data,
        )
    params = ConvertParams(
        url=url,
        mode=mode,
        trim=trim,
        normalize=normalize,
        negate=negate,
        resize=resize,
        cols=cols,
        lang=lang,
    )
    rendered = await run_in_threadpool(
        process_request,
        params,
        upload,
        cfg=cfg,
        acquirer=acquirer,
        service=service,
        user_agent=request.headers.get("user-agent"),
    )
    return _to_response(rendered)


@router.get("/convert")
async def convert_query(
    request: Request,
    url: str | None = None,
    mode: str | None = None,
    trim: str | None = None,
    normalize: str | None = None,
    negate: str | None = None,
    resize: str | None = None,
    cols: str | None = None,
    lang: str | None = None,
    cfg: Settings = Depends(get_settings),
    acquirer: SourceAcquirer = Depends(get_acquirer),
    service: ConversionService = Depends(get_conversion_service),
) -> Response:
    params = ConvertParams(
        url=url,
        mode=mode,
        trim=trim,
        normalize=normalize,
        negate=negate,
        resize=resize,
        cols=cols,
        lang=lang,
    )
    rendered = await run_in_threadpool(
        process_request,
        params,
        None,
        cfg=cfg,
        acquirer=acquirer,
        service=service,
        user_agent=request.headers.get("user-agent"),
    )
    return _to_response(rendered)
