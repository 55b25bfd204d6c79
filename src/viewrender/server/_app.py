# pyright: reportAny=false
"""FastAPI wiring for the view-rendering layer."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import cast

from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from structlog.typing import FilteringBoundLogger

from viewrender.config import RenderConfig, load_config
from viewrender.dispatch import ResponseDispatcher
from viewrender.exceptions import (
    DiscoveryError,
    TemplateError,
    TemplateExecutionError,
    TemplateNotFoundError,
    TemplateSyntaxError,
)
from viewrender.formatting import FormatterRegistry, build_registry
from viewrender.templating import (
    CatalogReference,
    TemplateCatalog,
    TemplateComposer,
    TemplateSetCompiler,
)
from viewrender.utils import create_logger


@dataclass(frozen=True, slots=True)
class ViewState:
    """Process-wide rendering objects, built once in the app lifespan."""

    config: RenderConfig
    registry: FormatterRegistry
    compiler: TemplateSetCompiler
    composer: TemplateComposer
    dispatcher: ResponseDispatcher
    catalogs: CatalogReference
    logger: FilteringBoundLogger

    def build_catalog(self) -> TemplateCatalog:
        templates = self.config.templates
        return self.compiler.compile_tree(templates.root, suffixes=templates.suffixes)


def build_state(config: RenderConfig) -> ViewState:
    """Build the registry, compiler, composer and dispatcher for `config`."""
    logger = create_logger(
        level=config.logging.level.value,
        log_format="json" if config.logging.format.value == "json" else "text",
        log_file=config.logging.file,
    )
    registry = build_registry(timezone=config.formatting.timezone, logger=logger)
    environment = config.templates.environment()
    return ViewState(
        config=config,
        registry=registry,
        compiler=TemplateSetCompiler(registry, config=environment, logger=logger),
        composer=TemplateComposer(registry, config=environment, logger=logger),
        dispatcher=ResponseDispatcher(config.cors),
        catalogs=CatalogReference(),
        logger=logger,
    )


def get_view_state(request: Request) -> ViewState:
    return cast("ViewState", request.app.state.views)


def get_catalog(request: Request) -> TemplateCatalog:
    """Dependency returning the catalog published at request time."""
    return get_view_state(request).catalogs.current


def get_composer(request: Request) -> TemplateComposer:
    return get_view_state(request).composer


def get_dispatcher(request: Request) -> ResponseDispatcher:
    return get_view_state(request).dispatcher


def wants_envelope(request: Request) -> bool:
    """Whether the caller speaks the status-envelope protocol."""
    if request.headers.get("x-requested-with", "").lower() == "xmlhttprequest":
        return True
    return "application/json" in request.headers.get("accept", "")


router = APIRouter(prefix="/api")


@router.get("/health")
async def get_health(request: Request) -> Response:
    return get_dispatcher(request).json({"status": "healthy"})


@router.post("/templates/reload")
async def reload_templates(request: Request) -> Response:
    """Recompile the template tree and publish it in one swap."""
    views = get_view_state(request)
    try:
        catalog = views.catalogs.rebuild(views.build_catalog)
    except (DiscoveryError, TemplateSyntaxError) as e:
        return views.dispatcher.report_error(e)
    views.logger.info("catalog_published", templates=len(catalog))
    return views.dispatcher.report_reload()


async def _template_error_handler(request: Request, exc: Exception) -> Response:
    views = get_view_state(request)
    error = cast("TemplateError", exc)
    views.logger.error(
        "request_render_failed",
        path=request.url.path,
        error_type=type(error).__name__,
        error=str(error),
    )
    if wants_envelope(request):
        return views.dispatcher.report_error(error)
    status_code = 404 if isinstance(error, TemplateNotFoundError) else 500
    return PlainTextResponse(str(error), status_code=status_code)


def create_app(config: RenderConfig | None = None) -> FastAPI:
    """Create the application.

    The template tree under ``config.templates.root`` is compiled during
    startup; a syntax error there aborts startup.

    Args:
        config: Configuration. If None, loads from the environment.

    Returns:
        The FastAPI application, with `ViewState` on ``app.state.views``.
    """
    resolved = config if config is not None else load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        views = build_state(resolved)
        catalog = views.build_catalog()
        _ = views.catalogs.publish(catalog)
        views.logger.info("catalog_published", templates=len(catalog))
        app.state.views = views
        yield

    app = FastAPI(docs_url=None, redoc_url=None, lifespan=lifespan)
    app.include_router(router)
    app.add_exception_handler(TemplateExecutionError, _template_error_handler)
    app.add_exception_handler(TemplateNotFoundError, _template_error_handler)
    app.add_exception_handler(TemplateSyntaxError, _template_error_handler)
    return app
