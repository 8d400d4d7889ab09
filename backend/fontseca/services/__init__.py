# Services package init
"""
fontseca.dev Backend — Services Layer
=======================================

What:  The bundle of business services injected into the routes.
How:   create_app() stores a `Services` instance on `app.state.services`;
       routes receive individual services through `Depends(provide("name"))`.
       When no bundle is passed to create_app(), one is built by the
       `module:callable` factory named in `settings.services_factory`.

Service Inventory (interfaces in interfaces.py):
    articles, drafts, patches, tags, topics   → archive
    me, experience, projects, technologies    → profile & portfolio
    pages                                     → HTML page renderer
"""

import importlib
import logging
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, Optional

from starlette.requests import Request

from fontseca.services.interfaces import (
    ArticlesService,
    DraftsService,
    ExperienceService,
    MeService,
    PageRenderer,
    PatchesService,
    ProjectsService,
    TagsService,
    TechnologiesService,
    TopicsService,
)

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Concrete service implementations; unset members make their routes fail with 500."""

    articles: Optional[ArticlesService] = None
    drafts: Optional[DraftsService] = None
    patches: Optional[PatchesService] = None
    projects: Optional[ProjectsService] = None
    experience: Optional[ExperienceService] = None
    me: Optional[MeService] = None
    tags: Optional[TagsService] = None
    topics: Optional[TopicsService] = None
    technologies: Optional[TechnologiesService] = None
    pages: Optional[PageRenderer] = None

    def configured(self) -> Dict[str, bool]:
        return {f.name: getattr(self, f.name) is not None for f in fields(self)}


def load_services(factory: str) -> Services:
    """
    Build the service bundle from a "package.module:callable" reference.

    An empty reference yields an empty bundle so the app can still start
    (health checks report it as degraded).
    """
    if not factory:
        logger.warning("No services factory configured; every service route will fail")
        return Services()

    module_name, _, attribute = factory.partition(":")
    module = importlib.import_module(module_name)
    services = getattr(module, attribute)()
    if not isinstance(services, Services):
        raise TypeError(
            f"services factory {factory!r} returned {type(services).__name__}, expected Services"
        )
    logger.info("Services loaded from %s", factory)
    return services


def provide(name: str) -> Callable[[Request], Any]:
    """
    FastAPI dependency factory returning the service called `name`.

    Raises:
        RuntimeError: the service is not configured (reported as a 500 problem)
    """

    def dependency(request: Request) -> Any:
        services: Services = request.app.state.services
        service = getattr(services, name, None)
        if service is None:
            raise RuntimeError(f"service {name!r} is not configured")
        return service

    dependency.__name__ = f"provide_{name}"
    return dependency
