"""
Generators — pure functions that produce file contents for a Next.js project.

Each generator takes a ``WizardConfig`` (and, where the output depends on the
project layout, a few layout facts) and returns a string.  ``render`` is the
single entry point keyed by template id::

    render("next-config", config, flavor="mjs")
    render("global-error", config, typescript=True, app_location=("src", "app"))

Unknown ids raise ``KeyError``.
"""

from __future__ import annotations

from typing import Any, Callable

from rollbar_wizard.core.models.config import WizardConfig
from rollbar_wizard.core.services.generators.error_pages import (
    global_error_page_contents,
    underscore_error_page_contents,
)
from rollbar_wizard.core.services.generators.example_page import (
    app_api_route_contents,
    example_page_contents,
    pages_api_route_contents,
    root_layout_contents,
)
from rollbar_wizard.core.services.generators.instrumentation import (
    instrumentation_hook_contents,
    instrumentation_hook_snippet,
)
from rollbar_wizard.core.services.generators.next_config import next_config_contents
from rollbar_wizard.core.services.generators.rollbar_config import (
    client_config_contents,
    edge_config_contents,
    server_config_contents,
)
from rollbar_wizard.core.services.generators.sourcemap_script import (
    sourcemap_script_contents,
)

_Renderer = Callable[..., str]

_TEMPLATES: dict[str, _Renderer] = {
    "server-config": lambda cfg: server_config_contents(cfg),
    "edge-config": lambda cfg: edge_config_contents(cfg),
    "client-config": lambda cfg, typescript=True: client_config_contents(cfg, typescript),
    "instrumentation": lambda cfg, location="root": instrumentation_hook_contents(location),
    "instrumentation-snippet": (
        lambda cfg, location="root": instrumentation_hook_snippet(location)
    ),
    "next-config": (
        lambda cfg, flavor="cjs": next_config_contents(flavor, cfg.enable_sourcemaps)
    ),
    "sourcemap-script": (
        lambda cfg, typescript=True: sourcemap_script_contents(cfg, typescript)
    ),
    "underscore-error": (
        lambda cfg, pages_location=("pages",): underscore_error_page_contents(pages_location)
    ),
    "global-error": (
        lambda cfg, typescript=True, app_location=("app",): global_error_page_contents(
            typescript, app_location
        )
    ),
    "example-page": (
        lambda cfg, typescript=True, app_location=None, pages_location=None: (
            example_page_contents(typescript, app_location, pages_location)
        )
    ),
    "example-app-api-route": (
        lambda cfg, typescript=True, app_location=("app",): app_api_route_contents(
            typescript, app_location
        )
    ),
    "example-pages-api-route": (
        lambda cfg, typescript=True, pages_location=("pages",): pages_api_route_contents(
            typescript, pages_location
        )
    ),
    "root-layout": lambda cfg, typescript=True: root_layout_contents(typescript),
}

TEMPLATE_IDS: tuple[str, ...] = tuple(_TEMPLATES)


def render(template_id: str, config: WizardConfig, **context: Any) -> str:
    """Render a template by id; raises ``KeyError`` for unknown ids."""
    try:
        renderer = _TEMPLATES[template_id]
    except KeyError:
        raise KeyError(f"Unknown template: {template_id}") from None
    return renderer(config, **context)
