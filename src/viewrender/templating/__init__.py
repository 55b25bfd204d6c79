r"""viewrender templating.

Layout/fragment composition on Jinja2 with the formatter registry attached
to every template.

Basic usage:
    from viewrender.formatting import build_registry
    from viewrender.templating import TemplateComposer, TemplateSetCompiler

    registry = build_registry()

    # Compile one template per page at startup
    compiler = TemplateSetCompiler(registry)
    catalog = compiler.compile_sets(
        "views/master.html",
        [("profile", "views/profile.html")],
    )

    composer = TemplateComposer(registry)
    html = composer.compose_from_catalog(catalog, "profile", {"user": user})

    # Or compose ad hoc
    row = composer.compose_from_string("<td>{{ amount|scaled_display2 }}</td>", {
        "amount": 123456,
    })

Layouts declare ``{% block %}`` slots and fragments fill them:
    views/master.html:   <main>{% block content %}{% endblock %}</main>
    views/profile.html:  {% block content %}{{ user.name }}{% endblock %}
"""

from ._catalog import CatalogReference, NamedTemplate, TemplateCatalog
from ._compiler import SetDescriptor, TemplateSetCompiler
from ._composer import TemplateComposer
from ._context import model_context
from ._environment import EnvironmentConfig, create_environment, render_fragment
from ._sources import (
    DEFAULT_SUFFIXES,
    ParseState,
    TemplateDiscovery,
    TemplateLike,
    TemplateSource,
    as_source,
    list_template_sources,
    lookup_name,
)

__all__ = [
    "DEFAULT_SUFFIXES",
    "CatalogReference",
    "EnvironmentConfig",
    "NamedTemplate",
    "ParseState",
    "SetDescriptor",
    "TemplateCatalog",
    "TemplateComposer",
    "TemplateDiscovery",
    "TemplateLike",
    "TemplateSetCompiler",
    "TemplateSource",
    "as_source",
    "create_environment",
    "list_template_sources",
    "lookup_name",
    "model_context",
    "render_fragment",
]
